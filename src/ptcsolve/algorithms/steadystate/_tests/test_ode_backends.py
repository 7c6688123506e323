import logging

import numpy as np
import pytest

from ptcsolve.algorithms.integrators import _ScipyIntegrator
from ptcsolve.algorithms.steadystate import SteadyStateSolver
from ptcsolve.algorithms.types.exceptions import InitialResidualError


def _decay(y):
    return -y


def _solver(strategy, **cfg):
    solver = SteadyStateSolver.with_default_engine(strategy=strategy)
    solver.update_config(verbose=False, **cfg)
    return solver


def test_fixed_horizon_continuation_converges():
    result = _solver("ode", tol=1e-8).solve(_decay, np.array([1.0, 2.0]))

    assert result.converged
    assert result.distance <= 1e-8
    assert np.all(np.abs(result.state) < 1e-7)
    assert result.rejected_count == 0
    assert all(rec.accepted for rec in result.history)
    assert all(np.isnan(rec.inner_distance) for rec in result.history)


def test_fixed_horizon_steps_grow():
    result = _solver("ode", tol=1e-8).solve(_decay, np.array([1.0]))
    steps = [rec.step for rec in result.history]

    assert len(steps) >= 2
    assert steps[0] == 1.0
    assert all(b > a for a, b in zip(steps, steps[1:]))


def test_fixed_horizon_with_injected_integrator():
    solver = SteadyStateSolver.with_default_engine(
        strategy="ode", integrator=_ScipyIntegrator(method="Radau", rtol=1e-8, atol=1e-10)
    )
    result = solver.solve(_decay, np.array([1.0]), tol=1e-8, verbose=False)

    assert result.converged


def test_fixed_horizon_rejects_algebraic_components():
    with pytest.raises(ValueError):
        _solver("ode").solve(_decay, np.array([1.0, 1.0]), algebraic=[1])


def test_fixed_horizon_requires_finite_step():
    with pytest.raises(ValueError):
        _solver("ode").solve(_decay, np.array([1.0]), step=np.inf)


def test_dynamic_steady_state_converges():
    result = _solver("dynamic", tol=1e-8).solve(_decay, np.array([1.0, -2.0]))

    assert result.converged
    assert result.distance <= 1e-8
    assert result.iterations == 1
    assert np.isfinite(result.final_step)


def test_dynamic_short_horizon_does_not_converge():
    result = _solver("dynamic", tol=1e-8, horizon=1.0).solve(_decay, np.array([1.0]))

    assert not result.converged
    assert result.final_step == pytest.approx(1.0)
    assert result.state[0] == pytest.approx(np.exp(-1.0), rel=1e-4)


def test_dynamic_already_steady_skips_integration():
    result = _solver("dynamic").solve(lambda y: np.zeros_like(y), np.array([3.0]))

    assert result.converged
    assert result.iterations == 0
    assert np.array_equal(result.state, [3.0])


def test_dynamic_rejects_algebraic_components():
    with pytest.raises(ValueError):
        _solver("dynamic").solve(_decay, np.array([1.0, 1.0]), algebraic=[True, False])


@pytest.mark.parametrize("strategy", ["ode", "dynamic"])
def test_nan_initial_residual_raises(strategy):
    with pytest.raises(InitialResidualError):
        _solver(strategy).solve(lambda y: np.full_like(y, np.nan), np.array([1.0]))


def _oscillator(y):
    return np.array([y[1], -y[0]])


def test_dynamic_oscillator_returns_unconverged(caplog):
    with caplog.at_level(logging.WARNING, logger="ptcsolve"):
        result = _solver("dynamic", ode_max_steps=500).solve(_oscillator, np.array([1.0, 0.0]))

    assert not result.converged
    assert result.iterations == 1
    assert result.distance > 1e-9
    assert np.all(np.isfinite(result.state))
    assert np.isfinite(result.final_step)
    assert "did not converge" in caplog.text


def test_fixed_horizon_oscillator_returns_unconverged():
    result = _solver("ode", max_iterations=5, ode_max_steps=200).solve(_oscillator, np.array([1.0, 0.0]))

    assert not result.converged
    assert result.iterations <= 6
    assert np.all(np.isfinite(result.state))
