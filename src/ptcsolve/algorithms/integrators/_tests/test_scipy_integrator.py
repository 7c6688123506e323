import numpy as np
import pytest

from ptcsolve.algorithms.integrators import (STEADY_STATE_EVENT,
                                             _EventConfig, _ScipyIntegrator,
                                             steady_state_event,
                                             step_budget_event)


def _decay(y):
    return -y


def test_integrate_exponential_decay():
    sol = _ScipyIntegrator().integrate(_decay, np.array([1.0]), (0.0, 1.0))

    assert sol.status == 0
    assert not sol.terminated_by_event
    assert sol.final_time == pytest.approx(1.0)
    assert sol.final_state[0] == pytest.approx(np.exp(-1.0), rel=1e-4)


def test_steady_state_event_terminates():
    tol = 1e-3
    event = steady_state_event(_decay, tol)
    sol = _ScipyIntegrator().integrate(
        _decay, np.array([1.0]), (0.0, 100.0), event_fn=event, event_cfg=STEADY_STATE_EVENT
    )

    # |y| = 0.5 * tol  ->  t = ln(2 / tol)
    assert sol.terminated_by_event
    assert sol.final_time == pytest.approx(np.log(2.0 / tol), rel=1e-3)
    assert abs(sol.final_state[0]) < tol


def test_steady_state_event_unbounded_horizon():
    event = steady_state_event(_decay, 1e-6)
    sol = _ScipyIntegrator().integrate(
        _decay, np.array([1.0, -1.0]), (0.0, np.inf), event_fn=event, event_cfg=STEADY_STATE_EVENT
    )

    assert sol.terminated_by_event
    assert np.isfinite(sol.final_time)


def test_jacobian_is_forwarded_to_implicit_methods():
    calls = []

    def J(y):
        calls.append(1)
        return -np.eye(y.size)

    sol = _ScipyIntegrator(method="Radau").integrate(_decay, np.array([1.0]), (0.0, 1.0), jacobian_fn=J)

    assert calls
    assert sol.final_state[0] == pytest.approx(np.exp(-1.0), rel=1e-4)


def test_zero_length_span_returns_initial_state():
    y0 = np.array([1.0, 2.0])
    sol = _ScipyIntegrator().integrate(_decay, y0, (0.0, 0.0))

    assert sol.states.shape == (2, 2)
    assert np.array_equal(sol.final_state, y0)


def test_event_ignores_nan_residual():
    event = steady_state_event(lambda y: np.full_like(y, np.nan), 1e-6)

    assert event(0.0, np.zeros(1)) == np.inf


def test_event_config_validates_direction():
    with pytest.raises(ValueError):
        _EventConfig(direction=2)


def test_step_budget_stops_integration():
    sol = _ScipyIntegrator().integrate(_decay, np.array([1.0]), (0.0, 100.0), max_steps=5)

    assert sol.budget_exhausted
    assert not sol.terminated_by_event
    assert sol.times.size == 6
    assert sol.final_time < 100.0


def test_step_budget_bounds_unsettled_trajectory():
    def oscillator(y):
        return np.array([y[1], -y[0]])

    event = steady_state_event(oscillator, 1e-9)
    sol = _ScipyIntegrator().integrate(
        oscillator, np.array([1.0, 0.0]), (0.0, np.inf),
        event_fn=event, event_cfg=STEADY_STATE_EVENT, max_steps=200,
    )

    assert sol.budget_exhausted
    assert np.isfinite(sol.final_time)
    assert np.all(np.isfinite(sol.final_state))


def test_unspent_step_budget_is_not_reported():
    sol = _ScipyIntegrator().integrate(_decay, np.array([1.0]), (0.0, 1.0), max_steps=10_000)

    assert not sol.budget_exhausted
    assert sol.final_time == pytest.approx(1.0)


def test_step_budget_must_be_positive():
    with pytest.raises(ValueError):
        step_budget_event(0)
