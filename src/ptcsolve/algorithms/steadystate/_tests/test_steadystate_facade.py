import numpy as np
import pandas as pd
import pytest

from ptcsolve.algorithms import (BackendError, EngineError,
                                 InitialResidualError,
                                 SteadyStateConfig, SteadyStateSolver,
                                 dynamic_steady_state_solve,
                                 ode_continuation_solve,
                                 pseudo_transient_solve)
from ptcsolve.algorithms.rootfinding.backends.base import _RootFindingBackend
from ptcsolve.algorithms.rootfinding.types import DiffMode, RootMethod


def _decay(y):
    return -y


def test_config_defaults():
    cfg = SteadyStateConfig()

    assert cfg.step == 1.0
    assert cfg.max_iterations == 100
    assert cfg.inner_iterations == 25
    assert cfg.tol == 1e-9
    assert cfg.scale == 2.0
    assert cfg.verbose
    assert not cfg.inner_verbose
    assert cfg.root_method is RootMethod.TRUST_REGION
    assert cfg.diff_mode is DiffMode.FINITE
    assert cfg.acceptance_tol == cfg.tol


@pytest.mark.parametrize(
    "kwargs",
    [
        {"step": 0.0},
        {"tol": -1.0},
        {"max_iterations": -1},
        {"inner_iterations": 0},
        {"backoff": 1.0},
        {"scale": 0.0},
        {"ode_max_steps": 0},
        {"method": "newton"},
        {"differentiation": "forward"},
        {"method": "broyden", "differentiation": "analytic"},
    ],
)
def test_config_validation(kwargs):
    with pytest.raises(ValueError):
        SteadyStateConfig(**kwargs)


def test_config_merge():
    cfg = SteadyStateConfig()
    merged = cfg.merge(tol=1e-6, step=None)

    assert merged.tol == 1e-6
    assert merged.step == 1.0
    assert cfg.tol == 1e-9
    with pytest.raises(ValueError):
        cfg.merge(unknown=1)


def test_solve_returns_result_and_history():
    solver = SteadyStateSolver.with_default_engine(config=SteadyStateConfig(verbose=False))
    result = solver.solve(_decay, [1.0])

    assert solver.results is result
    assert result.converged
    assert result.accepted_count + result.rejected_count == result.iterations

    df = result.to_df()
    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == ["iteration", "step", "distance", "inner_distance", "coef", "accepted"]
    assert len(df) == result.iterations
    assert df["iteration"].tolist() == list(range(1, result.iterations + 1))


def test_overrides_apply_per_call_unless_persisted():
    solver = SteadyStateSolver.with_default_engine(config=SteadyStateConfig(verbose=False))

    solver.solve(_decay, [1.0], tol=1e-6)
    assert solver.config.tol == 1e-9

    solver.solve(_decay, [1.0], override=True, tol=1e-6)
    assert solver.config.tol == 1e-6


def test_invalid_override_raises():
    solver = SteadyStateSolver.with_default_engine()

    with pytest.raises(ValueError):
        solver.solve(_decay, [1.0], backoff=0.5)


@pytest.mark.parametrize("y0", [[], [[1.0, 2.0]]])
def test_invalid_initial_state(y0):
    with pytest.raises(ValueError):
        SteadyStateSolver.with_default_engine().solve(_decay, y0)


def test_residual_shape_mismatch():
    with pytest.raises(ValueError):
        SteadyStateSolver.with_default_engine().solve(lambda y: np.zeros(3), [1.0, 2.0])


def test_analytic_without_jacobian():
    with pytest.raises(ValueError):
        SteadyStateSolver.with_default_engine().solve(_decay, [1.0], differentiation="analytic")


def test_unknown_strategy():
    with pytest.raises(ValueError):
        SteadyStateSolver.with_default_engine(strategy="shooting")


def test_initial_nan_propagates_unwrapped():
    solver = SteadyStateSolver.with_default_engine()

    with pytest.raises(InitialResidualError):
        solver.solve(lambda y: np.full_like(y, np.nan), [1.0])


def test_unexpected_backend_error_is_wrapped():
    calls = {"n": 0}

    def F(y):
        calls["n"] += 1
        if calls["n"] > 1:
            raise RuntimeError("boom")
        return -y

    with pytest.raises(EngineError) as excinfo:
        SteadyStateSolver.with_default_engine().solve(F, [1.0])

    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_inner_solver_contract_violation_is_wrapped():
    class _Truncating(_RootFindingBackend):
        def run(self, residual_fn, x0, **kwargs):
            return np.asarray(x0)[:-1], 0.0

    solver = SteadyStateSolver.with_default_engine(root_backend=_Truncating())

    with pytest.raises(EngineError) as excinfo:
        solver.solve(_decay, [1.0, 2.0], verbose=False)

    assert isinstance(excinfo.value.__cause__, BackendError)


def test_functional_entry_points():
    y, d = pseudo_transient_solve(_decay, np.array([1.0]), verbose=False)
    assert abs(y[0]) < 1e-9 and d <= 1e-9

    y, d = pseudo_transient_solve(lambda y: y ** 2 - 4.0, np.array([1.0]), step=np.inf, verbose=False)
    assert y[0] == pytest.approx(2.0, abs=1e-8)

    y, d = ode_continuation_solve(_decay, np.array([1.0]), tol=1e-8, verbose=False)
    assert d <= 1e-8

    y, d = dynamic_steady_state_solve(_decay, np.array([1.0]), tol=1e-8, verbose=False)
    assert d <= 1e-8


def test_entry_point_forwards_extra_config():
    y, d = pseudo_transient_solve(
        _decay, np.array([1.0]), max_iterations=0, step_min=1e-3, backoff=4.0, verbose=False
    )

    assert d > 1e-9
