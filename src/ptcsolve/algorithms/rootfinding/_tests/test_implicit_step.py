import numpy as np
import pytest

from ptcsolve.algorithms.rootfinding import (RootMethod, _RootFindingBackend,
                                             _ScipyRootBackend,
                                             implicit_time_step)


def _decay(y):
    return -y


def test_implicit_step_linear_decay():
    # -y + (1 - y) / 1 = 0  ->  y = 0.5
    y, d = implicit_time_step(_decay, np.array([1.0]), 1.0)

    assert y[0] == pytest.approx(0.5, abs=1e-10)
    assert d <= 1e-9


def test_infinite_step_is_direct_solve():
    y, d = implicit_time_step(lambda y: y ** 2 - 4.0, np.array([1.0]), np.inf)

    assert y[0] == pytest.approx(2.0, abs=1e-8)
    assert d <= 1e-9


def test_algebraic_component_solved_exactly():
    def F(y):
        return np.array([-y[0], 2.0 - y[1]])

    y, d = implicit_time_step(F, np.array([1.0, 0.0]), 1.0, is_algebraic=np.array([False, True]))

    assert np.allclose(y, [0.5, 2.0], atol=1e-10)
    assert d <= 1e-9


def test_analytic_jacobian_matches_finite_differences():
    def J(y):
        return -np.eye(y.size)

    y_fd, _ = implicit_time_step(_decay, np.array([1.0, -3.0]), 2.0)
    y_an, d = implicit_time_step(
        _decay, np.array([1.0, -3.0]), 2.0, jacobian_fn=J, differentiation="analytic"
    )

    assert np.allclose(y_fd, y_an, atol=1e-10)
    assert np.allclose(y_an, [1.0 / 3.0, -1.0], atol=1e-10)
    assert d <= 1e-9


@pytest.mark.parametrize("method", ["levenberg_marquardt", "newton_krylov", "broyden"])
def test_alternative_methods(method):
    y, d = implicit_time_step(_decay, np.array([1.0, 2.0]), 1.0, method=method)

    assert np.allclose(y, [0.5, 1.0], atol=1e-7)
    assert np.isfinite(d)


def test_analytic_without_jacobian_raises():
    with pytest.raises(ValueError):
        implicit_time_step(_decay, np.array([1.0]), 1.0, differentiation="analytic")


def test_jacobian_with_jacobian_free_method_raises():
    with pytest.raises(ValueError):
        implicit_time_step(
            _decay,
            np.array([1.0]),
            1.0,
            jacobian_fn=lambda y: -np.eye(1),
            method=RootMethod.BROYDEN,
            differentiation="analytic",
        )


def test_linear_algebra_breakdown_maps_to_infinite_distance():
    def F(y):
        raise np.linalg.LinAlgError("singular")

    x0 = np.array([1.0, 2.0])
    x, d = _ScipyRootBackend().run(F, x0)

    assert np.array_equal(x, x0)
    assert d == np.inf


def test_custom_backend_receives_augmented_problem():
    seen = {}

    class _Recorder(_RootFindingBackend):
        def run(self, residual_fn, x0, **kwargs):
            seen["G0"] = residual_fn(x0)
            seen.update(kwargs)
            return x0, 0.0

    implicit_time_step(_decay, np.array([1.0]), 0.5, backend=_Recorder(), tol=1e-6, max_iterations=7)

    # at y = y_prev the regularization term vanishes
    assert np.allclose(seen["G0"], [-1.0])
    assert seen["tol"] == 1e-6
    assert seen["max_iterations"] == 7
    assert seen["method"] is RootMethod.TRUST_REGION


def test_tolerance_reaches_minpack_methods():
    hybr = _ScipyRootBackend._options(RootMethod.TRUST_REGION, n=2, tol=1e-6, max_iterations=25, verbose=False)
    lm = _ScipyRootBackend._options(RootMethod.LEVENBERG_MARQUARDT, n=2, tol=1e-6, max_iterations=25, verbose=False)

    assert hybr["xtol"] == 1e-6
    assert lm["xtol"] == lm["ftol"] == 1e-6


def test_tolerance_is_floored_at_machine_epsilon():
    hybr = _ScipyRootBackend._options(RootMethod.TRUST_REGION, n=1, tol=1e-20, max_iterations=25, verbose=False)

    assert hybr["xtol"] == np.finfo(float).eps
