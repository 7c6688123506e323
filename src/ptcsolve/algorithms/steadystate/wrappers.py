"""Functional entry points returning ``(state, distance)``.

Thin wrappers around :class:`~ptcsolve.algorithms.steadystate.base.SteadyStateSolver`
for callers that only need the final state and its residual distance.
"""

from typing import Iterable, Optional, Tuple

import numpy as np

from ptcsolve.algorithms.residual.types import JacobianFn, ResidualFn
from ptcsolve.algorithms.steadystate.base import SteadyStateSolver
from ptcsolve.algorithms.steadystate.config import SteadyStateConfig


def _run(strategy: str, residual_fn: ResidualFn, y0, algebraic, jacobian, overrides: dict) -> Tuple[np.ndarray, float]:
    config = SteadyStateConfig().merge(**overrides)
    solver = SteadyStateSolver.with_default_engine(config=config, strategy=strategy)
    result = solver.solve(residual_fn, y0, algebraic=algebraic, jacobian=jacobian)
    return result.state, result.distance


def pseudo_transient_solve(
    residual_fn: ResidualFn,
    y0,
    *,
    algebraic: Optional[Iterable] = None,
    jacobian: Optional[JacobianFn] = None,
    step: float = 1.0,
    max_iterations: int = 100,
    inner_iterations: int = 25,
    verbose: bool = True,
    inner_verbose: bool = False,
    method: str = "trust_region",
    differentiation: str = "finite",
    tol: float = 1e-9,
    scale: float = 2.0,
    **overrides,
) -> Tuple[np.ndarray, float]:
    """Find a steady state by pseudo-transient continuation.

    Each iteration solves one implicit Euler step of size ``step``; the step
    grows after successful iterations and shrinks after failed ones.
    ``step=numpy.inf`` solves ``F(y) = 0`` directly.

    Parameters
    ----------
    residual_fn : callable
        Residual ``F(y) -> dy/dt``.
    y0 : array_like
        Initial state.
    algebraic : sequence of bool or int, optional
        Components without a time derivative.
    jacobian : callable, optional
        Analytic Jacobian of *residual_fn*.
    **overrides
        Further :class:`~ptcsolve.algorithms.steadystate.config.SteadyStateConfig`
        fields (``step_min``, ``backoff``, ``max_step``, ``inner_tol``).

    Returns
    -------
    state : numpy.ndarray
        Final committed state.
    distance : float
        Its residual distance ``||F(state)||_2 / n``.

    Examples
    --------
    >>> import numpy as np
    >>> y, d = pseudo_transient_solve(lambda y: -y, np.array([1.0]), verbose=False)
    """
    overrides.update(
        step=step,
        max_iterations=max_iterations,
        inner_iterations=inner_iterations,
        verbose=verbose,
        inner_verbose=inner_verbose,
        method=method,
        differentiation=differentiation,
        tol=tol,
        scale=scale,
    )
    return _run("ptc", residual_fn, y0, algebraic, jacobian, overrides)


def ode_continuation_solve(
    residual_fn: ResidualFn,
    y0,
    *,
    jacobian: Optional[JacobianFn] = None,
    step: float = 1.0,
    max_iterations: int = 100,
    verbose: bool = True,
    tol: float = 1e-9,
    scale: float = 2.0,
    ode_method: str = "BDF",
    **overrides,
) -> Tuple[np.ndarray, float]:
    """Find a steady state by integrating over growing pseudo-time horizons."""
    overrides.update(
        step=step,
        max_iterations=max_iterations,
        verbose=verbose,
        tol=tol,
        scale=scale,
        ode_method=ode_method,
    )
    return _run("ode", residual_fn, y0, None, jacobian, overrides)


def dynamic_steady_state_solve(
    residual_fn: ResidualFn,
    y0,
    *,
    jacobian: Optional[JacobianFn] = None,
    tol: float = 1e-9,
    horizon: float = np.inf,
    verbose: bool = True,
    ode_method: str = "BDF",
    **overrides,
) -> Tuple[np.ndarray, float]:
    """Find a steady state by a single integration stopped at steady state."""
    overrides.update(tol=tol, horizon=horizon, verbose=verbose, ode_method=ode_method)
    return _run("dynamic", residual_fn, y0, None, jacobian, overrides)
