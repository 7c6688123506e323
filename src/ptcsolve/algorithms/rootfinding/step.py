"""Implicit pseudo-time step.

One step solves the regularized system
``F(y) + (y_prev - y) / delta = 0`` starting from ``y_prev``. With
``delta = inf`` the regularization vanishes and the step is a plain solve
of ``F(y) = 0``.
"""

from typing import Optional, Tuple, Union

import numpy as np

from ptcsolve.algorithms.residual.augment import (augment_jacobian,
                                                  augment_residual)
from ptcsolve.algorithms.residual.types import JacobianFn, ResidualFn
from ptcsolve.algorithms.rootfinding.backends.base import _RootFindingBackend
from ptcsolve.algorithms.rootfinding.backends.scipy_root import \
    _ScipyRootBackend
from ptcsolve.algorithms.rootfinding.types import DiffMode, RootMethod


def implicit_time_step(
    residual_fn: ResidualFn,
    y_prev: np.ndarray,
    delta: float,
    *,
    is_algebraic: Optional[np.ndarray] = None,
    jacobian_fn: Optional[JacobianFn] = None,
    backend: Optional[_RootFindingBackend] = None,
    method: Union[RootMethod, str] = RootMethod.TRUST_REGION,
    differentiation: Union[DiffMode, str] = DiffMode.FINITE,
    tol: float = 1e-9,
    max_iterations: int = 25,
    verbose: bool = False,
) -> Tuple[np.ndarray, float]:
    """Take one implicit step of size *delta* from *y_prev*.

    Parameters
    ----------
    residual_fn : :data:`~ptcsolve.algorithms.residual.types.ResidualFn`
        Residual F(y).
    y_prev : numpy.ndarray
        Committed state; also the initial guess of the inner solve.
    delta : float
        Pseudo-time step, ``numpy.inf`` for a direct solve.
    is_algebraic : numpy.ndarray or None
        Boolean mask of algebraic components.
    jacobian_fn : :data:`~ptcsolve.algorithms.residual.types.JacobianFn` or None
        Jacobian of F, used when *differentiation* is ``"analytic"``.
    backend : :class:`~ptcsolve.algorithms.rootfinding.backends.base._RootFindingBackend` or None
        Inner solver. Defaults to :class:`~ptcsolve.algorithms.rootfinding.backends.scipy_root._ScipyRootBackend`.
    method : RootMethod or str
        Inner solver method.
    differentiation : DiffMode or str
        Jacobian source.
    tol : float
        Inner convergence tolerance.
    max_iterations : int
        Inner iteration budget.
    verbose : bool
        Log the inner solve summary at INFO instead of DEBUG.

    Returns
    -------
    y_next : numpy.ndarray
        Best iterate of the inner solve.
    distance : float
        Inner solver's convergence distance at *y_next*.

    Raises
    ------
    ValueError
        If analytic differentiation is requested without a Jacobian.
    """
    method = RootMethod(method)
    differentiation = DiffMode(differentiation)
    backend = backend if backend is not None else _ScipyRootBackend()

    augmented = augment_residual(residual_fn, y_prev, delta, is_algebraic)

    augmented_jac = None
    if differentiation is DiffMode.ANALYTIC:
        if jacobian_fn is None:
            raise ValueError("Analytic differentiation requires a Jacobian function.")
        augmented_jac = augment_jacobian(jacobian_fn, delta, is_algebraic)

    return backend.run(
        augmented,
        np.asarray(y_prev, dtype=float),
        jacobian_fn=augmented_jac,
        method=method,
        tol=tol,
        max_iterations=max_iterations,
        verbose=verbose,
    )
