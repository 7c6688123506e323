"""Implicit-Euler regularization of residual functions.

Finding a root of

.. math::

    G(y) = F(y) + \\frac{y_{prev} - y}{\\Delta}

is one backward-Euler step of size :math:`\\Delta` from :math:`y_{prev}`
under the dynamics :math:`\\dot y = F(y)`. Algebraic components carry no
time derivative and are left untouched.
"""

from typing import Iterable, Optional

import numpy as np
from numba import njit

from ptcsolve.algorithms.residual.types import JacobianFn, ResidualFn
from ptcsolve.algorithms.utils.config import FASTMATH


@njit(fastmath=FASTMATH, cache=False)
def _augment_inplace(dydt, y, y_prev, delta, is_algebraic):
    for i in range(dydt.shape[0]):
        if not is_algebraic[i]:
            dydt[i] = dydt[i] + (y_prev[i] - y[i]) / delta
    return dydt


@njit(fastmath=FASTMATH, cache=False)
def _shift_diagonal_inplace(jac, delta, is_algebraic):
    for i in range(jac.shape[0]):
        if not is_algebraic[i]:
            jac[i, i] = jac[i, i] - 1.0 / delta
    return jac


@njit(fastmath=FASTMATH, cache=False)
def _scaled_norm(v):
    # explicit sum so NaN entries propagate
    acc = 0.0
    for i in range(v.shape[0]):
        acc += v[i] * v[i]
    return np.sqrt(acc) / v.shape[0]


def _as_state(y) -> np.ndarray:
    return np.ascontiguousarray(y, dtype=np.float64)


def algebraic_mask(is_algebraic: Optional[Iterable], n: int) -> np.ndarray:
    """Normalize an algebraic-component specification to a boolean mask.

    Parameters
    ----------
    is_algebraic : None, sequence of bool or iterable of int
        ``None`` marks every component as differential. A boolean sequence
        must have length *n*; otherwise the entries are read as indices.
    n : int
        Length of the state vector.

    Returns
    -------
    numpy.ndarray
        Boolean array of shape (n,), True where the component is algebraic.

    Raises
    ------
    ValueError
        If a boolean mask has the wrong length or an index is out of range.
    """
    if is_algebraic is None:
        return np.zeros(n, dtype=np.bool_)

    arr = np.asarray(list(is_algebraic) if not isinstance(is_algebraic, np.ndarray) else is_algebraic)
    if arr.size == 0:
        return np.zeros(n, dtype=np.bool_)

    if arr.dtype == np.bool_:
        if arr.shape != (n,):
            raise ValueError(
                f"Algebraic mask has shape {arr.shape}, expected ({n},)."
            )
        return arr.copy()

    if not np.issubdtype(arr.dtype, np.integer):
        raise ValueError("Algebraic components must be given as a boolean mask or integer indices.")

    idx = arr.ravel()
    if np.any(idx < 0) or np.any(idx >= n):
        raise ValueError(f"Algebraic indices must lie in [0, {n}), got {idx.tolist()}.")
    mask = np.zeros(n, dtype=np.bool_)
    mask[idx] = True
    return mask


def residual_distance(residual_fn: ResidualFn, y: np.ndarray) -> float:
    """Return the normalized residual norm ``||F(y)||_2 / n``.

    NaN is returned unchanged; callers decide how to treat it.
    """
    dydt = _as_state(residual_fn(_as_state(y)))
    return float(_scaled_norm(dydt))


def augment_residual(
    residual_fn: ResidualFn,
    y_prev: np.ndarray,
    delta: float,
    is_algebraic: Optional[np.ndarray] = None,
) -> ResidualFn:
    """Build the time-regularized residual of one implicit step.

    Parameters
    ----------
    residual_fn : :data:`~ptcsolve.algorithms.residual.types.ResidualFn`
        Residual F(y).
    y_prev : numpy.ndarray
        Committed state the implicit step starts from.
    delta : float
        Pseudo-time step. ``numpy.inf`` returns *residual_fn* unchanged.
    is_algebraic : numpy.ndarray or None
        Boolean mask of algebraic components (never regularized).

    Returns
    -------
    :data:`~ptcsolve.algorithms.residual.types.ResidualFn`
        ``G(y) = F(y) + (y_prev - y) / delta`` on differential components,
        ``F(y)`` on algebraic ones.
    """
    if np.isinf(delta):
        return residual_fn

    y_ref = _as_state(y_prev).copy()
    mask = algebraic_mask(is_algebraic, y_ref.shape[0])
    step = float(delta)

    def _augmented(y: np.ndarray) -> np.ndarray:
        y_arr = _as_state(y)
        dydt = np.array(residual_fn(y_arr), dtype=np.float64)
        if dydt.shape != y_arr.shape:
            raise ValueError(
                f"Residual returned shape {dydt.shape} for a state of shape {y_arr.shape}."
            )
        return _augment_inplace(dydt, y_arr, y_ref, step, mask)

    return _augmented


def augment_jacobian(
    jacobian_fn: JacobianFn,
    delta: float,
    is_algebraic: Optional[np.ndarray] = None,
) -> JacobianFn:
    """Build the Jacobian of :func:`augment_residual`'s output.

    ``dG/dy = dF/dy - diag(d) / delta`` where ``d`` is 1 on differential
    components and 0 on algebraic ones.
    """
    if np.isinf(delta):
        return jacobian_fn

    step = float(delta)

    def _augmented(y: np.ndarray) -> np.ndarray:
        jac = np.array(jacobian_fn(_as_state(y)), dtype=np.float64)
        if jac.ndim != 2 or jac.shape[0] != jac.shape[1]:
            raise ValueError(f"Jacobian must be a square matrix, got shape {jac.shape}.")
        mask = algebraic_mask(is_algebraic, jac.shape[0])
        return _shift_diagonal_inplace(jac, step, mask)

    return _augmented
