"""
Types for the residual module.
"""

from typing import Callable

import numpy as np

#: Type alias for residual function signatures.
#:
#: Functions of this type map a state vector ``y`` to its time derivative
#: ``dy/dt``. A steady state is a vector at which the residual vanishes.
#:
#: Parameters
#: ----------
#: y : ndarray
#:     State vector of length n.
#:
#: Returns
#: -------
#: dydt : ndarray
#:     Derivative vector of length n.
#:
#: Notes
#: -----
#: The function must be pure and callable with arbitrary vectors, including
#: intermediate iterates far away from any root. Its output is copied before
#: being modified, so returning an internal buffer is allowed.
ResidualFn = Callable[[np.ndarray], np.ndarray]

#: Type alias for Jacobian function signatures.
#:
#: Parameters
#: ----------
#: y : ndarray
#:     State vector at which to evaluate the Jacobian.
#:
#: Returns
#: -------
#: jacobian : ndarray
#:     Matrix of shape (n, n); element (i, j) is dF_i/dy_j.
JacobianFn = Callable[[np.ndarray], np.ndarray]
