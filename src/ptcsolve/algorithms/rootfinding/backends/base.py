"""Abstract base class for nonlinear root-finding backends."""

from abc import abstractmethod
from typing import Optional, Tuple

import numpy as np

from ptcsolve.algorithms.residual.types import JacobianFn, ResidualFn
from ptcsolve.algorithms.rootfinding.types import RootMethod
from ptcsolve.algorithms.types.core import _PtcBaseBackend


class _RootFindingBackend(_PtcBaseBackend):
    """Contract for the solver that handles one implicit step.

    Implementations must be bounded by ``max_iterations`` and must not raise
    on non-convergence: they return their best iterate together with its
    convergence distance and let the caller decide.
    """

    @abstractmethod
    def run(
        self,
        residual_fn: ResidualFn,
        x0: np.ndarray,
        *,
        jacobian_fn: Optional[JacobianFn] = None,
        method: RootMethod = RootMethod.TRUST_REGION,
        tol: float = 1e-9,
        max_iterations: int = 25,
        verbose: bool = False,
    ) -> Tuple[np.ndarray, float]:
        """Solve ``residual_fn(x) = 0`` starting from *x0*.

        Returns
        -------
        x : numpy.ndarray
            Best iterate found.
        distance : float
            Sup norm of the residual at *x*; ``inf`` when undefined.
        """
        ...
