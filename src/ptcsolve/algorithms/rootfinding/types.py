"""Types for the rootfinding module."""

from enum import Enum


class RootMethod(Enum):
    """Inner nonlinear solver selector.

    Parameters
    ----------
    TRUST_REGION : str
        Powell's hybrid dogleg trust-region method (MINPACK ``hybrd``/``hybrj``).
    LEVENBERG_MARQUARDT : str
        Levenberg-Marquardt least squares (MINPACK ``lmdif``/``lmder``).
    NEWTON_KRYLOV : str
        Jacobian-free inexact Newton with a Krylov linear solver.
    BROYDEN : str
        Broyden's first quasi-Newton method.
    """
    TRUST_REGION = "trust_region"
    LEVENBERG_MARQUARDT = "levenberg_marquardt"
    NEWTON_KRYLOV = "newton_krylov"
    BROYDEN = "broyden"

    @property
    def accepts_jacobian(self) -> bool:
        return self in (RootMethod.TRUST_REGION, RootMethod.LEVENBERG_MARQUARDT)

    def __str__(self) -> str:
        return self.value


class DiffMode(Enum):
    """Jacobian source for the inner solver.

    Parameters
    ----------
    FINITE : str
        Let the solver approximate the Jacobian by finite differences.
    ANALYTIC : str
        Use the Jacobian function supplied with the problem.
    """
    FINITE = "finite"
    ANALYTIC = "analytic"

    def __str__(self) -> str:
        return self.value
