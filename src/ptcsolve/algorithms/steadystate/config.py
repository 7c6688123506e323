"""Provide the configuration class for steady-state solves.

One frozen configuration drives all three strategies (implicit
pseudo-transient continuation, fixed-horizon ODE continuation and direct
steady-state integration). Fields that a strategy does not use are ignored by
it.
"""

from dataclasses import dataclass
from typing import Literal, Optional

import numpy as np

from ptcsolve.algorithms.rootfinding.types import DiffMode, RootMethod
from ptcsolve.algorithms.types.core import _PtcBaseConfig


@dataclass(frozen=True)
class SteadyStateConfig(_PtcBaseConfig):
    """Configuration for steady-state solves.

    Parameters
    ----------
    step : float, default=1.0
        Initial pseudo-time step. ``numpy.inf`` requests a single direct
        solve of F(y) = 0 (implicit strategy only).
    max_iterations : int, default=100
        Outer iteration budget. The loop runs while the iteration counter
        is at most this value.
    inner_iterations : int, default=25
        Iteration budget of each inner nonlinear solve.
    tol : float, default=1e-9
        Convergence tolerance on the distance ``||F(y)||_2 / n``.
    inner_tol : float or None, default=None
        Tolerance an inner solve must reach for its step to be accepted.
        Falls back to `tol`.
    scale : float, default=2.0
        Factor compounding the step growth coefficient on consecutive
        non-regressing accepted steps.
    step_min : float, default=1e-12
        Floor on the pseudo-time step; the loop stops below it.
    max_step : float, default=inf
        Ceiling on the pseudo-time step.
    backoff : float, default=10.0
        Divisor applied to the step after a rejected iteration.
    method : {"trust_region", "levenberg_marquardt", "newton_krylov", "broyden"}
        Inner nonlinear solver.
    differentiation : {"finite", "analytic"}, default="finite"
        Jacobian source of the inner solver.
    verbose : bool, default=True
        Log each outer iteration at INFO level (DEBUG otherwise).
    inner_verbose : bool, default=False
        Log each inner solve at INFO level (DEBUG otherwise).
    ode_method : str, default="BDF"
        :func:`scipy.integrate.solve_ivp` method of the ODE strategies.
    ode_rtol : float, default=1e-6
        Relative tolerance of the ODE strategies.
    ode_atol : float or None, default=None
        Absolute tolerance of the ODE strategies. Falls back to `tol`.
    horizon : float, default=inf
        End of the pseudo-time span of the direct steady-state integration.
    ode_max_steps : int, default=10000
        Budget of accepted integrator steps per integration of the ODE
        strategies. An integration that spends it stops where it is, so a
        trajectory that never settles (an oscillator) still returns.

    Examples
    --------
    >>> config = SteadyStateConfig(tol=1e-10, scale=1.5)
    >>> tighter = config.merge(tol=1e-12)
    """
    step: float = 1.0
    max_iterations: int = 100
    inner_iterations: int = 25
    tol: float = 1e-9
    inner_tol: Optional[float] = None
    scale: float = 2.0
    step_min: float = 1e-12
    max_step: float = np.inf
    backoff: float = 10.0
    method: Literal["trust_region", "levenberg_marquardt", "newton_krylov", "broyden"] = "trust_region"
    differentiation: Literal["finite", "analytic"] = "finite"
    verbose: bool = True
    inner_verbose: bool = False
    ode_method: str = "BDF"
    ode_rtol: float = 1e-6
    ode_atol: Optional[float] = None
    horizon: float = np.inf
    ode_max_steps: int = 10_000

    def _validate(self) -> None:
        """Validate the configuration."""
        if not self.step > 0:
            raise ValueError(f"step must be positive, got {self.step}")
        if self.max_iterations < 0:
            raise ValueError(f"max_iterations must be non-negative, got {self.max_iterations}")
        if self.inner_iterations <= 0:
            raise ValueError(f"inner_iterations must be positive, got {self.inner_iterations}")
        if not self.tol > 0:
            raise ValueError(f"tol must be positive, got {self.tol}")
        if self.inner_tol is not None and not self.inner_tol > 0:
            raise ValueError(f"inner_tol must be positive, got {self.inner_tol}")
        if not self.scale > 0:
            raise ValueError(f"scale must be positive, got {self.scale}")
        if self.step_min < 0:
            raise ValueError(f"step_min must be non-negative, got {self.step_min}")
        if not self.max_step > 0:
            raise ValueError(f"max_step must be positive, got {self.max_step}")
        if not self.backoff > 1:
            raise ValueError(f"backoff must be greater than 1, got {self.backoff}")
        if self.ode_max_steps <= 0:
            raise ValueError(f"ode_max_steps must be positive, got {self.ode_max_steps}")
        if not self.horizon > 0:
            raise ValueError(f"horizon must be positive, got {self.horizon}")

        try:
            method = RootMethod(self.method)
            differentiation = DiffMode(self.differentiation)
        except ValueError as exc:
            raise ValueError(f"Invalid solver selector: {exc}") from exc

        if differentiation is DiffMode.ANALYTIC and not method.accepts_jacobian:
            raise ValueError(
                f"Method '{method}' is Jacobian-free and cannot use analytic differentiation."
            )

    @property
    def root_method(self) -> RootMethod:
        return RootMethod(self.method)

    @property
    def diff_mode(self) -> DiffMode:
        return DiffMode(self.differentiation)

    @property
    def acceptance_tol(self) -> float:
        return self.tol if self.inner_tol is None else self.inner_tol
