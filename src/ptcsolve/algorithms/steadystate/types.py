"""Types for the steadystate module."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from ptcsolve.algorithms.residual.types import JacobianFn, ResidualFn
from ptcsolve.algorithms.rootfinding.types import DiffMode, RootMethod
from ptcsolve.algorithms.types.core import _PtcBaseProblem, _PtcBaseResults


@dataclass(frozen=True)
class _IterationRecord:
    """Trace of one outer iteration.

    Attributes
    ----------
    iteration : int
        1-based iteration number.
    step : float
        Pseudo-time step used by the iteration.
    distance : float
        Distance of the candidate state (``inf`` when undefined).
    inner_distance : float
        Convergence distance reported by the inner solver (``nan`` for
        strategies without an inner solve).
    coef : float
        Growth coefficient after the iteration.
    accepted : bool
        Whether the candidate was committed.
    """

    iteration: int
    step: float
    distance: float
    inner_distance: float
    coef: float
    accepted: bool


@dataclass(frozen=True)
class _ControllerState:
    """Loop state of one continuation run.

    Each iteration produces a new record; a record is never mutated.
    """

    state: np.ndarray
    step: float
    coef: float
    distance: float
    iteration: int = 0
    accepted: int = 0
    rejected: int = 0


@dataclass(frozen=True)
class SteadyStateResult(_PtcBaseResults):
    """Standardized result of a steady-state solve.

    Attributes
    ----------
    state : numpy.ndarray
        Best available estimate of the steady state.
    distance : float
        ``||F(state)||_2 / n`` (the inner solver's distance for a direct
        solve).
    converged : bool
        Whether `distance` is within the tolerance.
    iterations : int
        Number of outer iterations performed.
    accepted_count : int
        Number of committed iterations.
    rejected_count : int
        Number of rejected iterations.
    final_step : float
        Pseudo-time step when the loop stopped.
    history : tuple of _IterationRecord
        Per-iteration trace.
    """

    state: np.ndarray
    distance: float
    converged: bool
    iterations: int
    accepted_count: int
    rejected_count: int
    final_step: float
    history: Tuple[_IterationRecord, ...] = ()

    def to_df(self) -> pd.DataFrame:
        """Return the iteration history as a DataFrame."""
        columns = ["iteration", "step", "distance", "inner_distance", "coef", "accepted"]
        return pd.DataFrame([asdict(record) for record in self.history], columns=columns)


@dataclass(frozen=True)
class _SteadyStateProblem(_PtcBaseProblem):
    """Defines the inputs for a steady-state run.

    Attributes
    ----------
    residual_fn : :data:`~ptcsolve.algorithms.residual.types.ResidualFn`
        Residual F(y).
    y0 : numpy.ndarray
        Initial state.
    is_algebraic : numpy.ndarray
        Boolean mask of algebraic components.
    jacobian_fn : :data:`~ptcsolve.algorithms.residual.types.JacobianFn` or None
        Optional Jacobian of F.
    step : float
        Initial pseudo-time step.
    max_iterations : int
        Outer iteration budget.
    inner_iterations : int
        Inner iteration budget.
    tol : float
        Outer convergence tolerance.
    inner_tol : float
        Inner acceptance tolerance.
    scale : float
        Growth coefficient factor.
    step_min : float
        Step floor.
    max_step : float
        Step ceiling.
    backoff : float
        Step divisor on rejection.
    method : RootMethod
        Inner solver.
    differentiation : DiffMode
        Jacobian source.
    verbose : bool
        Outer verbosity.
    inner_verbose : bool
        Inner verbosity.
    ode_method : str
        Integrator method of the ODE strategies.
    ode_rtol : float
        Integrator relative tolerance.
    ode_atol : float
        Integrator absolute tolerance.
    horizon : float
        End of the direct integration span.
    ode_max_steps : int
        Step budget of each integration.
    """

    residual_fn: ResidualFn
    y0: np.ndarray
    is_algebraic: np.ndarray
    jacobian_fn: Optional[JacobianFn]
    step: float
    max_iterations: int
    inner_iterations: int
    tol: float
    inner_tol: float
    scale: float
    step_min: float
    max_step: float
    backoff: float
    method: RootMethod
    differentiation: DiffMode
    verbose: bool
    inner_verbose: bool
    ode_method: str
    ode_rtol: float
    ode_atol: float
    horizon: float
    ode_max_steps: int
