"""Event functions for integrations that stop at a steady state."""

from typing import Callable

import numpy as np

from ptcsolve.algorithms.integrators.configs import _EventConfig
from ptcsolve.algorithms.residual.augment import residual_distance
from ptcsolve.algorithms.residual.types import ResidualFn

# Stop strictly inside the tolerance so the terminal state passes the check.
_STEADY_STATE_MARGIN = 0.5

STEADY_STATE_EVENT = _EventConfig(direction=-1, terminal=True)


def steady_state_event(residual_fn: ResidualFn, tol: float) -> Callable[[float, np.ndarray], float]:
    """Return ``g(t, y) = ||F(y)||/n - margin * tol``.

    A decreasing zero crossing of *g* means the trajectory has entered the
    steady-state tolerance. NaN residuals map to ``+inf`` so they never
    register as a crossing.
    """
    threshold = _STEADY_STATE_MARGIN * float(tol)

    def _event(t: float, y: np.ndarray) -> float:
        distance = residual_distance(residual_fn, y)
        if np.isnan(distance):
            return float("inf")
        return distance - threshold

    return _event


STEP_BUDGET_EVENT = _EventConfig(direction=-1, terminal=True)


def step_budget_event(max_steps: int) -> Callable[[float, np.ndarray], float]:
    """Return an event that fires once *max_steps* integrator steps are taken.

    :func:`scipy.integrate.solve_ivp` evaluates every event once at the
    initial time and then once at the end of each accepted step, always at
    a later time than before. The event counts those forward evaluations
    and stays positive until the budget is spent. From then on it is
    ``t_stop - t``, which vanishes exactly at the end of the last allowed
    step, so the root bracket ``[t_old, t_stop]`` is always valid.
    """
    if max_steps <= 0:
        raise ValueError(f"max_steps must be positive, got {max_steps}")

    seen = {"t": None, "steps": 0, "t_stop": None}

    def _event(t: float, y: np.ndarray) -> float:
        if seen["t_stop"] is not None:
            return seen["t_stop"] - t
        if seen["t"] is None:
            seen["t"] = t
        elif t > seen["t"]:
            seen["t"] = t
            seen["steps"] += 1
            if seen["steps"] >= max_steps:
                seen["t_stop"] = t
                return 0.0
        return float(max_steps - seen["steps"])

    return _event
