"""Time integration of ``dy/dt = F(y)`` for the ODE-based strategies."""

from .configs import _EventConfig
from .events import (STEADY_STATE_EVENT, STEP_BUDGET_EVENT,
                     steady_state_event, step_budget_event)
from .scipy_ivp import _ScipyIntegrator
from .types import _Solution

__all__ = [
    "_EventConfig",
    "_ScipyIntegrator",
    "_Solution",
    "STEADY_STATE_EVENT",
    "steady_state_event",
    "STEP_BUDGET_EVENT",
    "step_budget_event",
]
