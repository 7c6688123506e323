"""Steady-state solvers for ``dy/dt = F(y)``.

Three strategies share one configuration, one result type and the
facade → engine → interface → backend pipeline:

- ``"ptc"``: pseudo-transient continuation with implicit Euler steps and an
  adaptive step size (default).
- ``"ode"``: repeated integration over growing pseudo-time horizons.
- ``"dynamic"``: a single integration stopped once the steady state is
  reached.
"""

from .backends import (_DynamicSteadyStateBackend, _FixedHorizonODEBackend,
                       _PTCBackend, _SteadyStateBackend)
from .base import SteadyStateSolver
from .config import SteadyStateConfig
from .engine import _SteadyStateEngine, _SteadyStateEngineBase
from .interfaces import _SteadyStateInterface
from .stepping import _StepSizeController
from .types import (SteadyStateResult, _ControllerState, _IterationRecord,
                    _SteadyStateProblem)
from .wrappers import (dynamic_steady_state_solve, ode_continuation_solve,
                       pseudo_transient_solve)

__all__ = [
    # Backends
    "_SteadyStateBackend",
    "_PTCBackend",
    "_FixedHorizonODEBackend",
    "_DynamicSteadyStateBackend",

    # Interfaces & Engines
    "_SteadyStateEngineBase",
    "_SteadyStateEngine",
    "_SteadyStateInterface",
    "_StepSizeController",

    # Facade, config & entry points
    "SteadyStateSolver",
    "SteadyStateConfig",
    "pseudo_transient_solve",
    "ode_continuation_solve",
    "dynamic_steady_state_solve",

    # Types & Results
    "SteadyStateResult",
    "_ControllerState",
    "_IterationRecord",
    "_SteadyStateProblem",
]
