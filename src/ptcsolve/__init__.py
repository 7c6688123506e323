"""ptcsolve: steady states of ``dy/dt = F(y)`` by pseudo-transient continuation."""

from ptcsolve.algorithms import (BackendError, DiffMode, EngineError,
                                 InitialResidualError, PtcError,
                                 RootMethod, SteadyStateConfig,
                                 SteadyStateResult, SteadyStateSolver,
                                 augment_residual, dynamic_steady_state_solve,
                                 implicit_time_step, ode_continuation_solve,
                                 pseudo_transient_solve)

__version__ = "0.1.0"

__all__ = [
    "SteadyStateSolver",
    "SteadyStateConfig",
    "SteadyStateResult",
    "pseudo_transient_solve",
    "ode_continuation_solve",
    "dynamic_steady_state_solve",
    "augment_residual",
    "implicit_time_step",
    "RootMethod",
    "DiffMode",
    "PtcError",
    "BackendError",
    "EngineError",
    "InitialResidualError",
]
