""" Public API for the :mod:`~ptcsolve.algorithms` package.
"""

from .integrators.scipy_ivp import _ScipyIntegrator as ScipyIntegrator
from .residual.augment import augment_residual
from .rootfinding.backends.scipy_root import \
    _ScipyRootBackend as ScipyRootBackend
from .rootfinding.step import implicit_time_step
from .rootfinding.types import DiffMode, RootMethod
from .steadystate.base import SteadyStateSolver
from .steadystate.config import SteadyStateConfig
from .steadystate.types import SteadyStateResult
from .steadystate.wrappers import (dynamic_steady_state_solve,
                                   ode_continuation_solve,
                                   pseudo_transient_solve)
from .types.exceptions import (BackendError, EngineError,
                               InitialResidualError, PtcError)

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
    "ScipyRootBackend",
    "ScipyIntegrator",
    "PtcError",
    "BackendError",
    "EngineError",
    "InitialResidualError",
]
