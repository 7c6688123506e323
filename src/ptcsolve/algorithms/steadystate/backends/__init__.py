from .base import _SteadyStateBackend
from .dynamic import _DynamicSteadyStateBackend
from .ode import _FixedHorizonODEBackend
from .ptc import _PTCBackend

__all__ = [
    "_SteadyStateBackend",
    "_PTCBackend",
    "_FixedHorizonODEBackend",
    "_DynamicSteadyStateBackend",
]
