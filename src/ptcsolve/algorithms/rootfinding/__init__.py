"""Inner nonlinear solves for implicit pseudo-time steps."""

from .backends import _RootFindingBackend, _ScipyRootBackend
from .step import implicit_time_step
from .types import DiffMode, RootMethod

__all__ = [
    "implicit_time_step",
    "RootMethod",
    "DiffMode",
    "_RootFindingBackend",
    "_ScipyRootBackend",
]
