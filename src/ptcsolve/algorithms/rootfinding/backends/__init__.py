from .base import _RootFindingBackend
from .scipy_root import _ScipyRootBackend

__all__ = ["_RootFindingBackend", "_ScipyRootBackend"]
