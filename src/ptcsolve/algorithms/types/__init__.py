"""Shared pipeline base classes and exceptions."""

from .core import (_BackendCall, _PtcBaseBackend, _PtcBaseConfig,
                   _PtcBaseEngine, _PtcBaseFacade, _PtcBaseInterface,
                   _PtcBaseProblem, _PtcBaseResults)
from .exceptions import (BackendError, EngineError, InitialResidualError,
                         PtcError)

__all__ = [
    "_BackendCall",
    "_PtcBaseBackend",
    "_PtcBaseConfig",
    "_PtcBaseEngine",
    "_PtcBaseFacade",
    "_PtcBaseInterface",
    "_PtcBaseProblem",
    "_PtcBaseResults",
    "PtcError",
    "BackendError",
    "EngineError",
    "InitialResidualError",
]
