"""
Abstract base class for steady-state engines.
"""

from ptcsolve.algorithms.types.core import _PtcBaseEngine


class _SteadyStateEngineBase(_PtcBaseEngine):
    """Shared base class for steady-state engines."""
