from .base import _SteadyStateEngineBase
from .engine import _SteadyStateEngine

__all__ = ["_SteadyStateEngineBase", "_SteadyStateEngine"]
