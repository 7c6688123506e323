"""Steady-state engine wiring backend and interface."""

from typing import Any

import numpy as np

from ptcsolve.algorithms.steadystate.backends.base import _SteadyStateBackend
from ptcsolve.algorithms.steadystate.engine.base import _SteadyStateEngineBase
from ptcsolve.algorithms.steadystate.interfaces import _SteadyStateInterface
from ptcsolve.algorithms.steadystate.types import _SteadyStateProblem
from ptcsolve.algorithms.types.exceptions import EngineError, InitialResidualError


class _SteadyStateEngine(_SteadyStateEngineBase):
    """Engine orchestrating steady-state solves via backend and interface."""

    def __init__(
        self,
        *,
        backend: _SteadyStateBackend,
        interface: _SteadyStateInterface | None = None,
    ) -> None:
        super().__init__(backend=backend, interface=interface)

    def _handle_backend_failure(
        self,
        exc: Exception,
        *,
        problem: _SteadyStateProblem,
        call,
        interface,
    ) -> None:
        if isinstance(exc, InitialResidualError):
            raise exc
        raise EngineError("Steady-state solve failed") from exc

    def _after_backend_success(self, outputs, *, problem, domain_payload, interface) -> None:
        state, distance, info = outputs
        if not info.get("converged", False):
            return
        self._backend.on_success(
            np.asarray(state, dtype=float),
            iterations=int(info.get("iterations", 0)),
            residual_norm=float(distance),
        )

    def _invoke_backend(self, call) -> tuple[np.ndarray, float, dict[str, Any]]:
        return self._backend.run(*call.args, **call.kwargs)
