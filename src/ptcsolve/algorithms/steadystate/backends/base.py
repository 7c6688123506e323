"""Abstract base class for steady-state backends."""

from abc import abstractmethod
from typing import Any, Tuple

import numpy as np

from ptcsolve.algorithms.residual.augment import residual_distance
from ptcsolve.algorithms.residual.types import ResidualFn
from ptcsolve.algorithms.steadystate.types import (_ControllerState,
                                                   _IterationRecord,
                                                   _SteadyStateProblem)
from ptcsolve.algorithms.types.core import _PtcBaseBackend
from ptcsolve.algorithms.types.exceptions import InitialResidualError
from ptcsolve.utils.log_config import logger


class _SteadyStateBackend(_PtcBaseBackend):
    """Shared precondition, bookkeeping and reporting of steady-state backends.

    Every backend returns ``(state, distance, info)`` where *info* holds the
    counters and the iteration history consumed by the interface.
    """

    @abstractmethod
    def run(self, problem: _SteadyStateProblem) -> Tuple[np.ndarray, float, dict[str, Any]]:
        """Solve *problem* and return its final state, distance and info."""
        ...

    @staticmethod
    def _initial_distance(problem: _SteadyStateProblem) -> float:
        distance = residual_distance(problem.residual_fn, problem.y0)
        if np.isnan(distance):
            raise InitialResidualError("Residual function returns NaN at the initial state.")
        return distance

    @staticmethod
    def _distance(residual_fn: ResidualFn, y: np.ndarray) -> float:
        distance = residual_distance(residual_fn, y)
        return float("inf") if np.isnan(distance) else distance

    @staticmethod
    def _log_iteration(problem: _SteadyStateProblem, record: _IterationRecord) -> None:
        log = logger.info if problem.verbose else logger.debug
        shown = record.distance if record.accepted else float("nan")
        log("iter=%d, step=%.3e, distance=%.3e", record.iteration, record.step, shown)

    def _finish(self, problem: _SteadyStateProblem, ctrl: _ControllerState, history: list[_IterationRecord]) -> Tuple[np.ndarray, float, dict[str, Any]]:
        converged = bool(ctrl.distance <= problem.tol)
        if converged:
            self.on_accept(ctrl.state, iterations=ctrl.iteration, residual_norm=ctrl.distance)
        else:
            logger.warning(
                "Iteration did not converge (distance=%.3e > tol=%.3e after %d iterations, step=%.3e)",
                ctrl.distance, problem.tol, ctrl.iteration, ctrl.step,
            )
            self.on_failure(ctrl.state, iterations=ctrl.iteration, residual_norm=ctrl.distance)

        info = {
            "converged": converged,
            "iterations": int(ctrl.iteration),
            "accepted_count": int(ctrl.accepted),
            "rejected_count": int(ctrl.rejected),
            "final_step": float(ctrl.step),
            "history": tuple(history),
        }
        return ctrl.state, float(ctrl.distance), info
