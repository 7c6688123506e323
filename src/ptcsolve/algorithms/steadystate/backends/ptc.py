"""Pseudo-transient continuation backend.

Each outer iteration takes one implicit pseudo-time step from the committed
state. A step whose inner solve reaches the acceptance tolerance is
committed and the step size grows; otherwise the step is discarded and the
step size shrinks. The loop ends on convergence, on the iteration budget or
when the step falls below its floor.
"""

from dataclasses import replace
from typing import Any, Optional, Tuple

import numpy as np

from ptcsolve.algorithms.rootfinding.backends.base import _RootFindingBackend
from ptcsolve.algorithms.rootfinding.backends.scipy_root import \
    _ScipyRootBackend
from ptcsolve.algorithms.rootfinding.step import implicit_time_step
from ptcsolve.algorithms.steadystate.backends.base import _SteadyStateBackend
from ptcsolve.algorithms.steadystate.stepping import _StepSizeController
from ptcsolve.algorithms.steadystate.types import (_ControllerState,
                                                   _IterationRecord,
                                                   _SteadyStateProblem)
from ptcsolve.algorithms.types.exceptions import BackendError


class _PTCBackend(_SteadyStateBackend):
    """Adaptive continuation controller around implicit pseudo-time steps.

    Parameters
    ----------
    root_backend : :class:`~ptcsolve.algorithms.rootfinding.backends.base._RootFindingBackend` or None
        Inner nonlinear solver. Defaults to
        :class:`~ptcsolve.algorithms.rootfinding.backends.scipy_root._ScipyRootBackend`.
    """

    def __init__(self, root_backend: Optional[_RootFindingBackend] = None) -> None:
        super().__init__()
        self._root_backend = root_backend if root_backend is not None else _ScipyRootBackend()

    @property
    def root_backend(self) -> _RootFindingBackend:
        return self._root_backend

    def run(self, problem: _SteadyStateProblem) -> Tuple[np.ndarray, float, dict[str, Any]]:
        distance0 = self._initial_distance(problem)
        y0 = np.array(problem.y0, dtype=float)

        if np.isinf(problem.step):
            return self._direct_solve(problem, y0)

        controller = _StepSizeController(
            scale=problem.scale,
            backoff=problem.backoff,
            max_step=problem.max_step,
        )
        ctrl = _ControllerState(state=y0, step=float(problem.step), coef=1.0, distance=distance0)
        history: list[_IterationRecord] = []

        while (
            ctrl.iteration <= problem.max_iterations
            and ctrl.step >= problem.step_min
            and ctrl.distance > problem.tol
        ):
            ctrl = replace(ctrl, iteration=ctrl.iteration + 1)
            step = ctrl.step

            candidate, inner_distance = self._step(
                problem,
                ctrl.state,
                step,
                tol=problem.inner_tol,
                max_iterations=problem.inner_iterations,
                verbose=problem.inner_verbose,
            )
            new_distance = self._distance(problem.residual_fn, candidate)

            # a NaN residual at the candidate is a failed step, not a new baseline
            accepted = bool(inner_distance <= problem.inner_tol and np.isfinite(new_distance))
            if accepted:
                ctrl = controller.on_accept(ctrl, candidate, new_distance)
            else:
                ctrl = controller.on_reject(ctrl)

            record = _IterationRecord(
                iteration=ctrl.iteration,
                step=step,
                distance=new_distance,
                inner_distance=float(inner_distance),
                coef=ctrl.coef,
                accepted=accepted,
            )
            history.append(record)
            self._log_iteration(problem, record)
            self.on_iteration(ctrl.iteration, ctrl.state, ctrl.distance)

        return self._finish(problem, ctrl, history)

    def _direct_solve(self, problem: _SteadyStateProblem, y0: np.ndarray) -> Tuple[np.ndarray, float, dict[str, Any]]:
        y, distance = self._step(
            problem,
            y0,
            np.inf,
            tol=problem.tol,
            max_iterations=max(problem.max_iterations, 1),
            verbose=problem.verbose,
        )
        accepted = bool(distance <= problem.tol)
        ctrl = _ControllerState(
            state=y,
            step=np.inf,
            coef=1.0,
            distance=float(distance),
            iteration=1,
            accepted=int(accepted),
            rejected=int(not accepted),
        )
        record = _IterationRecord(
            iteration=1,
            step=np.inf,
            distance=float(distance),
            inner_distance=float(distance),
            coef=1.0,
            accepted=accepted,
        )
        self.on_iteration(1, y, float(distance))
        return self._finish(problem, ctrl, [record])

    def _step(self, problem: _SteadyStateProblem, y_prev: np.ndarray, step: float, *, tol: float, max_iterations: int, verbose: bool) -> Tuple[np.ndarray, float]:
        y_next, distance = implicit_time_step(
            problem.residual_fn,
            y_prev,
            step,
            is_algebraic=problem.is_algebraic,
            jacobian_fn=problem.jacobian_fn,
            backend=self._root_backend,
            method=problem.method,
            differentiation=problem.differentiation,
            tol=tol,
            max_iterations=max_iterations,
            verbose=verbose,
        )
        y_next = np.asarray(y_next, dtype=float)
        if y_next.shape != y_prev.shape:
            raise BackendError(
                f"{type(self._root_backend).__name__} returned a state of shape {y_next.shape}, expected {y_prev.shape}"
            )
        return y_next, float(distance)
