"""Fixed-horizon ODE continuation backend.

Same outer loop and step-size law as the implicit controller, but each
iteration integrates ``dy/dt = F(y)`` over ``[0, step]`` instead of solving
an implicit step. Every integration ending at a finite distance is
committed.
"""

from dataclasses import replace
from typing import Any, Optional, Tuple

import numpy as np

from ptcsolve.algorithms.integrators.events import (STEADY_STATE_EVENT,
                                                    steady_state_event)
from ptcsolve.algorithms.integrators.scipy_ivp import _ScipyIntegrator
from ptcsolve.algorithms.steadystate.backends.base import _SteadyStateBackend
from ptcsolve.algorithms.steadystate.stepping import _StepSizeController
from ptcsolve.algorithms.steadystate.types import (_ControllerState,
                                                   _IterationRecord,
                                                   _SteadyStateProblem)


class _FixedHorizonODEBackend(_SteadyStateBackend):
    """Continuation by repeated integration over growing pseudo-time horizons.

    Parameters
    ----------
    integrator : :class:`~ptcsolve.algorithms.integrators.scipy_ivp._ScipyIntegrator` or None
        Integrator to use. When None, one is built per run from the
        problem's ``ode_method``, ``ode_rtol`` and ``ode_atol``.
    """

    def __init__(self, integrator: Optional[_ScipyIntegrator] = None) -> None:
        super().__init__()
        self._integrator = integrator

    def _make_integrator(self, problem: _SteadyStateProblem) -> _ScipyIntegrator:
        if self._integrator is not None:
            return self._integrator
        return _ScipyIntegrator(method=problem.ode_method, rtol=problem.ode_rtol, atol=problem.ode_atol)

    def run(self, problem: _SteadyStateProblem) -> Tuple[np.ndarray, float, dict[str, Any]]:
        distance0 = self._initial_distance(problem)
        integrator = self._make_integrator(problem)
        event = steady_state_event(problem.residual_fn, problem.tol)

        controller = _StepSizeController(
            scale=problem.scale,
            backoff=problem.backoff,
            max_step=problem.max_step,
        )
        ctrl = _ControllerState(
            state=np.array(problem.y0, dtype=float),
            step=float(problem.step),
            coef=1.0,
            distance=distance0,
        )
        history: list[_IterationRecord] = []

        while (
            ctrl.iteration <= problem.max_iterations
            and ctrl.step >= problem.step_min
            and ctrl.distance > problem.tol
        ):
            ctrl = replace(ctrl, iteration=ctrl.iteration + 1)
            step = ctrl.step

            sol = integrator.integrate(
                problem.residual_fn,
                ctrl.state,
                (0.0, step),
                jacobian_fn=problem.jacobian_fn,
                event_fn=event,
                event_cfg=STEADY_STATE_EVENT,
                max_steps=problem.ode_max_steps,
            )
            candidate = np.array(sol.final_state, dtype=float)
            new_distance = self._distance(problem.residual_fn, candidate)
            accepted = bool(np.isfinite(new_distance))
            if accepted:
                ctrl = controller.on_accept(ctrl, candidate, new_distance)
            else:
                ctrl = controller.on_reject(ctrl)

            record = _IterationRecord(
                iteration=ctrl.iteration,
                step=step,
                distance=new_distance,
                inner_distance=float("nan"),
                coef=ctrl.coef,
                accepted=accepted,
            )
            history.append(record)
            self._log_iteration(problem, record)
            self.on_iteration(ctrl.iteration, ctrl.state, ctrl.distance)

        return self._finish(problem, ctrl, history)
