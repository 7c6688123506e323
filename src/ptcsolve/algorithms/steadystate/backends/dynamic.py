"""Direct steady-state integration backend.

A single integration of ``dy/dt = F(y)`` from ``t = 0`` towards the
configured horizon (infinite by default), stopped as soon as the residual
distance enters the tolerance.
"""

from typing import Any, Optional, Tuple

import numpy as np

from ptcsolve.algorithms.integrators.events import (STEADY_STATE_EVENT,
                                                    steady_state_event)
from ptcsolve.algorithms.integrators.scipy_ivp import _ScipyIntegrator
from ptcsolve.algorithms.steadystate.backends.base import _SteadyStateBackend
from ptcsolve.algorithms.steadystate.types import (_ControllerState,
                                                   _IterationRecord,
                                                   _SteadyStateProblem)


class _DynamicSteadyStateBackend(_SteadyStateBackend):
    """Integrate until steady state with a terminal event.

    Parameters
    ----------
    integrator : :class:`~ptcsolve.algorithms.integrators.scipy_ivp._ScipyIntegrator` or None
        Integrator to use; built from the problem when None.
    """

    def __init__(self, integrator: Optional[_ScipyIntegrator] = None) -> None:
        super().__init__()
        self._integrator = integrator

    def run(self, problem: _SteadyStateProblem) -> Tuple[np.ndarray, float, dict[str, Any]]:
        distance0 = self._initial_distance(problem)
        y0 = np.array(problem.y0, dtype=float)

        if distance0 <= problem.tol:
            ctrl = _ControllerState(state=y0, step=0.0, coef=1.0, distance=distance0)
            return self._finish(problem, ctrl, [])

        integrator = self._integrator or _ScipyIntegrator(
            method=problem.ode_method, rtol=problem.ode_rtol, atol=problem.ode_atol
        )
        sol = integrator.integrate(
            problem.residual_fn,
            y0,
            (0.0, problem.horizon),
            jacobian_fn=problem.jacobian_fn,
            event_fn=steady_state_event(problem.residual_fn, problem.tol),
            event_cfg=STEADY_STATE_EVENT,
            max_steps=problem.ode_max_steps,
        )

        y = np.array(sol.final_state, dtype=float)
        distance = self._distance(problem.residual_fn, y)
        ctrl = _ControllerState(
            state=y,
            step=sol.final_time,
            coef=1.0,
            distance=distance,
            iteration=1,
            accepted=1,
        )
        record = _IterationRecord(
            iteration=1,
            step=sol.final_time,
            distance=distance,
            inner_distance=float("nan"),
            coef=1.0,
            accepted=True,
        )
        self._log_iteration(problem, record)
        self.on_iteration(1, y, distance)
        return self._finish(problem, ctrl, [record])
