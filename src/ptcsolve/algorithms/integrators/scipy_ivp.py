"""Integrator wrapper delegating to :func:`scipy.integrate.solve_ivp`."""

from typing import Callable, Optional, Sequence

import numpy as np
from scipy.integrate import solve_ivp

from ptcsolve.algorithms.integrators.configs import _EventConfig
from ptcsolve.algorithms.integrators.events import (STEP_BUDGET_EVENT,
                                                    step_budget_event)
from ptcsolve.algorithms.integrators.types import _Solution
from ptcsolve.algorithms.residual.types import JacobianFn, ResidualFn
from ptcsolve.utils.log_config import logger


def _as_ivp_event(event_fn: Callable[[float, np.ndarray], float], cfg: _EventConfig) -> Callable[[float, np.ndarray], float]:
    def _event(t, y):
        return event_fn(t, y)

    _event.terminal = cfg.terminal
    _event.direction = cfg.direction
    return _event


class _ScipyIntegrator:
    """Integrate the autonomous system ``dy/dt = F(y)``.

    Parameters
    ----------
    method : str, default "BDF"
        Any :func:`scipy.integrate.solve_ivp` method name.
    rtol, atol : float
        Relative and absolute tolerances.
    """

    def __init__(self, method: str = "BDF", rtol: float = 1e-6, atol: float = 1e-9):
        self.name = method
        self.rtol = float(rtol)
        self.atol = float(atol)

    def integrate(
        self,
        residual_fn: ResidualFn,
        y0: np.ndarray,
        t_span: Sequence[float],
        *,
        jacobian_fn: Optional[JacobianFn] = None,
        event_fn: Optional[Callable[[float, np.ndarray], float]] = None,
        event_cfg: Optional[_EventConfig] = None,
        max_steps: Optional[int] = None,
    ) -> _Solution:
        """Integrate from ``t_span[0]`` to ``t_span[1]`` (which may be ``inf``).

        Parameters
        ----------
        residual_fn : :data:`~ptcsolve.algorithms.residual.types.ResidualFn`
            Right-hand side F(y).
        y0 : numpy.ndarray
            Initial state.
        t_span : sequence of float
            Integration interval.
        jacobian_fn : :data:`~ptcsolve.algorithms.residual.types.JacobianFn` or None
            Jacobian of F, forwarded to implicit methods.
        event_fn : callable or None
            Scalar event function ``g(t, y)``.
        event_cfg : :class:`~ptcsolve.algorithms.integrators.configs._EventConfig` or None
            Direction and terminal flag of *event_fn*.
        max_steps : int or None
            Stop after this many accepted steps. Required to bound an
            integration towards ``t = inf`` that never triggers *event_fn*.

        Returns
        -------
        :class:`~ptcsolve.algorithms.integrators.types._Solution`
            Accepted nodes and states; the last state is the terminal one.
        """
        y0 = np.asarray(y0, dtype=float)
        t0, tf = float(t_span[0]), float(t_span[1])

        if t0 == tf:
            return _Solution(times=np.array([t0, tf]), states=np.vstack([y0, y0]))

        def _rhs(t, y):
            return np.asarray(residual_fn(y), dtype=float)

        kwargs = {}
        if jacobian_fn is not None and self.name in ("BDF", "Radau", "LSODA"):
            kwargs["jac"] = lambda t, y: np.asarray(jacobian_fn(y), dtype=float)

        events = []
        if event_fn is not None:
            events.append(_as_ivp_event(event_fn, event_cfg or _EventConfig()))
        if max_steps is not None:
            events.append(_as_ivp_event(step_budget_event(max_steps), STEP_BUDGET_EVENT))

        sol = solve_ivp(
            _rhs,
            (t0, tf),
            y0,
            method=self.name,
            rtol=self.rtol,
            atol=self.atol,
            events=events or None,
            **kwargs,
        )

        if sol.status < 0:
            logger.debug("Integration with %s stopped at t=%.3e: %s", self.name, sol.t[-1], sol.message)

        budget_exhausted = bool(max_steps is not None and len(sol.t_events[-1]) > 0)
        if budget_exhausted:
            logger.debug("Integration with %s used its %d-step budget at t=%.3e", self.name, max_steps, sol.t[-1])

        return _Solution(
            times=np.asarray(sol.t, dtype=float),
            states=np.asarray(sol.y, dtype=float).T,
            status=int(sol.status),
            message=str(sol.message),
            budget_exhausted=budget_exhausted,
        )

    def __str__(self):
        return f"scipy-{self.name}"

    def __repr__(self):
        return f"{self.__class__.__name__}(method='{self.name}', rtol={self.rtol}, atol={self.atol})"
