"""Provide the interface translating user inputs to steady-state backends."""

from typing import Any, Iterable, Literal, Optional

import numpy as np

from ptcsolve.algorithms.residual.augment import algebraic_mask
from ptcsolve.algorithms.residual.types import JacobianFn, ResidualFn
from ptcsolve.algorithms.rootfinding.types import DiffMode
from ptcsolve.algorithms.steadystate.config import SteadyStateConfig
from ptcsolve.algorithms.steadystate.types import (SteadyStateResult,
                                                   _SteadyStateProblem)
from ptcsolve.algorithms.types.core import _BackendCall, _PtcBaseInterface

StrategyT = Literal["ptc", "ode", "dynamic"]

_STRATEGIES = ("ptc", "ode", "dynamic")


class _SteadyStateInterface(
    _PtcBaseInterface[
        SteadyStateConfig,
        _SteadyStateProblem,
        SteadyStateResult,
        tuple[np.ndarray, float, dict[str, Any]],
    ]
):
    """Adapter between residual callables and steady-state backends.

    Parameters
    ----------
    strategy : {"ptc", "ode", "dynamic"}, default="ptc"
        Backend family the problems are built for. The ODE strategies
        cannot handle algebraic components.
    """

    def __init__(self, strategy: StrategyT = "ptc") -> None:
        super().__init__()
        if strategy not in _STRATEGIES:
            raise ValueError(f"Unknown strategy '{strategy}', expected one of {_STRATEGIES}")
        self._strategy = strategy

    @property
    def strategy(self) -> str:
        return self._strategy

    def create_problem(
        self,
        *,
        config: SteadyStateConfig,
        residual_fn: ResidualFn,
        y0,
        algebraic: Optional[Iterable] = None,
        jacobian: Optional[JacobianFn] = None,
    ) -> _SteadyStateProblem:
        if not callable(residual_fn):
            raise TypeError("residual_fn must be callable")
        if jacobian is not None and not callable(jacobian):
            raise TypeError("jacobian must be callable")

        y0_arr = np.array(y0, dtype=float)
        if y0_arr.ndim != 1 or y0_arr.size == 0:
            raise ValueError(f"Initial state must be a non-empty 1-D vector, got shape {y0_arr.shape}")

        dydt = np.asarray(residual_fn(y0_arr.copy()), dtype=float)
        if dydt.shape != y0_arr.shape:
            raise ValueError(
                f"Residual returned shape {dydt.shape} for an initial state of shape {y0_arr.shape}"
            )

        mask = algebraic_mask(algebraic, y0_arr.shape[0])

        if config.diff_mode is DiffMode.ANALYTIC and jacobian is None:
            raise ValueError("Analytic differentiation requires a Jacobian")

        if self._strategy != "ptc" and np.any(mask):
            raise ValueError(
                f"Strategy '{self._strategy}' integrates an explicit ODE and cannot handle algebraic components"
            )
        if self._strategy == "ode" and not np.isfinite(config.step):
            raise ValueError("Fixed-horizon ODE continuation requires a finite initial step")

        self._config = config
        return _SteadyStateProblem(
            residual_fn=residual_fn,
            y0=y0_arr,
            is_algebraic=mask,
            jacobian_fn=jacobian,
            step=float(config.step),
            max_iterations=int(config.max_iterations),
            inner_iterations=int(config.inner_iterations),
            tol=float(config.tol),
            inner_tol=float(config.acceptance_tol),
            scale=float(config.scale),
            step_min=float(config.step_min),
            max_step=float(config.max_step),
            backoff=float(config.backoff),
            method=config.root_method,
            differentiation=config.diff_mode,
            verbose=bool(config.verbose),
            inner_verbose=bool(config.inner_verbose),
            ode_method=str(config.ode_method),
            ode_rtol=float(config.ode_rtol),
            ode_atol=float(config.tol if config.ode_atol is None else config.ode_atol),
            horizon=float(config.horizon),
            ode_max_steps=int(config.ode_max_steps),
        )

    def to_backend_inputs(self, problem: _SteadyStateProblem) -> _BackendCall:
        return _BackendCall(args=(problem,))

    def to_results(
        self,
        outputs: tuple[np.ndarray, float, dict[str, Any]],
        *,
        problem: _SteadyStateProblem,
        domain_payload: Any = None,
    ) -> SteadyStateResult:
        state, distance, info = outputs
        return SteadyStateResult(
            state=np.asarray(state, dtype=float),
            distance=float(distance),
            converged=bool(info.get("converged", distance <= problem.tol)),
            iterations=int(info.get("iterations", 0)),
            accepted_count=int(info.get("accepted_count", 0)),
            rejected_count=int(info.get("rejected_count", 0)),
            final_step=float(info.get("final_step", problem.step)),
            history=tuple(info.get("history", ())),
        )
