"""User-facing facade for steady-state solves.

The facade assembles engine, backend and interface using DI and exposes a
single :meth:`SteadyStateSolver.solve` taking a residual function and an
initial state.
"""

from typing import TYPE_CHECKING, Iterable, Literal, Optional

from ptcsolve.algorithms.residual.types import JacobianFn, ResidualFn
from ptcsolve.algorithms.steadystate.config import SteadyStateConfig
from ptcsolve.algorithms.steadystate.types import SteadyStateResult
from ptcsolve.algorithms.types.core import _PtcBaseFacade

if TYPE_CHECKING:
    from ptcsolve.algorithms.integrators.scipy_ivp import _ScipyIntegrator
    from ptcsolve.algorithms.rootfinding.backends.base import \
        _RootFindingBackend
    from ptcsolve.algorithms.steadystate.engine.engine import \
        _SteadyStateEngine
    from ptcsolve.algorithms.steadystate.interfaces import \
        _SteadyStateInterface


class SteadyStateSolver(_PtcBaseFacade):
    """Facade for steady-state solves of ``dy/dt = F(y)``.

    Users supply an engine (DI). Use :meth:`with_default_engine` to build one
    wired with the backend of the requested strategy.

    Examples
    --------
    >>> import numpy as np
    >>> solver = SteadyStateSolver.with_default_engine()
    >>> result = solver.solve(lambda y: -y, np.array([1.0]))
    >>> result.converged
    True
    """

    def __init__(self, config: SteadyStateConfig, interface: "_SteadyStateInterface", engine: "_SteadyStateEngine") -> None:
        super().__init__(config, interface, engine)

    @classmethod
    def with_default_engine(
        cls,
        *,
        config: Optional[SteadyStateConfig] = None,
        interface: Optional["_SteadyStateInterface"] = None,
        strategy: Literal["ptc", "ode", "dynamic"] = "ptc",
        root_backend: Optional["_RootFindingBackend"] = None,
        integrator: Optional["_ScipyIntegrator"] = None,
    ) -> "SteadyStateSolver":
        """Create a facade instance with a default engine (factory).

        Parameters
        ----------
        config : :class:`~ptcsolve.algorithms.steadystate.config.SteadyStateConfig` or None
            Configuration; defaults are used when None.
        interface : :class:`~ptcsolve.algorithms.steadystate.interfaces._SteadyStateInterface` or None
            Interface override. Its strategy wins over *strategy*.
        strategy : {"ptc", "ode", "dynamic"}, default="ptc"
            Implicit pseudo-transient continuation, fixed-horizon ODE
            continuation or direct steady-state integration.
        root_backend : :class:`~ptcsolve.algorithms.rootfinding.backends.base._RootFindingBackend` or None
            Inner solver of the ``"ptc"`` strategy.
        integrator : :class:`~ptcsolve.algorithms.integrators.scipy_ivp._ScipyIntegrator` or None
            Integrator of the ODE strategies.
        """
        from ptcsolve.algorithms.steadystate.backends.dynamic import \
            _DynamicSteadyStateBackend
        from ptcsolve.algorithms.steadystate.backends.ode import \
            _FixedHorizonODEBackend
        from ptcsolve.algorithms.steadystate.backends.ptc import _PTCBackend
        from ptcsolve.algorithms.steadystate.engine.engine import \
            _SteadyStateEngine
        from ptcsolve.algorithms.steadystate.interfaces import \
            _SteadyStateInterface

        intf = interface or _SteadyStateInterface(strategy=strategy)
        if intf.strategy == "ptc":
            backend = _PTCBackend(root_backend=root_backend)
        elif intf.strategy == "ode":
            backend = _FixedHorizonODEBackend(integrator=integrator)
        else:
            backend = _DynamicSteadyStateBackend(integrator=integrator)

        engine = _SteadyStateEngine(backend=backend, interface=intf)
        return cls(config or SteadyStateConfig(), intf, engine)

    def solve(
        self,
        residual_fn: ResidualFn,
        y0,
        override: bool = False,
        *,
        algebraic: Optional[Iterable] = None,
        jacobian: Optional[JacobianFn] = None,
        step: Optional[float] = None,
        max_iterations: Optional[int] = None,
        inner_iterations: Optional[int] = None,
        tol: Optional[float] = None,
        inner_tol: Optional[float] = None,
        scale: Optional[float] = None,
        step_min: Optional[float] = None,
        max_step: Optional[float] = None,
        backoff: Optional[float] = None,
        method: Optional[str] = None,
        differentiation: Optional[str] = None,
        verbose: Optional[bool] = None,
        inner_verbose: Optional[bool] = None,
        ode_method: Optional[str] = None,
        ode_rtol: Optional[float] = None,
        ode_atol: Optional[float] = None,
        horizon: Optional[float] = None,
        ode_max_steps: Optional[int] = None,
    ) -> SteadyStateResult:
        """Find a steady state of ``dy/dt = residual_fn(y)`` starting at *y0*.

        Parameters
        ----------
        residual_fn : callable
            Residual ``F(y) -> dy/dt``.
        y0 : array_like
            Initial state, a non-empty 1-D vector.
        override : bool, default=False
            Persist the keyword overrides into the stored configuration.
        algebraic : sequence of bool or int, optional
            Algebraic components as a boolean mask or indices.
        jacobian : callable, optional
            ``J(y) -> dF/dy``; required for analytic differentiation.
        **overrides
            Any :class:`~ptcsolve.algorithms.steadystate.config.SteadyStateConfig`
            field; ``None`` keeps the configured value.

        Returns
        -------
        :class:`~ptcsolve.algorithms.steadystate.types.SteadyStateResult`
            Final state, distance, counters and iteration history.

        Raises
        ------
        :class:`~ptcsolve.algorithms.types.exceptions.InitialResidualError`
            If the residual is NaN at *y0*.
        ValueError
            If the inputs or the overrides are invalid.
        """
        config_overrides = {
            "step": step,
            "max_iterations": max_iterations,
            "inner_iterations": inner_iterations,
            "tol": tol,
            "inner_tol": inner_tol,
            "scale": scale,
            "step_min": step_min,
            "max_step": max_step,
            "backoff": backoff,
            "method": method,
            "differentiation": differentiation,
            "verbose": verbose,
            "inner_verbose": inner_verbose,
            "ode_method": ode_method,
            "ode_rtol": ode_rtol,
            "ode_atol": ode_atol,
            "horizon": horizon,
            "ode_max_steps": ode_max_steps,
        }

        problem = self._create_problem(
            override,
            config_overrides=config_overrides,
            residual_fn=residual_fn,
            y0=y0,
            algebraic=algebraic,
            jacobian=jacobian,
        )
        engine = self._get_engine()
        self._results = engine.solve(problem)
        return self._results

    def _validate_config(self, config: SteadyStateConfig) -> None:
        """Validate the configuration object.

        Raises
        ------
        TypeError
            If *config* is not a :class:`SteadyStateConfig`.
        """
        super()._validate_config(config)
        if not isinstance(config, SteadyStateConfig):
            raise TypeError(f"Expected SteadyStateConfig, got {type(config).__name__}")
