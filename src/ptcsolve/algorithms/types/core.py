"""Abstract base classes for the solver pipelines.

Every algorithm in :mod:`ptcsolve.algorithms` is assembled from the same
four pieces: facade → engine → interface → backend. This module provides the
shared contracts and the canonical engine flow.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from typing import Any, Generic, TypeVar, Union

from ptcsolve.algorithms.types.exceptions import EngineError

ConfigT = TypeVar("ConfigT", bound=Union["_PtcBaseConfig", None])

ProblemT = TypeVar("ProblemT", bound="_PtcBaseProblem")

ResultT = TypeVar("ResultT", bound="_PtcBaseResults")

OutputsT = TypeVar("OutputsT")


@dataclass(frozen=True)
class _BackendCall:
    """Describe a backend call with positional and keyword arguments."""

    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)


class _PtcBaseProblem(ABC):
    """Marker base class for problem payloads produced by interfaces."""

    __slots__ = ()


class _PtcBaseResults(ABC):
    """Marker base class for user-facing results returned by engines."""

    __slots__ = ()


@dataclass(frozen=True)
class _PtcBaseConfig(ABC):
    """Base class for frozen configuration payloads.

    Subclasses override :meth:`_validate`; it runs once, right after the
    dataclass is constructed.
    """

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Validate the configuration."""
        return None

    def merge(self, **overrides: Any) -> "_PtcBaseConfig":
        """Return a copy with *overrides* applied (``None`` values are ignored).

        Raises
        ------
        ValueError
            If an override does not name a configuration field.
        """
        known = {f.name for f in fields(self)}
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        for key, value in overrides.items():
            if value is None:
                continue
            if key not in known:
                raise ValueError(f"Unknown configuration parameter: {key}")
            values[key] = value
        return type(self)(**values)


class _PtcBaseBackend(ABC):
    """Abstract base class for all backend implementations.

    Backends are responsible for the core numerical computations, while
    engines handle orchestration and interfaces manage data translation.

    Notes
    -----
    This base class provides common lifecycle hooks that backends can override:
    - on_iteration: Called after each iteration of the main algorithm
    - on_accept: Called when the backend detects convergence/success
    - on_failure: Called when the backend completes without converging
    - on_success: Called by the engine after final acceptance
    """

    def __init__(self) -> None:
        """Initialize the backend."""
        pass

    @abstractmethod
    def run(self, *args, **kwargs) -> Any:
        """Run the backend."""
        ...

    def on_iteration(self, k: int, x: Any, r_norm: float) -> None:
        """Called after each iteration of the main algorithm.

        Parameters
        ----------
        k : int
            Current iteration number (1-based).
        x : Any
            Current committed state.
        r_norm : float
            Current residual distance.
        """
        return

    def on_accept(self, x: Any, *, iterations: int, residual_norm: float) -> None:
        """Called when the backend detects convergence.

        Parameters
        ----------
        x : Any
            Final solution.
        iterations : int
            Total number of iterations performed.
        residual_norm : float
            Final residual distance.
        """
        return

    def on_failure(self, x: Any, *, iterations: int, residual_norm: float) -> None:
        """Called when the backend completes without converging.

        Parameters
        ----------
        x : Any
            Final solution estimate (not converged).
        iterations : int
            Total number of iterations performed.
        residual_norm : float
            Final residual distance.
        """
        return

    def on_success(self, x: Any, *, iterations: int, residual_norm: float) -> None:
        """Called by the engine after the results have been packaged."""
        return


class _PtcBaseInterface(Generic[ConfigT, ProblemT, ResultT, OutputsT], ABC):
    """Shared contract for translating between user inputs and backends."""

    def __init__(self) -> None:
        self._config: ConfigT | None = None
        self._backend: _PtcBaseBackend | None = None

    @property
    def current_config(self) -> ConfigT | None:
        return self._config

    @abstractmethod
    def create_problem(self, *, config: ConfigT, **kwargs) -> ProblemT:
        """Compose an immutable problem payload for the backend."""

    @abstractmethod
    def to_backend_inputs(self, problem: ProblemT) -> _BackendCall:
        """Translate a problem into backend invocation arguments."""

    def to_domain(self, outputs: OutputsT, *, problem: ProblemT) -> Any:
        """Optional hook to derive domain artefacts from outputs."""
        return None

    @abstractmethod
    def to_results(self, outputs: OutputsT, *, problem: ProblemT, domain_payload: Any = None) -> ResultT:
        """Package backend outputs into user-facing result objects."""

    def bind_backend(self, backend: _PtcBaseBackend) -> None:
        self._backend = backend

    def on_start(self, problem: ProblemT) -> None:
        return None

    def on_success(self, outputs: OutputsT, *, problem: ProblemT, domain_payload: Any = None) -> None:
        return None

    def on_failure(self, exc: Exception, *, problem: ProblemT) -> None:
        return None


class _PtcBaseEngine(Generic[ProblemT, ResultT, OutputsT], ABC):
    """Template providing the canonical engine flow."""

    def __init__(
        self,
        *,
        backend: _PtcBaseBackend,
        interface: _PtcBaseInterface[Any, ProblemT, ResultT, OutputsT] | None = None,
    ) -> None:
        self._backend = backend
        self._interface = interface

    @property
    def backend(self) -> _PtcBaseBackend:
        return self._backend

    def solve(self, problem: ProblemT) -> ResultT:
        """Execute the standard engine orchestration for ``problem``."""

        interface = self._get_interface(problem)
        interface.bind_backend(self._backend)
        call = interface.to_backend_inputs(problem)
        interface.on_start(problem)
        self._before_backend(problem, call, interface)

        try:
            outputs = self._invoke_backend(call)
        except Exception as exc:
            interface.on_failure(exc, problem=problem)
            self._handle_backend_failure(exc, problem=problem, call=call, interface=interface)
            raise

        domain_payload = interface.to_domain(outputs, problem=problem)
        interface.on_success(outputs, problem=problem, domain_payload=domain_payload)
        self._after_backend_success(outputs, problem=problem, domain_payload=domain_payload, interface=interface)
        return interface.to_results(outputs, problem=problem, domain_payload=domain_payload)

    def _get_interface(
        self,
        problem: ProblemT,
    ) -> _PtcBaseInterface[Any, ProblemT, ResultT, OutputsT]:
        if self._interface is None:
            raise EngineError(
                f"{self.__class__.__name__} must be configured with an interface before solving."
            )
        return self._interface

    def set_interface(
        self,
        interface: _PtcBaseInterface[Any, ProblemT, ResultT, OutputsT],
    ) -> None:
        self._interface = interface

    def _before_backend(self, problem: ProblemT, call: _BackendCall, interface: _PtcBaseInterface[Any, ProblemT, ResultT, OutputsT]) -> None:
        return None

    def _after_backend_success(self, outputs: OutputsT, *, problem: ProblemT, domain_payload: Any, interface: _PtcBaseInterface[Any, ProblemT, ResultT, OutputsT]) -> None:
        return None

    def _handle_backend_failure(self, exc: Exception, *, problem: ProblemT, call: _BackendCall, interface: _PtcBaseInterface[Any, ProblemT, ResultT, OutputsT]) -> None:
        raise EngineError(str(exc)) from exc

    def _invoke_backend(self, call: _BackendCall) -> OutputsT:
        return self._backend.run(*call.args, **call.kwargs)


class _PtcBaseFacade(Generic[ConfigT, ProblemT, ResultT]):
    """Abstract base class for user-facing facades.

    Facades orchestrate the pipeline facade → engine → interface → backend.
    They accept engines via the constructor (dependency injection), provide
    ``with_default_engine()`` factories, and delegate computation to the
    engine while handling configuration.
    """

    def __init__(self, config, interface, engine) -> None:
        """Initialize the facade."""
        self._results: ResultT | None = None
        self._make_pipeline(config, interface, engine)

    @classmethod
    @abstractmethod
    def with_default_engine(cls, *, config=None, interface=None) -> "_PtcBaseFacade[ConfigT, ProblemT, ResultT]":
        pass

    @abstractmethod
    def solve(self, *args, **kwargs) -> ResultT:
        """Solve the problem using the configured engine."""
        ...

    def update_config(self, **kwargs) -> None:
        """Update configuration parameters.

        Parameters
        ----------
        **kwargs
            Configuration parameters to update. ``None`` values are ignored.

        Raises
        ------
        ValueError
            If the configuration parameter is not valid.
        """
        self._config = self._config.merge(**kwargs)
        self._validate_config(self._config)

    def _get_engine(self) -> _PtcBaseEngine[ProblemT, ResultT, Any]:
        return self._engine

    def _get_interface(self) -> _PtcBaseInterface[Any, ProblemT, ResultT, Any]:
        return self._interface

    def _get_backend(self) -> _PtcBaseBackend:
        return self._backend

    def _get_config(self) -> ConfigT:
        return self._config

    def _create_problem(self, override: bool = False, *, config_overrides: dict[str, Any] | None = None, **kwargs) -> ProblemT:
        """Create a problem object from input parameters.

        Parameters
        ----------
        override : bool, default=False
            When True, ``config_overrides`` are merged into the stored
            configuration before the problem is built. When False, they
            apply to this call only.
        config_overrides : dict or None
            Configuration fields to replace.
        **kwargs
            Problem inputs forwarded to ``interface.create_problem``.
        """
        config = self._get_config()
        if config_overrides:
            if override:
                self.update_config(**config_overrides)
                config = self._get_config()
            else:
                config = config.merge(**config_overrides)
                self._validate_config(config)

        interface = self._get_interface()
        return interface.create_problem(config=config, **kwargs)

    def _make_pipeline(self, config, interface, engine):
        self._config: ConfigT = config
        self._interface: _PtcBaseInterface[Any, ProblemT, ResultT, Any] = interface
        self._engine: _PtcBaseEngine[ProblemT, ResultT, Any] = engine
        self._engine.set_interface(interface)
        self._backend: _PtcBaseBackend = engine.backend
        interface.bind_backend(self._backend)
        self._validate_config(config)

    def _validate_config(self, config: ConfigT) -> None:
        """Validate the configuration object.

        This method can be overridden by concrete facades to perform
        domain-specific configuration validation.
        """
        pass

    @property
    def config(self) -> ConfigT:
        return self._config

    @property
    def results(self) -> ResultT | None:
        return self._results
