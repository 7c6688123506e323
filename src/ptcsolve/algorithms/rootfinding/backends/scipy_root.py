"""Root-finding backend delegating to :func:`scipy.optimize.root`."""

from typing import Optional, Tuple

import numpy as np
from scipy.optimize import root

from ptcsolve.algorithms.residual.types import JacobianFn, ResidualFn
from ptcsolve.algorithms.rootfinding.backends.base import _RootFindingBackend
from ptcsolve.algorithms.rootfinding.types import RootMethod
from ptcsolve.utils.log_config import logger

_SCIPY_METHODS = {
    RootMethod.TRUST_REGION: "hybr",
    RootMethod.LEVENBERG_MARQUARDT: "lm",
    RootMethod.NEWTON_KRYLOV: "krylov",
    RootMethod.BROYDEN: "broyden1",
}


class _ScipyRootBackend(_RootFindingBackend):
    """Solve one nonlinear system with :func:`scipy.optimize.root`.

    The MINPACK methods count function evaluations rather than iterations,
    so their budget is scaled by ``n + 1`` (one evaluation per Jacobian
    column plus the step itself). They stop on the relative change of the
    iterate (and, for ``lm``, of the sum of squares), so ``tol`` is forwarded
    as those tolerances, floored at machine epsilon. The Jacobian-free
    methods stop on the sup norm of the residual and take ``tol`` directly.
    """

    def run(
        self,
        residual_fn: ResidualFn,
        x0: np.ndarray,
        *,
        jacobian_fn: Optional[JacobianFn] = None,
        method: RootMethod = RootMethod.TRUST_REGION,
        tol: float = 1e-9,
        max_iterations: int = 25,
        verbose: bool = False,
    ) -> Tuple[np.ndarray, float]:
        x0 = np.asarray(x0, dtype=float).copy()
        if jacobian_fn is not None and not method.accepts_jacobian:
            raise ValueError(f"Method '{method}' does not use a Jacobian.")

        scipy_method = _SCIPY_METHODS[method]
        options = self._options(method, n=x0.size, tol=tol, max_iterations=max_iterations, verbose=verbose)

        try:
            sol = root(
                residual_fn,
                x0,
                jac=jacobian_fn,
                method=scipy_method,
                options=options,
            )
        except (np.linalg.LinAlgError, FloatingPointError) as exc:
            logger.debug("Inner solve (%s) broke down: %s", scipy_method, exc)
            return x0, float("inf")

        x = np.asarray(sol.x, dtype=float).reshape(x0.shape)
        fun = np.asarray(sol.fun, dtype=float)
        distance = float(np.max(np.abs(fun))) if fun.size else 0.0
        if not np.isfinite(distance):
            distance = float("inf")

        log = logger.info if verbose else logger.debug
        log(
            "Inner solve (%s): success=%s, nfev=%s, |G|=%.3e, %s",
            scipy_method,
            bool(sol.success),
            getattr(sol, "nfev", getattr(sol, "nit", "?")),
            distance,
            str(getattr(sol, "message", "")).strip(),
        )
        return x, distance

    @staticmethod
    def _options(method: RootMethod, *, n: int, tol: float, max_iterations: int, verbose: bool) -> dict:
        rel_tol = max(float(tol), float(np.finfo(float).eps))
        if method is RootMethod.TRUST_REGION:
            return {"maxfev": max_iterations * (n + 1), "xtol": rel_tol}
        if method is RootMethod.LEVENBERG_MARQUARDT:
            return {"maxiter": max_iterations * (n + 1), "xtol": rel_tol, "ftol": rel_tol}
        # nonlin solvers stop on the sup norm of the residual
        return {"maxiter": max_iterations, "fatol": tol, "disp": verbose}
