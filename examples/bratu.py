"""Example script: the 1-D Bratu problem solved three ways.

``u'' + lambda * exp(u) = 0`` on (0, 1) with homogeneous Dirichlet data,
discretized by central differences and relaxed to its lower steady branch.

Run with
    python examples/bratu.py
"""

import os
import sys

import numpy as np

sys.path.append(os.path.join(os.path.dirname(__file__), "..", "src"))

from ptcsolve import (dynamic_steady_state_solve, ode_continuation_solve,
                      pseudo_transient_solve)


def make_bratu(n: int = 50, lam: float = 1.0):
    h = 1.0 / (n + 1)

    def residual(u: np.ndarray) -> np.ndarray:
        padded = np.concatenate(([0.0], u, [0.0]))
        return (padded[2:] - 2.0 * padded[1:-1] + padded[:-2]) / h ** 2 + lam * np.exp(u)

    def jacobian(u: np.ndarray) -> np.ndarray:
        main = -2.0 / h ** 2 + lam * np.exp(u)
        off = np.full(n - 1, 1.0 / h ** 2)
        return np.diag(main) + np.diag(off, 1) + np.diag(off, -1)

    return residual, jacobian


def main() -> None:
    """Compare the implicit, fixed-horizon and direct-integration strategies."""
    residual, jacobian = make_bratu()
    u0 = np.zeros(50)

    u_ptc, d_ptc = pseudo_transient_solve(residual, u0, jacobian=jacobian, differentiation="analytic")
    u_ode, d_ode = ode_continuation_solve(residual, u0, jacobian=jacobian, tol=1e-8)
    u_dyn, d_dyn = dynamic_steady_state_solve(residual, u0, jacobian=jacobian, tol=1e-8)

    print(f"ptc:     max(u)={u_ptc.max():.6f}, distance={d_ptc:.3e}")
    print(f"ode:     max(u)={u_ode.max():.6f}, distance={d_ode:.3e}")
    print(f"dynamic: max(u)={u_dyn.max():.6f}, distance={d_dyn:.3e}")

if __name__ == "__main__":
    main()
