"""Example script: steady state of the stiff Robertson kinetics as a DAE.

The third species is replaced by the mass-conservation constraint, which is
marked algebraic so it carries no pseudo-time derivative.

Run with
    python examples/robertson.py
"""

import os
import sys

import numpy as np

sys.path.append(os.path.join(os.path.dirname(__file__), "..", "src"))

from ptcsolve import SteadyStateSolver


def robertson(y: np.ndarray) -> np.ndarray:
    y1, y2, y3 = y
    return np.array([
        -0.04 * y1 + 1e4 * y2 * y3,
        0.04 * y1 - 1e4 * y2 * y3 - 3e7 * y2 ** 2,
        y1 + y2 + y3 - 1.0,
    ])


def main() -> None:
    """Drive the Robertson system to its steady state and print the trace."""
    solver = SteadyStateSolver.with_default_engine()
    result = solver.solve(robertson, np.array([1.0, 0.0, 0.0]), algebraic=[2], max_iterations=200)
    print(result.to_df().to_string(index=False))
    print(f"state={result.state}, distance={result.distance:.3e}, converged={result.converged}")

if __name__ == "__main__":
    main()
