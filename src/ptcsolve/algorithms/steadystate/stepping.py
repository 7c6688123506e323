"""Pseudo-time step-size law.

After an accepted step the pseudo-time step grows with the relative
improvement of the residual,

.. math::

    \\Delta_{k+1} = \\Delta_k \\, c_k \\, \\frac{d_{k-1}}{d_k},

where the coefficient :math:`c_k` is multiplied by ``scale`` on every
non-regressing step and reset to 1 otherwise. A rejected step divides the
pseudo-time step by ``backoff`` and resets the coefficient.
"""

from dataclasses import replace

import numpy as np

from ptcsolve.algorithms.steadystate.types import _ControllerState


class _StepSizeController:
    """Apply the accept/reject transitions to a :class:`_ControllerState`.

    Parameters
    ----------
    scale : float
        Coefficient factor on non-regressing steps.
    backoff : float
        Step divisor on rejection.
    max_step : float
        Ceiling on the step; also the value taken when the new distance is
        exactly zero.
    """

    def __init__(self, *, scale: float = 2.0, backoff: float = 10.0, max_step: float = np.inf) -> None:
        self.scale = float(scale)
        self.backoff = float(backoff)
        self.max_step = float(max_step)

    def grow(self, step: float, coef: float, old_distance: float, new_distance: float) -> float:
        """Return the next step for a committed candidate."""
        if new_distance == 0.0:
            return self.max_step
        return min(step * coef * old_distance / new_distance, self.max_step)

    def on_accept(self, current: _ControllerState, candidate: np.ndarray, distance: float) -> _ControllerState:
        """Commit *candidate* and grow the step."""
        old_distance = current.distance
        coef = self.scale * current.coef if distance <= old_distance else 1.0
        return replace(
            current,
            state=candidate,
            step=self.grow(current.step, coef, old_distance, distance),
            coef=coef,
            distance=distance,
            accepted=current.accepted + 1,
        )

    def on_reject(self, current: _ControllerState) -> _ControllerState:
        """Keep the committed state and shrink the step."""
        return replace(
            current,
            step=current.step / self.backoff,
            coef=1.0,
            rejected=current.rejected + 1,
        )
