"""Types for the integrators module."""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class _Solution:
    """Terminal data of one integration.

    Attributes
    ----------
    times : numpy.ndarray
        Accepted time nodes, shape (m,).
    states : numpy.ndarray
        States at *times*, shape (m, n).
    status : int
        ``0`` reached the end of the span, ``1`` stopped on a terminal
        event, ``-1`` the integrator failed.
    message : str
        Integrator message.
    budget_exhausted : bool
        Whether the integration was cut by its step budget.
    """

    times: np.ndarray
    states: np.ndarray
    status: int = 0
    message: str = ""
    budget_exhausted: bool = False

    @property
    def final_state(self) -> np.ndarray:
        return self.states[-1]

    @property
    def final_time(self) -> float:
        return float(self.times[-1])

    @property
    def terminated_by_event(self) -> bool:
        return self.status == 1 and not self.budget_exhausted
