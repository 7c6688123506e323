from dataclasses import dataclass


@dataclass(frozen=True)
class _EventConfig:
    """Configuration for a scalar event function g(t, y).

    Parameters
    ----------
    direction : int, default 0
        Crossing direction to detect:
        - 0: any sign change
        - +1: only increasing crossings
        - -1: only decreasing crossings
    terminal : bool, default True
        When True, integration stops at the first event.
    """

    direction: int = 0
    terminal: bool = True

    def __post_init__(self) -> None:
        if self.direction not in (-1, 0, 1):
            raise ValueError(f"direction must be -1, 0 or +1, got {self.direction}")
