"""Time sources for cooldown and combo-window checks."""

import time
from typing import Callable


# Returns the current time in milliseconds
Clock = Callable[[], float]


def wall_clock_ms() -> float:
    """Wall-clock time in milliseconds since the epoch."""
    return time.time() * 1000


class ManualClock:
    """
    Clock that only moves when told to.

    Lets a host (or a test) drive cooldowns and combo windows
    deterministically instead of sleeping.
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, ms: float) -> float:
        """Move the clock forward and return the new time."""
        if ms < 0:
            raise ValueError("Clock cannot move backwards")
        self.now_ms += ms
        return self.now_ms
