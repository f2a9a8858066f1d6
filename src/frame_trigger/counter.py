"""
Event rate counter for the diagnostic overlay.
"""

import time
from collections import deque
from typing import Callable

from .utils.constants import RATE_WINDOW_SECONDS


class RateCounter:
    """
    Estimates an event rate from a sliding window of timestamps.

    The window is seeded with the construction time and always keeps at least
    two timestamps, even if they are further apart than max_span, so a rate can
    be computed after the first feed().
    """

    def __init__(
        self,
        max_span: float = RATE_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_span <= 0:
            raise ValueError(f"max_span must be positive, got {max_span}")
        self.max_span = max_span
        self._clock = clock
        # Newest first
        self._instants: deque[float] = deque([clock()])

    def __len__(self) -> int:
        return len(self._instants)

    def span(self) -> float:
        """Seconds between the newest and oldest timestamp."""
        return self._instants[0] - self._instants[-1]

    def feed(self, now: float | None = None) -> None:
        """Record one event."""
        if now is None:
            now = self._clock()
        self._instants.appendleft(now)

        while len(self._instants) > 2 and self.span() > self.max_span:
            self._instants.pop()

    def rate(self) -> float | None:
        """
        Events per second over the window.

        Returns:
            Rate, or None with fewer than two samples or a zero span
        """
        if len(self._instants) < 2:
            return None
        span = self.span()
        if span <= 0:
            return None
        return len(self._instants) / span
