"""
Rising-edge debounce.

An action only needs to run once per stretch of "feature present" frames.
EdgeDebouncer turns a noisy per-frame boolean into single rising-edge events,
with a cooldown between accepted edges.
"""

import time
from enum import Enum
from typing import Callable

from .utils.constants import DEFAULT_COOLDOWN_SECONDS


class DebounceState(str, Enum):
    """Debouncer state at a given instant."""

    NEVER_FIRED = "never_fired"
    COOLING_DOWN = "cooling_down"
    READY = "ready"


class EdgeDebouncer:
    """
    Converts a boolean stream into rising-edge events.

    feed(True) fires when the debouncer is NEVER_FIRED or READY. While
    COOLING_DOWN a true is swallowed, and with refresh_on_true it also restarts
    the cooldown, so a continuous stretch of true fires exactly once no matter
    how long it lasts. Without refresh the cooldown only counts from the last
    accepted edge. feed(False) never changes state.

    Args:
        cooldown: Minimum seconds between accepted edges
        refresh_on_true: Restart the cooldown on every swallowed true
        clock: Monotonic time source used when feed() gets no timestamp
    """

    def __init__(
        self,
        cooldown: float = DEFAULT_COOLDOWN_SECONDS,
        refresh_on_true: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        if cooldown < 0:
            raise ValueError(f"cooldown must be >= 0, got {cooldown}")
        self.cooldown = cooldown
        self.refresh_on_true = refresh_on_true
        self._clock = clock
        self.last_rising: float | None = None

    def state(self, now: float | None = None) -> DebounceState:
        """State of the automaton at time now."""
        if self.last_rising is None:
            return DebounceState.NEVER_FIRED
        if now is None:
            now = self._clock()
        if now - self.last_rising < self.cooldown:
            return DebounceState.COOLING_DOWN
        return DebounceState.READY

    def feed(self, event: bool, now: float | None = None) -> bool:
        """
        Feed one sample.

        Args:
            event: Detector result for this frame
            now: Sample timestamp in seconds (defaults to the clock)

        Returns:
            True only on an accepted rising edge
        """
        if not event:
            return False

        if now is None:
            now = self._clock()

        if self.state(now) is DebounceState.COOLING_DOWN:
            if self.refresh_on_true:
                self.last_rising = now
            return False

        self.last_rising = now
        return True

    def reset(self) -> None:
        """Forget the last edge; the next true fires."""
        self.last_rising = None
