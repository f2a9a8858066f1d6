"""
Event Pipeline - detection -> debounce -> dispatch for one frame.

Each configured event owns a detector, a debouncer and an action. A detector
that fails on a frame produces no event for that frame and does not affect
the others.
"""

import logging
import time
from dataclasses import dataclass, field

import numpy as np

from .actions import ActionWorker, CommandAction, WebhookAction
from .debounce import EdgeDebouncer
from .detection import Detector
from .errors import DetectionError

logger = logging.getLogger(__name__)

# Log the first detection error of an event, then every Nth
ERROR_LOG_INTERVAL = 100


@dataclass
class WatchedEvent:
    """One configured event: what to look for, how to debounce, what to do."""

    name: str
    detector: Detector
    debouncer: EdgeDebouncer
    action: WebhookAction | CommandAction | None = None
    error_count: int = field(default=0)
    fired_count: int = field(default=0)


class Pipeline:
    """
    Runs every watched event against a frame.

    Args:
        events: Watched events, evaluated in order
        worker: Receives actions for rising edges
    """

    def __init__(self, events: list[WatchedEvent], worker: ActionWorker):
        self.events = events
        self.worker = worker

    def process_frame(self, frame: np.ndarray, now: float | None = None) -> list[str]:
        """
        Evaluate all events on one frame.

        Args:
            frame: Current frame
            now: Frame timestamp in seconds (monotonic clock by default)

        Returns:
            Names of events that fired on this frame
        """
        if now is None:
            now = time.monotonic()

        fired = []
        for event in self.events:
            present = self._evaluate(event, frame)
            if not event.debouncer.feed(present, now):
                continue

            event.fired_count += 1
            fired.append(event.name)
            logger.info(f"Event fired: {event.name}")

            if event.action is not None:
                self.worker.submit(event.name, event.action)

        return fired

    def _evaluate(self, event: WatchedEvent, frame: np.ndarray) -> bool:
        try:
            return event.detector.evaluate(frame)
        except DetectionError as e:
            event.error_count += 1
            if event.error_count == 1 or event.error_count % ERROR_LOG_INTERVAL == 0:
                logger.warning(
                    f"Detector {event.detector.name} failed for {event.name} "
                    f"({event.error_count} total): {e}"
                )
            return False
