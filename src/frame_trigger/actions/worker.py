"""
Action Worker - runs actions off the frame loop.

The frame loop submits requests to a bounded queue; a single daemon thread
drains it and calls the dispatcher. A slow or hanging webhook therefore delays
other actions but never frame acquisition or debouncing.

When the queue is full the configured QueuePolicy decides what is lost.
"""

import logging
import queue
import threading
import time
from dataclasses import dataclass, field
from enum import Enum

from ..errors import ActionError
from ..utils.constants import DEFAULT_BLOCK_TIMEOUT, DEFAULT_QUEUE_SIZE
from .dispatcher import ActionDispatcher
from .models import CommandAction, WebhookAction

logger = logging.getLogger(__name__)


class QueuePolicy(str, Enum):
    """What to do with a new request when the queue is full."""

    DROP_NEWEST = "drop_newest"  # discard the new request
    DROP_OLDEST = "drop_oldest"  # discard the oldest queued request
    BLOCK = "block"  # wait up to block_timeout, then discard the new request


@dataclass
class ActionRequest:
    """One queued action execution."""

    event_name: str
    action: WebhookAction | CommandAction
    submitted_at: float = field(default_factory=time.time)


class ActionWorker:
    """
    Single-consumer worker thread for action execution.

    Args:
        dispatcher: Executes each action
        queue_size: Maximum queued requests
        policy: Full-queue policy
        block_timeout: Seconds submit() may wait under QueuePolicy.BLOCK
    """

    def __init__(
        self,
        dispatcher: ActionDispatcher,
        queue_size: int = DEFAULT_QUEUE_SIZE,
        policy: QueuePolicy = QueuePolicy.DROP_NEWEST,
        block_timeout: float = DEFAULT_BLOCK_TIMEOUT,
    ):
        if queue_size < 1:
            raise ValueError(f"queue_size must be >= 1, got {queue_size}")
        self.dispatcher = dispatcher
        self.policy = QueuePolicy(policy)
        self.block_timeout = block_timeout
        self._queue: queue.Queue[ActionRequest | None] = queue.Queue(maxsize=queue_size)
        self._thread: threading.Thread | None = None

        self.submitted = 0
        self.dropped = 0
        self.executed = 0
        self.failed = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the worker thread."""
        if self.running:
            return
        self._thread = threading.Thread(
            target=self._run, name="ActionWorker", daemon=True
        )
        self._thread.start()
        logger.info(
            f"Action worker started (queue={self._queue.maxsize}, policy={self.policy.value})"
        )

    def submit(self, event_name: str, action: WebhookAction | CommandAction) -> bool:
        """
        Queue an action without waiting on its execution.

        Returns:
            True if the request was queued
        """
        request = ActionRequest(event_name=event_name, action=action)

        if self.policy is QueuePolicy.BLOCK:
            try:
                self._queue.put(request, timeout=self.block_timeout)
            except queue.Full:
                return self._drop(request, "queue full after waiting")
            self.submitted += 1
            return True

        try:
            self._queue.put_nowait(request)
            self.submitted += 1
            return True
        except queue.Full:
            if self.policy is QueuePolicy.DROP_NEWEST:
                return self._drop(request, "queue full")

        # DROP_OLDEST: make room by discarding the head of the queue
        try:
            oldest = self._queue.get_nowait()
            self._queue.task_done()
            if oldest is not None:
                self._drop(oldest, "evicted by newer request")
        except queue.Empty:
            pass

        try:
            self._queue.put_nowait(request)
        except queue.Full:
            return self._drop(request, "queue full")
        self.submitted += 1
        return True

    def stop(self, timeout: float | None = None) -> None:
        """
        Finish queued requests and stop the thread.

        Args:
            timeout: Maximum seconds to wait for the thread (None = forever)
        """
        if self._thread is None:
            return

        try:
            self._queue.put(None, timeout=timeout)
        except queue.Full:
            logger.warning("Action worker queue still full, not waiting for shutdown")
            return

        self._thread.join(timeout=timeout)
        if self._thread.is_alive():
            logger.warning("Action worker did not stop in time")
        else:
            logger.info(
                f"Action worker stopped: executed={self.executed} "
                f"failed={self.failed} dropped={self.dropped}"
            )
            self._thread = None

    def _drop(self, request: ActionRequest, reason: str) -> bool:
        self.dropped += 1
        logger.warning(
            f"Dropped action for {request.event_name} ({request.action.describe()}): {reason}"
        )
        return False

    def _run(self) -> None:
        """Worker loop: execute requests until the None sentinel arrives."""
        while True:
            request = self._queue.get()
            try:
                if request is None:
                    break
                self._execute(request)
            finally:
                self._queue.task_done()

    def _execute(self, request: ActionRequest) -> None:
        waited = time.time() - request.submitted_at
        try:
            self.dispatcher.execute(request.action)
            self.executed += 1
            logger.info(
                f"Action for {request.event_name} done: {request.action.describe()} "
                f"(queued {waited:.2f}s)"
            )
        except ActionError as e:
            self.failed += 1
            logger.error(f"Action for {request.event_name} failed: {e}")
        except Exception as e:
            self.failed += 1
            logger.error(
                f"Unexpected error running action for {request.event_name}: {e}",
                exc_info=True,
            )
