"""
Frame source - OpenCV capture with reconnect.

A failed open or read is retried with exponential backoff; once the attempts
are used up the source is considered gone and FrameSourceError is raised.
"""

import logging
import time

import cv2
import numpy as np

from .errors import FrameSourceError
from .utils.constants import CAMERA_RECONNECT_DELAY, MAX_CAMERA_RECONNECT_ATTEMPTS

logger = logging.getLogger(__name__)


def parse_source(source: int | str) -> int | str:
    """Device index for numeric strings ("0"), otherwise the URL/path as given."""
    if isinstance(source, str) and source.strip().isdigit():
        return int(source.strip())
    return source


class FrameSource:
    """
    Video frames from a capture device, file or stream URL.

    Args:
        source: Device index or URL/path
        max_reconnect_attempts: Retries after a failed open or read
        reconnect_delay: Base delay in seconds, doubled on each retry
    """

    def __init__(
        self,
        source: int | str,
        max_reconnect_attempts: int = MAX_CAMERA_RECONNECT_ATTEMPTS,
        reconnect_delay: float = CAMERA_RECONNECT_DELAY,
    ):
        self.source = parse_source(source)
        self.max_reconnect_attempts = max_reconnect_attempts
        self.reconnect_delay = reconnect_delay
        self.cap: cv2.VideoCapture | None = None
        self.frame_count = 0

    def __enter__(self) -> "FrameSource":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def open(self) -> None:
        """
        Open the capture, retrying on failure.

        Raises:
            FrameSourceError: If the source cannot be opened
        """
        for attempt in range(self.max_reconnect_attempts + 1):
            logger.info(f"Opening frame source: {self.source} (attempt {attempt + 1})")
            cap = cv2.VideoCapture(self.source)

            if cap.isOpened():
                self.cap = cap
                logger.info("Frame source opened")
                return

            cap.release()
            if attempt < self.max_reconnect_attempts:
                delay = self._backoff(attempt)
                logger.warning(f"Failed to open, retrying in {delay}s...")
                time.sleep(delay)

        raise FrameSourceError(
            f"Cannot open frame source {self.source} after "
            f"{self.max_reconnect_attempts + 1} attempts"
        )

    def read(self) -> np.ndarray:
        """
        Block until the next frame is available.

        Raises:
            FrameSourceError: If frames stop arriving and reconnecting fails
        """
        if self.cap is None:
            self.open()

        for attempt in range(self.max_reconnect_attempts + 1):
            ok, frame = self.cap.read()
            if ok and frame is not None:
                self.frame_count += 1
                return frame

            if attempt < self.max_reconnect_attempts:
                delay = self._backoff(attempt)
                logger.warning(f"Failed to read frame, reconnecting in {delay}s...")
                time.sleep(delay)
                self._reopen()

        raise FrameSourceError(f"Frame source {self.source} stopped delivering frames")

    def release(self) -> None:
        if self.cap is not None:
            self.cap.release()
            self.cap = None

    def _reopen(self) -> None:
        self.release()
        cap = cv2.VideoCapture(self.source)
        if cap.isOpened():
            self.cap = cap
            logger.info("Frame source reconnected")
        else:
            cap.release()
            # Keep a closed capture so the next read() fails and retries
            self.cap = cv2.VideoCapture()

    def _backoff(self, attempt: int) -> float:
        return self.reconnect_delay * (2**attempt)
