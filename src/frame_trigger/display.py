"""
Debug window - shows the live feed with the frame rate overlaid.

Presentation only; nothing here feeds back into detection.
"""

import cv2
import numpy as np

DEFAULT_WINDOW_NAME = "frame-trigger"


def format_rate(rate: float | None) -> str:
    """Overlay text for a RateCounter value."""
    if rate is None:
        return "-- fps"
    return f"{rate:.1f} fps ({1000 / rate:.2f}ms)"


class DebugWindow:
    """OpenCV window with a text overlay. Press q to request shutdown."""

    def __init__(self, name: str = DEFAULT_WINDOW_NAME):
        self.name = name
        self._open = False

    def show(self, frame: np.ndarray, text: str) -> bool:
        """
        Draw the frame with text in the top-left corner.

        The caller's frame is not modified.

        Returns:
            True if the user pressed q
        """
        if not self._open:
            cv2.namedWindow(self.name)
            self._open = True

        annotated = frame.copy()
        cv2.putText(
            annotated,
            text,
            (0, 50),
            cv2.FONT_HERSHEY_SIMPLEX,
            1.0,
            (255, 255, 255),
            2,
        )
        cv2.imshow(self.name, annotated)
        return cv2.waitKey(1) & 0xFF == ord("q")

    def close(self) -> None:
        if self._open:
            cv2.destroyWindow(self.name)
            self._open = False
