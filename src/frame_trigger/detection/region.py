"""
Region of interest extraction.

Regions are expressed as fractions of the frame size so one definition works
for any capture resolution with the same aspect ratio.
"""

from dataclasses import dataclass

import numpy as np

from ..errors import OutOfBoundsError


@dataclass(frozen=True)
class RegionSpec:
    """
    Rectangular region described relative to the frame.

    Attributes:
        center_x: Horizontal center as a fraction of frame width
        center_y: Vertical center as a fraction of frame height
        width_frac: Region width as a fraction of frame width
        height_frac: Region height as a fraction of frame height
    """

    center_x: float
    center_y: float
    width_frac: float
    height_frac: float

    def __post_init__(self):
        for name in ("width_frac", "height_frac"):
            value = getattr(self, name)
            if not 0 < value <= 1:
                raise ValueError(f"{name} must be in (0, 1], got {value}")

        half_w = self.width_frac / 2
        half_h = self.height_frac / 2
        if self.center_x - half_w < 0 or self.center_x + half_w > 1:
            raise ValueError("Region extends past the left/right frame edge")
        if self.center_y - half_h < 0 or self.center_y + half_h > 1:
            raise ValueError("Region extends past the top/bottom frame edge")


def region_bounds(
    frame_shape: tuple[int, ...], spec: RegionSpec
) -> tuple[int, int, int, int]:
    """
    Compute pixel bounds of a region for a given frame shape.

    Args:
        frame_shape: numpy shape of the frame, (height, width[, channels])
        spec: Fractional region definition

    Returns:
        (x, y, width, height) of the region's top-left corner and size

    Raises:
        OutOfBoundsError: If the rectangle is empty or leaves the frame
    """
    frame_h, frame_w = frame_shape[:2]

    width = int(round(frame_w * spec.width_frac))
    height = int(round(frame_h * spec.height_frac))
    x = int(round(frame_w * spec.center_x - width / 2))
    y = int(round(frame_h * spec.center_y - height / 2))

    if width <= 0 or height <= 0:
        raise OutOfBoundsError(
            f"Region is empty for {frame_w}x{frame_h} frame: {width}x{height}"
        )
    if x < 0 or y < 0 or x + width > frame_w or y + height > frame_h:
        raise OutOfBoundsError(
            f"Region ({x}, {y}, {width}x{height}) outside {frame_w}x{frame_h} frame"
        )

    return x, y, width, height


def extract_region(frame: np.ndarray, spec: RegionSpec) -> np.ndarray:
    """
    Crop the region out of a frame.

    The result is a read-only view; the source frame is never modified.

    Raises:
        OutOfBoundsError: If the region does not fit inside the frame
    """
    x, y, width, height = region_bounds(frame.shape, spec)
    roi = frame[y : y + height, x : x + width]
    roi.flags.writeable = False
    return roi
