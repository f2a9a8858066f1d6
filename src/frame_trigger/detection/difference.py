"""
Frame differencing.

Distance is the L2 norm of the pixelwise difference between two
single-channel images of identical size.
"""

import cv2
import numpy as np

from ..errors import SizeMismatchError


def frame_distance(a: np.ndarray, b: np.ndarray) -> float:
    """
    L2 distance between two equally sized images.

    Raises:
        SizeMismatchError: If the shapes differ
    """
    if a.shape != b.shape:
        raise SizeMismatchError(f"Cannot compare {a.shape} with {b.shape}")

    # cv2.norm needs matching element types
    if a.dtype != b.dtype:
        a = a.astype(np.float64)
        b = b.astype(np.float64)

    return float(cv2.norm(a, b, cv2.NORM_L2))


def is_similar(a: np.ndarray, b: np.ndarray, threshold: float) -> bool:
    """True when the distance between a and b is below threshold."""
    return frame_distance(a, b) < threshold
