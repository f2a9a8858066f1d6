"""
Reference images for detectors.

A reference is loaded once at startup, reduced to the detector's channel and
binarized at the detector's cutoff. When the live region of interest has a
different size the reference is rescaled lazily, once, and reused until the
size changes again.
"""

import logging
from pathlib import Path

import cv2
import numpy as np

from ..errors import ChannelError, ReferenceLoadError
from .threshold import binarize, extract_channel

logger = logging.getLogger(__name__)


class ReferenceImage:
    """
    Binarized single-channel baseline a region is compared against.

    The originally loaded image is kept so every rescale starts from full
    quality instead of compounding earlier resizes. Nearest-neighbour
    interpolation keeps the rescaled image binary.
    """

    def __init__(self, image: np.ndarray, source: str | None = None):
        if image.ndim != 2:
            raise ValueError(f"Reference must be single-channel, got {image.shape}")
        self._original = image
        self._image = image
        self.source = source or "<memory>"
        self.resize_count = 0

    @classmethod
    def from_file(
        cls, path: str | Path, channel: int, cutoff: int
    ) -> "ReferenceImage":
        """
        Load a reference from disk and prepare it for comparison.

        Args:
            path: Image file path
            channel: Channel to extract (BGR index)
            cutoff: Binarization cutoff

        Returns:
            ReferenceImage ready for use

        Raises:
            ReferenceLoadError: If the file is missing, unreadable, or lacks the channel
        """
        path = Path(path)
        if not path.is_file():
            raise ReferenceLoadError(f"Reference image not found: {path}")

        loaded = cv2.imread(str(path), cv2.IMREAD_COLOR)
        if loaded is None:
            raise ReferenceLoadError(f"Reference image could not be decoded: {path}")

        try:
            single = extract_channel(loaded, channel)
        except ChannelError as e:
            raise ReferenceLoadError(f"Reference image {path}: {e}") from e

        logger.info(f"Loaded reference {path} ({single.shape[1]}x{single.shape[0]})")
        return cls(binarize(single, cutoff), source=str(path))

    @property
    def image(self) -> np.ndarray:
        return self._image

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) of the current image."""
        height, width = self._image.shape[:2]
        return width, height

    def match_size(self, width: int, height: int) -> bool:
        """
        Rescale the reference to width x height if it differs.

        Calling this again with the same size does nothing.

        Returns:
            True if the reference was rescaled
        """
        if self.size == (width, height):
            return False

        self._image = cv2.resize(
            self._original, (width, height), interpolation=cv2.INTER_NEAREST
        )
        self.resize_count += 1
        logger.debug(f"Rescaled reference {self.source} to {width}x{height}")
        return True
