"""
Channel isolation and binarization.
"""

import numpy as np

from ..errors import ChannelError

# OpenCV delivers frames in BGR order
CHANNEL_BLUE = 0
CHANNEL_GREEN = 1
CHANNEL_RED = 2


def extract_channel(image: np.ndarray, channel: int) -> np.ndarray:
    """
    Copy one color channel into a new single-channel image.

    A single-channel (2-D) image only has channel 0.

    Args:
        image: (H, W) or (H, W, C) image
        channel: Channel index

    Returns:
        Contiguous (H, W) array with the same dtype as the input

    Raises:
        ChannelError: If the channel does not exist
    """
    if image.ndim == 2:
        if channel != 0:
            raise ChannelError(
                f"Channel {channel} requested from a single-channel image"
            )
        return image.copy()

    if image.ndim != 3:
        raise ChannelError(f"Unsupported image shape: {image.shape}")

    channels = image.shape[2]
    if not 0 <= channel < channels:
        raise ChannelError(f"Channel {channel} out of range for {channels} channels")

    return image[:, :, channel].copy()


def binarize(image: np.ndarray, cutoff: int, max_value: int = 255) -> np.ndarray:
    """
    Binarize a single-channel image.

    Pixels at or above the cutoff become max_value, everything else 0.
    """
    return np.where(image >= cutoff, max_value, 0).astype(np.uint8)
