"""
Detector - answers "is feature X on screen in this frame?"

Composition of region extraction, channel thresholding and frame differencing
against a stored reference image.
"""

import logging
from dataclasses import dataclass
from enum import Enum

import numpy as np

from .difference import frame_distance
from .reference import ReferenceImage
from .region import RegionSpec, extract_region
from .threshold import binarize, extract_channel

logger = logging.getLogger(__name__)


class DetectionSense(str, Enum):
    """
    How a distance maps onto "feature present".

    PRESENT_WHEN_SIMILAR: the reference shows the feature; a distance below
        the threshold means the feature is on screen.
    PRESENT_WHEN_DIFFERENT: the reference shows the normal screen; a distance
        at or above the threshold means the feature is on screen.
    """

    PRESENT_WHEN_SIMILAR = "similar"
    PRESENT_WHEN_DIFFERENT = "different"


@dataclass(frozen=True)
class DetectorSpec:
    """Static, hand-tuned parameters of one detector."""

    region: RegionSpec
    channel: int
    cutoff: int
    distance_threshold: float
    sense: DetectionSense = DetectionSense.PRESENT_WHEN_SIMILAR

    def __post_init__(self):
        if self.channel < 0:
            raise ValueError(f"channel must be >= 0, got {self.channel}")
        if not 0 <= self.cutoff <= 255:
            raise ValueError(f"cutoff must be in [0, 255], got {self.cutoff}")
        if self.distance_threshold <= 0:
            raise ValueError("distance_threshold must be positive")


class Detector:
    """
    Evaluates one DetectorSpec against live frames.

    The only state is the reference image, which is rescaled lazily to the
    region size. Detectors never interact, so several can run on one frame in
    any order.
    """

    def __init__(self, name: str, spec: DetectorSpec, reference: ReferenceImage):
        self.name = name
        self.spec = spec
        self.reference = reference

    def measure(self, frame: np.ndarray) -> float:
        """
        Distance between the frame's region and the reference.

        Raises:
            DetectionError: If the region cannot be taken from this frame
        """
        roi = extract_region(frame, self.spec.region)
        roi_h, roi_w = roi.shape[:2]
        self.reference.match_size(roi_w, roi_h)

        channel = extract_channel(roi, self.spec.channel)
        binary = binarize(channel, self.spec.cutoff)
        return frame_distance(binary, self.reference.image)

    def evaluate(self, frame: np.ndarray) -> bool:
        """
        True when the target feature is present in the frame.

        Raises:
            DetectionError: If the region cannot be taken from this frame
        """
        distance = self.measure(frame)
        if self.spec.sense is DetectionSense.PRESENT_WHEN_SIMILAR:
            present = distance < self.spec.distance_threshold
        else:
            present = distance >= self.spec.distance_threshold

        logger.debug(f"{self.name}: distance={distance:.0f} present={present}")
        return present
