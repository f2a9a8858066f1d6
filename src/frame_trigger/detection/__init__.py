"""
Detection components.

Pixel/threshold detectors built from three pure steps:
  region.py     - crop a fractional region of interest
  threshold.py  - isolate a channel and binarize it
  difference.py - L2 distance against a reference image
Composed by detector.py; named specs live in presets.py.
"""

from .detector import DetectionSense, Detector, DetectorSpec
from .difference import frame_distance, is_similar
from .presets import PRESET_REGISTRY, Preset, get_preset
from .reference import ReferenceImage
from .region import RegionSpec, extract_region, region_bounds
from .threshold import (
    CHANNEL_BLUE,
    CHANNEL_GREEN,
    CHANNEL_RED,
    binarize,
    extract_channel,
)

__all__ = [
    "CHANNEL_BLUE",
    "CHANNEL_GREEN",
    "CHANNEL_RED",
    "DetectionSense",
    "Detector",
    "DetectorSpec",
    "PRESET_REGISTRY",
    "Preset",
    "ReferenceImage",
    "RegionSpec",
    "binarize",
    "extract_channel",
    "extract_region",
    "frame_distance",
    "get_preset",
    "is_similar",
    "region_bounds",
]
