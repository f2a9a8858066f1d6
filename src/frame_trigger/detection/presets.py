"""
Detector Presets - named, hand-tuned detector specs.

Presets register themselves with a decorator and are looked up by name from
the event configuration. A config can also describe a detector inline.
"""

import logging
from typing import Callable

from .detector import DetectionSense, DetectorSpec
from .region import RegionSpec
from .threshold import CHANNEL_RED

logger = logging.getLogger(__name__)


class Preset:
    """A registered detector spec plus its default reference image."""

    def __init__(self, name: str, spec: DetectorSpec, reference: str, description: str):
        self.name = name
        self.spec = spec
        self.reference = reference
        self.description = description


# Registry: preset name -> Preset
PRESET_REGISTRY: dict[str, Preset] = {}


def register(name: str, reference: str) -> Callable:
    """Decorator to register a function returning a DetectorSpec."""

    def decorator(func: Callable[[], DetectorSpec]):
        doc = (func.__doc__ or "").strip()
        description = doc.splitlines()[0] if doc else ""
        PRESET_REGISTRY[name] = Preset(name, func(), reference, description)
        return func

    return decorator


def get_preset(name: str) -> Preset:
    """
    Look up a preset by name.

    Raises:
        KeyError: If no preset has that name
    """
    try:
        return PRESET_REGISTRY[name]
    except KeyError:
        known = ", ".join(sorted(PRESET_REGISTRY)) or "none"
        raise KeyError(f"Unknown detector preset '{name}' (known: {known})") from None


@register("dark_souls_you_died", reference="youdied.png")
def dark_souls_you_died() -> DetectorSpec:
    """Dark Souls "YOU DIED" banner (red text on a dark band).

    The band sits slightly below the middle of the screen in all three games.
    The red channel is binarized at 80 and compared against a reference
    banner; a small distance means the banner is showing.
    """
    return DetectorSpec(
        region=RegionSpec(
            center_x=0.5, center_y=0.525, width_frac=0.4, height_frac=0.15
        ),
        channel=CHANNEL_RED,
        cutoff=80,
        distance_threshold=5000.0,
        sense=DetectionSense.PRESENT_WHEN_SIMILAR,
    )
