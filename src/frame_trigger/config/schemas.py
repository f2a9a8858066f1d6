"""
Pydantic schemas for configuration validation.

Provides type-safe, declarative validation with clear error messages.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator

from ..actions import ActionConfig
from ..detection import PRESET_REGISTRY, DetectionSense, DetectorSpec, RegionSpec
from ..utils.constants import (
    CAMERA_RECONNECT_DELAY,
    DEFAULT_BLOCK_TIMEOUT,
    DEFAULT_COOLDOWN_SECONDS,
    DEFAULT_QUEUE_SIZE,
    MAX_CAMERA_RECONNECT_ATTEMPTS,
    RATE_WINDOW_SECONDS,
    STATUS_REPORT_INTERVAL,
    WORKER_SHUTDOWN_TIMEOUT,
)


class StrictModel(BaseModel):
    """Base model that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid")


class RegionConfig(StrictModel):
    """Region of interest as fractions of the frame size."""

    center_x: float = Field(..., ge=0, le=1)
    center_y: float = Field(..., ge=0, le=1)
    width_frac: float = Field(..., gt=0, le=1)
    height_frac: float = Field(..., gt=0, le=1)

    @model_validator(mode="after")
    def validate_inside_frame(self):
        # RegionSpec raises ValueError if the region leaves the unit square
        self.to_spec()
        return self

    def to_spec(self) -> RegionSpec:
        return RegionSpec(
            center_x=self.center_x,
            center_y=self.center_y,
            width_frac=self.width_frac,
            height_frac=self.height_frac,
        )


class DetectorConfig(StrictModel):
    """Inline detector definition."""

    region: RegionConfig
    channel: int = Field(default=2, ge=0, le=3, description="BGR(A) channel index")
    cutoff: int = Field(..., ge=0, le=255, description="Binarization cutoff")
    distance_threshold: float = Field(..., gt=0)
    sense: Literal["similar", "different"] = "similar"

    def to_spec(self) -> DetectorSpec:
        return DetectorSpec(
            region=self.region.to_spec(),
            channel=self.channel,
            cutoff=self.cutoff,
            distance_threshold=self.distance_threshold,
            sense=DetectionSense(self.sense),
        )


class EventConfig(StrictModel):
    """One watched event: detector, debounce and action."""

    name: str = Field(..., min_length=1)
    enabled: bool = True
    detector: str | DetectorConfig = Field(
        ..., description="Preset name or inline detector definition"
    )
    reference: str | None = Field(
        default=None, description="Reference image (defaults to the preset's)"
    )
    cooldown_seconds: float = Field(default=DEFAULT_COOLDOWN_SECONDS, ge=0)
    refresh_on_true: bool = True
    action: ActionConfig | None = None

    @model_validator(mode="after")
    def validate_detector(self):
        if isinstance(self.detector, str):
            if self.detector not in PRESET_REGISTRY:
                known = ", ".join(sorted(PRESET_REGISTRY))
                raise ValueError(
                    f"Unknown detector preset '{self.detector}' (known: {known})"
                )
        elif not self.reference:
            raise ValueError("Inline detectors need a 'reference' image")
        return self

    def detector_spec(self) -> DetectorSpec:
        if isinstance(self.detector, str):
            return PRESET_REGISTRY[self.detector].spec
        return self.detector.to_spec()

    def reference_path(self) -> str:
        if self.reference:
            return self.reference
        return PRESET_REGISTRY[self.detector].reference


class CameraConfig(StrictModel):
    """Frame source configuration."""

    source: int | str = Field(default=0, description="Device index or stream URL")
    max_reconnect_attempts: int = Field(default=MAX_CAMERA_RECONNECT_ATTEMPTS, ge=0)
    reconnect_delay: float = Field(default=CAMERA_RECONNECT_DELAY, ge=0)


class DispatchConfig(StrictModel):
    """Action queue configuration."""

    queue_size: int = Field(default=DEFAULT_QUEUE_SIZE, ge=1)
    when_full: Literal["drop_newest", "drop_oldest", "block"] = "drop_newest"
    block_timeout: float = Field(default=DEFAULT_BLOCK_TIMEOUT, gt=0)
    shutdown_timeout: float = Field(default=WORKER_SHUTDOWN_TIMEOUT, gt=0)


class RuntimeConfig(StrictModel):
    """Runtime configuration."""

    rate_window_seconds: float = Field(default=RATE_WINDOW_SECONDS, gt=0)
    status_interval: int = Field(default=STATUS_REPORT_INTERVAL, ge=1)


class Config(StrictModel):
    """Complete configuration schema."""

    debug_window: bool = False
    camera: CameraConfig = Field(default_factory=CameraConfig)
    dispatch: DispatchConfig = Field(default_factory=DispatchConfig)
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)
    events: list[EventConfig] = Field(default_factory=list)

    # Directory relative reference paths are resolved against
    _base_dir: Path = PrivateAttr(default_factory=Path.cwd)

    @model_validator(mode="after")
    def validate_unique_names(self):
        seen = set()
        for event in self.events:
            if event.name in seen:
                raise ValueError(f"Duplicate event name: '{event.name}'")
            seen.add(event.name)
        return self

    @property
    def enabled_events(self) -> list[EventConfig]:
        return [event for event in self.events if event.enabled]

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def set_base_dir(self, path: Path) -> None:
        self._base_dir = Path(path)

    def resolve_path(self, path: str) -> Path:
        """Resolve a config-relative path."""
        candidate = Path(path).expanduser()
        if candidate.is_absolute():
            return candidate
        return self._base_dir / candidate
