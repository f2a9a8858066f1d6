"""
Configuration loading and validation.

- load_config: find, read, override and validate the YAML config
- apply_env_overrides: environment variable overrides
- Config and sub-schemas: pydantic models for type-safe validation
"""

from ..errors import ConfigValidationError
from .loader import (
    apply_env_overrides,
    find_config_file,
    format_validation_errors,
    load_config,
    read_config_file,
    validate_config,
)
from .schemas import (
    CameraConfig,
    Config,
    DetectorConfig,
    DispatchConfig,
    EventConfig,
    RegionConfig,
    RuntimeConfig,
)

__all__ = [
    "CameraConfig",
    "Config",
    "ConfigValidationError",
    "DetectorConfig",
    "DispatchConfig",
    "EventConfig",
    "RegionConfig",
    "RuntimeConfig",
    "apply_env_overrides",
    "find_config_file",
    "format_validation_errors",
    "load_config",
    "read_config_file",
    "validate_config",
]
