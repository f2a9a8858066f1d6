"""
Configuration loading.

Finds the config file, follows pointer files, applies environment variable
overrides and validates the result against the pydantic schemas.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..errors import ConfigValidationError
from ..utils.constants import DEFAULT_CONFIG_FILE, ENV_CAMERA_SOURCE, USER_CONFIG_DIR
from .schemas import Config

logger = logging.getLogger(__name__)


def find_config_file(config_path: str = DEFAULT_CONFIG_FILE) -> Path:
    """
    Find config file in standard locations.

    Search order:
    1. Specified path (if provided and not default)
    2. Current directory (config.yaml)
    3. ~/.config/frame-trigger/config.yaml

    Raises:
        ConfigValidationError: If no config file is found
    """
    # If user specified a non-default path, use only that
    if config_path != DEFAULT_CONFIG_FILE:
        specified = Path(config_path)
        if specified.exists():
            return specified
        raise ConfigValidationError(f"Specified config file not found: {config_path}")

    search_paths = [
        Path.cwd() / DEFAULT_CONFIG_FILE,
        Path.home() / ".config" / USER_CONFIG_DIR / DEFAULT_CONFIG_FILE,
    ]

    for path in search_paths:
        if path.exists():
            logger.info(f"Using config: {path}")
            return path

    raise ConfigValidationError(
        "No config file found in any of these locations:\n"
        + "\n".join(f"  - {path}" for path in search_paths)
    )


def read_config_file(config_file: Path) -> tuple[dict[str, Any], Path]:
    """
    Read YAML from a config file.

    Supports pointer files: if the file only contains `use: path/to/config.yaml`,
    that file is loaded instead.

    Returns:
        (raw config dict, path of the file actually read)

    Raises:
        ConfigValidationError: If the file cannot be read or is not valid YAML
    """
    try:
        with open(config_file, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if isinstance(data, dict) and list(data.keys()) == ["use"]:
            if not isinstance(data["use"], str):
                raise ConfigValidationError(
                    f"Pointer file {config_file}: 'use' must be a path, "
                    f"got {data['use']!r}"
                )
            # Resolve relative to the pointer file's directory
            pointer_path = Path(config_file).parent / data["use"]
            logger.info(f"Config pointer: {config_file} -> {pointer_path}")
            with open(pointer_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            config_file = pointer_path

    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in {config_file}: {e}") from e
    except OSError as e:
        raise ConfigValidationError(f"Cannot read config {config_file}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigValidationError(f"Config {config_file} must be a mapping")

    return data, Path(config_file)


def apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to a raw config dict.

    Args:
        data: Raw configuration dictionary

    Returns:
        Configuration with environment variables applied

    Raises:
        ConfigValidationError: If the camera section cannot take the override
    """
    if ENV_CAMERA_SOURCE in os.environ:
        logger.info(f"Using camera source from environment: {ENV_CAMERA_SOURCE}")
        camera = data.get("camera") or {}
        if not isinstance(camera, dict):
            raise ConfigValidationError(
                f"camera must be a mapping to apply {ENV_CAMERA_SOURCE}, "
                f"got {camera!r}"
            )
        camera["source"] = os.environ[ENV_CAMERA_SOURCE]
        data["camera"] = camera

    return data


def format_validation_errors(error: ValidationError) -> list[str]:
    """Turn a pydantic error into 'location: message' lines."""
    messages = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "config"
        messages.append(f"{location}: {err['msg']}")
    return messages


def validate_config(data: dict[str, Any], base_dir: Path | None = None) -> Config:
    """
    Validate a raw config dict.

    Raises:
        ConfigValidationError: With one message per schema error
    """
    try:
        config = Config.model_validate(data)
    except ValidationError as e:
        errors = format_validation_errors(e)
        raise ConfigValidationError(
            f"Invalid configuration ({len(errors)} error(s))", errors
        ) from e

    if base_dir is not None:
        config.set_base_dir(base_dir)
    return config


def load_config(config_path: str = DEFAULT_CONFIG_FILE) -> Config:
    """
    Load, override and validate the configuration file.

    Raises:
        ConfigValidationError: If the file is missing, unreadable or invalid
    """
    config_file = find_config_file(config_path)
    data, config_file = read_config_file(config_file)
    data = apply_env_overrides(data)
    config = validate_config(data, base_dir=config_file.resolve().parent)
    logger.info(f"Configuration loaded from {config_file}")
    return config
