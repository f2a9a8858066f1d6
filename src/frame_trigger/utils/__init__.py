"""
Utility modules.
"""

from .constants import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_COOLDOWN_SECONDS,
    DEFAULT_QUEUE_SIZE,
    ENV_CAMERA_SOURCE,
    RATE_WINDOW_SECONDS,
    STATUS_REPORT_INTERVAL,
)

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "DEFAULT_COOLDOWN_SECONDS",
    "DEFAULT_QUEUE_SIZE",
    "ENV_CAMERA_SOURCE",
    "RATE_WINDOW_SECONDS",
    "STATUS_REPORT_INTERVAL",
]
