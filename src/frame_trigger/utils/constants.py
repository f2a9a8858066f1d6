"""
Constants used throughout the frame trigger system
"""

# Performance and monitoring
STATUS_REPORT_INTERVAL = 500  # Log status every N frames
RATE_WINDOW_SECONDS = 60.0  # Sliding window for the frame rate estimate

# Debounce
DEFAULT_COOLDOWN_SECONDS = 5.0

# Action queue
DEFAULT_QUEUE_SIZE = 16
DEFAULT_BLOCK_TIMEOUT = 1.0  # Seconds submit() waits under the "block" policy
WORKER_SHUTDOWN_TIMEOUT = 15.0

# Camera reconnection
MAX_CAMERA_RECONNECT_ATTEMPTS = 2
CAMERA_RECONNECT_DELAY = 2.0  # Base seconds between reconnection attempts

# Configuration
DEFAULT_CONFIG_FILE = "config.yaml"
USER_CONFIG_DIR = "frame-trigger"

# Environment variables
ENV_CAMERA_SOURCE = "FRAME_TRIGGER_CAMERA"
