"""
Exception hierarchy for the frame trigger system.

Startup errors (config, reference images) and frame source errors are fatal.
Detection errors are local to one detector for one frame.
Action errors are reported by the action worker and never stop the pipeline.
"""


class FrameTriggerError(Exception):
    """Base class for all frame trigger errors."""


class ConfigValidationError(FrameTriggerError):
    """Raised when the configuration file cannot be loaded or is invalid."""

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or []


class ReferenceLoadError(FrameTriggerError):
    """Raised when a reference image cannot be read at startup."""


class FrameSourceError(FrameTriggerError):
    """Raised when the frame source cannot be opened or stops delivering frames."""


class DetectionError(FrameTriggerError):
    """Base class for errors raised while evaluating a single detector."""


class OutOfBoundsError(DetectionError):
    """Raised when a region of interest does not fit inside the frame."""


class SizeMismatchError(DetectionError):
    """Raised when two images that must be the same size are not."""


class ChannelError(DetectionError):
    """Raised when a requested color channel does not exist in an image."""


class ActionError(FrameTriggerError):
    """Base class for errors raised while executing a configured action."""


class WebhookFailedError(ActionError):
    """Raised when a webhook call fails or returns a non-2xx status."""

    def __init__(self, url: str, reason: str, status_code: int | None = None):
        super().__init__(f"Webhook {url} failed: {reason}")
        self.url = url
        self.reason = reason
        self.status_code = status_code


class CommandFailedError(ActionError):
    """Raised when a command action exits non-zero, times out or cannot start."""
