"""
Frame Trigger

Watches a live video feed, evaluates hand-tuned pixel detectors on every
frame, debounces each detector's boolean stream into single rising-edge
events and fires a configured action (webhook or command) once per edge.

Package structure:
  detection/  - Region, channel/threshold and difference detectors
  actions/    - Action variants, dispatcher and background worker
  config/     - Configuration loading and validation
  utils/      - Constants
"""

__version__ = "1.0.0"

from .actions import ActionDispatcher, ActionWorker, CommandAction, WebhookAction
from .config import Config, ConfigValidationError, load_config
from .counter import RateCounter
from .debounce import DebounceState, EdgeDebouncer
from .detection import DetectionSense, Detector, DetectorSpec, ReferenceImage, RegionSpec
from .pipeline import Pipeline, WatchedEvent
from .runner import run_watch

__all__ = [
    "ActionDispatcher",
    "ActionWorker",
    "CommandAction",
    "Config",
    "ConfigValidationError",
    "DebounceState",
    "DetectionSense",
    "Detector",
    "DetectorSpec",
    "EdgeDebouncer",
    "Pipeline",
    "RateCounter",
    "ReferenceImage",
    "RegionSpec",
    "WatchedEvent",
    "WebhookAction",
    "load_config",
    "run_watch",
]
