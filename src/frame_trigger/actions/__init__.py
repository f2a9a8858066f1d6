"""
Actions - side effects fired on a detector's rising edge.

  models.py     - closed set of action variants (webhook, command)
  dispatcher.py - executes one action, one attempt
  worker.py     - bounded queue + thread so the frame loop never waits on I/O
"""

from .dispatcher import ActionDispatcher
from .models import (
    ActionConfig,
    CommandAction,
    WebhookAction,
    parse_action,
)
from .worker import ActionRequest, ActionWorker, QueuePolicy

__all__ = [
    "ActionConfig",
    "ActionDispatcher",
    "ActionRequest",
    "ActionWorker",
    "CommandAction",
    "QueuePolicy",
    "WebhookAction",
    "parse_action",
]
