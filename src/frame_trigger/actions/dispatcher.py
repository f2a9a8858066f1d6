"""
Action Dispatcher - executes a configured side effect.

Each action variant maps to one handler. One call performs exactly one
attempt; retrying is left to the caller.
"""

import logging
import subprocess
from typing import Callable

import requests

from ..errors import ActionError, CommandFailedError, WebhookFailedError
from .models import CommandAction, WebhookAction

logger = logging.getLogger(__name__)


class ActionDispatcher:
    """
    Runs actions by variant.

    Args:
        http_post: Callable used for webhook requests (requests.post by default)
        run_command: Callable used for command actions (subprocess.run by default)
    """

    def __init__(
        self,
        http_post: Callable[..., requests.Response] | None = None,
        run_command: Callable[..., subprocess.CompletedProcess] | None = None,
    ):
        self._http_post = http_post or requests.post
        self._run_command = run_command or subprocess.run
        self._handlers: dict[type, Callable] = {
            WebhookAction: self._execute_webhook,
            CommandAction: self._execute_command,
        }

    def execute(self, action: WebhookAction | CommandAction) -> None:
        """
        Execute an action once.

        Raises:
            ActionError: If the action failed (WebhookFailedError, CommandFailedError)
        """
        handler = self._handlers.get(type(action))
        if handler is None:
            raise ActionError(f"No handler for action type: {type(action).__name__}")
        handler(action)

    def _execute_webhook(self, action: WebhookAction) -> None:
        try:
            response = self._http_post(action.url, timeout=action.timeout_seconds)
        except requests.RequestException as e:
            raise WebhookFailedError(action.url, str(e)) from e

        if not 200 <= response.status_code < 300:
            raise WebhookFailedError(
                action.url, f"HTTP {response.status_code}", response.status_code
            )

        logger.debug(f"Webhook sent to {action.url} ({response.status_code})")

    def _execute_command(self, action: CommandAction) -> None:
        use_shell = isinstance(action.command, str)
        try:
            result = self._run_command(
                action.command,
                shell=use_shell,
                timeout=action.timeout_seconds,
                capture_output=True,
                text=True,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandFailedError(
                f"Command timed out after {action.timeout_seconds}s: {action.describe()}"
            ) from e
        except OSError as e:
            raise CommandFailedError(f"Command could not start: {e}") from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()[:200]
            raise CommandFailedError(
                f"Command exited with code {result.returncode}: {stderr}"
            )

        if result.stdout:
            logger.debug(f"Command stdout: {result.stdout.strip()}")
