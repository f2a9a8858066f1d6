"""
Action configuration models.

Actions are a closed set of variants tagged by "type". Adding a new kind of
side effect means adding a model here and a handler in the dispatcher.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

DEFAULT_WEBHOOK_TIMEOUT = 10.0
DEFAULT_COMMAND_TIMEOUT = 30.0


class ActionModel(BaseModel):
    """Base for action variants: immutable, unknown fields rejected."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class WebhookAction(ActionModel):
    """POST with an empty body; any 2xx response is success."""

    type: Literal["webhook"] = "webhook"
    url: str = Field(..., min_length=1, description="Webhook endpoint URL")
    timeout_seconds: float = Field(default=DEFAULT_WEBHOOK_TIMEOUT, gt=0)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("Webhook URL must start with http:// or https://")
        return v

    def describe(self) -> str:
        return f"webhook {self.url}"


class CommandAction(ActionModel):
    """Run a local command; exit status 0 is success."""

    type: Literal["command"] = "command"
    command: str | list[str] = Field(..., description="Shell string or argv list")
    timeout_seconds: float = Field(default=DEFAULT_COMMAND_TIMEOUT, gt=0)

    @field_validator("command")
    @classmethod
    def validate_command(cls, v: str | list[str]) -> str | list[str]:
        if not v or (isinstance(v, list) and not all(v)):
            raise ValueError("Command must not be empty")
        return v

    def describe(self) -> str:
        command = self.command if isinstance(self.command, str) else " ".join(self.command)
        return f"command '{command}'"


ActionConfig = Annotated[
    Union[WebhookAction, CommandAction], Field(discriminator="type")
]

_ACTION_ADAPTER = TypeAdapter(ActionConfig)


def parse_action(data: dict) -> WebhookAction | CommandAction:
    """
    Validate a raw action mapping.

    Raises:
        pydantic.ValidationError: If the type tag is unknown or fields are invalid
    """
    return _ACTION_ADAPTER.validate_python(data)
