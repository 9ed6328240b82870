"""Configuration for the eww workspace widget."""

import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError
from .models import SlotRange

logger = logging.getLogger(__name__)

DEFAULT_MONITORS_FILE = Path("/tmp/monitors.json")

SWAYMSG = "swaymsg"
I3_MSG = "i3-msg"
SUPPORTED_COMMANDS = (SWAYMSG, I3_MSG)

# Environment overrides
COMMAND_ENV = "EWW_WORKSPACES_COMMAND"
LOG_LEVEL_ENV = "LOG_LEVEL"

BOX_FORMAT = (
    '(box :class "workspaces" :orientation "h" :halign "start" '
    ':spacing "6" :space-evenly "true" {buttons})'
)
BUTTON_FORMAT = (
    '(button :onclick "{command} \'workspace {number}\'" '
    ':visible {visible} :class "{state}" "{number}")'
)


class WidgetConfig(BaseModel):
    """Runtime settings: slot range, timeouts and markup templates.

    Timeouts are in seconds.
    """

    slot_range: SlotRange = Field(default_factory=SlotRange)

    detect_timeout: float = Field(default=0.3, gt=0)
    fetch_timeout: float = Field(default=0.5, gt=0)
    resolve_timeout: float = Field(default=5.0, gt=0)
    poll_interval: float = Field(default=0.2, gt=0)

    preferred_command: str = SWAYMSG
    fallback_command: str = I3_MSG
    forced_command: Optional[str] = None

    event_types: list[str] = Field(default_factory=lambda: ["window", "workspace"], min_length=1)

    box_format: str = BOX_FORMAT
    button_format: str = BUTTON_FORMAT

    @field_validator('forced_command')
    @classmethod
    def forced_command_must_be_supported(cls, v: Optional[str]) -> Optional[str]:
        """Only the two compatible CLIs understand the query protocol"""
        if v and v not in SUPPORTED_COMMANDS:
            raise ValueError(f"unsupported command {v!r}, expected one of {', '.join(SUPPORTED_COMMANDS)}")
        return v or None

    @classmethod
    def build(cls, **overrides: Any) -> "WidgetConfig":
        """Build a config from keyword overrides, raising ConfigError on bad values.

        None values are dropped so unset CLI flags fall back to defaults.
        """
        values = {key: value for key, value in overrides.items() if value is not None}
        if "forced_command" not in values and os.environ.get(COMMAND_ENV):
            values["forced_command"] = os.environ[COMMAND_ENV]

        try:
            config = cls.model_validate(values)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ()))
            raise ConfigError(f"Invalid configuration: {field}: {first.get('msg')}", field=field) from e

        logger.debug(
            f"Config: slots={config.slot_range.min_slot}..{config.slot_range.max_slot}, "
            f"resolve_timeout={config.resolve_timeout}s, forced_command={config.forced_command}"
        )
        return config
