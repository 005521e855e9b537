"""Pydantic models for world chat configuration."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)

logger = logging.getLogger(__name__)

DEFAULT_ANNOUNCE_TEXT = (
    '[Global Chat] Type "/join Global" to talk to all players on the server '
    "regardless of faction."
)


class BroadcastConfig(BaseModel):
    """Immutable snapshot of the world chat options.

    Field aliases match the option names used in server config files
    (``Enable``, ``ChannelName``, ``CrossFactions``, ``Announce``).  An
    invalid value for any option falls back to that option's default
    instead of rejecting the whole snapshot.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    enabled: bool = Field(default=True, alias="Enable")
    channel_label: str = Field(default="Global", alias="ChannelName")
    cross_affiliation: bool = Field(default=True, alias="CrossFactions")
    announce_on_join: bool = Field(default=True, alias="Announce")
    announce_delay_ms: int = Field(default=10000, ge=0, alias="AnnounceDelay")
    announce_text: str = Field(default=DEFAULT_ANNOUNCE_TEXT, alias="AnnounceText")

    @field_validator("channel_label", "announce_text", mode="before")
    @classmethod
    def _scalar_to_str(cls, value: Any) -> Any:
        # Option files may hold a bare number, e.g. ChannelName: 2024
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("channel_label", "announce_text")
    @classmethod
    def _non_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("*", mode="wrap")
    @classmethod
    def _fallback_to_default(
        cls,
        value: Any,
        handler: ValidatorFunctionWrapHandler,
        info: ValidationInfo,
    ) -> Any:
        try:
            return handler(value)
        except ValidationError as exc:
            default = cls.model_fields[info.field_name].default
            logger.warning(
                "Invalid value %r for %s (%s) -- using default %r",
                value,
                info.field_name,
                exc.errors()[0]["msg"],
                default,
            )
            return default

    def matches_channel(self, channel_name: str | None) -> bool:
        """Return True if *channel_name* is the world chat channel (case-insensitive)."""
        if not channel_name:
            return False
        return channel_name.upper() == self.channel_label.upper()
