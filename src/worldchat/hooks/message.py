"""Inbound chat message as reported by the host's chat system."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Language(Enum):
    """Chat language tag attached to every inbound message."""

    UNIVERSAL = "universal"
    COMMON = "common"
    ORCISH = "orcish"
    ADDON = "addon"  # addon data traffic, never player speech


@dataclass(frozen=True)
class ChatMessage:
    """An immutable chat line observed before the host delivers it."""

    content: str
    channel: str | None = None  # None for say/yell/whisper
    language: Language = Language.UNIVERSAL
