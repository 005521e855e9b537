"""Events emitted by the engine for observers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineEvent:
    """Base engine event."""


@dataclass(frozen=True)
class BroadcastEvent(EngineEvent):
    """A world chat message was fanned out."""

    sender_id: str = ""
    log_line: str = ""
    recipients: tuple[str, ...] = ()
    unreachable: tuple[str, ...] = ()


@dataclass(frozen=True)
class AnnouncementFiredEvent(EngineEvent):
    """A delayed login announcement came due."""

    participant_id: str = ""
    delivered: bool = False


def emit(listeners: list[Any], event: EngineEvent) -> None:
    """Dispatch *event* to every listener, logging listener failures."""
    for listener in listeners:
        try:
            listener(event)
        except Exception:
            logger.exception("Event listener raised an exception")
