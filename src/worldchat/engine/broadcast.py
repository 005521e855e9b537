"""Broadcast engine: validate, render, log, and fan out a world chat line."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from worldchat.engine.events import BroadcastEvent, emit
from worldchat.engine.policy import should_deliver
from worldchat.engine.render import render
from worldchat.errors import ErrorKind

if TYPE_CHECKING:
    from worldchat.config.schema import BroadcastConfig
    from worldchat.config.store import ConfigStore
    from worldchat.engine.directory import DeliverySink, ParticipantDirectory
    from worldchat.engine.participant import Participant

logger = logging.getLogger(__name__)


class BroadcastEngine:
    """Fans a world chat message out to every eligible participant.

    Parameters
    ----------
    config_store:
        Source of the current :class:`BroadcastConfig` snapshot.
    directory:
        Registry of connected participants.
    sink:
        Delivers a rendered line to one participant's session.
    event_listeners:
        Callables invoked with a :class:`BroadcastEvent` after each send.
    """

    def __init__(
        self,
        config_store: ConfigStore,
        directory: ParticipantDirectory,
        sink: DeliverySink,
        event_listeners: list[Any] | None = None,
    ) -> None:
        self.config_store = config_store
        self.directory = directory
        self.sink = sink
        self.event_listeners: list[Any] = [] if event_listeners is None else event_listeners

    def check(self, sender: Participant | None, raw_text: str | None) -> ErrorKind | None:
        """Return why ``send`` would do nothing, or None if it would broadcast."""
        return _rejection(self.config_store.snapshot(), sender, raw_text)

    def send(self, sender: Participant | None, raw_text: str | None) -> bool:
        """Broadcast *raw_text* from *sender*.

        Returns ``True`` if the message was consumed (rendered, logged and
        fanned out), ``False`` if it was ignored.  Never raises.
        """
        config = self.config_store.snapshot()
        reason = _rejection(config, sender, raw_text)
        if reason is not None:
            logger.debug("Broadcast ignored: %s", reason.value)
            return False

        message = render(sender, raw_text, config)
        logger.info("%s", message.log_line)

        delivered: list[str] = []
        unreachable: list[str] = []
        for recipient in self.directory.snapshot():
            if not recipient.in_world:
                continue
            if not should_deliver(sender, recipient, config):
                continue
            try:
                self.sink.deliver(recipient, message.display_line)
            except Exception as exc:
                logger.debug("Skipping recipient %s: %s", recipient.identity, exc)
                unreachable.append(recipient.identity)
                continue
            delivered.append(recipient.identity)

        emit(
            self.event_listeners,
            BroadcastEvent(
                sender_id=sender.identity,
                log_line=message.log_line,
                recipients=tuple(delivered),
                unreachable=tuple(unreachable),
            ),
        )
        return True


def _rejection(
    config: BroadcastConfig,
    sender: Participant | None,
    raw_text: str | None,
) -> ErrorKind | None:
    if not config.enabled:
        return ErrorKind.DISABLED
    if sender is None or not sender.in_world:
        return ErrorKind.NO_SENDER
    if not raw_text or not raw_text.strip():
        return ErrorKind.EMPTY_MESSAGE
    return None
