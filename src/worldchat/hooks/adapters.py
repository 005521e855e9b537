"""Hook implementations that route host events into the engine."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from worldchat.errors import ErrorKind
from worldchat.hooks.contracts import (
    ChatListener,
    CommandHandler,
    ConfigListener,
    SessionLifecycleListener,
    Ticker,
)
from worldchat.hooks.message import Language

if TYPE_CHECKING:
    from worldchat.config.store import ConfigStore
    from worldchat.engine.broadcast import BroadcastEngine
    from worldchat.engine.participant import Participant
    from worldchat.engine.scheduler import AnnounceScheduler
    from worldchat.hooks.message import ChatMessage

logger = logging.getLogger(__name__)

USAGE = "Usage: .chat <message>"


class ConfigReloader(ConfigListener):
    """Re-reads the config file into the store on every host config load."""

    def __init__(self, store: ConfigStore) -> None:
        self.store = store

    def on_config_load(self, reload: bool) -> None:
        logger.debug("Config %s requested", "reload" if reload else "load")
        self.store.reload()


class ChatCommand(CommandHandler):
    """``.chat <message>`` -- broadcast to the world channel."""

    def __init__(self, engine: BroadcastEngine) -> None:
        self.engine = engine

    @property
    def name(self) -> str:
        return "chat"

    def handle(
        self,
        invoker: Participant | None,
        tail: str,
        reply: Callable[[str], None],
    ) -> bool:
        reason = self.engine.check(invoker, tail)
        if reason is ErrorKind.EMPTY_MESSAGE:
            reply(USAGE)
            return True
        if reason is not None:
            return True
        self.engine.send(invoker, tail)
        return True


class ChannelObserver(ChatListener):
    """Relays messages typed into the world chat channel."""

    def __init__(self, engine: BroadcastEngine, store: ConfigStore) -> None:
        self.engine = engine
        self.store = store

    def on_chat(self, sender: Participant | None, message: ChatMessage) -> bool:
        if sender is None or message.channel is None:
            return False
        if message.language is Language.ADDON:
            return False
        if not self.store.snapshot().matches_channel(message.channel):
            return False
        return self.engine.send(sender, message.content)


class SessionListener(SessionLifecycleListener):
    """Arms the login announcement on login and cancels it on logout."""

    def __init__(self, scheduler: AnnounceScheduler) -> None:
        self.scheduler = scheduler

    def on_login(self, participant: Participant | None) -> None:
        if participant is None:
            return
        self.scheduler.arm(participant.identity)

    def on_logout(self, participant: Participant | None) -> None:
        if participant is None:
            return
        self.scheduler.cancel(participant.identity)


class SchedulerTicker(Ticker):
    """Advances the announcement scheduler on every world update."""

    def __init__(self, scheduler: AnnounceScheduler) -> None:
        self.scheduler = scheduler

    def on_update(self, diff_ms: int) -> None:
        self.scheduler.advance(diff_ms)
