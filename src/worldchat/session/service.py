"""Composition of the world chat engine and its host hooks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from worldchat.config.store import ConfigStore
from worldchat.engine.broadcast import BroadcastEngine
from worldchat.engine.scheduler import AnnounceScheduler
from worldchat.hooks.adapters import (
    ChannelObserver,
    ChatCommand,
    ConfigReloader,
    SchedulerTicker,
    SessionListener,
)
from worldchat.session.ticker import TickLoop

if TYPE_CHECKING:
    from worldchat.engine.directory import DeliverySink, ParticipantDirectory

logger = logging.getLogger(__name__)


class WorldChatService:
    """Owns the engine, the scheduler and the hooks that feed them.

    Parameters
    ----------
    directory:
        The host's registry of connected participants.
    sink:
        Delivers system lines to participant sessions.
    config_path:
        YAML file re-read on every config load.  None means defaults.
    event_listeners:
        Callables receiving every engine event.
    tick_interval:
        Seconds between scheduler updates when the service drives its own
        ticks (see :meth:`start_async`).
    """

    def __init__(
        self,
        directory: ParticipantDirectory,
        sink: DeliverySink,
        config_path: str | None = None,
        event_listeners: list[Any] | None = None,
        tick_interval: float = 0.1,
    ) -> None:
        self.store = ConfigStore(path=config_path)
        listeners = [] if event_listeners is None else event_listeners
        self.engine = BroadcastEngine(self.store, directory, sink, listeners)
        self.scheduler = AnnounceScheduler(self.store, directory, sink, listeners)

        self.config_listener = ConfigReloader(self.store)
        self.command = ChatCommand(self.engine)
        self.channel_observer = ChannelObserver(self.engine, self.store)
        self.session_listener = SessionListener(self.scheduler)
        self.ticker = SchedulerTicker(self.scheduler)
        self.tick_loop = TickLoop(self.ticker, interval=tick_interval)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Load configuration and start accepting announcements."""
        self.config_listener.on_config_load(reload=False)
        self.scheduler.start()
        logger.info("World chat service started")

    def stop(self) -> None:
        """Drop pending announcements and stop the scheduler."""
        self.scheduler.stop()
        logger.info("World chat service stopped")

    async def start_async(self) -> None:
        """Start the service and tick the scheduler on the running event loop.

        Use this when no host world loop calls :attr:`ticker`.
        """
        self.start()
        self.tick_loop.start()

    async def stop_async(self) -> None:
        """Stop ticking, then stop the service."""
        await self.tick_loop.stop()
        self.stop()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def hooks(self) -> list[Any]:
        """Every hook object the host needs to call into."""
        return [
            self.config_listener,
            self.command,
            self.session_listener,
            self.channel_observer,
            self.ticker,
        ]

    def register(self, add_hook: Callable[[Any], None]) -> None:
        """Hand each hook to the host's registration function."""
        for hook in self.hooks():
            add_hook(hook)
        logger.debug("Registered %d world chat hooks", len(self.hooks()))
