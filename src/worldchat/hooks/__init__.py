"""Host-facing hooks: contracts and the adapters that implement them."""

from worldchat.hooks.adapters import (
    USAGE,
    ChannelObserver,
    ChatCommand,
    ConfigReloader,
    SchedulerTicker,
    SessionListener,
)
from worldchat.hooks.contracts import (
    ChatListener,
    CommandHandler,
    ConfigListener,
    SessionLifecycleListener,
    Ticker,
)
from worldchat.hooks.message import ChatMessage, Language

__all__ = [
    "USAGE",
    "ChannelObserver",
    "ChatCommand",
    "ChatListener",
    "ChatMessage",
    "CommandHandler",
    "ConfigListener",
    "ConfigReloader",
    "Language",
    "SchedulerTicker",
    "SessionLifecycleListener",
    "SessionListener",
    "Ticker",
]
