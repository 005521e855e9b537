"""Hook contracts the host calls into."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from worldchat.engine.participant import Participant
    from worldchat.hooks.message import ChatMessage


class ConfigListener(ABC):
    """Notified after the host (re)loads its configuration."""

    @abstractmethod
    def on_config_load(self, reload: bool) -> None: ...


class CommandHandler(ABC):
    """A chat command such as ``.chat <message>``."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Command keyword, without the leading dot."""
        ...

    @abstractmethod
    def handle(
        self,
        invoker: Participant | None,
        tail: str,
        reply: Callable[[str], None],
    ) -> bool:
        """Run the command.

        *invoker* is None when the command comes from the console.
        *reply* sends a system line back to whoever invoked the command.
        Returns True if the command was handled.
        """
        ...


class SessionLifecycleListener(ABC):
    """Notified when a participant enters or leaves the world."""

    @abstractmethod
    def on_login(self, participant: Participant | None) -> None: ...

    @abstractmethod
    def on_logout(self, participant: Participant | None) -> None: ...


class Ticker(ABC):
    """Driven once per world update with the elapsed milliseconds."""

    @abstractmethod
    def on_update(self, diff_ms: int) -> None: ...


class ChatListener(ABC):
    """Sees player chat before the host delivers it."""

    @abstractmethod
    def on_chat(self, sender: Participant | None, message: ChatMessage) -> bool:
        """Return True if the host should suppress its own delivery."""
        ...
