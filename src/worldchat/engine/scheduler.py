"""Delayed one-shot login announcements."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from worldchat.engine.events import AnnouncementFiredEvent, emit

if TYPE_CHECKING:
    from worldchat.config.store import ConfigStore
    from worldchat.engine.directory import DeliverySink, ParticipantDirectory

logger = logging.getLogger(__name__)


class AnnounceScheduler:
    """Counts down a reminder per participant and sends it once when due.

    Each participant identity has at most one pending entry.  Arming an
    identity that is already pending resets its countdown.  The scheduler
    only accepts entries between :meth:`start` and :meth:`stop`.

    ``arm``, ``cancel`` and ``advance`` are serialized by an internal
    lock, so join/leave callbacks may run on a different thread than
    the tick driver.
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
        self._lock = threading.Lock()
        self._remaining_ms: dict[str, int] = {}
        self._running = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        with self._lock:
            self._running = True
        logger.debug("Announcement scheduler started")

    def stop(self) -> None:
        """Stop accepting entries and drop everything still pending."""
        with self._lock:
            self._running = False
            dropped = len(self._remaining_ms)
            self._remaining_ms.clear()
        logger.debug("Announcement scheduler stopped, dropped %d pending", dropped)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        with self._lock:
            return len(self._remaining_ms)

    def __contains__(self, identity: object) -> bool:
        with self._lock:
            return identity in self._remaining_ms

    def pending(self, identity: str) -> int | None:
        """Milliseconds left before *identity* is announced to, or None."""
        with self._lock:
            return self._remaining_ms.get(identity)

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    def arm(self, identity: str) -> None:
        """Schedule (or reschedule) the announcement for *identity*."""
        config = self.config_store.snapshot()
        if not config.announce_on_join:
            return
        with self._lock:
            if not self._running:
                logger.debug("Scheduler not running, ignoring arm for %s", identity)
                return
            self._remaining_ms[identity] = config.announce_delay_ms

    def cancel(self, identity: str) -> None:
        """Drop the pending announcement for *identity*, if any."""
        with self._lock:
            self._remaining_ms.pop(identity, None)

    def advance(self, elapsed_ms: int) -> list[str]:
        """Move every countdown forward by *elapsed_ms*.

        Entries that come due are removed and their announcement is sent
        if the participant is still in world.  A negative *elapsed_ms* counts
        as zero.  Returns the identities
        that came due, in no particular order.
        """
        if elapsed_ms < 0:
            logger.debug("Negative tick %d ms treated as 0", elapsed_ms)
            elapsed_ms = 0

        with self._lock:
            if not self._remaining_ms:
                return []
            due: list[str] = []
            for identity in list(self._remaining_ms):
                remaining = self._remaining_ms[identity]
                if remaining <= elapsed_ms:
                    del self._remaining_ms[identity]
                    due.append(identity)
                else:
                    self._remaining_ms[identity] = remaining - elapsed_ms

        if due:
            text = self.config_store.snapshot().announce_text
            for identity in due:
                self._fire(identity, text)
        return due

    def _fire(self, identity: str, text: str) -> None:
        participant = self.directory.find(identity)
        delivered = False
        if participant is not None and participant.in_world:
            try:
                self.sink.deliver(participant, text)
                delivered = True
            except Exception as exc:
                logger.debug("Announcement to %s not delivered: %s", identity, exc)
        else:
            logger.debug("Announcement for %s expired, participant gone", identity)
        emit(
            self.event_listeners,
            AnnouncementFiredEvent(participant_id=identity, delivered=delivered),
        )
