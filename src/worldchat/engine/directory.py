"""Participant directory and delivery sink contracts."""

from __future__ import annotations

import threading
from collections import defaultdict
from dataclasses import replace
from typing import Protocol

from worldchat.engine.participant import Participant
from worldchat.errors import RecipientUnreachable


class ParticipantDirectory(Protocol):
    """Read-only access to the host's registry of connected participants."""

    def snapshot(self) -> tuple[Participant, ...]:
        """Return every connected participant at this instant."""
        ...

    def find(self, identity: str) -> Participant | None:
        """Return the participant with *identity*, or None if not connected."""
        ...


class DeliverySink(Protocol):
    """Sends a system line to one participant's session."""

    def deliver(self, recipient: Participant, line: str) -> None:
        """Deliver *line*; may raise :class:`RecipientUnreachable`."""
        ...


class InMemoryDirectory:
    """A directory backed by a dict, for tests and local simulation."""

    def __init__(self, participants: list[Participant] | None = None) -> None:
        self._lock = threading.Lock()
        self._participants: dict[str, Participant] = {}
        for p in participants or []:
            self._participants[p.identity] = p

    def __len__(self) -> int:
        return len(self._participants)

    def add(self, participant: Participant) -> None:
        with self._lock:
            self._participants[participant.identity] = participant

    def remove(self, identity: str) -> Participant | None:
        with self._lock:
            return self._participants.pop(identity, None)

    def set_in_world(self, identity: str, in_world: bool) -> None:
        """Flip the session presence flag of a registered participant."""
        with self._lock:
            current = self._participants.get(identity)
            if current is not None:
                self._participants[identity] = replace(current, in_world=in_world)

    def snapshot(self) -> tuple[Participant, ...]:
        with self._lock:
            return tuple(self._participants.values())

    def find(self, identity: str) -> Participant | None:
        with self._lock:
            return self._participants.get(identity)


class Mailbox:
    """Delivery sink that records every line per recipient identity.

    Identities listed in *unreachable* raise :class:`RecipientUnreachable`
    instead of receiving, which mimics a session dropping mid-broadcast.
    """

    def __init__(self, unreachable: set[str] | None = None) -> None:
        self.inbox: dict[str, list[str]] = defaultdict(list)
        self.unreachable: set[str] = set(unreachable or ())

    def deliver(self, recipient: Participant, line: str) -> None:
        if recipient.identity in self.unreachable:
            raise RecipientUnreachable(recipient.identity)
        self.inbox[recipient.identity].append(line)

    def received(self, identity: str) -> list[str]:
        """Lines delivered to *identity* so far."""
        return list(self.inbox.get(identity, []))

    @property
    def total(self) -> int:
        """Total number of lines delivered."""
        return sum(len(lines) for lines in self.inbox.values())
