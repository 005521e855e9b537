"""Failure kinds for broadcast operations.

None of these ever escape the core: they describe why an operation
turned into a no-op.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Reasons a broadcast or delivery did not happen."""

    DISABLED = "disabled"
    NO_SENDER = "no_sender"
    EMPTY_MESSAGE = "empty_message"
    RECIPIENT_UNREACHABLE = "recipient_unreachable"


class RecipientUnreachable(Exception):
    """Raised by a delivery sink when a recipient cannot be reached."""

    kind = ErrorKind.RECIPIENT_UNREACHABLE

    def __init__(self, identity: str) -> None:
        super().__init__(f"Recipient {identity!r} is unreachable")
        self.identity = identity
