"""Delivery filter between a sender and a potential recipient."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from worldchat.config.schema import BroadcastConfig
    from worldchat.engine.participant import Participant


def should_deliver(
    sender: Participant | None,
    recipient: Participant | None,
    config: BroadcastConfig,
) -> bool:
    """Return True if a broadcast from *sender* may reach *recipient*.

    Cross-faction mode opens the channel to everyone; otherwise only
    participants of the sender's own faction are reached.
    """
    if sender is None or recipient is None:
        return False
    if config.cross_affiliation:
        return True
    return sender.affiliation == recipient.affiliation
