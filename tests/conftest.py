"""Shared fixtures for world chat tests."""

from __future__ import annotations

import pytest

from worldchat.config.schema import BroadcastConfig
from worldchat.config.store import ConfigStore
from worldchat.engine.directory import InMemoryDirectory, Mailbox
from worldchat.engine.participant import Affiliation, ClassTag, Participant


@pytest.fixture
def alliance_mage() -> Participant:
    return Participant(
        identity="a1",
        affiliation=Affiliation.ALLIANCE,
        display_name="Jaina",
        class_tag=ClassTag.MAGE,
    )


@pytest.fixture
def alliance_priest() -> Participant:
    return Participant(
        identity="a2",
        affiliation=Affiliation.ALLIANCE,
        display_name="Anduin",
        class_tag=ClassTag.PRIEST,
    )


@pytest.fixture
def horde_shaman() -> Participant:
    return Participant(
        identity="h1",
        affiliation=Affiliation.HORDE,
        display_name="Thrall",
        class_tag=ClassTag.SHAMAN,
    )


@pytest.fixture
def horde_warrior() -> Participant:
    return Participant(
        identity="h2",
        affiliation=Affiliation.HORDE,
        display_name="Garrosh",
        class_tag=ClassTag.WARRIOR,
    )


@pytest.fixture
def directory(
    alliance_mage: Participant,
    alliance_priest: Participant,
    horde_shaman: Participant,
    horde_warrior: Participant,
) -> InMemoryDirectory:
    """Two alliance and two horde participants, all in world."""
    return InMemoryDirectory([alliance_mage, alliance_priest, horde_shaman, horde_warrior])


@pytest.fixture
def mailbox() -> Mailbox:
    return Mailbox()


@pytest.fixture
def store() -> ConfigStore:
    """A store holding the default configuration."""
    return ConfigStore(BroadcastConfig())
