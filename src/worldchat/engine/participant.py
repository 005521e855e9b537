"""Participant records as observed from the host's player registry."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Affiliation(Enum):
    """The two factions a participant can belong to."""

    ALLIANCE = "alliance"
    HORDE = "horde"


class ClassTag(Enum):
    """Character class, used only to pick a name color."""

    WARRIOR = "warrior"
    PALADIN = "paladin"
    HUNTER = "hunter"
    ROGUE = "rogue"
    PRIEST = "priest"
    DEATH_KNIGHT = "death_knight"
    SHAMAN = "shaman"
    MAGE = "mage"
    WARLOCK = "warlock"
    DRUID = "druid"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Participant:
    """Immutable view of one connected participant.

    The host owns the underlying player object; the core only ever sees
    this snapshot for the duration of a single operation.
    """

    identity: str
    affiliation: Affiliation
    display_name: str
    class_tag: ClassTag = ClassTag.UNKNOWN
    in_world: bool = True
