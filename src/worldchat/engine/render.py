"""Display and log rendering of world chat lines."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from worldchat.engine.participant import Affiliation, ClassTag

if TYPE_CHECKING:
    from worldchat.config.schema import BroadcastConfig
    from worldchat.engine.participant import Participant

RESET = "|r"
LABEL_COLOR = "|cffffd000"

AFFILIATION_COLORS: dict[Affiliation, str] = {
    Affiliation.ALLIANCE: "|cff3399FF",
    Affiliation.HORDE: "|cffff0000",
}

AFFILIATION_TAGS: dict[Affiliation, str] = {
    Affiliation.ALLIANCE: "[A]",
    Affiliation.HORDE: "[H]",
}

CLASS_COLORS: dict[ClassTag, str] = {
    ClassTag.WARRIOR: "|cffC79C6E",
    ClassTag.PALADIN: "|cffF58CBA",
    ClassTag.HUNTER: "|cffABD473",
    ClassTag.ROGUE: "|cffFFF569",
    ClassTag.PRIEST: "|cffFFFFFF",
    ClassTag.DEATH_KNIGHT: "|cffC41E3A",
    ClassTag.SHAMAN: "|cff0070DE",
    ClassTag.MAGE: "|cff69CCF0",
    ClassTag.WARLOCK: "|cff9482C9",
    ClassTag.DRUID: "|cffFF7D0A",
}
DEFAULT_CLASS_COLOR = "|cffffffff"

_MARKUP_RE = re.compile(r"\|c[0-9A-Fa-f]{8}|\|r")


@dataclass(frozen=True)
class RenderedMessage:
    """A broadcast rendered for players and for the server log."""

    display_line: str
    log_line: str


def render(sender: Participant, text: str, config: BroadcastConfig) -> RenderedMessage:
    """Render *text* from *sender* as a colored display line and a plain log line.

    Color codes typed by the sender are kept in the display line and
    removed from the log line.  Layout: ``[Label] [A] Name: text``.  The display line adds the label
    color, a faction-colored tag, the sender's class color on the name,
    and the faction color on the text.
    """
    body = text.strip()
    label = f"[{config.channel_label}]"
    tag = AFFILIATION_TAGS[sender.affiliation]
    faction_color = AFFILIATION_COLORS[sender.affiliation]
    class_color = CLASS_COLORS.get(sender.class_tag, DEFAULT_CLASS_COLOR)

    display_line = (
        f"{LABEL_COLOR}{label}{RESET} "
        f"{faction_color}{tag}{RESET} "
        f"{class_color}{sender.display_name}{RESET}: "
        f"{faction_color}{body}{RESET}"
    )
    log_line = f"{label} {tag} {strip_markup(sender.display_name)}: {strip_markup(body)}"
    return RenderedMessage(display_line=display_line, log_line=log_line)


def strip_markup(line: str) -> str:
    """Remove ``|cAARRGGBB`` color codes and ``|r`` resets from *line*."""
    return _MARKUP_RE.sub("", line)
