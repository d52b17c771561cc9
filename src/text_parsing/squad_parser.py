"""Squad page parsing.

The squad page lists players under section headers (Forwards, Midfielders,
Defenders, Goalkeepers). Each player spans a few lines::

    7                      <- optional shirt number
    Lionel Messi           <- name
    ST 36 93 40 90         <- position, ..., ATT, DEF, OVR
    Value 85,5M            <- value

The rating that matters depends on the section: attack for forwards,
defense for defenders and goalkeepers, overall for midfielders.
"""

import logging
from typing import List, Optional

from src.league_manager.league_state import Player
from src.text_parsing.config import (
    DEFAULT_POSITION_GROUP,
    SQUAD_NUMBER_PATTERN,
    SQUAD_SECTION_HEADERS,
    SQUAD_STATS_PATTERN,
    SQUAD_VALUE_PATTERN,
)
from src.text_parsing.values import ValueParseError, parse_value

logger = logging.getLogger(__name__)


def section_group(line: str) -> Optional[str]:
    """Return the position group for a section header line, else None."""
    lowered = line.lower()
    for header, group in SQUAD_SECTION_HEADERS.items():
        if lowered.startswith(header):
            return group
    return None


def _rating_for_group(group: str, att: int, defense: int, ovr: int) -> int:
    if group == "Forward":
        return att
    if group in ("Defender", "Goalkeeper"):
        return defense
    return ovr


def _find_name(lines: List[str], i: int) -> Optional[str]:
    """Name is the line above the stats line, skipping a shirt number."""
    if i < 1:
        return None
    name = lines[i - 1]
    if SQUAD_NUMBER_PATTERN.match(name) and i > 1:
        name = lines[i - 2]
    if not name or section_group(name):
        return None
    return name


def parse_squad(text: str) -> List[Player]:
    """Parse a pasted squad page into players.

    Entries without a resolvable name or value line are dropped.
    """
    players: List[Player] = []
    lines = [line.strip() for line in (text or "").strip().splitlines()]
    group = DEFAULT_POSITION_GROUP

    for i, line in enumerate(lines):
        header_group = section_group(line)
        if header_group:
            group = header_group
            continue

        stats = SQUAD_STATS_PATTERN.match(line)
        if not stats:
            continue

        pos, att, defense, ovr = stats.groups()
        name = _find_name(lines, i)
        value_line = lines[i + 1] if i + 1 < len(lines) else ""
        value_match = SQUAD_VALUE_PATTERN.search(value_line)

        if not name or not value_match:
            logger.debug("Dropping squad entry at line %d (%r)", i, line)
            continue
        try:
            value = parse_value(value_match.group(1))
        except ValueParseError as e:
            logger.debug("Dropping squad entry %r: %s", name, e)
            continue

        players.append(Player(
            name=name,
            pos=pos,
            ovr=_rating_for_group(group, int(att), int(defense), int(ovr)),
            value=value,
        ))

    logger.info("Parsed squad: %d players", len(players))
    return players
