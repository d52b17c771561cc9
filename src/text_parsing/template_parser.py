"""League template parsing.

A league template is the pasted team table of a new league, one team per
line, ending in ``<round> <team value> <income per round>``::

    FC Alpha FC Alpha 1 50,0M 10,0M
    Real Beta Bob 1 42M 8M

When the name column is repeated ("FC Alpha FC Alpha") the team has no
separate alias; otherwise the last word before the numbers is the alias.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from src.league_manager.config import BATTLE_TEAM_PATTERN
from src.league_manager.league_state import Team
from src.text_parsing.config import (
    TEMPLATE_DUPE_PATTERN,
    TEMPLATE_LINE_PATTERN,
)
from src.text_parsing.values import ValueParseError, parse_value

logger = logging.getLogger(__name__)


@dataclass
class TemplateParseResult:
    teams: List[Team] = field(default_factory=list)
    type: str = "standard"  # "battle" when any team is "Team Blue/Red <n>"


def split_name_part(name_part: str) -> tuple:
    """Split the text before the numbers into ``(name, alias)``."""
    words = name_part.split()
    half = len(words) // 2
    if len(words) % 2 == 0 and words[:half] == words[half:]:
        name = " ".join(words[:half])
        return name, name
    if len(words) >= 2:
        return " ".join(words[:-1]), words[-1]
    return name_part, name_part


def parse_template_line(line: str) -> Optional[Team]:
    """Parse one template line, or return None when it is not a team row."""
    line = line.strip()
    m = TEMPLATE_DUPE_PATTERN.match(line)
    if m:
        name = m.group(1).strip()
        alias = name
    else:
        m = TEMPLATE_LINE_PATTERN.match(line)
        if not m:
            return None
        name, alias = split_name_part(m.group(1).strip())

    try:
        initial_value = parse_value(m.group(2))
        income = parse_value(m.group(3))
    except ValueParseError as e:
        logger.debug("Unreadable amount in template line %r: %s", line, e)
        return None

    return Team(
        name=name,
        alias=alias,
        initial_value=initial_value,
        fixed_income_per_round=income,
        initial_cash=0.0,
    )


def parse_template(text: str) -> TemplateParseResult:
    """Parse a pasted league template into teams and a league type."""
    result = TemplateParseResult()
    lines = [line.strip() for line in (text or "").strip().splitlines()]

    for line in filter(None, lines):
        team = parse_template_line(line)
        if team is None:
            logger.debug("Skipping template line: %r", line)
            continue
        result.teams.append(team)
        if BATTLE_TEAM_PATTERN.match(team.name):
            result.type = "battle"

    logger.info("Parsed league template: %d teams (%s)", len(result.teams), result.type)
    return result
