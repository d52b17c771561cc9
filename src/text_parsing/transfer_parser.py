"""Transfer block parsing.

Pasted transfer history comes in blocks of lines, each block closed by a
details line (``ST 12 10M 15M``: position, round, base value, final price).

* A 4-line block is a purchase from the transfer list::

      player / team / manager / details

* A 5-line block names both sides of a deal and is ambiguous::

      player / A / B / C / details

  Either ``(A, B)`` is the (team, manager) pair of the league member and the
  deal is a **sale** to an outside club ``C``, or ``(B, C)`` is the pair and
  the deal is a **purchase** from an outside club ``A``.

The 5-line case is resolved, first rule that applies wins:

1. Known league teams (when supplied): ``A`` known -> sale,
   ``B`` known -> purchase, neither -> dropped.
2. Team -> manager associations confirmed earlier in the same batch.
3. Pair frequency across the batch: the league member's own pair keeps
   recurring while counterparties vary.
4. Length tie-break: manager names tend to be shorter than team names.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional

from src.league_manager.league_state import ManagerAssignment, Transfer, utc_now
from src.text_parsing.config import DETAILS_PATTERN
from src.text_parsing.values import ValueParseError, parse_value

logger = logging.getLogger(__name__)

LIST_PURCHASE_BLOCK_SIZE = 4
DEAL_BLOCK_SIZE = 5


@dataclass
class TransferParseResult:
    transfers: List[Transfer] = field(default_factory=list)
    managers_by_team: ManagerAssignment = field(default_factory=dict)


@dataclass
class _Decision:
    transaction_type: str
    team: str
    manager: str
    rule: str


def split_blocks(text: str) -> List[List[str]]:
    """Group non-empty lines into blocks, each ending at a details line.

    Lines after the last details line form no block and are discarded.
    """
    blocks: List[List[str]] = []
    current: List[str] = []
    lines = [line.strip() for line in (text or "").strip().splitlines()]

    for line in filter(None, lines):
        current.append(line)
        if DETAILS_PATTERN.match(line):
            blocks.append(current)
            current = []

    if current:
        logger.debug("Discarding %d trailing line(s) without details", len(current))
    return blocks


def _count_pairs(blocks: Iterable[List[str]]) -> tuple:
    """Count how often each candidate (team, manager) pair recurs."""
    sale_pairs: Counter = Counter()
    purchase_pairs: Counter = Counter()
    for block in blocks:
        if len(block) == DEAL_BLOCK_SIZE:
            sale_pairs[(block[1], block[2])] += 1
            purchase_pairs[(block[2], block[3])] += 1
    return sale_pairs, purchase_pairs


def _sale(block: List[str], rule: str) -> _Decision:
    return _Decision("sale", block[1], block[2], rule)


def _purchase(block: List[str], rule: str) -> _Decision:
    return _Decision("purchase", block[2], block[3], rule)


def _resolve_deal_block(
    block: List[str],
    league_teams: Optional[set],
    managers_by_team: ManagerAssignment,
    sale_pairs: Counter,
    purchase_pairs: Counter,
) -> Optional[_Decision]:
    """Decide sale vs purchase for a 5-line block, or None to drop it."""
    first, second, third = block[1], block[2], block[3]

    if league_teams:
        if first in league_teams:
            return _sale(block, "known team")
        if second in league_teams:
            return _purchase(block, "known team")
        return None

    if managers_by_team.get(first) == second:
        return _sale(block, "known manager")
    if managers_by_team.get(second) == third:
        return _purchase(block, "known manager")

    sale_freq = sale_pairs[(first, second)]
    purchase_freq = purchase_pairs[(second, third)]
    if sale_freq > purchase_freq:
        return _sale(block, "pair frequency")
    if purchase_freq > sale_freq:
        return _purchase(block, "pair frequency")

    # Equal frequencies (first sighting included): shorter line is the manager
    if len(second) < len(third):
        return _sale(block, "name length")
    return _purchase(block, "name length")


def parse_transfers(
    text: str,
    league_teams: Optional[Iterable[str]] = None,
    created_at: Optional[datetime] = None,
) -> TransferParseResult:
    """Parse pasted transfer text into transfers and manager associations.

    Args:
        text: Raw pasted transfer history.
        league_teams: Names of the league's teams. When given, 5-line blocks
            are resolved only against these names.
        created_at: Timestamp stamped on every transfer. Defaults to now.

    Returns:
        :class:`TransferParseResult` with the confirmed transfers (in block
        order) and every team -> manager pair they confirmed. Blocks that
        cannot be resolved are left out.
    """
    known_teams = set(league_teams) if league_teams else None
    stamp = created_at or utc_now()
    blocks = split_blocks(text)
    sale_pairs, purchase_pairs = _count_pairs(blocks)

    result = TransferParseResult()
    for block in blocks:
        details = DETAILS_PATTERN.match(block[-1])
        position, round_str, base_str, final_str = details.groups()
        try:
            base_value = parse_value(base_str)
            final_price = parse_value(final_str)
        except ValueParseError as e:
            logger.debug("Dropping block with unreadable amount (%s): %s", e, block)
            continue

        if len(block) == LIST_PURCHASE_BLOCK_SIZE:
            decision = _Decision("purchase", block[1], block[2], "transfer list")
        elif len(block) == DEAL_BLOCK_SIZE:
            decision = _resolve_deal_block(
                block, known_teams, result.managers_by_team,
                sale_pairs, purchase_pairs,
            )
        else:
            logger.debug("Dropping %d-line block: %s", len(block), block)
            continue

        if decision is None:
            logger.debug("No known team in block, dropping: %s", block)
            continue

        logger.debug(
            "%s of %s by %s (%s) via %s",
            decision.transaction_type, block[0], decision.manager,
            decision.team, decision.rule,
        )
        result.transfers.append(Transfer(
            player_name=block[0],
            transaction_type=decision.transaction_type,
            manager_team=decision.team,
            manager_name=decision.manager,
            position=position,
            round=int(round_str) if round_str else 0,
            base_value=base_value,
            final_price=final_price,
            created_at=stamp,
        ))
        result.managers_by_team[decision.team] = decision.manager

    logger.info(
        "Parsed %d transfer(s) from %d block(s); %d manager association(s)",
        len(result.transfers), len(blocks), len(result.managers_by_team),
    )
    return result
