"""Manager-level views over simulation results.

Ranking, per-manager drill-down and, for friendly battle leagues, the
head-to-head comparison of "Team Blue <n>" against "Team Red <n>".
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from src.cash_flow.models import ManagerSummary
from src.league_manager.config import (
    BATTLE_SIDES,
    BATTLE_TEAM_PATTERN,
    RANKING_SORT_KEYS,
    TOP_SALES_IN_DETAILS,
)
from src.league_manager.league_state import Transfer

logger = logging.getLogger(__name__)


@dataclass
class ManagerDetails:
    manager: ManagerSummary
    biggest_purchase: Optional[Transfer] = None
    best_sales: List[Transfer] = field(default_factory=list)
    worst_sales: List[Transfer] = field(default_factory=list)
    immediate_sales: int = 0  # Sales of players with no base value
    immediate_sales_value: float = 0.0


@dataclass
class Rivalry:
    """Head-to-head summary of two battle-league opponents."""

    pair_number: int
    blue: ManagerSummary
    red: ManagerSummary
    blue_better_buyer: bool
    blue_better_seller: bool
    best_sale: Optional[Transfer]
    worst_purchase: Optional[Transfer]
    blue_assets_share: float
    blue_value_share: float
    blue_cash_share: float


def rank_managers(
    manager_list: List[ManagerSummary],
    sort_key: str = "totalAssets",
) -> List[ManagerSummary]:
    """Return managers sorted descending by *sort_key*.

    Raises:
        ValueError: if *sort_key* is not a supported ranking.
    """
    if sort_key not in RANKING_SORT_KEYS:
        raise ValueError(
            f"Invalid sort_key: {sort_key!r}. "
            f"Must be one of {sorted(RANKING_SORT_KEYS)}."
        )
    attr = RANKING_SORT_KEYS[sort_key]
    return sorted(manager_list, key=lambda m: getattr(m, attr), reverse=True)


def get_manager_details(
    manager_name: str,
    manager_list: List[ManagerSummary],
) -> Optional[ManagerDetails]:
    """Drill-down for one manager, or None if the name is unknown."""
    manager = next((m for m in manager_list if m.name == manager_name), None)
    if manager is None:
        logger.debug("No manager named %r", manager_name)
        return None

    purchases = sorted(
        (t for t in manager.transfers if t.is_purchase),
        key=lambda t: t.final_price,
        reverse=True,
    )
    sales = sorted(
        (t for t in manager.transfers if t.is_sale),
        key=lambda t: t.premium_percent,
        reverse=True,
    )
    immediate = [t for t in manager.transfers if t.is_sale and t.base_value == 0]

    return ManagerDetails(
        manager=manager,
        biggest_purchase=purchases[0] if purchases else None,
        best_sales=sales[:TOP_SALES_IN_DETAILS],
        worst_sales=sorted(sales, key=lambda t: t.premium_percent)[:TOP_SALES_IN_DETAILS],
        immediate_sales=len(immediate),
        immediate_sales_value=sum(t.final_price for t in immediate),
    )


def _share(blue: float, red: float) -> float:
    total = blue + red
    return blue / total * 100 if total > 0 else 50.0


def _rivalry(number: int, blue: ManagerSummary, red: ManagerSummary) -> Rivalry:
    both = blue.transfers + red.transfers
    sales = [t for t in both if t.is_sale]
    purchases = [t for t in both if t.is_purchase]
    return Rivalry(
        pair_number=number,
        blue=blue,
        red=red,
        blue_better_buyer=blue.avg_premium < red.avg_premium,
        blue_better_seller=blue.avg_profit > red.avg_profit,
        best_sale=max(sales, key=lambda t: t.premium_percent, default=None),
        worst_purchase=max(purchases, key=lambda t: t.premium_percent, default=None),
        blue_assets_share=_share(blue.total_assets, red.total_assets),
        blue_value_share=_share(blue.current_value, red.current_value),
        blue_cash_share=_share(blue.cash, red.cash),
    )


def build_rivalries(manager_list: List[ManagerSummary]) -> List[Rivalry]:
    """Pair Blue and Red managers with the same team number.

    Numbers missing a side are skipped.
    """
    sides: Dict[int, Dict[str, ManagerSummary]] = {}
    for m in manager_list:
        match = BATTLE_TEAM_PATTERN.match(m.team_name)
        if match:
            sides.setdefault(int(match.group(2)), {})[match.group(1)] = m

    blue_side, red_side = BATTLE_SIDES
    rivalries = []
    for number in sorted(sides):
        pair = sides[number]
        if blue_side in pair and red_side in pair:
            rivalries.append(_rivalry(number, pair[blue_side], pair[red_side]))
        else:
            logger.debug("Battle pair %d has only one side", number)
    return rivalries
