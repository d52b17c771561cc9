"""Sale price recommendations for a manager's own squad.

Each squad player is priced against comparable historical sales: same
position group, base value within 0.8x-1.5x of the player's value. The
median and upper-quartile price multipliers of that set give a cautious
and an optimal asking price.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from src.league_manager.config import (
    CAUTIOUS_CAP_MULTIPLIER,
    CAUTIOUS_PERCENTILE,
    COMPARABLE_VALUE_RANGE,
    DEFAULT_POSITION_GROUP,
    DEFAULT_TIER,
    FALLBACK_CAUTIOUS_MULTIPLIER,
    FALLBACK_OPTIMAL_MULTIPLIER,
    OPTIMAL_CAP_MULTIPLIER,
    OPTIMAL_PERCENTILE,
    POSITION_GROUPS,
    TIER_THRESHOLDS,
    TREND_MIN_RECENT_SALES,
    TREND_THRESHOLD,
    TREND_WINDOW_DAYS,
)
from src.league_manager.league_state import Player, Transfer, utc_now

logger = logging.getLogger(__name__)


@dataclass
class RecommendedPlayer:
    name: str
    pos: str
    ovr: int
    value: float
    player_tier: str
    liquidity: int  # Number of comparable sales
    trend: str  # "rising", "falling" or "stable"
    cautious_price: float
    optimal_price: float

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "pos": self.pos,
            "ovr": self.ovr,
            "value": self.value,
            "playerTier": self.player_tier,
            "liquidity": self.liquidity,
            "trend": self.trend,
            "cautiousPrice": self.cautious_price,
            "optimalPrice": self.optimal_price,
        }


def position_group(pos: str) -> Optional[str]:
    """Group of a position code, or None when the code is unknown."""
    return POSITION_GROUPS.get((pos or "").upper())


def player_tier(ovr: int) -> str:
    for threshold, tier in TIER_THRESHOLDS:
        if ovr > threshold:
            return tier
    return DEFAULT_TIER


def _as_utc(ts: datetime) -> datetime:
    return ts.replace(tzinfo=timezone.utc) if ts.tzinfo is None else ts


def _multiplier(sale: Transfer) -> float:
    return sale.final_price / sale.base_value


def _percentile(sorted_values: List[float], fraction: float, fallback: float) -> float:
    value = sorted_values[int(len(sorted_values) * fraction)]
    return value or fallback


def market_trend(
    comparables: List[Transfer],
    now: datetime,
) -> str:
    """Compare recent comparable sales against the whole comparable set."""
    since = _as_utc(now) - timedelta(days=TREND_WINDOW_DAYS)
    recent = [
        s for s in comparables
        if s.created_at is not None and _as_utc(s.created_at) >= since
    ]
    if len(recent) < TREND_MIN_RECENT_SALES:
        return "stable"

    historical_mean = sum(_multiplier(s) for s in comparables) / len(comparables)
    recent_mean = sum(_multiplier(s) for s in recent) / len(recent)

    if recent_mean > historical_mean * (1 + TREND_THRESHOLD):
        return "rising"
    if recent_mean < historical_mean * (1 - TREND_THRESHOLD):
        return "falling"
    return "stable"


class SaleAdvisor:
    """Prices squad players from the league's sale history."""

    def __init__(self, historical_transfers: Iterable[Transfer]):
        self.sales = [
            t for t in historical_transfers if t.is_sale and t.base_value > 0
        ]

    def comparable_sales(self, player: Player) -> List[Transfer]:
        # Unknown squad positions price as midfielders; unknown sales match nothing
        group = position_group(player.pos) or DEFAULT_POSITION_GROUP
        low, high = (player.value * f for f in COMPARABLE_VALUE_RANGE)
        return [
            s for s in self.sales
            if position_group(s.position) == group and low <= s.base_value <= high
        ]

    def recommend_player(self, player: Player, now: datetime) -> RecommendedPlayer:
        comparables = self.comparable_sales(player)
        cautious = player.value * FALLBACK_CAUTIOUS_MULTIPLIER
        optimal = player.value * FALLBACK_OPTIMAL_MULTIPLIER
        trend = "stable"

        if comparables:
            multipliers = sorted(_multiplier(s) for s in comparables)
            cautious = player.value * _percentile(
                multipliers, CAUTIOUS_PERCENTILE, FALLBACK_CAUTIOUS_MULTIPLIER,
            )
            optimal = player.value * _percentile(
                multipliers, OPTIMAL_PERCENTILE, FALLBACK_OPTIMAL_MULTIPLIER,
            )
            trend = market_trend(comparables, now)

        return RecommendedPlayer(
            name=player.name,
            pos=player.pos,
            ovr=player.ovr,
            value=player.value,
            player_tier=player_tier(player.ovr),
            liquidity=len(comparables),
            trend=trend,
            cautious_price=min(cautious, player.value * CAUTIOUS_CAP_MULTIPLIER),
            optimal_price=min(optimal, player.value * OPTIMAL_CAP_MULTIPLIER),
        )

    def recommend(
        self,
        squad: Iterable[Player],
        now: Optional[datetime] = None,
    ) -> List[RecommendedPlayer]:
        """Recommend sale prices for *squad*, highest optimal price first."""
        now = now or utc_now()
        recommendations = [self.recommend_player(p, now) for p in squad]
        recommendations.sort(key=lambda r: r.optimal_price, reverse=True)
        logger.info(
            "Priced %d player(s) against %d historical sale(s)",
            len(recommendations), len(self.sales),
        )
        return recommendations


def recommend(
    squad: Iterable[Player],
    historical_transfers: Iterable[Transfer],
    now: Optional[datetime] = None,
) -> List[RecommendedPlayer]:
    return SaleAdvisor(historical_transfers).recommend(squad, now)
