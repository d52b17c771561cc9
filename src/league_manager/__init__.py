from src.league_manager.league_state import (
    LeagueData,
    Player,
    Team,
    Transfer,
)
from src.league_manager.sale_advisor import RecommendedPlayer, SaleAdvisor, recommend

__all__ = [
    "LeagueData",
    "Player",
    "RecommendedPlayer",
    "SaleAdvisor",
    "Team",
    "Transfer",
    "recommend",
]
