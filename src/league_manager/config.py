import re

# Position code -> position group
POSITION_GROUPS = {
    "ST": "Forward", "CF": "Forward", "RW": "Forward", "LW": "Forward",
    "CAM": "Midfielder", "CM": "Midfielder", "CDM": "Midfielder",
    "RM": "Midfielder", "LM": "Midfielder",
    "CB": "Defender", "RB": "Defender", "LB": "Defender",
    "RWB": "Defender", "LWB": "Defender",
    "GK": "Goalkeeper",
}
DEFAULT_POSITION_GROUP = "Midfielder"

# Player tiers by overall rating (strictly greater than the threshold)
TIER_THRESHOLDS = [
    (90, "Star"),
    (80, "Quality"),
]
DEFAULT_TIER = "Promising"

# Comparable sales: base value within [low, high] x the player's value
COMPARABLE_VALUE_RANGE = (0.8, 1.5)

# Sale price multipliers
FALLBACK_CAUTIOUS_MULTIPLIER = 1.8
FALLBACK_OPTIMAL_MULTIPLIER = 2.2
CAUTIOUS_PERCENTILE = 0.5
OPTIMAL_PERCENTILE = 0.75
CAUTIOUS_CAP_MULTIPLIER = 3.0
OPTIMAL_CAP_MULTIPLIER = 3.5

# Market trend
TREND_WINDOW_DAYS = 7
TREND_MIN_RECENT_SALES = 2
TREND_THRESHOLD = 0.10  # +/- 10% vs the comparable-set mean

# Manager ranking sort keys -> ManagerSummary attribute
RANKING_SORT_KEYS = {
    "totalAssets": "total_assets",
    "spent": "spent",
    "income": "income",
    "count": "count",
}

# Friendly battle leagues pair "Team Blue <n>" against "Team Red <n>"
BATTLE_SIDES = ("Blue", "Red")
BATTLE_TEAM_PATTERN = re.compile(r"^Team (Blue|Red) (\d+)$")
TOP_SALES_IN_DETAILS = 3
