"""League data models - single source of truth for teams, transfers and squads."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

TRANSACTION_TYPES = ("purchase", "sale")

# Team name -> manager display name
ManagerAssignment = Dict[str, str]


def _as_float(value, default: float = 0.0) -> float:
    """Convert *value* to float, replacing None with *default*."""
    if value is None:
        return default
    return float(value)


def _parse_timestamp(value) -> Optional[datetime]:
    """Accept a datetime, ISO-8601 text or None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def premium_percent(base_value: float, final_price: float) -> float:
    """Percent paid over (or received above) base value; 0 for a zero base."""
    if base_value > 0:
        return ((final_price / base_value) - 1) * 100
    return 0.0


@dataclass
class Team:
    """A roster entity imported from a league template."""

    name: str
    alias: str
    initial_value: float = 0.0
    fixed_income_per_round: float = 0.0
    initial_cash: float = 0.0
    current_value: float = 0.0  # Assigned later, when managers are set up

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "alias": self.alias,
            "initialValue": self.initial_value,
            "fixedIncomePerRound": self.fixed_income_per_round,
            "initialCash": self.initial_cash,
            "currentValue": self.current_value,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Team":
        name = data.get("name")
        if not name:
            raise ValueError(f"Team record has no name: {data!r}")
        return cls(
            name=name,
            alias=data.get("alias") or name,
            initial_value=_as_float(data.get("initialValue")),
            fixed_income_per_round=_as_float(data.get("fixedIncomePerRound")),
            initial_cash=_as_float(data.get("initialCash")),
            current_value=_as_float(data.get("currentValue")),
        )


@dataclass(frozen=True)
class Transfer:
    """A single purchase or sale. Immutable once created."""

    player_name: str
    transaction_type: str  # "purchase" or "sale"
    manager_team: str
    manager_name: str
    position: str
    round: int = 0
    base_value: float = 0.0
    final_price: float = 0.0
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if self.transaction_type not in TRANSACTION_TYPES:
            raise ValueError(
                f"Invalid transaction_type: {self.transaction_type!r}. "
                "Must be 'purchase' or 'sale'."
            )
        if self.round < 0:
            raise ValueError(f"round cannot be negative: {self.round}")

    @property
    def is_purchase(self) -> bool:
        return self.transaction_type == "purchase"

    @property
    def is_sale(self) -> bool:
        return self.transaction_type == "sale"

    @property
    def premium_percent(self) -> float:
        return premium_percent(self.base_value, self.final_price)

    def to_dict(self) -> Dict:
        """Interchange form. Field names are part of the stored format."""
        return {
            "playerName": self.player_name,
            "transactionType": self.transaction_type,
            "managerTeam": self.manager_team,
            "managerName": self.manager_name,
            "position": self.position,
            "round": self.round,
            "baseValue": self.base_value,
            "finalPrice": self.final_price,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Transfer":
        for key in ("playerName", "managerName"):
            if not data.get(key):
                raise ValueError(f"Transfer record is missing {key!r}: {data!r}")
        return cls(
            player_name=data["playerName"],
            transaction_type=data.get("transactionType"),
            manager_team=data.get("managerTeam", ""),
            manager_name=data["managerName"],
            position=data.get("position", ""),
            round=int(data.get("round") or 0),
            base_value=_as_float(data.get("baseValue")),
            final_price=_as_float(data.get("finalPrice")),
            created_at=_parse_timestamp(data.get("createdAt")),
        )


@dataclass
class Player:
    """A squad member parsed from a manager's own team page."""

    name: str
    pos: str
    ovr: int
    value: float

    def to_dict(self) -> Dict:
        return {"name": self.name, "pos": self.pos, "ovr": self.ovr, "value": self.value}


@dataclass
class LeagueData:
    """A stored league document: teams plus team -> manager assignments."""

    name: str = ""
    type: str = "standard"  # "standard" or "battle"
    teams: List[Team] = field(default_factory=list)
    managers_by_team: ManagerAssignment = field(default_factory=dict)

    def team_names(self) -> set:
        return {team.name for team in self.teams}

    def get_team(self, team_name: str) -> Optional[Team]:
        for team in self.teams:
            if team.name == team_name:
                return team
        return None

    def merge_managers(self, managers_by_team: ManagerAssignment) -> "LeagueData":
        """Return a copy whose assignments include *managers_by_team*."""
        merged = dict(self.managers_by_team)
        merged.update(managers_by_team)
        return LeagueData(
            name=self.name,
            type=self.type,
            teams=list(self.teams),
            managers_by_team=merged,
        )

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "type": self.type,
            "teams": [team.to_dict() for team in self.teams],
            "managersByTeam": dict(self.managers_by_team),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "LeagueData":
        return cls(
            name=data.get("name", ""),
            type=data.get("type", "standard"),
            teams=[Team.from_dict(t) for t in data.get("teams") or []],
            managers_by_team=dict(data.get("managersByTeam") or {}),
        )


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
