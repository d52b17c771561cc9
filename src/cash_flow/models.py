"""Data models for the cash-flow simulation."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd

from src.cash_flow.config import (
    GRANULARITIES,
    INITIAL_CASH_POLICIES,
    INTEREST_RATE,
    PRESEASON_ROUNDS,
    STEP_ORDERS,
)
from src.league_manager.league_state import Transfer


@dataclass(frozen=True)
class SimulationConfig:
    """Strategy selection for the cash-flow simulation.

    The round-level model is the default. The day-level and variable-income
    models are alternate configurations of the same engine.
    """

    granularity: str = "round"
    step_order: str = "settle_first"
    initial_cash_policy: str = "stored"
    variable_income: bool = False
    clamp_negative_cash: bool = False
    interest_rate: float = INTEREST_RATE
    preseason_rounds: int = PRESEASON_ROUNDS

    def __post_init__(self):
        if self.granularity not in GRANULARITIES:
            raise ValueError(
                f"Invalid granularity: {self.granularity!r}. "
                f"Must be one of {GRANULARITIES}."
            )
        if self.step_order not in STEP_ORDERS:
            raise ValueError(
                f"Invalid step_order: {self.step_order!r}. "
                f"Must be one of {STEP_ORDERS}."
            )
        if self.initial_cash_policy not in INITIAL_CASH_POLICIES:
            raise ValueError(
                f"Invalid initial_cash_policy: {self.initial_cash_policy!r}. "
                f"Must be one of {INITIAL_CASH_POLICIES}."
            )
        if self.preseason_rounds < 0:
            raise ValueError("preseason_rounds cannot be negative")

    @classmethod
    def round_level(cls) -> "SimulationConfig":
        return cls()

    @classmethod
    def day_level(cls) -> "SimulationConfig":
        return cls(granularity="day", step_order="interest_first", clamp_negative_cash=True)

    @classmethod
    def variable_income_variant(cls) -> "SimulationConfig":
        return cls(initial_cash_policy="income_multiple", variable_income=True)


@dataclass
class CashSnapshot:
    """Manager cash after one simulation step."""

    round: int
    cash: float
    day: Optional[int] = None  # Set only by the day-level simulation


@dataclass
class ManagerState:
    """Mutable per-manager state while a simulation runs."""

    name: str
    team_name: str
    cash: float
    cash_flow: List[CashSnapshot] = field(default_factory=list)


@dataclass
class ManagerSnapshot:
    """One row of the league table at a given step."""

    name: str
    cash: float
    current_value: float
    total_assets: float


@dataclass
class ManagerSummary:
    """Final financial metrics for one manager."""

    name: str
    team_name: str
    initial_value: float
    current_value: float
    initial_cash: float
    fixed_income_per_round: float
    spent: float = 0.0
    income: float = 0.0
    count: int = 0
    transfers: List[Transfer] = field(default_factory=list)
    transfer_net: float = 0.0
    cash: float = 0.0
    total_assets: float = 0.0
    evolution: float = 0.0
    avg_premium: float = 0.0
    avg_profit: float = 0.0
    cash_flow: List[CashSnapshot] = field(default_factory=list)


@dataclass
class RankedTransfer:
    """A transfer on a leaderboard, with its premium/profit percent."""

    transfer: Transfer
    percent: float


@dataclass
class TradeCount:
    name: str
    count: int


@dataclass
class LeagueStats:
    """Everything the simulation computes for a league."""

    manager_list: List[ManagerSummary] = field(default_factory=list)
    historical_snapshots: Dict[int, List[ManagerSnapshot]] = field(default_factory=dict)
    total_spent: float = 0.0
    total_income: float = 0.0
    avg_purchase_price: float = 0.0
    avg_sale_price: float = 0.0
    panic_buys: List[RankedTransfer] = field(default_factory=list)
    master_sales: List[RankedTransfer] = field(default_factory=list)
    most_traded: List[TradeCount] = field(default_factory=list)
    granularity: str = "round"
    preseason_rounds: int = 0

    def step_round(self, step: int) -> int:
        """Game round of a history step (steps are days at day granularity)."""
        if self.granularity == "day":
            return 0 if step <= self.preseason_rounds else step - self.preseason_rounds
        return step

    def ranking_at(self, step: int) -> List[ManagerSnapshot]:
        """League table at *step*, best total assets first."""
        rows = self.historical_snapshots.get(step, [])
        return sorted(rows, key=lambda r: r.total_assets, reverse=True)

    def snapshots_frame(self) -> pd.DataFrame:
        """Full history as a long-format DataFrame."""
        columns = ["step", "round", "name", "cash", "current_value", "total_assets"]
        rows = [
            {
                "step": step,
                "round": self.step_round(step),
                "name": snap.name,
                "cash": snap.cash,
                "current_value": snap.current_value,
                "total_assets": snap.total_assets,
            }
            for step, snapshots in sorted(self.historical_snapshots.items())
            for snap in snapshots
        ]
        return pd.DataFrame(rows, columns=columns)
