from src.cash_flow.models import (
    CashSnapshot,
    LeagueStats,
    ManagerSnapshot,
    ManagerSummary,
    SimulationConfig,
)
from src.cash_flow.simulator import CashFlowSimulator, advance_cash, simulate

__all__ = [
    "CashFlowSimulator",
    "CashSnapshot",
    "LeagueStats",
    "ManagerSnapshot",
    "ManagerSummary",
    "SimulationConfig",
    "advance_cash",
    "simulate",
]
