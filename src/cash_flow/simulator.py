"""Cash-flow simulation for league managers.

Replays every attributed transfer in round order against each manager's
starting cash. Each step (a round, or a day at day granularity) accrues
fixed income, settles that round's transfers and pays interest on positive
cash, in the order chosen by :class:`SimulationConfig`.

The simulator is stateless: every call rebuilds manager state from the
transfers and league it is given.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

from src.cash_flow.config import (
    INITIAL_CASH_INCOME_MULTIPLE,
    TOP_N,
    VARIABLE_INCOME_RATIO,
)
from src.cash_flow.models import (
    CashSnapshot,
    LeagueStats,
    ManagerSnapshot,
    ManagerState,
    ManagerSummary,
    RankedTransfer,
    SimulationConfig,
    TradeCount,
)
from src.league_manager.league_state import LeagueData, Team, Transfer

logger = logging.getLogger(__name__)


def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def advance_cash(
    cash: float,
    income: float,
    settlement: float,
    config: SimulationConfig,
) -> float:
    """Apply one simulation step to *cash* and return the new balance.

    Args:
        cash: Balance carried into the step.
        income: Income accrued this step.
        settlement: Net transfer amount settled this step
            (sales positive, purchases negative).
        config: Step order, interest rate and clamping policy.
    """
    if config.step_order == "interest_first":
        if cash > 0:
            cash += cash * config.interest_rate
        cash += income
        cash += settlement
    else:
        cash += income
        cash += settlement
        if cash > 0:
            cash += cash * config.interest_rate

    if config.clamp_negative_cash and cash < 0:
        cash = 0.0
    return cash


def compute_evolution(
    initial_value: float,
    initial_cash: float,
    current_value: float,
    final_cash: float,
) -> float:
    """Percent change of total assets (team value + cash).

    Returns 0 when the starting total is not positive.
    """
    initial_total = initial_value + initial_cash
    if initial_total <= 0:
        return 0.0
    total_assets = current_value + final_cash
    return (total_assets - initial_total) / initial_total * 100


class CashFlowSimulator:
    """Compute manager finances and league-wide stats from transfers."""

    def __init__(self, config: Optional[SimulationConfig] = None):
        self.config = config or SimulationConfig()
        if self.config.granularity == "day" and self.config.preseason_rounds < 1:
            raise ValueError("Day-level simulation needs at least one preseason round")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def calculate(
        self,
        transfers: Iterable[Transfer],
        league: Optional[LeagueData],
    ) -> LeagueStats:
        """Run the simulation and aggregate the results.

        Args:
            transfers: Every stored transfer of the league, any order.
            league: Teams and team -> manager assignments. ``None`` or a
                league without teams yields empty stats.

        Returns:
            :class:`LeagueStats`. Transfers by managers not assigned to a
            team are left out of every per-manager figure and league sum.
        """
        transfers = list(transfers)
        stats = LeagueStats(
            granularity=self.config.granularity,
            preseason_rounds=(
                self.config.preseason_rounds if self.config.granularity == "day" else 0
            ),
        )
        if league is None or not league.teams:
            logger.info("No league teams to simulate")
            return stats

        teams = self._teams_by_manager(league)
        summaries = {
            name: self._new_summary(name, team) for name, team in teams.items()
        }

        attributed: List[Transfer] = []
        for t in transfers:
            summary = summaries.get(t.manager_name)
            if summary is None:
                logger.debug(
                    "Ignoring transfer of %s by unassigned manager %r",
                    t.player_name, t.manager_name,
                )
                continue
            attributed.append(t)
            summary.transfers.append(t)
            summary.count += 1
            if t.is_purchase:
                summary.spent += t.final_price
            else:
                summary.income += t.final_price

        states = {
            name: ManagerState(name=name, team_name=team.name, cash=summaries[name].initial_cash)
            for name, team in teams.items()
        }
        # The timeline spans every observed round, attributed or not
        total_rounds = max((t.round for t in transfers), default=0)
        stats.historical_snapshots = self._simulate(states, teams, attributed, total_rounds)

        for name, summary in summaries.items():
            self._finalize_summary(summary, states[name])

        stats.manager_list = list(summaries.values())
        self._aggregate_league(stats, transfers, attributed)

        logger.info(
            "Simulated %d manager(s) over %d step(s) from %d transfer(s) "
            "(%d unattributed)",
            len(summaries), len(stats.historical_snapshots),
            len(transfers), len(transfers) - len(attributed),
        )
        return stats

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    @staticmethod
    def _teams_by_manager(league: LeagueData) -> Dict[str, Team]:
        teams: Dict[str, Team] = {}
        for team in league.teams:
            manager = league.managers_by_team.get(team.name)
            if not manager:
                continue
            if manager in teams:
                logger.warning(
                    "Manager %r assigned to both %r and %r; using %r",
                    manager, teams[manager].name, team.name, team.name,
                )
            teams[manager] = team
        return teams

    def _initial_cash(self, team: Team) -> float:
        if self.config.initial_cash_policy == "income_multiple":
            return team.fixed_income_per_round * INITIAL_CASH_INCOME_MULTIPLE
        return team.initial_cash

    def _income_per_step(self, team: Team) -> float:
        income = team.fixed_income_per_round
        if self.config.variable_income:
            income += team.fixed_income_per_round * VARIABLE_INCOME_RATIO
        return income

    def _new_summary(self, name: str, team: Team) -> ManagerSummary:
        return ManagerSummary(
            name=name,
            team_name=team.name,
            initial_value=team.initial_value,
            current_value=team.current_value,
            initial_cash=self._initial_cash(team),
            fixed_income_per_round=team.fixed_income_per_round,
        )

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def _steps(self, total_rounds: int) -> List[Tuple[int, int, bool]]:
        """Return ``(step, game_round, settles_round)`` for every step.

        At round granularity each round is one step. At day granularity the
        preseason days all belong to round 0 and a round's transfers settle
        on its first day only.
        """
        if self.config.granularity == "round":
            return [(r, r, True) for r in range(total_rounds + 1)]

        preseason = self.config.preseason_rounds
        steps = []
        for day in range(1, preseason + total_rounds + 1):
            game_round = 0 if day <= preseason else day - preseason
            settles = day == 1 or day > preseason
            steps.append((day, game_round, settles))
        return steps

    def _simulate(
        self,
        states: Dict[str, ManagerState],
        teams: Dict[str, Team],
        transfers: List[Transfer],
        total_rounds: int,
    ) -> Dict[int, List[ManagerSnapshot]]:
        settlements: Dict[Tuple[str, int], float] = {}
        for t in transfers:
            key = (t.manager_name, t.round)
            amount = t.final_price if t.is_sale else -t.final_price
            settlements[key] = settlements.get(key, 0.0) + amount

        history: Dict[int, List[ManagerSnapshot]] = {}
        is_day = self.config.granularity == "day"
        for step, game_round, settles in self._steps(total_rounds):
            rows = []
            for name, state in states.items():
                team = teams[name]
                settlement = settlements.get((name, game_round), 0.0) if settles else 0.0
                state.cash = advance_cash(
                    state.cash, self._income_per_step(team), settlement, self.config,
                )
                state.cash_flow.append(CashSnapshot(
                    round=game_round, cash=state.cash, day=step if is_day else None,
                ))
                rows.append(ManagerSnapshot(
                    name=name,
                    cash=state.cash,
                    current_value=team.current_value,
                    total_assets=team.current_value + state.cash,
                ))
            history[step] = rows
        return history

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    @staticmethod
    def _finalize_summary(summary: ManagerSummary, state: ManagerState) -> None:
        summary.transfer_net = summary.income - summary.spent
        summary.cash = state.cash
        summary.cash_flow = list(state.cash_flow)
        summary.total_assets = summary.current_value + state.cash
        summary.evolution = compute_evolution(
            summary.initial_value, summary.initial_cash,
            summary.current_value, state.cash,
        )
        summary.avg_premium = _mean(
            [t.premium_percent for t in summary.transfers if t.is_purchase]
        )
        summary.avg_profit = _mean(
            [t.premium_percent for t in summary.transfers if t.is_sale]
        )

    @staticmethod
    def _top_by_percent(transfers: List[Transfer]) -> List[RankedTransfer]:
        ranked = [RankedTransfer(transfer=t, percent=t.premium_percent) for t in transfers]
        ranked.sort(key=lambda r: r.percent, reverse=True)
        return ranked[:TOP_N]

    @staticmethod
    def _most_traded(transfers: List[Transfer]) -> List[TradeCount]:
        if not transfers:
            return []
        names = pd.Series([t.player_name for t in transfers], name="player")
        counts = (
            names.groupby(names, sort=False)
            .size()
            .sort_values(ascending=False, kind="stable")
            .head(TOP_N)
        )
        return [TradeCount(name=name, count=int(count)) for name, count in counts.items()]

    def _aggregate_league(
        self,
        stats: LeagueStats,
        transfers: List[Transfer],
        attributed: List[Transfer],
    ) -> None:
        stats.total_spent = sum(m.spent for m in stats.manager_list)
        stats.total_income = sum(m.income for m in stats.manager_list)

        purchase_count = sum(1 for t in attributed if t.is_purchase)
        sale_count = len(attributed) - purchase_count
        stats.avg_purchase_price = stats.total_spent / purchase_count if purchase_count else 0.0
        stats.avg_sale_price = stats.total_income / sale_count if sale_count else 0.0

        stats.panic_buys = self._top_by_percent([t for t in transfers if t.is_purchase])
        stats.master_sales = self._top_by_percent([t for t in transfers if t.is_sale])
        stats.most_traded = self._most_traded(transfers)


def simulate(
    transfers: Iterable[Transfer],
    league: Optional[LeagueData],
    config: Optional[SimulationConfig] = None,
) -> LeagueStats:
    """Convenience wrapper around :meth:`CashFlowSimulator.calculate`."""
    return CashFlowSimulator(config).calculate(transfers, league)
