"""Tests for manager ranking, drill-down and battle rivalries."""

import pytest

from src.cash_flow.models import ManagerSummary
from src.cash_flow.simulator import simulate
from src.league_manager.league_state import Team
from src.league_manager.manager_details import (
    build_rivalries,
    get_manager_details,
    rank_managers,
)

from tests.factories import make_league, make_transfer


def _summary(name, team_name="FC Alpha", transfers=(), **metrics):
    summary = ManagerSummary(
        name=name,
        team_name=team_name,
        initial_value=metrics.pop("initial_value", 0.0),
        current_value=metrics.pop("current_value", 0.0),
        initial_cash=0.0,
        fixed_income_per_round=0.0,
        transfers=list(transfers),
    )
    for attr, value in metrics.items():
        setattr(summary, attr, value)
    return summary


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------

class TestRankManagers:
    @pytest.fixture
    def managers(self):
        return [
            _summary("Ann", total_assets=100.0, spent=5.0, income=50.0, count=1),
            _summary("Ben", total_assets=300.0, spent=30.0, income=10.0, count=4),
            _summary("Cat", total_assets=200.0, spent=20.0, income=0.0, count=2),
        ]

    def test_default_by_total_assets(self, managers):
        assert [m.name for m in rank_managers(managers)] == ["Ben", "Cat", "Ann"]

    @pytest.mark.parametrize("key, expected", [
        ("spent", ["Ben", "Cat", "Ann"]),
        ("income", ["Ann", "Ben", "Cat"]),
        ("count", ["Ben", "Cat", "Ann"]),
    ])
    def test_other_keys(self, managers, key, expected):
        assert [m.name for m in rank_managers(managers, key)] == expected

    def test_invalid_key(self, managers):
        with pytest.raises(ValueError, match="sort_key"):
            rank_managers(managers, "evolution")

    def test_input_not_reordered(self, managers):
        rank_managers(managers)
        assert [m.name for m in managers] == ["Ann", "Ben", "Cat"]


# ---------------------------------------------------------------------------
# Drill-down
# ---------------------------------------------------------------------------

class TestManagerDetails:
    @pytest.fixture
    def bob(self):
        return _summary("Bob", transfers=[
            make_transfer("Cheap", "purchase", base=5.0, final=6.0),
            make_transfer("Pricey", "purchase", base=30.0, final=40.0),
            make_transfer("Good", "sale", base=10.0, final=20.0),
            make_transfer("Okay", "sale", base=10.0, final=12.0),
            make_transfer("Bad", "sale", base=10.0, final=5.0),
            make_transfer("Worse", "sale", base=10.0, final=2.0),
            make_transfer("Youth", "sale", base=0.0, final=3.0),
        ])

    def test_unknown_manager(self, bob):
        assert get_manager_details("Nobody", [bob]) is None

    def test_biggest_purchase(self, bob):
        details = get_manager_details("Bob", [bob])
        assert details.manager is bob
        assert details.biggest_purchase.player_name == "Pricey"

    def test_best_sales(self, bob):
        details = get_manager_details("Bob", [bob])
        assert [t.player_name for t in details.best_sales] == ["Good", "Okay", "Youth"]

    def test_worst_sales(self, bob):
        details = get_manager_details("Bob", [bob])
        assert [t.player_name for t in details.worst_sales] == ["Worse", "Bad", "Youth"]

    def test_immediate_sales(self, bob):
        details = get_manager_details("Bob", [bob])
        assert details.immediate_sales == 1
        assert details.immediate_sales_value == 3.0

    def test_no_transfers(self):
        details = get_manager_details("Ann", [_summary("Ann")])
        assert details.biggest_purchase is None
        assert details.best_sales == []
        assert details.immediate_sales == 0


# ---------------------------------------------------------------------------
# Battle rivalries
# ---------------------------------------------------------------------------

class TestRivalries:
    def test_pairs_by_number(self):
        managers = [
            _summary("R2", "Team Red 2"),
            _summary("B1", "Team Blue 1"),
            _summary("B2", "Team Blue 2"),
            _summary("R1", "Team Red 1"),
        ]
        rivalries = build_rivalries(managers)
        assert [(r.pair_number, r.blue.name, r.red.name) for r in rivalries] == [
            (1, "B1", "R1"), (2, "B2", "R2"),
        ]

    def test_incomplete_pair_skipped(self):
        managers = [
            _summary("B1", "Team Blue 1"),
            _summary("B3", "Team Blue 3"),
            _summary("R1", "Team Red 1"),
        ]
        assert [r.pair_number for r in build_rivalries(managers)] == [1]

    def test_non_battle_teams_ignored(self):
        assert build_rivalries([_summary("Bob", "FC Alpha")]) == []

    def test_comparison(self):
        blue = _summary(
            "Blue", "Team Blue 1",
            transfers=[make_transfer("B-sale", "sale", "Blue", base=10.0, final=30.0)],
            avg_premium=10.0, avg_profit=200.0,
            total_assets=150.0, current_value=100.0, cash=50.0,
        )
        red = _summary(
            "Red", "Team Red 1",
            transfers=[make_transfer("R-buy", "purchase", "Red", base=10.0, final=25.0)],
            avg_premium=150.0, avg_profit=0.0,
            total_assets=50.0, current_value=100.0, cash=-50.0,
        )
        (rivalry,) = build_rivalries([blue, red])
        assert rivalry.blue_better_buyer is True
        assert rivalry.blue_better_seller is True
        assert rivalry.best_sale.player_name == "B-sale"
        assert rivalry.worst_purchase.player_name == "R-buy"
        assert rivalry.blue_assets_share == pytest.approx(75.0)
        assert rivalry.blue_value_share == pytest.approx(50.0)
        # Shares default to an even split when the sum is not positive
        assert rivalry.blue_cash_share == 50.0

    def test_from_simulation(self):
        league = make_league(
            Team("Team Blue 1", "Ann", initial_cash=10.0, current_value=40.0),
            Team("Team Red 1", "Ray", initial_cash=10.0, current_value=60.0),
            managers={"Team Blue 1": "Ann", "Team Red 1": "Ray"},
            type="battle",
        )
        stats = simulate([], league)
        (rivalry,) = build_rivalries(stats.manager_list)
        assert rivalry.blue.name == "Ann"
        assert rivalry.best_sale is None
        assert rivalry.blue_value_share == pytest.approx(40.0)
