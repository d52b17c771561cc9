"""Tests for league data models and their interchange form."""

from datetime import datetime, timezone

import pytest

from src.league_manager.league_state import (
    LeagueData,
    Player,
    Team,
    Transfer,
    premium_percent,
)

from tests.factories import make_league, make_transfer

TRANSFER_KEYS = {
    "playerName", "transactionType", "managerTeam", "managerName",
    "position", "round", "baseValue", "finalPrice", "createdAt",
}


class TestTransfer:
    def test_invalid_type_rejected(self):
        with pytest.raises(ValueError, match="transaction_type"):
            make_transfer(kind="loan")

    def test_negative_round_rejected(self):
        with pytest.raises(ValueError, match="round"):
            make_transfer(round=-1)

    def test_from_dict_negative_round(self):
        with pytest.raises(ValueError, match="round"):
            Transfer.from_dict({
                "playerName": "Messi",
                "transactionType": "sale",
                "managerName": "Bob",
                "round": -2,
                "finalPrice": 50,
            })

    def test_is_immutable(self):
        t = make_transfer()
        with pytest.raises(AttributeError):
            t.final_price = 99.0

    def test_to_dict_keys(self):
        assert set(make_transfer().to_dict()) == TRANSFER_KEYS

    def test_to_dict_values(self):
        stamp = datetime(2025, 2, 1, 9, 30, tzinfo=timezone.utc)
        d = make_transfer(player="Messi", kind="sale", created_at=stamp).to_dict()
        assert d["playerName"] == "Messi"
        assert d["transactionType"] == "sale"
        assert d["createdAt"] == "2025-02-01T09:30:00+00:00"

    def test_from_dict_round_trip(self):
        stamp = datetime(2025, 2, 1, 9, 30, tzinfo=timezone.utc)
        t = make_transfer(kind="sale", round=4, created_at=stamp)
        assert Transfer.from_dict(t.to_dict()) == t

    def test_from_dict_defaults(self):
        t = Transfer.from_dict({
            "playerName": "Messi",
            "transactionType": "purchase",
            "managerName": "Bob",
        })
        assert t.round == 0
        assert t.base_value == 0.0
        assert t.final_price == 0.0
        assert t.created_at is None

    def test_from_dict_missing_player(self):
        with pytest.raises(ValueError, match="playerName"):
            Transfer.from_dict({"transactionType": "sale", "managerName": "Bob"})

    def test_from_dict_missing_type(self):
        with pytest.raises(ValueError):
            Transfer.from_dict({"playerName": "Messi", "managerName": "Bob"})

    def test_premium_percent(self):
        assert make_transfer(base=10.0, final=15.0).premium_percent == pytest.approx(50.0)

    def test_premium_percent_zero_base(self):
        assert make_transfer(base=0.0, final=15.0).premium_percent == 0.0


class TestPremiumPercent:
    def test_loss(self):
        assert premium_percent(20.0, 15.0) == pytest.approx(-25.0)

    def test_negative_base(self):
        assert premium_percent(-1.0, 5.0) == 0.0


class TestTeam:
    def test_round_trip(self):
        team = Team("FC Alpha", "Bob", 50.0, 10.0, 0.0, 55.0)
        assert Team.from_dict(team.to_dict()) == team

    def test_defaults(self):
        team = Team.from_dict({"name": "FC Alpha"})
        assert team.alias == "FC Alpha"
        assert team.initial_value == 0.0
        assert team.current_value == 0.0

    def test_missing_name(self):
        with pytest.raises(ValueError):
            Team.from_dict({"alias": "Bob"})


class TestLeagueData:
    def test_merge_managers_returns_copy(self):
        league = make_league(Team("A", "A"), managers={"A": "Ann"})
        merged = league.merge_managers({"B": "Ben", "A": "Amy"})
        assert merged.managers_by_team == {"A": "Amy", "B": "Ben"}
        assert league.managers_by_team == {"A": "Ann"}

    def test_team_names(self):
        league = make_league(Team("A", "A"), Team("B", "B"))
        assert league.team_names() == {"A", "B"}

    def test_get_team(self):
        league = make_league(Team("A", "A"))
        assert league.get_team("A").name == "A"
        assert league.get_team("Z") is None

    def test_round_trip(self, two_team_league):
        again = LeagueData.from_dict(two_team_league.to_dict())
        assert again == two_team_league

    def test_from_empty_dict(self):
        league = LeagueData.from_dict({})
        assert league.teams == []
        assert league.managers_by_team == {}
        assert league.type == "standard"


class TestPlayer:
    def test_to_dict(self):
        assert Player("Kane", "ST", 92, 80.0).to_dict() == {
            "name": "Kane", "pos": "ST", "ovr": 92, "value": 80.0,
        }
