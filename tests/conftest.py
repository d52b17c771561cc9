"""Shared fixtures for the league tracker test suite."""

import pytest

from src.league_manager.league_state import Team

from tests.factories import make_league


# ------------------------------------------------------------------
# Pasted text samples
# ------------------------------------------------------------------

TRANSFER_TEXT = """
Messi
FC Alpha
Bob
ST 1 10M 15M

Ronaldo
FC Alpha
Bob
Real Madrid
ST 2 20M 30M

Kane
Bayern Munich
FC Beta
Alice
ST 3 5M 6M
"""

TEMPLATE_TEXT = """
League table
FC Alpha FC Alpha 1 50,0M 10,0M
FC Beta Alice 1 42M 8M
Totals: nothing here
"""

SQUAD_TEXT = """
Forwards
Harry Kane
9
ST 30 92 45 88
Value 80M
Midfielders
Kevin De Bruyne
CM 33 85 70 91
Value 60,5M
Defenders
Virgil van Dijk
CB 32 60 89 86
Value 500K
Goalkeepers
Alisson
GK 31 20 88 87
"""


@pytest.fixture
def transfer_text():
    return TRANSFER_TEXT


@pytest.fixture
def template_text():
    return TEMPLATE_TEXT


@pytest.fixture
def squad_text():
    return SQUAD_TEXT


# ------------------------------------------------------------------
# Leagues
# ------------------------------------------------------------------

@pytest.fixture
def two_team_league():
    """FC Alpha (Bob) and FC Beta (Alice), plus an unassigned team."""
    return make_league(
        Team("FC Alpha", "FC Alpha", initial_value=100.0,
             fixed_income_per_round=0.0, initial_cash=100.0, current_value=100.0),
        Team("FC Beta", "Alice", initial_value=80.0,
             fixed_income_per_round=5.0, initial_cash=20.0, current_value=90.0),
        Team("FC Gamma", "FC Gamma", initial_value=60.0),
        managers={"FC Alpha": "Bob", "FC Beta": "Alice"},
    )
