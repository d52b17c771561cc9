"""Tests for league template parsing."""

from src.text_parsing.template_parser import (
    parse_template,
    parse_template_line,
    split_name_part,
)


class TestParseTemplateLine:
    def test_duplicated_name(self):
        team = parse_template_line("FC Alpha FC Alpha 1 50.0M 10.0M")
        assert team.name == "FC Alpha"
        assert team.alias == "FC Alpha"
        assert team.initial_value == 50.0
        assert team.fixed_income_per_round == 10.0

    def test_separate_alias(self):
        team = parse_template_line("FC Alpha Bob 1 50.0M 10.0M")
        assert team.name == "FC Alpha"
        assert team.alias == "Bob"

    def test_initial_cash_is_zero(self):
        team = parse_template_line("FC Alpha FC Alpha 1 50.0M 10.0M")
        assert team.initial_cash == 0
        assert team.current_value == 0

    def test_thousands_amounts(self):
        team = parse_template_line("Minnows Minnows 1 900K 500K")
        assert team.initial_value == 0.9
        assert team.fixed_income_per_round == 0.5

    def test_decimal_comma(self):
        team = parse_template_line("Real Beta Ana 1 42,5M 8,25M")
        assert team.initial_value == 42.5
        assert team.fixed_income_per_round == 8.25

    def test_non_matching_line(self):
        assert parse_template_line("League table") is None
        assert parse_template_line("FC Alpha 50M 10M") is None

    def test_amount_without_digits(self):
        assert parse_template_line("FC Alpha FC Alpha 1 ..M 10M") is None
        assert parse_template_line("FC Alpha Bob 1 50M ,M") is None

    def test_unreadable_amount(self):
        assert parse_template_line("FC Alpha FC Alpha 1 .,5M 10M") is None


class TestSplitNamePart:
    def test_even_repeated_halves(self):
        assert split_name_part("Team Blue 1 Team Blue 1") == ("Team Blue 1", "Team Blue 1")

    def test_last_word_alias(self):
        assert split_name_part("Sporting Lisbon Rui") == ("Sporting Lisbon", "Rui")

    def test_single_word(self):
        assert split_name_part("Ajax") == ("Ajax", "Ajax")


class TestParseTemplate:
    def test_skips_noise_lines(self, template_text):
        result = parse_template(template_text)
        assert [t.name for t in result.teams] == ["FC Alpha", "FC Beta"]
        assert result.teams[1].alias == "Alice"

    def test_standard_type(self, template_text):
        assert parse_template(template_text).type == "standard"

    def test_battle_type(self):
        text = (
            "Team Blue 1 Team Blue 1 1 114M 10M\n"
            "Team Red 1 Team Red 1 1 117M 10M\n"
        )
        result = parse_template(text)
        assert result.type == "battle"
        assert [t.name for t in result.teams] == ["Team Blue 1", "Team Red 1"]

    def test_battle_name_needs_pair_number(self):
        result = parse_template("Team Blue Team Blue 1 114M 10M\n")
        assert [t.name for t in result.teams] == ["Team Blue"]
        assert result.type == "standard"

    def test_bad_amount_skips_only_that_line(self):
        text = "FC Alpha FC Alpha 1 ..M 10M\nFC Beta Alice 1 42M 8M\n"
        assert [t.name for t in parse_template(text).teams] == ["FC Beta"]

    def test_empty_text(self):
        result = parse_template("")
        assert result.teams == []
        assert result.type == "standard"
