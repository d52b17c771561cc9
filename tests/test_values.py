"""Tests for amount normalization."""

import pytest

from src.text_parsing.values import ValueParseError, parse_value


class TestParseValue:
    def test_decimal_comma_millions(self):
        assert parse_value("1,5M") == 1.5

    def test_thousands_to_millions(self):
        assert parse_value("500K") == 0.5

    def test_lowercase_suffix(self):
        assert parse_value("250k") == 0.25
        assert parse_value("3m") == 3.0

    def test_no_suffix(self):
        assert parse_value("12") == 12.0

    def test_decimal_point(self):
        assert parse_value("10.25M") == 10.25

    def test_empty(self):
        assert parse_value("") == 0

    def test_none(self):
        assert parse_value(None) == 0

    def test_numeric_input(self):
        assert parse_value(7) == 7.0
        assert parse_value(2.5) == 2.5

    def test_only_first_comma_converted(self):
        assert parse_value("1,234,5M") == pytest.approx(1.234)

    def test_unparseable_raises(self):
        with pytest.raises(ValueParseError):
            parse_value("abc")

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_value("M")
