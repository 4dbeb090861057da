"""Unit tests for CLI option parsing."""

import datetime as dt
from decimal import Decimal

import click
import pytest

from timekeeper.cli.utils.parsing import (
    amount_option,
    clock_time_option,
    end_date_option,
    parse_date_input,
    start_date_option,
)


class TestParseDateInput:
    """Test date option parsing."""

    def test_full_date(self):
        assert parse_date_input("2025-11-03") == dt.date(2025, 11, 3)

    def test_month_start(self):
        assert parse_date_input("2025-11") == dt.date(2025, 11, 1)

    def test_month_end(self):
        assert parse_date_input("2025-11", end_of_month=True) == dt.date(2025, 11, 30)

    def test_month_end_leap_year(self):
        assert parse_date_input("2024-02", end_of_month=True) == dt.date(2024, 2, 29)

    def test_full_date_ignores_end_of_month(self):
        assert parse_date_input("2025-11-03", end_of_month=True) == dt.date(2025, 11, 3)

    @pytest.mark.parametrize("value", ["03/11/2025", "2025-13", "november", ""])
    def test_invalid(self, value):
        with pytest.raises(ValueError, match="Invalid date format"):
            parse_date_input(value)


class TestCallbacks:
    """Test click callbacks."""

    def test_date_callbacks(self):
        assert start_date_option(None, None, "2025-02") == dt.date(2025, 2, 1)
        assert end_date_option(None, None, "2025-02") == dt.date(2025, 2, 28)
        assert start_date_option(None, None, None) is None
        assert end_date_option(None, None, None) is None

    def test_date_callback_bad_value(self):
        with pytest.raises(click.BadParameter):
            start_date_option(None, None, "yesterday")

    def test_clock_time(self):
        assert clock_time_option(None, None, " 07:45 ") == dt.time(7, 45)
        assert clock_time_option(None, None, None) is None

    @pytest.mark.parametrize("value", ["24:00", "7h45", "09:60"])
    def test_clock_time_invalid(self, value):
        with pytest.raises(click.BadParameter, match="Expected HH:MM"):
            clock_time_option(None, None, value)

    @pytest.mark.parametrize(
        "value,expected",
        [("150", Decimal("150")), ("12,5", Decimal("12.5")), ("0", Decimal("0"))],
    )
    def test_amount(self, value, expected):
        assert amount_option(None, None, value) == expected

    @pytest.mark.parametrize("value", ["abc", "-1", "NaN", "Infinity"])
    def test_amount_invalid(self, value):
        with pytest.raises(click.BadParameter):
            amount_option(None, None, value)
