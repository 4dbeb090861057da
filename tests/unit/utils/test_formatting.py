"""Tests for shared display formatting."""

import datetime as dt
from decimal import Decimal

import pytest

from timekeeper.models.time_entry import ApprovalState
from timekeeper.utils.formatting import (
    format_currency,
    format_date,
    format_decimal,
    format_hours_clock,
    format_status,
    format_time_of_day,
)


class TestFormatHoursClock:
    """Test decimal hours to HH:MM."""

    @pytest.mark.parametrize(
        "hours,expected",
        [
            (Decimal("1.5"), "01:30"),
            (Decimal("0.25"), "00:15"),
            (Decimal("8"), "08:00"),
            (Decimal("1.9999"), "02:00"),
            (Decimal("125.5"), "125:30"),
            (None, "00:00"),
            ("garbage", "00:00"),
            (Decimal("-1"), "00:00"),
            (float("nan"), "00:00"),
        ],
    )
    def test_values(self, hours, expected):
        assert format_hours_clock(hours) == expected


class TestFormatTimeOfDay:
    def test_time(self):
        assert format_time_of_day(dt.datetime(2025, 11, 3, 9, 5)) == "09:05"

    def test_missing(self):
        assert format_time_of_day(None) == "--:--"


class TestFormatDate:
    def test_default_format(self):
        assert format_date(dt.date(2025, 11, 3)) == "03/11/2025"

    def test_custom_format(self):
        assert format_date(dt.date(2025, 11, 3), "%Y-%m-%d") == "2025-11-03"

    def test_missing(self):
        assert format_date(None) == "--/--/----"


class TestFormatCurrency:
    """Test money formatting."""

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (Decimal("1234.5"), "R$ 1.234,50"),
            (Decimal("0"), "R$ 0,00"),
            (Decimal("1234567.891"), "R$ 1.234.567,89"),
            (Decimal("-50"), "R$ -50,00"),
            (None, "R$ 0,00"),
            (100, "R$ 100,00"),
        ],
    )
    def test_default_separators(self, amount, expected):
        assert format_currency(amount) == expected

    def test_custom_separators(self):
        result = format_currency(
            Decimal("1480"), symbol="$", decimal_separator=".", thousands_separator=","
        )
        assert result == "$ 1,480.00"

    def test_without_symbol(self):
        assert format_currency(Decimal("10"), symbol="") == "10,00"


class TestFormatDecimal:
    @pytest.mark.parametrize(
        "value,expected",
        [(Decimal("8.5"), "8.50"), (Decimal("8.125"), "8.13"), (None, "0.00")],
    )
    def test_values(self, value, expected):
        assert format_decimal(value) == expected

    def test_places(self):
        assert format_decimal(Decimal("1.5"), places=1) == "1.5"


class TestFormatStatus:
    def test_labels(self):
        assert format_status(ApprovalState.APPROVED) == "Approved"
        assert format_status(None) == "--"
