"""Unit tests for report data structures."""

import datetime as dt
from decimal import Decimal

import pytest

from timekeeper.models.report import DateRange, EmployeeReport, ReportTotals
from timekeeper.models.time_entry import EmployeeRef
from timekeeper.validators.errors import DateRangeError


class TestDateRange:
    """Test the inclusive calendar-day window."""

    def test_inverted_range_raises(self):
        with pytest.raises(DateRangeError):
            DateRange(dt.date(2025, 11, 30), dt.date(2025, 11, 1))

    def test_single_day_range(self):
        period = DateRange(dt.date(2025, 11, 3), dt.date(2025, 11, 3))
        assert period.days == 1
        assert period.contains(dt.date(2025, 11, 3))

    def test_bounds_are_inclusive(self):
        period = DateRange(dt.date(2025, 11, 1), dt.date(2025, 11, 30))
        assert period.contains(dt.date(2025, 11, 1))
        assert period.contains(dt.date(2025, 11, 30))
        assert not period.contains(dt.date(2025, 12, 1))
        assert not period.contains(dt.date(2025, 10, 31))

    def test_instants_cover_whole_days(self):
        period = DateRange(dt.date(2025, 11, 1), dt.date(2025, 11, 30))
        assert period.start_instant == dt.datetime(2025, 11, 1, 0, 0, 0)
        assert period.end_instant == dt.datetime(2025, 11, 30, 23, 59, 59, 999000)

    def test_contains_datetime_uses_calendar_day(self):
        period = DateRange(dt.date(2025, 11, 1), dt.date(2025, 11, 30))
        assert period.contains(dt.datetime(2025, 11, 30, 23, 59, 59))

    def test_datetime_bounds_become_dates(self):
        period = DateRange(dt.datetime(2025, 11, 1, 12), dt.datetime(2025, 11, 2, 8))
        assert period.start == dt.date(2025, 11, 1)
        assert period.end == dt.date(2025, 11, 2)

    def test_str(self):
        period = DateRange(dt.date(2025, 11, 1), dt.date(2025, 11, 30))
        assert str(period) == "2025-11-01 to 2025-11-30"


class TestEmployeeReport:
    """Test EmployeeReport defaults."""

    def test_defaults_to_empty_totals(self):
        report = EmployeeReport(employee=EmployeeRef(id="emp-1", name="Ana"))
        assert report.entries == []
        assert report.totals == ReportTotals.empty()
        assert report.totals.total_pay == Decimal("0.00")
        assert report.employee_id == "emp-1"
        assert report.employee_name == "Ana"
