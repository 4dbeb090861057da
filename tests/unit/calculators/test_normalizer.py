"""Unit tests for the time entry normalizer."""

import datetime as dt
from decimal import Decimal

import pytest

from timekeeper.calculators.normalizer import (
    calculate_worked_hours,
    normalize,
    normalize_batch,
    normalize_record,
    preview_totals,
)
from timekeeper.models.time_entry import EmployeeRef, RawTimeEntry, TimeEntryDraft
from timekeeper.validators.errors import EntryValidationError
from timekeeper.validators.validation_report import ValidationSeverity


def make_raw(**overrides) -> RawTimeEntry:
    values = {
        "id": "e-1",
        "employee": EmployeeRef(id="emp-1", name="Ana"),
        "date": dt.date(2025, 11, 3),
        "entry_instant": dt.datetime(2025, 11, 3, 9, 0),
        "exit_instant": dt.datetime(2025, 11, 3, 17, 30),
        "daily_rate": Decimal("100"),
    }
    values.update(overrides)
    return RawTimeEntry(**values)


class TestWorkedHours:
    """Test worked hours from clock-in and clock-out."""

    def test_day_shift(self):
        """Test 09:00 to 17:30 is 8.5 hours."""
        assert calculate_worked_hours(make_raw()) == Decimal("8.5")

    def test_overnight_shift(self):
        """Test 22:00 to 02:00 the next day is 4.0 hours."""
        raw = make_raw(
            entry_instant=dt.datetime(2025, 11, 3, 22, 0),
            exit_instant=dt.datetime(2025, 11, 4, 2, 0),
        )
        assert calculate_worked_hours(raw) == Decimal("4")

    def test_open_shift(self):
        assert calculate_worked_hours(make_raw(exit_instant=None)) == Decimal("0")


class TestNormalize:
    """Test normalize()."""

    def test_clock_extra_hours(self):
        """Test "01:30" counts as 1.5 extra hours."""
        normalized = normalize(make_raw(extra_duration="01:30"))
        assert normalized.extra_hours_decimal == Decimal("1.5")
        assert normalized.extra_hours_formatted == "01:30"

    def test_decimal_extra_hours_passthrough(self):
        normalized = normalize(make_raw(extra_duration=2.25))
        assert normalized.extra_hours_decimal == Decimal("2.25")
        assert normalized.extra_hours_formatted == "02:15"

    def test_absent_extra_hours(self):
        normalized = normalize(make_raw())
        assert normalized.extra_hours_decimal == Decimal("0")
        assert normalized.extra_hours_formatted == "00:00"
        assert normalized.adjustments == ()

    def test_total_pay(self):
        """Test daily 100 plus 1.5 extra hours at 20 is 130.00."""
        normalized = normalize(
            make_raw(extra_duration="01:30", extra_rate=Decimal("20"))
        )
        assert normalized.total_pay == Decimal("130.00")
        assert str(normalized.total_pay) == "130.00"

    def test_total_hours_adds_extra_hours(self):
        normalized = normalize(make_raw(extra_duration="01:30"))
        assert normalized.total_hours == Decimal("10")

    def test_total_hours_keeps_full_precision(self):
        raw = make_raw(
            entry_instant=dt.datetime(2025, 11, 3, 9, 0),
            exit_instant=dt.datetime(2025, 11, 3, 9, 20),
        )
        normalized = normalize(raw)
        assert normalized.total_hours != normalized.display_total_hours
        assert normalized.display_total_hours == Decimal("0.33")

    def test_open_shift_still_earns_daily_rate(self):
        normalized = normalize(make_raw(exit_instant=None))
        assert normalized.worked_hours == Decimal("0")
        assert normalized.total_pay == Decimal("100.00")

    def test_malformed_extra_hours_default_to_zero(self):
        """Test that bad extra time counts as 00:00 and is recorded."""
        normalized = normalize(
            make_raw(extra_duration="1:75", extra_rate=Decimal("20"))
        )
        assert normalized.extra_hours_decimal == Decimal("0")
        assert normalized.extra_hours_formatted == "00:00"
        assert normalized.total_pay == Decimal("100.00")
        assert normalized.has_adjustments
        assert "1:75" in normalized.adjustments[0].message

    def test_nan_rates_are_zero(self):
        normalized = normalize(
            make_raw(
                daily_rate=float("nan"),
                extra_duration="01:00",
                extra_rate=float("nan"),
            )
        )
        assert normalized.total_pay == Decimal("0.00")

    @pytest.mark.parametrize("rate", [-30, "-5", "abc", True, [30]])
    def test_unusable_extra_rate_defaults_to_zero(self, rate):
        """Test a bad extra rate keeps the shift and its daily rate."""
        normalized = normalize(make_raw(extra_duration="01:00", extra_rate=rate))

        assert normalized.extra_rate == Decimal("0")
        assert normalized.total_pay == Decimal("100.00")
        assert [a.field for a in normalized.adjustments] == ["extra_rate"]

    def test_renormalizing_keeps_adjustments_once(self):
        once = normalize(make_raw(extra_duration="soon", extra_rate=-30))
        twice = normalize(once)

        assert [a.field for a in once.adjustments] == ["extra_rate", "extra_duration"]
        assert twice == once

    def test_idempotent(self):
        """Test that normalizing a normalized entry gives an equal result."""
        once = normalize(make_raw(extra_duration="01:30", extra_rate=Decimal("20")))
        twice = normalize(once)
        assert twice == once

    def test_raw_fields_are_kept(self):
        raw = make_raw(notes="Inventory")
        normalized = normalize(raw)
        assert normalized.raw_fields() == raw.model_dump()


class TestNormalizeRecord:
    """Test normalize_record() on store records."""

    def test_store_record(self):
        normalized = normalize_record(
            {
                "_id": "e-9",
                "employee": {"_id": "emp-1", "name": "Ana"},
                "date": "2025-11-03",
                "entryTime": "09:00",
                "exitTime": "17:30",
                "dailyRate": 100,
                "extraHoursFormatted": "01:30",
                "extraHoursRate": 20,
            }
        )
        assert normalized.worked_hours == Decimal("8.5")
        assert normalized.total_pay == Decimal("130.00")

    def test_missing_entry_time_raises(self):
        with pytest.raises(EntryValidationError) as exc_info:
            normalize_record(
                {
                    "_id": "e-9",
                    "employee": "emp-1",
                    "date": "2025-11-03",
                    "dailyRate": 100,
                }
            )
        assert exc_info.value.entry_id == "e-9"
        assert "entry_instant" in exc_info.value.fields


class TestNormalizeBatch:
    """Test batch normalization with partial failures."""

    def test_bad_record_is_skipped_not_fatal(self):
        records = [
            {"_id": "bad", "employee": "emp-1", "date": "not a date", "dailyRate": 1},
            make_raw(id="good"),
        ]

        batch = normalize_batch(records)

        assert [e.id for e in batch.entries] == ["good"]
        assert batch.skipped == 1
        assert batch.warnings.error_count >= 1
        assert all(
            issue.context["entry_id"] == "bad" for issue in batch.warnings.get_errors()
        )

    def test_adjustments_become_warnings(self):
        batch = normalize_batch([make_raw(extra_duration="soon")])

        assert len(batch.entries) == 1
        warnings = batch.warnings.get_warnings()
        assert len(warnings) == 1
        assert warnings[0].severity == ValidationSeverity.WARNING
        assert warnings[0].context == {"entry_id": "e-1", "employee_id": "emp-1"}

    def test_negative_extra_rate_record_is_kept_with_warning(self):
        record = {
            "_id": "e-7",
            "employee": {"_id": "emp-1", "name": "Ana"},
            "date": "2025-11-03",
            "entryTime": "09:00",
            "exitTime": "17:00",
            "dailyRate": 150,
            "extraHoursFormatted": "01:00",
            "extraHoursRate": -30,
        }

        batch = normalize_batch([record])

        assert batch.skipped == 0
        assert batch.entries[0].total_pay == Decimal("150.00")
        warnings = batch.warnings.get_warnings()
        assert [(w.field, w.value) for w in warnings] == [("extra_rate", -30)]

    def test_excluded_entries_add_no_warnings(self):
        batch = normalize_batch(
            [make_raw(id="kept"), make_raw(id="dropped", extra_duration="soon")],
            include=lambda entry: entry.id == "kept",
        )

        assert [e.id for e in batch.entries] == ["kept"]
        assert len(batch.warnings) == 0


class TestPreviewTotals:
    """Test previewing an unsubmitted entry."""

    def test_preview(self):
        draft = TimeEntryDraft(
            employee_id="emp-1",
            date=dt.date(2025, 11, 3),
            entry_time=dt.time(9, 0),
            exit_time=dt.time(17, 30),
            daily_rate=Decimal("100"),
            extra_hours="01:30",
            extra_rate=Decimal("20"),
        )

        preview = preview_totals(draft)

        assert preview.worked_hours == Decimal("8.50")
        assert preview.extra_hours == Decimal("1.50")
        assert preview.total_hours == Decimal("10.00")
        assert preview.total_pay == Decimal("130.00")
        assert preview.extra_hours_formatted == "01:30"

    def test_preview_open_shift(self):
        draft = TimeEntryDraft(
            employee_id="emp-1",
            date=dt.date(2025, 11, 3),
            entry_time=dt.time(9, 0),
            daily_rate=Decimal("100"),
        )
        preview = preview_totals(draft)
        assert preview.worked_hours == Decimal("0.00")
        assert preview.total_pay == Decimal("100.00")
