"""
Unit tests for ReportTableGenerator.
"""

import datetime as dt

import pytest

from timekeeper.aggregators.report_aggregator import aggregate
from timekeeper.config import TimekeeperConfig
from timekeeper.models.report import DateRange
from timekeeper.writers.report_table_generator import (
    DETAIL_COLUMNS,
    GRAND_TOTAL_LABEL,
    SUMMARY_COLUMNS,
    ReportTableGenerator,
)


@pytest.fixture
def result(sample_records, november_2025):
    """Aggregation of the sample records for November 2025."""
    return aggregate(sample_records, DateRange(*november_2025))


class TestReportTableGenerator:
    """Test cases for ReportTableGenerator."""

    def test_detail_layout(self, result):
        tables = ReportTableGenerator(result).generate()

        assert list(tables.details.columns) == DETAIL_COLUMNS
        assert tables.details["Employee"].tolist() == [
            "Ana",
            "Ana",
            "Ana",
            "Total Ana",
            "Bruno",
            "Bruno",
            "Total Bruno",
        ]
        assert tables.heading_rows == [0, 4]
        assert tables.total_rows == [3, 6]

    def test_entry_row(self, result):
        details = ReportTableGenerator(result).generate().details

        row = details.iloc[1]
        assert row["Date"] == "03/11/2025"
        assert row["Entry"] == "09:00"
        assert row["Exit"] == "17:00"
        assert row["Total Hours"] == "9,00"
        assert row["Extra Hours"] == "01:00"
        assert row["Notes"] == "Inventory"
        assert row["Total Pay"] == "R$ 180,00"
        assert row["Status"] == "Approved"

    def test_overnight_entry_row(self, result):
        row = ReportTableGenerator(result).generate().details.iloc[5]

        assert row["Entry"] == "22:00"
        assert row["Exit"] == "02:00"
        assert row["Total Hours"] == "4,00"
        assert row["Notes"] == ""
        assert row["Status"] == "Pending"

    def test_heading_row_is_blank_apart_from_name(self, result):
        row = ReportTableGenerator(result).generate().details.iloc[0]
        assert [row[c] for c in DETAIL_COLUMNS[1:]] == [""] * (len(DETAIL_COLUMNS) - 1)

    def test_total_row(self, result):
        row = ReportTableGenerator(result).generate().details.iloc[3]

        assert row["Date"] == "2 day(s)"
        assert row["Total Hours"] == "17,00"
        assert row["Extra Hours"] == "01:00"
        assert row["Total Pay"] == "R$ 330,00"

    def test_summary(self, result):
        summary = ReportTableGenerator(result).generate().summary

        assert list(summary.columns) == SUMMARY_COLUMNS
        assert summary["Employee"].tolist() == ["Ana", "Bruno", GRAND_TOTAL_LABEL]
        grand = summary.iloc[-1]
        assert grand["Days Worked"] == 3
        assert grand["Regular Hours"] == "20,00"
        assert grand["Extra Hours"] == "1,00"
        assert grand["Total Hours"] == "21,00"
        assert grand["Total Pay"] == "R$ 430,00"

    def test_custom_formatting(self, result):
        generator = ReportTableGenerator(
            result,
            currency_symbol="$",
            date_format="%Y-%m-%d",
            decimal_separator=".",
            thousands_separator=",",
        )

        row = generator.generate().details.iloc[1]

        assert row["Date"] == "2025-11-03"
        assert row["Total Hours"] == "9.00"
        assert row["Total Pay"] == "$ 180.00"

    def test_from_config(self, result):
        config = TimekeeperConfig(REPORT_CURRENCY_SYMBOL="EUR")

        summary = ReportTableGenerator.from_config(result, config).generate().summary

        assert summary.iloc[0]["Total Pay"] == "EUR 330,00"

    def test_empty_result(self):
        empty = aggregate([], DateRange(dt.date(2025, 1, 1), dt.date(2025, 1, 31)))

        tables = ReportTableGenerator(empty).generate()

        assert tables.details.empty
        assert list(tables.details.columns) == DETAIL_COLUMNS
        assert tables.summary.empty
        assert list(tables.summary.columns) == SUMMARY_COLUMNS
