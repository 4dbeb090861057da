"""Report table generator for creating export-ready DataFrames.

This module lays out an AggregationResult as the tables that go into an
exported document: a detail table with, per employee, a heading row, the
employee's entries and a total row, and a summary table with one line per
employee plus a grand total.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

import pandas as pd

from timekeeper.aggregators.report_aggregator import AggregationResult
from timekeeper.models.report import EmployeeReport, ReportTotals
from timekeeper.models.time_entry import NormalizedTimeEntry
from timekeeper.utils.formatting import (
    format_currency,
    format_date,
    format_decimal,
    format_hours_clock,
    format_status,
    format_time_of_day,
)

DETAIL_COLUMNS = [
    "Employee",
    "Date",
    "Entry",
    "Exit",
    "Total Hours",
    "Extra Hours",
    "Notes",
    "Total Pay",
    "Status",
]

SUMMARY_COLUMNS = [
    "Employee",
    "Days Worked",
    "Regular Hours",
    "Extra Hours",
    "Total Hours",
    "Total Pay",
]

GRAND_TOTAL_LABEL = "Grand Total"


@dataclass
class ReportTables:
    """Container for the export tables.

    Attributes:
        details: Per-employee heading, entry and total rows
        summary: One row per employee followed by the grand total
        heading_rows: Row positions in ``details`` holding employee headings
        total_rows: Row positions in ``details`` holding employee totals
    """

    details: pd.DataFrame
    summary: pd.DataFrame
    heading_rows: List[int] = field(default_factory=list)
    total_rows: List[int] = field(default_factory=list)


class ReportTableGenerator:
    """Generate export tables from an aggregation result.

    All cells are display strings, formatted the same way the CLI shows
    them: dates with ``date_format``, times as "HH:MM", hours with 2 decimal
    places and money with the currency symbol and separators.

    Example:
        >>> tables = ReportTableGenerator(result).generate()
        >>> list(tables.details.columns)[:3]
        ['Employee', 'Date', 'Entry']
        >>> tables.summary["Employee"].iloc[-1]
        'Grand Total'
    """

    def __init__(
        self,
        result: AggregationResult,
        currency_symbol: str = "R$",
        date_format: str = "%d/%m/%Y",
        decimal_separator: str = ",",
        thousands_separator: str = ".",
    ):
        """Initialize with an aggregation result.

        Args:
            result: Output of the report aggregator
            currency_symbol: Prefix for money cells
            date_format: strftime format for dates
            decimal_separator: Decimal mark for hours and money
            thousands_separator: Grouping mark for money
        """
        self.result = result
        self.currency_symbol = currency_symbol
        self.date_format = date_format
        self.decimal_separator = decimal_separator
        self.thousands_separator = thousands_separator

    @classmethod
    def from_config(
        cls, result: AggregationResult, config: Any
    ) -> "ReportTableGenerator":
        return cls(
            result,
            currency_symbol=config.currency_symbol,
            date_format=config.date_format,
            decimal_separator=config.decimal_separator,
            thousands_separator=config.thousands_separator,
        )

    def generate(self) -> ReportTables:
        """Generate the detail and summary tables."""
        details, heading_rows, total_rows = self._generate_details()
        return ReportTables(
            details=details,
            summary=self._generate_summary(),
            heading_rows=heading_rows,
            total_rows=total_rows,
        )

    def _generate_details(self):
        rows: List[Dict[str, str]] = []
        heading_rows: List[int] = []
        total_rows: List[int] = []

        for report in self.result.reports:
            heading_rows.append(len(rows))
            rows.append(self._heading_row(report))
            for entry in report.entries:
                rows.append(self._entry_row(entry))
            total_rows.append(len(rows))
            rows.append(self._total_row(report))

        if not rows:
            return pd.DataFrame(columns=DETAIL_COLUMNS), heading_rows, total_rows
        return pd.DataFrame(rows, columns=DETAIL_COLUMNS), heading_rows, total_rows

    def _generate_summary(self) -> pd.DataFrame:
        rows = [
            self._summary_row(report.employee_name, report.totals)
            for report in self.result.reports
        ]
        if rows:
            rows.append(self._summary_row(GRAND_TOTAL_LABEL, self.result.grand_totals))
        return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)

    def _heading_row(self, report: EmployeeReport) -> Dict[str, str]:
        row = {column: "" for column in DETAIL_COLUMNS}
        row["Employee"] = report.employee_name
        return row

    def _entry_row(self, entry: NormalizedTimeEntry) -> Dict[str, str]:
        return {
            "Employee": entry.employee.name,
            "Date": format_date(entry.date, self.date_format),
            "Entry": format_time_of_day(entry.entry_instant),
            "Exit": format_time_of_day(entry.exit_instant),
            "Total Hours": self._hours(entry.display_total_hours),
            "Extra Hours": entry.extra_hours_formatted,
            "Notes": entry.notes or "",
            "Total Pay": self._money(entry.total_pay),
            "Status": format_status(entry.approval_state),
        }

    def _total_row(self, report: EmployeeReport) -> Dict[str, str]:
        totals = report.totals
        row = {column: "" for column in DETAIL_COLUMNS}
        row.update(
            {
                "Employee": f"Total {report.employee_name}",
                "Date": f"{totals.days_worked} day(s)",
                "Total Hours": self._hours(totals.total_hours),
                "Extra Hours": format_hours_clock(totals.total_extra_hours),
                "Total Pay": self._money(totals.total_pay),
            }
        )
        return row

    def _summary_row(self, label: str, totals: ReportTotals) -> Dict[str, Any]:
        return {
            "Employee": label,
            "Days Worked": totals.days_worked,
            "Regular Hours": self._hours(totals.total_regular_hours),
            "Extra Hours": self._hours(totals.total_extra_hours),
            "Total Hours": self._hours(totals.total_hours),
            "Total Pay": self._money(totals.total_pay),
        }

    def _hours(self, value: Any) -> str:
        return format_decimal(value).replace(".", self.decimal_separator)

    def _money(self, value: Any) -> str:
        return format_currency(
            value,
            symbol=self.currency_symbol,
            decimal_separator=self.decimal_separator,
            thousands_separator=self.thousands_separator,
        )
