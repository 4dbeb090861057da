"""Report aggregator for per-employee time entry summaries.

This module groups normalized entries by employee over an inclusive date
range and computes per-employee and grand totals for on-screen summaries
and document export.

The aggregator:
1. Reads and normalizes any entries that are not normalized yet
2. Filters to the inclusive date range (whole calendar days) and, optionally,
   a single employee, before collecting diagnostics
3. Records ERROR issues for unreadable entries and WARNING issues for kept
   entries that had defaults applied
4. Groups by employee id, dropping empty groups
5. Sorts each group by date, then clock-in time
6. Sums totals at full precision and rounds once
7. Sorts the reports by employee name (case- and accent-insensitive)

It is stateless: the same inputs always produce the same output.
"""

import datetime as dt
import logging
import unicodedata
from collections import OrderedDict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from timekeeper.calculators.normalizer import EntryInput, normalize_batch
from timekeeper.calculators.time_utils import round_currency, round_hours
from timekeeper.models.report import DateRange, EmployeeReport, ReportTotals
from timekeeper.models.time_entry import EmployeeRef, NormalizedTimeEntry
from timekeeper.readers.time_entry_reader import TimeEntryReader
from timekeeper.validators.validation_report import ValidationReport

logger = logging.getLogger(__name__)

RangeInput = Union[DateRange, Tuple[dt.date, dt.date]]


@dataclass
class AggregationResult:
    """Container for an aggregated report request.

    Attributes:
        reports: One EmployeeReport per employee with entries in range,
            sorted by employee name
        warnings: Diagnostics for excluded entries (ERROR) and entries kept
            with defaults applied (WARNING)
        date_range: The requested range
        grand_totals: Totals across every report
        skipped: Number of entries excluded because they could not be read

    Example:
        >>> result = aggregate(entries, DateRange(start, end))
        >>> [r.employee.name for r in result.reports]
        ['Ana', 'Bruno']
    """

    reports: List[EmployeeReport]
    warnings: ValidationReport
    date_range: DateRange
    grand_totals: ReportTotals = field(default_factory=ReportTotals.empty)
    skipped: int = 0

    @property
    def entries(self) -> List[NormalizedTimeEntry]:
        """All entries in report order (employee name, then date)."""
        return [entry for report in self.reports for entry in report.entries]

    def is_empty(self) -> bool:
        return not self.reports

    def report_for(self, employee_id: str) -> Optional[EmployeeReport]:
        for report in self.reports:
            if report.employee.id == employee_id:
                return report
        return None


def calculate_totals(entries: Iterable[NormalizedTimeEntry]) -> ReportTotals:
    """Sum entry values at full precision and round each total once.

    Args:
        entries: Normalized entries to total

    Returns:
        ReportTotals with hours and pay rounded to 2 decimal places

    Example:
        >>> totals = calculate_totals(ana_entries)
        >>> totals.days_worked, totals.total_hours
        (2, Decimal('17.00'))
    """
    days_worked = 0
    regular_hours = Decimal("0")
    extra_hours = Decimal("0")
    total_hours = Decimal("0")
    total_pay = Decimal("0")

    for entry in entries:
        days_worked += 1
        regular_hours += entry.worked_hours
        extra_hours += entry.extra_hours_decimal
        total_hours += entry.total_hours
        total_pay += entry.total_pay

    return ReportTotals(
        days_worked=days_worked,
        total_regular_hours=round_hours(regular_hours),
        total_extra_hours=round_hours(extra_hours),
        total_hours=round_hours(total_hours),
        total_pay=round_currency(total_pay),
    )


def employee_sort_key(employee: EmployeeRef) -> Tuple[str, str, str]:
    """Deterministic, case- and accent-insensitive ordering key.

    "álvaro", "Alvaro" and "ALVARO" sort together; ties fall back to the
    exact name and then the employee id so the order never depends on
    input order or on the process locale.
    """
    decomposed = unicodedata.normalize("NFKD", employee.name)
    folded = "".join(c for c in decomposed if not unicodedata.combining(c))
    return folded.casefold(), employee.name, employee.id


def entry_sort_key(entry: NormalizedTimeEntry) -> Tuple[dt.date, dt.datetime]:
    # Wall-clock comparison; mixing aware and naive datetimes must not fail
    return entry.date, entry.entry_instant.replace(tzinfo=None)


def aggregate(
    entries: Iterable[EntryInput],
    date_range: RangeInput,
    employee_id: Optional[str] = None,
    reader: Optional[TimeEntryReader] = None,
) -> AggregationResult:
    """Group entries by employee within a date range and compute totals.

    Args:
        entries: Normalized entries, raw entries or store records in any mix
        date_range: DateRange, or a (start, end) tuple of calendar days
        employee_id: Only include this employee (optional)
        reader: Reader used for store records (default: no directory)

    Returns:
        AggregationResult with the employee reports and diagnostics

    Raises:
        DateRangeError: If the range starts after it ends; raised before any
            entry is looked at
    """
    if not isinstance(date_range, DateRange):
        date_range = DateRange(*date_range)

    logger.info(f"Aggregating time entries for {date_range}")
    if employee_id:
        logger.info(f"Employee filter: {employee_id}")

    wanted = employee_id.strip() if employee_id else None

    def include(entry: NormalizedTimeEntry) -> bool:
        if not date_range.contains(entry.date):
            return False
        return wanted is None or entry.employee.id == wanted

    # Entries outside the request are dropped before their adjustments count
    batch = normalize_batch(entries, reader, include=include)
    warnings = batch.warnings
    in_range = batch.entries
    scope = f"{date_range}, employee '{wanted}'" if wanted else str(date_range)
    logger.debug(f"Filtered to {scope}: {len(in_range)} entries remaining")

    groups: Dict[str, List[NormalizedTimeEntry]] = OrderedDict()
    for entry in in_range:
        groups.setdefault(entry.employee.id, []).append(entry)

    reports: List[EmployeeReport] = []
    for group in groups.values():
        ordered = sorted(group, key=entry_sort_key)
        reports.append(
            EmployeeReport(
                employee=ordered[0].employee,
                entries=ordered,
                totals=calculate_totals(ordered),
            )
        )

    reports.sort(key=lambda report: employee_sort_key(report.employee))

    result = AggregationResult(
        reports=reports,
        warnings=warnings,
        date_range=date_range,
        grand_totals=calculate_totals(in_range),
        skipped=batch.skipped,
    )

    logger.info(
        f"Aggregation complete: {len(reports)} employee(s), "
        f"{len(in_range)} entries, {batch.skipped} skipped"
    )
    return result


class ReportAggregator:
    """Aggregates time entries into per-employee reports.

    A thin object wrapper around :func:`aggregate` holding the one piece of
    caller-supplied context the aggregation can use: an employee directory
    for naming employees whose records only carry an id. It keeps no state
    between calls.

    Example:
        >>> aggregator = ReportAggregator(directory={"emp-1": "Ana"})
        >>> result = aggregator.aggregate(
        ...     records,
        ...     start_date=dt.date(2025, 11, 1),
        ...     end_date=dt.date(2025, 11, 30),
        ... )
        >>> result.reports[0].totals.days_worked
        2
    """

    def __init__(self, directory: Optional[Mapping[str, str]] = None):
        """Initialize the aggregator.

        Args:
            directory: Optional employee id -> name mapping
        """
        self.directory: Dict[str, str] = dict(directory or {})

    def aggregate(
        self,
        entries: Iterable[EntryInput],
        start_date: dt.date,
        end_date: dt.date,
        employee_id: Optional[str] = None,
    ) -> AggregationResult:
        """Aggregate entries for an inclusive date range.

        Args:
            entries: Normalized entries, raw entries or store records
            start_date: First day of the range (inclusive)
            end_date: Last day of the range (inclusive)
            employee_id: Only include this employee (optional)

        Returns:
            AggregationResult

        Raises:
            DateRangeError: If start_date is after end_date
        """
        date_range = DateRange(start_date, end_date)
        reader = TimeEntryReader(directory=self.directory)
        return aggregate(entries, date_range, employee_id=employee_id, reader=reader)
