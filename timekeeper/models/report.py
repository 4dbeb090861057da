"""Report data structures produced by the report aggregator.

These are created per report request and discarded after rendering or
export; nothing here is persisted.
"""

import datetime as dt
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Union

from timekeeper.models.time_entry import EmployeeRef, NormalizedTimeEntry
from timekeeper.validators.errors import DateRangeError


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar-day window for fetching and aggregating entries.

    Attributes:
        start: First calendar day of the range
        end: Last calendar day of the range

    Raises:
        DateRangeError: If start is after end

    Example:
        >>> period = DateRange(dt.date(2025, 11, 1), dt.date(2025, 11, 30))
        >>> period.contains(dt.date(2025, 11, 30))
        True
        >>> period.end_instant
        datetime.datetime(2025, 11, 30, 23, 59, 59, 999000)
    """

    start: dt.date
    end: dt.date

    def __post_init__(self) -> None:
        if isinstance(self.start, dt.datetime) or isinstance(self.end, dt.datetime):
            # Bounds are calendar days, drop any time-of-day
            object.__setattr__(self, "start", _as_date(self.start))
            object.__setattr__(self, "end", _as_date(self.end))
        if self.start > self.end:
            raise DateRangeError(
                f"Invalid date range: start ({self.start}) is after end ({self.end})"
            )

    @property
    def start_instant(self) -> dt.datetime:
        """00:00:00.000 of the first day."""
        return dt.datetime.combine(self.start, dt.time.min)

    @property
    def end_instant(self) -> dt.datetime:
        """23:59:59.999 of the last day."""
        return dt.datetime.combine(self.end, dt.time(23, 59, 59, 999000))

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def contains(self, value: Union[dt.date, dt.datetime]) -> bool:
        """Check whether a calendar day or instant falls inside the range.

        Args:
            value: Date or datetime to check; datetimes are compared by their
                own calendar day

        Returns:
            True if the value is within [start, end]
        """
        return self.start <= _as_date(value) <= self.end

    def __str__(self) -> str:
        return f"{self.start.isoformat()} to {self.end.isoformat()}"


def _as_date(value: Union[dt.date, dt.datetime]) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class ReportTotals:
    """Totals for a group of normalized entries.

    Hour and money values are rounded to 2 decimal places once, after
    summing at full precision.

    Attributes:
        days_worked: Number of entries
        total_regular_hours: Sum of worked hours
        total_extra_hours: Sum of extra hours
        total_hours: Sum of total hours
        total_pay: Sum of total pay
    """

    days_worked: int
    total_regular_hours: Decimal
    total_extra_hours: Decimal
    total_hours: Decimal
    total_pay: Decimal

    @classmethod
    def empty(cls) -> "ReportTotals":
        return cls(
            days_worked=0,
            total_regular_hours=Decimal("0.00"),
            total_extra_hours=Decimal("0.00"),
            total_hours=Decimal("0.00"),
            total_pay=Decimal("0.00"),
        )


@dataclass
class EmployeeReport:
    """Entries and totals for one employee within a report range.

    Attributes:
        employee: Employee identity
        entries: Entries sorted ascending by date, then entry instant
        totals: Totals over ``entries``
    """

    employee: EmployeeRef
    entries: List[NormalizedTimeEntry] = field(default_factory=list)
    totals: ReportTotals = field(default_factory=ReportTotals.empty)

    @property
    def employee_id(self) -> str:
        return self.employee.id

    @property
    def employee_name(self) -> str:
        return self.employee.name
