"""Time entry reader for converting store records into RawTimeEntry models.

This is the boundary of the engine: records arrive from the time-entry
store as loosely typed mappings (camelCase keys, wrapped identifiers,
ISO strings, upper-case states) and leave as validated RawTimeEntry
objects. Records that lack required identity or timestamp fields are
rejected with an EntryValidationError; optional fields are passed through
for the normalizer to canonicalize.
"""

import datetime as dt
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from timekeeper.models.time_entry import ApprovalState, EmployeeRef, RawTimeEntry
from timekeeper.readers.date_values import (
    canonicalize_identifier,
    parse_calendar_date,
    parse_instant,
)
from timekeeper.validators.errors import EntryValidationError
from timekeeper.validators.validation_report import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
)

logger = logging.getLogger(__name__)

_MISSING = object()


class TimeEntryReader:
    """Reader for time-entry records as returned by the store.

    Field aliases understood (first match wins):

    - id: ``_id``, ``id``
    - employee: ``employee`` (id string or object), ``employeeId``
    - employee name: ``employee.name``, ``employee.firstName/lastName``,
      ``employeeName``, then the employee directory
    - date: ``date``
    - entry: ``entryTime``, ``entryInstant``
    - exit: ``exitTime``, ``exitInstant``
    - daily rate: ``dailyRate``
    - extra time: ``extraHoursFormatted`` (unless "00:00"), ``extraDuration``,
      ``extraHours``
    - extra rate: ``extraHoursRate``, ``extraRate``
    - state: ``status``, ``approvalState``

    Attributes:
        directory: Optional employee id -> name mapping supplied by the caller

    Example:
        >>> reader = TimeEntryReader(directory={"emp-1": "Ana"})
        >>> entry = reader.read_record({
        ...     "_id": "e-1",
        ...     "employee": "emp-1",
        ...     "date": "2025-11-03T00:00:00.000Z",
        ...     "entryTime": "2025-11-03T09:00:00.000Z",
        ...     "exitTime": "2025-11-03T17:00:00.000Z",
        ...     "dailyRate": 150,
        ...     "extraHoursFormatted": "01:00",
        ...     "extraHoursRate": 30,
        ...     "status": "APPROVED",
        ... })
        >>> entry.employee.name
        'Ana'
    """

    def __init__(self, directory: Optional[Mapping[str, str]] = None):
        """Initialize the reader.

        Args:
            directory: Optional mapping of employee id to display name, used
                when a record only carries the employee id
        """
        self.directory: Dict[str, str] = dict(directory or {})

    def read_record(self, record: Mapping[str, Any]) -> RawTimeEntry:
        """Convert a single store record into a RawTimeEntry.

        Args:
            record: Record as returned by the store

        Returns:
            Validated RawTimeEntry

        Raises:
            EntryValidationError: If required fields are missing or unreadable
        """
        if isinstance(record, RawTimeEntry):
            return record
        if not isinstance(record, Mapping):
            raise EntryValidationError(
                f"Expected a mapping, got {type(record).__name__}",
                issues=[
                    ValidationIssue(
                        severity=ValidationSeverity.ERROR,
                        field="record",
                        message=f"Expected a mapping, got {type(record).__name__}",
                        value=record,
                    )
                ],
            )

        report = ValidationReport()
        entry_id = canonicalize_identifier(_first(record, "_id", "id"))
        employee_id = self.read_employee_id(record)
        context = {"entry_id": entry_id, "employee_id": employee_id}

        if entry_id is None:
            report.add_error("id", "Entry identifier is required", None, context)

        employee: Optional[EmployeeRef] = None
        if employee_id is None:
            report.add_error(
                "employee",
                "Employee reference is required",
                record.get("employee", record.get("employeeId")),
                context,
            )
        else:
            employee = EmployeeRef(
                id=employee_id, name=self._read_employee_name(record, employee_id)
            )

        date = self._read_date(record, report, context)
        entry_instant = self._read_instant(
            record,
            ("entryTime", "entryInstant"),
            "entry_instant",
            date,
            report,
            context,
            required=True,
        )
        exit_instant = self._read_instant(
            record,
            ("exitTime", "exitInstant"),
            "exit_instant",
            date,
            report,
            context,
            required=False,
        )
        daily_rate = self._read_daily_rate(record, report, context)

        if report.has_errors():
            raise EntryValidationError(
                f"Entry {entry_id or '<unknown>'} rejected: "
                + "; ".join(issue.message for issue in report.get_errors()),
                entry_id=entry_id,
                issues=report.get_errors(),
            )

        try:
            return RawTimeEntry(
                id=entry_id,
                employee=employee,
                date=date,
                entry_instant=entry_instant,
                exit_instant=exit_instant,
                daily_rate=daily_rate,
                extra_duration=self._read_extra_duration(record),
                extra_rate=_first(record, "extraHoursRate", "extraRate", default=None),
                notes=record.get("notes"),
                approval_state=self._read_state(record),
            )
        except ValidationError as e:
            issues = [
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    field=".".join(str(part) for part in error["loc"]) or "record",
                    message=error["msg"],
                    value=error.get("input"),
                    context=context,
                )
                for error in e.errors()
            ]
            raise EntryValidationError(
                f"Entry {entry_id} rejected: "
                + "; ".join(issue.message for issue in issues),
                entry_id=entry_id,
                issues=issues,
            ) from e

    def read_records(
        self, records: Iterable[Mapping[str, Any]]
    ) -> Tuple[List[RawTimeEntry], ValidationReport]:
        """Read many records, skipping the ones that cannot be read.

        Args:
            records: Records as returned by the store

        Returns:
            Tuple of (readable entries, report with one ERROR per skipped field)
        """
        entries: List[RawTimeEntry] = []
        report = ValidationReport()

        for record in records:
            try:
                entries.append(self.read_record(record))
            except EntryValidationError as e:
                logger.warning(f"Skipping time entry: {e}")
                for issue in e.issues:
                    report.add_issue(issue)

        logger.debug(
            f"Read {len(entries)} time entries, skipped {report.error_count} issue(s)"
        )
        return entries, report

    def read_employee_id(self, record: Mapping[str, Any]) -> Optional[str]:
        """Employee id of a store record, or None if it has none."""
        employee = record.get("employee")
        if employee is not None:
            employee_id = canonicalize_identifier(employee)
            if employee_id:
                return employee_id
        return canonicalize_identifier(record.get("employeeId"))

    def _read_employee_name(self, record: Mapping[str, Any], employee_id: str) -> str:
        employee = record.get("employee")
        if isinstance(employee, Mapping):
            name = employee.get("name")
            if isinstance(name, str) and name.strip():
                return name.strip()
            full_name = " ".join(
                str(employee.get(key) or "").strip()
                for key in ("firstName", "lastName")
            ).strip()
            if full_name:
                return full_name

        name = record.get("employeeName")
        if isinstance(name, str) and name.strip():
            return name.strip()

        if employee_id in self.directory:
            return self.directory[employee_id]

        # Short label for staff missing from the directory
        return f"Employee {employee_id[-6:]}"

    def _read_date(
        self,
        record: Mapping[str, Any],
        report: ValidationReport,
        context: Dict[str, Any],
    ) -> Optional[dt.date]:
        raw = record.get("date")
        if raw is None or raw == "":
            report.add_error("date", "Date is required", raw, context)
            return None
        try:
            return parse_calendar_date(raw)
        except ValueError as e:
            report.add_error("date", f"Unparsable date: {e}", raw, context)
            return None

    def _read_instant(
        self,
        record: Mapping[str, Any],
        keys: Tuple[str, ...],
        field: str,
        date: Optional[dt.date],
        report: ValidationReport,
        context: Dict[str, Any],
        required: bool,
    ) -> Optional[dt.datetime]:
        raw = _first(record, *keys, default=None)
        if raw is None or raw == "":
            if required:
                report.add_error(field, "Timestamp is required", raw, context)
            return None
        try:
            return parse_instant(raw, on_date=date)
        except ValueError as e:
            if required:
                report.add_error(field, f"Unparsable timestamp: {e}", raw, context)
                return None
            # An unreadable clock-out is treated like an open shift
            logger.debug(f"Ignoring unreadable {field} {raw!r}: {e}")
            return None

    def _read_daily_rate(
        self,
        record: Mapping[str, Any],
        report: ValidationReport,
        context: Dict[str, Any],
    ) -> Optional[Any]:
        raw = record.get("dailyRate")
        if raw is None or raw == "":
            report.add_error("daily_rate", "Daily rate is required", raw, context)
            return None
        if isinstance(raw, (int, float, Decimal)) and not isinstance(raw, bool):
            return raw
        try:
            return Decimal(str(raw).strip().replace(",", "."))
        except InvalidOperation:
            report.add_error("daily_rate", "Daily rate is not a number", raw, context)
            return None

    def _read_extra_duration(self, record: Mapping[str, Any]) -> Any:
        formatted = record.get("extraHoursFormatted")
        if isinstance(formatted, str) and formatted.strip() not in ("", "00:00"):
            return formatted
        for key in ("extraDuration", "extraHours"):
            value = record.get(key)
            if value is not None and value != "":
                return value
        return formatted

    def _read_state(self, record: Mapping[str, Any]) -> ApprovalState:
        raw = _first(record, "status", "approvalState", default=None)
        if raw is None:
            return ApprovalState.PENDING
        try:
            return ApprovalState(raw)
        except ValueError:
            logger.debug(f"Unknown approval state {raw!r}, using pending")
            return ApprovalState.PENDING


def _first(record: Mapping[str, Any], *keys: str, default: Any = _MISSING) -> Any:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return None if default is _MISSING else default
