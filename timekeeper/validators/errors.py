"""Exceptions raised by the time-accounting engine.

Two kinds of failure are raised: structurally invalid entries that cannot
be normalized at all, and inverted report ranges. Soft data-quality issues
are never raised; they are recorded in a ValidationReport instead.
"""

from typing import List, Optional

from timekeeper.validators.validation_report import ValidationIssue


class EntryValidationError(ValueError):
    """Raised when a raw entry is missing required identity or timestamp fields.

    Attributes:
        entry_id: Identifier of the rejected entry, if it had one
        issues: Field-level issues that caused the rejection
    """

    def __init__(
        self,
        message: str,
        entry_id: Optional[str] = None,
        issues: Optional[List[ValidationIssue]] = None,
    ):
        self.entry_id = entry_id
        self.issues = list(issues or [])
        super().__init__(message)

    @property
    def fields(self) -> List[str]:
        return [issue.field for issue in self.issues]


class DateRangeError(ValueError):
    """Raised when a report range starts after it ends."""
