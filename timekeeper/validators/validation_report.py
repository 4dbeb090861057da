"""Diagnostics collected while reading and normalizing time entries.

Normalization and aggregation never abort on a single bad record. Instead
they record what happened here: ERROR issues for entries that were
excluded, WARNING issues for entries that were kept with defaults applied.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, List, Optional


class ValidationSeverity(IntEnum):
    """How an issue affected its entry."""

    WARNING = 2
    ERROR = 3


@dataclass
class ValidationIssue:
    """One problem found in one field of a store record.

    Attributes:
        severity: ERROR when the entry was excluded, WARNING when a default
            was used instead
        field: Engine field name (``date``, ``extra_rate``, ...)
        message: Human-readable description
        value: The value as received
        context: Entry and employee ids, when known
    """

    severity: ValidationSeverity
    field: str
    message: str
    value: Any
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        suffix = ""
        if self.context:
            pairs = ", ".join(f"{k}={v}" for k, v in self.context.items())
            suffix = f" ({pairs})"
        return f"[{self.severity.name}] {self.field}: {self.message}{suffix}"


class ValidationReport:
    """Issues of one batch, in the order they were found.

    Example:
        >>> report = ValidationReport()
        >>> report.add_error("date", "Unparsable date", "2025-13-45")
        >>> report.add_warning("extra_duration", "Counted as 00:00", "abc")
        >>> report.summary()
        '1 error(s), 1 warning(s)'
    """

    def __init__(self) -> None:
        self.issues: List[ValidationIssue] = []

    def __len__(self) -> int:
        return len(self.issues)

    def __iter__(self):
        return iter(self.issues)

    @property
    def error_count(self) -> int:
        """Number of ERROR issues (fields of excluded entries)."""
        return len(self.get_errors())

    @property
    def warning_count(self) -> int:
        """Number of WARNING issues (defaults applied to kept entries)."""
        return len(self.get_warnings())

    def has_errors(self) -> bool:
        return self.error_count > 0

    def add_issue(self, issue: ValidationIssue) -> None:
        self.issues.append(issue)

    def add_error(
        self,
        field: str,
        message: str,
        value: Any,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.add_issue(
            ValidationIssue(ValidationSeverity.ERROR, field, message, value, context)
        )

    def add_warning(
        self,
        field: str,
        message: str,
        value: Any,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.add_issue(
            ValidationIssue(ValidationSeverity.WARNING, field, message, value, context)
        )

    def get_errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    def get_warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    def for_entry(self, entry_id: str) -> List[ValidationIssue]:
        """Issues recorded against one entry id."""
        return [
            issue
            for issue in self.issues
            if issue.context and issue.context.get("entry_id") == entry_id
        ]

    def summary(self) -> str:
        """Counts per severity, e.g. ``"1 error(s), 2 warning(s)"``."""
        parts = []
        if self.error_count:
            parts.append(f"{self.error_count} error(s)")
        if self.warning_count:
            parts.append(f"{self.warning_count} warning(s)")
        return ", ".join(parts) if parts else "No issues found"
