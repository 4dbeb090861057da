"""Diagnostics and errors for entry normalization and report aggregation."""

from timekeeper.validators.errors import DateRangeError, EntryValidationError
from timekeeper.validators.validation_report import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
)

__all__ = [
    "DateRangeError",
    "EntryValidationError",
    "ValidationReport",
    "ValidationIssue",
    "ValidationSeverity",
]
