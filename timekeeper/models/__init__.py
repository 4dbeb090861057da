"""Data models for the time-accounting engine.

This package contains the models shared by every layer:
- BaseDataModel: Base class with common configuration
- RawTimeEntry / NormalizedTimeEntry: a shift as stored and as computed
- EmployeeRef, ApprovalState: entry identity and workflow state
- TimeEntryDraft: create/update payload for the store
- DateRange, ReportTotals, EmployeeReport: aggregation results
"""

from timekeeper.models.base import BaseDataModel, FrozenDataModel
from timekeeper.models.report import DateRange, EmployeeReport, ReportTotals
from timekeeper.models.time_entry import (
    ApprovalState,
    EmployeeRef,
    NormalizedTimeEntry,
    RawTimeEntry,
    TimeEntryDraft,
)

__all__ = [
    "BaseDataModel",
    "FrozenDataModel",
    "ApprovalState",
    "EmployeeRef",
    "RawTimeEntry",
    "NormalizedTimeEntry",
    "TimeEntryDraft",
    "DateRange",
    "ReportTotals",
    "EmployeeReport",
]
