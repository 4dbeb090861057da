"""
Services for reaching the time-entry store.

This package provides:
- The TimeEntryStore interface with JSON-file and HTTP implementations
- A caller-owned EntryCache of fetch results
- ReportService, which fetches, aggregates and submits entries
"""

from .entry_cache import EntryCache
from .report_service import ReportService
from .time_entry_store import (
    ApiTimeEntryStore,
    JsonFileTimeEntryStore,
    StoreError,
    TimeEntryStore,
    create_store,
    describe_http_status,
)

__all__ = [
    "ApiTimeEntryStore",
    "EntryCache",
    "JsonFileTimeEntryStore",
    "ReportService",
    "StoreError",
    "TimeEntryStore",
    "create_store",
    "describe_http_status",
]
