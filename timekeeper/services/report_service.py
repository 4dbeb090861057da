"""
Report service tying the store, the cache and the engine together.
"""

import datetime as dt
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from timekeeper.aggregators.report_aggregator import AggregationResult, aggregate
from timekeeper.calculators.normalizer import EntryPreview, preview_totals
from timekeeper.models.report import DateRange
from timekeeper.models.time_entry import TimeEntryDraft
from timekeeper.readers.time_entry_reader import TimeEntryReader
from timekeeper.services.entry_cache import EntryCache
from timekeeper.services.time_entry_store import StoreRecord, TimeEntryStore
from timekeeper.utils.logging_utils import LogContext, generate_correlation_id

logger = logging.getLogger(__name__)


class ReportService:
    """
    Fetches time entries and turns them into employee reports.

    Example:
        >>> service = ReportService(JsonFileTimeEntryStore("entries.json"))
        >>> result = service.build_reports(dt.date(2025, 11, 1), dt.date(2025, 11, 30))
        >>> result.grand_totals.total_pay
        Decimal('330.00')
    """

    def __init__(
        self,
        store: TimeEntryStore,
        cache: Optional[EntryCache] = None,
        directory: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize the service.

        Args:
            store: Where records are fetched from and submitted to
            cache: Optional caller-owned cache of fetch results
            directory: Optional employee id -> name mapping
        """
        self.store = store
        self.cache = cache
        self.reader = TimeEntryReader(directory=directory)

    def fetch_records(
        self,
        start_date: dt.date,
        end_date: dt.date,
        employee_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Fetch raw store records, going through the cache when there is one."""
        if self.cache is not None:
            cached = self.cache.get(start_date, end_date, employee_id)
            if cached is not None:
                logger.debug(f"Using {len(cached)} cached records")
                return cached

        records = self.store.fetch_entries(start_date, end_date, employee_id)

        if self.cache is not None:
            self.cache.put(start_date, end_date, employee_id, records)
        return records

    def build_reports(
        self,
        start_date: dt.date,
        end_date: dt.date,
        employee_id: Optional[str] = None,
    ) -> AggregationResult:
        """
        Fetch and aggregate the entries of an inclusive date range.

        Args:
            start_date: First day of the range
            end_date: Last day of the range
            employee_id: Only include this employee (optional)

        Returns:
            AggregationResult with per-employee reports and diagnostics

        Raises:
            DateRangeError: If start_date is after end_date (nothing is fetched)
            StoreError: If the store cannot be read
        """
        date_range = DateRange(start_date, end_date)

        correlation_id = generate_correlation_id()
        with LogContext(correlation_id=correlation_id, employee_id=employee_id):
            records = self.fetch_records(date_range.start, date_range.end, employee_id)
            return aggregate(
                records, date_range, employee_id=employee_id, reader=self.reader
            )

    def preview(self, draft: TimeEntryDraft) -> EntryPreview:
        """Totals the entry form shows before submitting."""
        return preview_totals(draft)

    def submit_entry(
        self, draft: TimeEntryDraft, entry_id: Optional[str] = None
    ) -> Tuple[EntryPreview, StoreRecord]:
        """
        Preview and then create or update an entry in the store.

        Cached fetches covering the entry's day are dropped afterwards so the
        next report includes the change.

        Args:
            draft: Create/update payload
            entry_id: Entry to update; None creates a new entry

        Returns:
            Tuple of (preview computed locally, record as stored)

        Raises:
            StoreError: If the store rejects the write
        """
        preview = self.preview(draft)

        correlation_id = generate_correlation_id()
        with LogContext(correlation_id=correlation_id, employee_id=draft.employee_id):
            action = "Updating" if entry_id else "Creating"
            logger.info(
                f"{action} time entry for {draft.employee_id} on {draft.date} "
                f"(previewed pay {preview.total_pay})"
            )
            stored = self.store.submit_entry(draft, entry_id=entry_id)

        if self.cache is not None:
            self.cache.invalidate(draft.date)
        return preview, stored
