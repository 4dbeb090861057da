"""
Time-entry store interface and its file and HTTP implementations.

The store is the system of record for time entries; the engine only reads
records from it and sends create/update payloads to it. Records are
returned exactly as stored (loosely typed mappings) and are canonicalized
later by the TimeEntryReader.
"""

import datetime as dt
import json
import logging
import os
import tempfile
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import requests

from timekeeper.models.report import DateRange
from timekeeper.models.time_entry import TimeEntryDraft
from timekeeper.readers.date_values import parse_calendar_date
from timekeeper.readers.time_entry_reader import TimeEntryReader
from timekeeper.utils.logging_utils import sanitize_sensitive_data

logger = logging.getLogger(__name__)

StoreRecord = Dict[str, Any]


class StoreError(Exception):
    """Raised when the time-entry store cannot be read or written.

    Attributes:
        status_code: HTTP status returned by the store, if any
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def describe_http_status(status_code: int) -> str:
    """Human-readable description of an HTTP error status."""
    if status_code in (401, 403):
        return f"Not authorized (HTTP {status_code}), check TIMEKEEPER_API_TOKEN"
    if status_code == 404:
        return "Not found (HTTP 404)"
    if status_code == 429:
        return "Rate limited (HTTP 429)"
    if 500 <= status_code < 600:
        return f"Server error (HTTP {status_code})"
    return f"Client error (HTTP {status_code})"


class TimeEntryStore(ABC):
    """Source and sink of time-entry records."""

    @abstractmethod
    def fetch_entries(
        self,
        start_date: dt.date,
        end_date: dt.date,
        employee_id: Optional[str] = None,
    ) -> List[StoreRecord]:
        """Return the records of an inclusive date range.

        Args:
            start_date: First day of the range
            end_date: Last day of the range
            employee_id: Only return this employee's records (optional)

        Raises:
            DateRangeError: If start_date is after end_date
            StoreError: If the store cannot be read
        """

    @abstractmethod
    def submit_entry(
        self, draft: TimeEntryDraft, entry_id: Optional[str] = None
    ) -> StoreRecord:
        """Create an entry, or update ``entry_id`` when given.

        Returns:
            The record as stored

        Raises:
            StoreError: If the store rejects the write
        """


class JsonFileTimeEntryStore(TimeEntryStore):
    """
    Time-entry store backed by a JSON file.

    The file holds either a list of records or an object with an
    ``entries`` list. A missing file is an empty store. Writes replace the
    file atomically and keep its original shape.

    Example:
        >>> store = JsonFileTimeEntryStore("entries.json")
        >>> records = store.fetch_entries(dt.date(2025, 11, 1), dt.date(2025, 11, 30))
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._reader = TimeEntryReader()

    def fetch_entries(
        self,
        start_date: dt.date,
        end_date: dt.date,
        employee_id: Optional[str] = None,
    ) -> List[StoreRecord]:
        date_range = DateRange(start_date, end_date)
        records = self._load()

        selected = []
        for record in records:
            if (
                employee_id
                and isinstance(record, Mapping)
                and self._reader.read_employee_id(record) != employee_id
            ):
                continue
            if not self._in_range(record, date_range):
                continue
            selected.append(record)

        logger.info(
            f"Loaded {len(selected)} of {len(records)} records from {self.path} "
            f"for {date_range}"
        )
        return selected

    def submit_entry(
        self, draft: TimeEntryDraft, entry_id: Optional[str] = None
    ) -> StoreRecord:
        container = self._load_container()
        records = container["entries"] if isinstance(container, dict) else container

        if entry_id is None:
            stored = {"_id": uuid.uuid4().hex, **draft.to_payload()}
            records.append(stored)
            logger.info(f"Created time entry {stored['_id']} in {self.path}")
        else:
            index = self._index_of(records, entry_id)
            if index is None:
                raise StoreError(f"Time entry {entry_id} not found in {self.path}", 404)
            stored = self._merge_update(records[index], draft, entry_id)
            records[index] = stored
            logger.info(f"Updated time entry {entry_id} in {self.path}")

        self._save(container)
        return stored

    def _merge_update(
        self, existing: StoreRecord, draft: TimeEntryDraft, entry_id: str
    ) -> StoreRecord:
        cleared = set(draft.cleared_fields())
        stored = {key: value for key, value in existing.items() if key not in cleared}
        stored.update(draft.to_payload())
        stored["_id"] = entry_id

        # Keep the embedded {_id, name} reference so the name survives
        employee = existing.get("employee")
        if (
            isinstance(employee, Mapping)
            and self._reader.read_employee_id(existing) == draft.employee_id
        ):
            stored["employee"] = employee
        return stored

    def _in_range(self, record: Mapping[str, Any], date_range: DateRange) -> bool:
        raw = record.get("date") if isinstance(record, Mapping) else None
        try:
            return date_range.contains(parse_calendar_date(raw))
        except ValueError:
            # Kept so the aggregator reports it instead of dropping it silently
            return True

    def _index_of(self, records: List[StoreRecord], entry_id: str) -> Optional[int]:
        for index, record in enumerate(records):
            if str(record.get("_id", record.get("id"))) == entry_id:
                return index
        return None

    def _load(self) -> List[StoreRecord]:
        container = self._load_container()
        return container["entries"] if isinstance(container, dict) else container

    def _load_container(self) -> Union[List[StoreRecord], Dict[str, Any]]:
        if not self.path.exists():
            logger.debug(f"Store file {self.path} does not exist, starting empty")
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StoreError(f"Store file {self.path} is not valid JSON: {e}") from e
        except OSError as e:
            raise StoreError(f"Cannot read store file {self.path}: {e}") from e

        if isinstance(data, list):
            return data
        if isinstance(data, dict) and isinstance(data.get("entries"), list):
            return data
        raise StoreError(
            f"Store file {self.path} must contain a list of entries "
            f"or an object with an 'entries' list"
        )

    def _save(self, container: Union[List[StoreRecord], Dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=".entries_", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(container, f, indent=2, ensure_ascii=False, default=str)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StoreError(f"Cannot write store file {self.path}: {e}") from e


class ApiTimeEntryStore(TimeEntryStore):
    """
    Time-entry store reached over HTTP.

    Endpoints:
        GET   {base_url}/time-entries?startDate=&endDate=[&employeeId=]
        POST  {base_url}/time-entries
        PATCH {base_url}/time-entries/{id}

    Requests are sent once; failures surface as StoreError and retrying is
    left to the caller.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the API store.

        Args:
            base_url: Store API root, e.g. "https://api.example.com/v1"
            token: Bearer token sent with every request (optional)
            timeout: Per-request timeout in seconds
            session: Custom requests session (useful for testing)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if token:
            self.session.headers.update({"Authorization": f"Bearer {token}"})

        logger.info(f"API time-entry store initialized for {self.base_url}")

    @classmethod
    def from_config(cls, config: Any) -> "ApiTimeEntryStore":
        """Build the store from a TimekeeperConfig."""
        if not config.api_url:
            raise StoreError("TIMEKEEPER_API_URL is not configured")
        return cls(config.api_url, token=config.api_token, timeout=config.api_timeout)

    def fetch_entries(
        self,
        start_date: dt.date,
        end_date: dt.date,
        employee_id: Optional[str] = None,
    ) -> List[StoreRecord]:
        date_range = DateRange(start_date, end_date)
        params = {
            "startDate": date_range.start.isoformat(),
            "endDate": date_range.end.isoformat(),
        }
        if employee_id:
            params["employeeId"] = employee_id

        data = self._request("GET", "/time-entries", params=params)
        if isinstance(data, Mapping):
            data = data.get("entries", data.get("data"))
        if not isinstance(data, list):
            raise StoreError("Unexpected response body: expected a list of entries")

        logger.info(f"Fetched {len(data)} records from the API for {date_range}")
        return data

    def submit_entry(
        self, draft: TimeEntryDraft, entry_id: Optional[str] = None
    ) -> StoreRecord:
        if entry_id is None:
            stored = self._request("POST", "/time-entries", json=draft.to_payload())
        else:
            path = f"/time-entries/{entry_id}"
            stored = self._request("PATCH", path, json=draft.to_update_payload())

        if not isinstance(stored, dict):
            raise StoreError("Unexpected response body: expected the stored entry")
        return stored

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        headers = sanitize_sensitive_data(dict(self.session.headers))
        logger.debug(f"{method} {url} headers={headers} params={kwargs.get('params')}")

        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.Timeout as e:
            raise StoreError(f"{method} {url} timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise StoreError(f"{method} {url} failed: {e}") from e

        if response.status_code >= 400:
            raise StoreError(
                f"{method} {url}: {describe_http_status(response.status_code)}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise StoreError(f"{method} {url} returned a non-JSON body") from e


def create_store(
    config: Any, source: Optional[Union[str, Path]] = None
) -> TimeEntryStore:
    """Pick the store for a run.

    An explicit ``source`` file wins, then the configured API, then the
    configured data file.

    Raises:
        StoreError: If no store is configured
    """
    if source:
        return JsonFileTimeEntryStore(source)
    if config.has_api():
        return ApiTimeEntryStore.from_config(config)
    if config.data_file:
        return JsonFileTimeEntryStore(config.data_file)
    raise StoreError(
        "No time-entry store configured: pass --source or set "
        "TIMEKEEPER_API_URL or TIMEKEEPER_DATA_FILE"
    )
