"""
In-memory cache of fetched time-entry records.

The cache is an ordinary object created and passed around by the caller;
nothing in the engine keeps one globally. It is keyed by the exact fetch
request ``(start_date, end_date, employee_id)`` and evicts the least
recently used request when full.
"""

import copy
import datetime as dt
import logging
import threading
from collections import OrderedDict
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

CacheKey = Tuple[dt.date, dt.date, Optional[str]]


class EntryCache:
    """
    LRU cache of store fetch results.

    Example:
        >>> cache = EntryCache(max_size=16)
        >>> service = ReportService(store, cache=cache)
        >>> service.build_reports(start, end)   # fetches from the store
        >>> service.build_reports(start, end)   # served from the cache
    """

    def __init__(self, max_size: int = 32):
        """
        Initialize the cache.

        Args:
            max_size: Number of fetch requests kept before evicting
        """
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self._entries: "OrderedDict[CacheKey, List[Dict[str, Any]]]" = OrderedDict()
        self._lock = threading.Lock()
        self._stats = {"hits": 0, "misses": 0, "evictions": 0, "invalidations": 0}

    @staticmethod
    def make_key(
        start_date: dt.date, end_date: dt.date, employee_id: Optional[str] = None
    ) -> CacheKey:
        return (start_date, end_date, employee_id or None)

    def get(
        self, start_date: dt.date, end_date: dt.date, employee_id: Optional[str] = None
    ) -> Optional[List[Dict[str, Any]]]:
        """Return a copy of the cached records, or None on a miss."""
        key = self.make_key(start_date, end_date, employee_id)
        with self._lock:
            if key not in self._entries:
                self._stats["misses"] += 1
                return None
            self._entries.move_to_end(key)
            self._stats["hits"] += 1
            # Callers may mutate what they get back
            return copy.deepcopy(self._entries[key])

    def put(
        self,
        start_date: dt.date,
        end_date: dt.date,
        employee_id: Optional[str],
        records: List[Dict[str, Any]],
    ) -> None:
        key = self.make_key(start_date, end_date, employee_id)
        with self._lock:
            self._entries[key] = copy.deepcopy(list(records))
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                self._stats["evictions"] += 1
                logger.debug(f"Evicted cached fetch {evicted}")

    def invalidate(self, day: Optional[dt.date] = None) -> int:
        """Drop cached requests whose range covers ``day`` (all if None).

        Returns:
            Number of cached requests removed
        """
        with self._lock:
            if day is None:
                stale = list(self._entries)
            else:
                stale = [key for key in self._entries if key[0] <= day <= key[1]]
            for key in stale:
                del self._entries[key]
            self._stats["invalidations"] += len(stale)

        if stale:
            logger.debug(f"Invalidated {len(stale)} cached fetch(es)")
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

    @property
    def stats(self) -> Dict[str, int]:
        """Hit/miss/eviction counters and the current size."""
        with self._lock:
            return {**self._stats, "size": len(self._entries)}
