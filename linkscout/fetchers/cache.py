"""
In-memory page cache bounded by age and entry count.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """Markup fetched for a URL at a point in time."""
    url: str
    markup: str
    fetched_at: float


class FetchCache:
    """
    Maps URLs to previously fetched markup.

    Entries older than ttl_seconds read as absent. There is no background
    sweeping: when an insert pushes the cache over max_entries, the entry
    with the oldest fetched_at is evicted.
    """

    def __init__(
        self,
        ttl_seconds: float = 600,
        max_entries: int = 50,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, url: str) -> bool:
        return url in self._entries

    def get(self, url: str) -> Optional[str]:
        """Get cached markup if still fresh. Stale entries are left in place."""
        entry = self._entries.get(url)
        if entry is None:
            return None
        if self._clock() - entry.fetched_at < self.ttl_seconds:
            return entry.markup
        return None

    def put(self, url: str, markup: str) -> None:
        """Store markup for url, evicting the oldest entry if over capacity."""
        with self._lock:
            self._entries[url] = CacheEntry(url=url, markup=markup, fetched_at=self._clock())
            if len(self._entries) > self.max_entries:
                # min() keeps the first of equal timestamps, i.e. insertion order
                oldest = min(self._entries.values(), key=lambda e: e.fetched_at)
                del self._entries[oldest.url]
                logger.info("Cache full, evicted oldest entry: %s", oldest.url)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
