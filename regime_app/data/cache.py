"""
TTL cache for fetched price series.

Entries expire lazily at read time against an injectable clock, so tests
can drive expiry with a fake clock instead of sleeping.
"""

import math
import time
from typing import Callable, Optional

from cachetools import TLRUCache

from .models import CacheEntry, CacheKey, Series


def _entry_expiry(_key: CacheKey, entry: CacheEntry, _now: float) -> float:
    # TLRUCache drops an item once now >= expiry; nudge so expires_at itself is still valid
    return math.nextafter(entry.expires_at, math.inf)


class SeriesCache:
    """In-memory (symbol, range) -> Series store with per-entry TTL."""

    def __init__(
        self,
        default_ttl_seconds: float = 600.0,
        max_entries: int = 50_000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.default_ttl_seconds = default_ttl_seconds
        self._clock = clock
        self._entries: TLRUCache = TLRUCache(maxsize=max_entries, ttu=_entry_expiry, timer=clock)

    def get(self, key: CacheKey) -> Optional[Series]:
        """Return the cached series, or None on a miss or once expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        return entry.value

    def get_entry(self, key: CacheKey) -> Optional[CacheEntry]:
        return self._entries.get(key)

    def put(self, key: CacheKey, series: Series, ttl: Optional[float] = None) -> CacheEntry:
        """Store a series, replacing any previous entry for the key."""
        ttl_seconds = self.default_ttl_seconds if ttl is None else ttl
        entry = CacheEntry(key=key, value=series, expires_at=self._clock() + ttl_seconds)
        self._entries[key] = entry
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        # Count only live entries; expired ones linger until the next write
        self._entries.expire()
        return len(self._entries)
