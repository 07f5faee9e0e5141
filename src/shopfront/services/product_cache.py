"""In-memory product listing cache.

Memoizes product listing responses keyed by the canonical serialization
of the filter set. Entries expire after a fixed TTL; expired entries are
ignored on read and replaced by the next put rather than evicted eagerly.
The whole cache is dropped after every product mutation.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable

from shopfront.services.filters import FilterSet
from shopfront.shared.constants import Cache

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheEntry:
    """Last successful response for one filter set.

    Attributes:
        key: Canonical filter serialization
        payload: Response body as returned by the API
        stored_at: Clock reading when the payload was captured
    """

    key: str
    payload: Any
    stored_at: float

    def is_fresh(self, now: float, ttl_seconds: float) -> bool:
        return (now - self.stored_at) < ttl_seconds


@dataclass
class CacheStats:
    """Counters reported by ``shopfront cache stats``."""

    entries: int = 0
    fresh_entries: int = 0
    hits: int = 0
    misses: int = 0
    clears: int = 0

    @property
    def hit_ratio(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0


class ProductQueryCache:
    """TTL memo of product listing responses.

    Args:
        ttl_seconds: Maximum age of a served entry (default 30 s)
        clock: Monotonic time source; tests inject a fake

    Example:
        >>> now = [0.0]
        >>> cache = ProductQueryCache(ttl_seconds=30, clock=lambda: now[0])
        >>> cache.put(FilterSet(), {"products": []})
        >>> cache.get(FilterSet())
        {'products': []}
        >>> now[0] = 30.0
        >>> cache.get(FilterSet()) is None
        True
    """

    def __init__(
        self,
        ttl_seconds: float = Cache.TTL_SECONDS,
        clock: Clock = time.monotonic,
    ):
        if ttl_seconds <= 0:
            msg = f"ttl_seconds must be positive, got {ttl_seconds}"
            raise ValueError(msg)
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._clears = 0

    @staticmethod
    def key_for(filters: FilterSet) -> str:
        return filters.cache_key()

    def get(self, filters: FilterSet) -> Any | None:
        """Return the cached payload for ``filters`` if younger than the TTL."""
        key = self.key_for(filters)
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.is_fresh(now, self.ttl_seconds):
                self._hits += 1
                logger.debug("Listing cache hit: %s", key)
                return entry.payload
            self._misses += 1

        logger.debug("Listing cache miss: %s", key)
        return None

    def put(self, filters: FilterSet, payload: Any) -> None:
        """Store ``payload`` for ``filters``, replacing any previous entry."""
        key = self.key_for(filters)
        entry = CacheEntry(key=key, payload=payload, stored_at=self._clock())
        with self._lock:
            self._entries[key] = entry

    def clear(self) -> int:
        """Drop every entry.

        Returns:
            Number of entries removed
        """
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self._clears += 1

        logger.debug("Listing cache cleared (%d entries removed)", count)
        return count

    def purge_expired(self) -> int:
        """Drop entries whose age has reached the TTL.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        with self._lock:
            expired = [
                key
                for key, entry in self._entries.items()
                if not entry.is_fresh(now, self.ttl_seconds)
            ]
            for key in expired:
                del self._entries[key]

        if expired:
            logger.debug("Purged %d expired listing cache entries", len(expired))
        return len(expired)

    def stats(self) -> CacheStats:
        now = self._clock()
        with self._lock:
            return CacheStats(
                entries=len(self._entries),
                fresh_entries=sum(
                    1
                    for entry in self._entries.values()
                    if entry.is_fresh(now, self.ttl_seconds)
                ),
                hits=self._hits,
                misses=self._misses,
                clears=self._clears,
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["CacheEntry", "CacheStats", "Clock", "ProductQueryCache"]
