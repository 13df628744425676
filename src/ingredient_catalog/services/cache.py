"""In-process TTL cache shared by reference lookups and import bookkeeping."""

import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

SEARCH_TTL_SECONDS = 60 * 60
DETAILS_TTL_SECONDS = 24 * 60 * 60
IMPORTED_ID_TTL_SECONDS = 24 * 60 * 60


class Cache(Protocol):
    """Key-value cache with per-entry expiry."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value for ttl_seconds."""

    def delete(self, key: str) -> None:
        """Forget a key."""


@dataclass
class _CacheEntry:
    value: object
    expires_at: datetime


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class InMemoryCache(Cache):
    """Dictionary-backed cache; expired entries are evicted on read.

    Safe to share between the event loop and worker threads.
    """

    def __init__(
        self, max_entries: int = 5000, clock: Callable[[], datetime] = _utcnow
    ) -> None:
        self._entries: dict[str, _CacheEntry] = {}
        self._max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()

    def get(self, key: str) -> object | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() >= entry.expires_at:
                self._entries.pop(key, None)
                return None
            return entry.value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        with self._lock:
            if key not in self._entries and len(self._entries) >= self._max_entries:
                self._evict()
            expires_at = self._clock() + timedelta(seconds=ttl_seconds)
            self._entries[key] = _CacheEntry(value=value, expires_at=expires_at)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _evict(self) -> None:
        # Caller holds the lock.
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if now >= entry.expires_at]
        for key in expired:
            del self._entries[key]
        if len(self._entries) >= self._max_entries:
            # Oldest insertion goes first.
            del self._entries[next(iter(self._entries))]
