"""Small TTL cache for warm Lambda containers."""

import time
from collections.abc import Callable
from typing import Any, Generic, TypeVar

V = TypeVar("V")

_MISSING = object()


class TTLCache(Generic[V]):
    """Key -> (value, expiry) cache with an injectable clock.

    Entries expire ``ttl_seconds`` after they are set. Expired entries are
    dropped lazily on read.
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        max_entries: int = 1024,
    ):
        """Initialize cache.

        Args:
            ttl_seconds: Lifetime of an entry.
            clock: Returns the current time in seconds.
            max_entries: Entries kept before the oldest expiry is evicted.
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._max_entries = max_entries
        self._entries: dict[str, tuple[V, float]] = {}

    def get(self, key: str, default: Any = None) -> V | Any:
        """Return the cached value, or ``default`` if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return default

        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return default
        return value

    def set(self, key: str, value: V) -> None:
        """Store a value for ``ttl_seconds``."""
        if key not in self._entries and len(self._entries) >= self._max_entries:
            oldest = min(self._entries, key=lambda k: self._entries[k][1])
            del self._entries[oldest]
        self._entries[key] = (value, self._clock() + self.ttl_seconds)

    def get_or_load(self, key: str, loader: Callable[[], V]) -> V:
        """Return the cached value or load, store and return a fresh one."""
        value = self.get(key, _MISSING)
        if value is _MISSING:
            value = loader()
            self.set(key, value)
        return value

    def invalidate(self, key: str) -> None:
        """Drop a single entry."""
        self._entries.pop(key, None)

    def clear(self) -> None:
        """Drop all entries."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
