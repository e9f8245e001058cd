"""In-process TTL cache for upstream market data."""

import time
from typing import Any, Callable, Optional

from cryptotrack.domain.models import CacheEntry


DEFAULT_TTL_SECONDS = 60.0


class InMemoryMemoCache:
    """
    Dict-backed memo cache with a single TTL for all keys.

    Expired entries are not purged; they become unreachable through get()
    and are replaced on the next set() for the same key. The working key set
    (coin ids x currencies plus a handful of list endpoints) is bounded.

    No locking: concurrent writers for the same key race benignly and the
    last write wins.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        """Return the value for key if stored less than ttl seconds ago."""
        entry = self._entries.get(key)
        if entry is None or not entry.is_fresh(self._clock(), self._ttl):
            return default
        return entry.value

    def get_stale(self, key: str, default: Optional[Any] = None) -> Any:
        """Return the last value stored for key, ignoring the TTL."""
        entry = self._entries.get(key)
        return default if entry is None else entry.value

    def set(self, key: str, value: Any) -> None:
        """Store value for key with the current clock reading."""
        self._entries[key] = CacheEntry(key=key, value=value, stored_at=self._clock())

    def clear(self) -> None:
        """Drop all entries."""
        self._entries.clear()

    def stats(self) -> dict[str, Any]:
        """Return entry count and keys (expired entries included)."""
        keys = list(self._entries.keys())
        return {"size": len(keys), "keys": keys, "ttl_seconds": self._ttl}
