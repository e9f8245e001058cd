"""Cache entry model for memoized upstream responses."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """
    A memoized upstream payload.

    stored_at is a reading of the cache's clock (monotonic seconds), not a
    wall-clock timestamp. The entry is valid only while now - stored_at < ttl.
    """

    key: str
    value: Any
    stored_at: float

    def is_fresh(self, now: float, ttl_seconds: float) -> bool:
        """Return True while the entry is within its TTL."""
        return now - self.stored_at < ttl_seconds
