"""Memo cache protocol for upstream responses."""

from typing import Any, Optional, Protocol


class MemoCache(Protocol):
    """
    Interface for a time-bounded key/value cache.

    Implementations must never raise from these methods. Entries older than
    the cache TTL are treated as absent by get().
    """

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        """Return the stored value while fresh, else default."""
        ...

    def get_stale(self, key: str, default: Optional[Any] = None) -> Any:
        """Return the last stored value regardless of age, else default."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Store value under key, overwriting any prior entry."""
        ...

    def clear(self) -> None:
        """Drop all entries."""
        ...

    def stats(self) -> dict[str, Any]:
        """Return {"size", "keys", "ttl_seconds"} without mutating state."""
        ...
