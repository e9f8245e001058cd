"""In-memory repository implementations."""

from cryptotrack.repositories.memory.memo_cache import InMemoryMemoCache, DEFAULT_TTL_SECONDS

__all__ = [
    "InMemoryMemoCache",
    "DEFAULT_TTL_SECONDS",
]
