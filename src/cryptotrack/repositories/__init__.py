"""Repository layer - data access abstractions and implementations."""

from cryptotrack.repositories.protocols import (
    HoldingRepository,
    WatchlistRepository,
    MemoCache,
)

__all__ = [
    "HoldingRepository",
    "WatchlistRepository",
    "MemoCache",
]
