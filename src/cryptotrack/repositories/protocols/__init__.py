"""Repository protocol definitions (interfaces)."""

from cryptotrack.repositories.protocols.holding_repo import HoldingRepository
from cryptotrack.repositories.protocols.watchlist_repo import WatchlistRepository
from cryptotrack.repositories.protocols.memo_cache import MemoCache

__all__ = [
    "HoldingRepository",
    "WatchlistRepository",
    "MemoCache",
]
