"""Domain layer - pure models with no external dependencies."""

from cryptotrack.domain.models import Holding, Watchlist, CacheEntry

__all__ = [
    "Holding",
    "Watchlist",
    "CacheEntry",
]
