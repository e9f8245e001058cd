"""Domain models package."""

from cryptotrack.domain.models.holding import Holding, MIN_AMOUNT, MAX_NOTES_LENGTH
from cryptotrack.domain.models.watchlist import Watchlist, MAX_WATCHLIST_COINS, MAX_BATCH_ADD_COINS
from cryptotrack.domain.models.cache import CacheEntry

__all__ = [
    "Holding",
    "MIN_AMOUNT",
    "MAX_NOTES_LENGTH",
    "Watchlist",
    "MAX_WATCHLIST_COINS",
    "MAX_BATCH_ADD_COINS",
    "CacheEntry",
]
