"""Watchlist domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


MAX_WATCHLIST_COINS = 100
MAX_BATCH_ADD_COINS = 50


@dataclass
class Watchlist:
    """Ordered, duplicate-free list of coin ids a user follows."""

    user_id: str
    coin_ids: list[str] = field(default_factory=list)
    last_modified: Optional[datetime] = field(default=None)

    def contains(self, coin_id: str) -> bool:
        """Return True if the coin is already on the list."""
        return coin_id.strip().lower() in self.coin_ids
