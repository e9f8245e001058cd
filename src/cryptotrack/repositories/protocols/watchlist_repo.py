"""Watchlist repository protocol."""

from typing import Protocol

from cryptotrack.domain.models import Watchlist


class WatchlistRepository(Protocol):
    """Interface for watchlist data access."""

    def get_or_create(self, user_id: str) -> Watchlist:
        """Return the user's watchlist, creating an empty one if needed."""
        ...

    def save(self, watchlist: Watchlist) -> Watchlist:
        """Persist the coin list of a watchlist."""
        ...
