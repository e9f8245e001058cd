"""View model for a watchlist enriched with market data."""

from dataclasses import dataclass, field

from cryptotrack.domain.models import Watchlist
from cryptotrack.domain.views.market import MarketRow


@dataclass
class WatchlistView:
    """Watchlist with one market row per coin, in watchlist order."""

    watchlist: Watchlist
    coins: list[MarketRow] = field(default_factory=list)


@dataclass
class WatchlistBatchResult:
    """Per-coin outcome of adding several coins at once."""

    watchlist: Watchlist
    added: list[str] = field(default_factory=list)
    skipped: dict[str, str] = field(default_factory=dict)
    failed: dict[str, str] = field(default_factory=dict)
