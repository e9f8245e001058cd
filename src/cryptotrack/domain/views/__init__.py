"""View models for service outputs."""

from cryptotrack.domain.views.portfolio import (
    ValuedHolding,
    PortfolioTotals,
    PortfolioSnapshot,
    PerformerRanking,
    AllocationItem,
    PortfolioAnalytics,
    BatchWriteSummary,
    RefreshResult,
)
from cryptotrack.domain.views.market import (
    MarketRow,
    CoinListing,
    CoinMatch,
    CoinDetail,
    PriceHistory,
    GlobalStats,
)
from cryptotrack.domain.views.watchlist import WatchlistView, WatchlistBatchResult

__all__ = [
    "ValuedHolding",
    "PortfolioTotals",
    "PortfolioSnapshot",
    "PerformerRanking",
    "AllocationItem",
    "PortfolioAnalytics",
    "BatchWriteSummary",
    "RefreshResult",
    "MarketRow",
    "CoinListing",
    "CoinMatch",
    "CoinDetail",
    "PriceHistory",
    "GlobalStats",
    "WatchlistView",
    "WatchlistBatchResult",
]
