"""Service layer - business logic orchestration."""

from cryptotrack.services.market_data_service import MarketDataService
from cryptotrack.services.portfolio_service import PortfolioService, HoldingCreate, HoldingUpdate
from cryptotrack.services.watchlist_service import WatchlistService
from cryptotrack.services import valuation_engine

__all__ = [
    "MarketDataService",
    "PortfolioService",
    "HoldingCreate",
    "HoldingUpdate",
    "WatchlistService",
    "valuation_engine",
]
