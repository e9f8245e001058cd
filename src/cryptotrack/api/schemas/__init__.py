"""Pydantic schemas for API request/response."""

from cryptotrack.api.schemas.crypto import (
    CoinListingResponse,
    CoinListResponse,
    PaginationInfo,
    MarketPageResponse,
    CoinMatchResponse,
    SearchResponse,
    CoinDetailResponse,
    PricesRequest,
    PricesResponse,
    CoinsByIdsResponse,
    PriceHistoryResponse,
    GlobalStatsResponse,
)
from cryptotrack.api.schemas.portfolio import (
    HoldingCreateRequest,
    HoldingUpdateRequest,
    HoldingResponse,
    PortfolioTotalsResponse,
    PortfolioResponse,
    AllocationItemResponse,
    AnalyticsResponse,
    RefreshResponse,
)
from cryptotrack.api.schemas.watchlist import (
    WatchlistResponse,
    WatchlistUpdateResponse,
    WatchlistCoinsRequest,
    WatchlistBatchResponse,
    WatchlistCheckResponse,
    WatchlistClearResponse,
)
from cryptotrack.api.schemas.admin import CacheStatsResponse, MessageResponse

__all__ = [
    "CoinListingResponse",
    "CoinListResponse",
    "PaginationInfo",
    "MarketPageResponse",
    "CoinMatchResponse",
    "SearchResponse",
    "CoinDetailResponse",
    "PricesRequest",
    "PricesResponse",
    "CoinsByIdsResponse",
    "PriceHistoryResponse",
    "GlobalStatsResponse",
    "HoldingCreateRequest",
    "HoldingUpdateRequest",
    "HoldingResponse",
    "PortfolioTotalsResponse",
    "PortfolioResponse",
    "AllocationItemResponse",
    "AnalyticsResponse",
    "RefreshResponse",
    "WatchlistResponse",
    "WatchlistUpdateResponse",
    "WatchlistCoinsRequest",
    "WatchlistBatchResponse",
    "WatchlistCheckResponse",
    "WatchlistClearResponse",
    "CacheStatsResponse",
    "MessageResponse",
]
