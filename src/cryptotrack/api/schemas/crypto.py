"""Pydantic schemas for market data endpoints."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class CoinListingResponse(BaseModel):
    """Entry of the coin list."""

    model_config = {"from_attributes": True}

    id: str
    symbol: str
    name: str


class CoinListResponse(BaseModel):
    """Response schema for the full coin list."""

    coins: list[CoinListingResponse]
    count: int


class PaginationInfo(BaseModel):
    page: int
    per_page: int
    total: int


class MarketPageResponse(BaseModel):
    """One page of market rows."""

    data: list[dict[str, Any]]
    pagination: PaginationInfo


class CoinMatchResponse(BaseModel):
    """Search or trending result."""

    model_config = {"from_attributes": True}

    id: str
    symbol: str
    name: str
    market_cap_rank: Optional[int] = None
    thumb: Optional[str] = None


class SearchResponse(BaseModel):
    query: str
    results: list[CoinMatchResponse]
    count: int


class CoinDetailResponse(BaseModel):
    """Detail for one coin."""

    model_config = {"from_attributes": True}

    id: str
    symbol: str
    name: str
    current_price: dict[str, float]
    market_cap_rank: Optional[int] = None
    image: Optional[str] = None
    last_updated: Optional[datetime] = None


class PricesRequest(BaseModel):
    """Request body for batch price lookup."""

    coin_ids: list[str] = Field(..., min_length=1, max_length=100)


class PricesResponse(BaseModel):
    """coin_id -> price in the requested currency."""

    currency: str
    prices: dict[str, float]


class CoinsByIdsResponse(BaseModel):
    data: list[dict[str, Any]]
    count: int


class PriceHistoryResponse(BaseModel):
    """Price time series for one coin."""

    coin_id: str
    currency: str
    days: int
    prices: list[list[float]]
    market_caps: list[list[float]]
    total_volumes: list[list[float]]


class GlobalStatsResponse(BaseModel):
    """Global market statistics."""

    model_config = {"from_attributes": True}

    active_cryptocurrencies: int
    markets: int
    total_market_cap: dict[str, float]
    total_volume: dict[str, float]
    market_cap_percentage: dict[str, float]
    market_cap_change_percentage_24h_usd: Optional[float] = None
    updated_at: Optional[int] = None
