"""Cache administration endpoints (development only; not mounted in production)."""

from fastapi import APIRouter, Depends

from cryptotrack.api.deps import get_market_data_service
from cryptotrack.api.schemas import CacheStatsResponse, MessageResponse
from cryptotrack.services import MarketDataService

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/cache/stats", response_model=CacheStatsResponse)
def get_cache_stats(
    market: MarketDataService = Depends(get_market_data_service),
) -> CacheStatsResponse:
    """Return memo cache size and keys."""
    return CacheStatsResponse(**market.cache_stats())


@router.post("/cache/clear", response_model=MessageResponse)
def clear_cache(
    market: MarketDataService = Depends(get_market_data_service),
) -> MessageResponse:
    """Drop every memoized market data response."""
    market.clear_cache()
    return MessageResponse(message="Cache cleared successfully")
