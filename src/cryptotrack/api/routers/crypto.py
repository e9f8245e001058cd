"""Market data endpoints (public)."""

from fastapi import APIRouter, Depends, Query

from cryptotrack.api.deps import get_market_data_service, validate_currency
from cryptotrack.api.schemas import (
    CoinDetailResponse,
    CoinListingResponse,
    CoinListResponse,
    CoinMatchResponse,
    CoinsByIdsResponse,
    GlobalStatsResponse,
    MarketPageResponse,
    PaginationInfo,
    PriceHistoryResponse,
    PricesRequest,
    PricesResponse,
    SearchResponse,
)
from cryptotrack.core.exceptions import ValidationError
from cryptotrack.providers.market_data_provider import (
    DEFAULT_HISTORY_DAYS,
    DEFAULT_ORDER,
    DEFAULT_PAGE,
    DEFAULT_PER_PAGE,
    MAX_HISTORY_DAYS,
    MAX_PER_PAGE,
    MIN_SEARCH_LENGTH,
)
from cryptotrack.services import MarketDataService

router = APIRouter(prefix="/crypto", tags=["crypto"])

MAX_IDS_PER_REQUEST = 100


@router.get("/coins", response_model=CoinListResponse)
def list_coins(
    market: MarketDataService = Depends(get_market_data_service),
) -> CoinListResponse:
    """List every coin known to the provider."""
    coins = market.list_coins()
    return CoinListResponse(
        coins=[CoinListingResponse.model_validate(c) for c in coins],
        count=len(coins),
    )


@router.get("/markets", response_model=MarketPageResponse)
def get_markets(
    vs_currency: str = Query("usd"),
    page: int = Query(DEFAULT_PAGE, ge=1),
    per_page: int = Query(DEFAULT_PER_PAGE, ge=1, le=MAX_PER_PAGE),
    order: str = Query(DEFAULT_ORDER),
    market: MarketDataService = Depends(get_market_data_service),
) -> MarketPageResponse:
    """Get one page of market data."""
    currency = validate_currency(vs_currency)
    rows = market.get_market_page(
        currency=currency,
        page=page,
        per_page=per_page,
        order=order,
        price_change_windows=("24h", "7d", "30d"),
    )
    return MarketPageResponse(
        data=rows,
        pagination=PaginationInfo(page=page, per_page=per_page, total=len(rows)),
    )


@router.get("/coin/{coin_id}", response_model=CoinDetailResponse)
def get_coin(
    coin_id: str,
    market: MarketDataService = Depends(get_market_data_service),
) -> CoinDetailResponse:
    """Get detail for a single coin."""
    return CoinDetailResponse.model_validate(market.get_coin_detail(coin_id))


@router.post("/prices", response_model=PricesResponse)
def get_prices(
    body: PricesRequest,
    vs_currency: str = Query("usd"),
    market: MarketDataService = Depends(get_market_data_service),
) -> PricesResponse:
    """Get current prices for up to 100 coins (0 for coins without a price)."""
    currency = validate_currency(vs_currency)
    prices = market.get_prices_for(body.coin_ids, currency)
    return PricesResponse(currency=currency, prices=prices)


@router.get("/coins/by-ids", response_model=CoinsByIdsResponse)
def get_coins_by_ids(
    ids: str = Query(..., description="Comma-separated coin IDs"),
    vs_currency: str = Query("usd"),
    market: MarketDataService = Depends(get_market_data_service),
) -> CoinsByIdsResponse:
    """Get market rows for specific coins."""
    currency = validate_currency(vs_currency)
    coin_ids = [c.strip() for c in ids.split(",") if c.strip()]
    if not coin_ids:
        raise ValidationError("ids", "At least one valid coin ID is required")
    if len(coin_ids) > MAX_IDS_PER_REQUEST:
        raise ValidationError("ids", f"Maximum {MAX_IDS_PER_REQUEST} coins allowed per request")

    rows = market.get_coins_by_ids(coin_ids, currency)
    return CoinsByIdsResponse(data=rows, count=len(rows))


@router.get("/history/{coin_id}", response_model=PriceHistoryResponse)
def get_history(
    coin_id: str,
    vs_currency: str = Query("usd"),
    days: int = Query(DEFAULT_HISTORY_DAYS, ge=1, le=MAX_HISTORY_DAYS),
    market: MarketDataService = Depends(get_market_data_service),
) -> PriceHistoryResponse:
    """Get price history for a coin."""
    currency = validate_currency(vs_currency)
    history = market.get_history(coin_id, currency, days)
    return PriceHistoryResponse(
        coin_id=coin_id.strip().lower(),
        currency=currency,
        days=days,
        prices=history.prices,
        market_caps=history.market_caps,
        total_volumes=history.total_volumes,
    )


@router.get("/search", response_model=SearchResponse)
def search_coins(
    q: str = Query(..., min_length=MIN_SEARCH_LENGTH),
    market: MarketDataService = Depends(get_market_data_service),
) -> SearchResponse:
    """Search coins by name or symbol."""
    results = market.search(q)
    return SearchResponse(
        query=q,
        results=[CoinMatchResponse.model_validate(r) for r in results],
        count=len(results),
    )


@router.get("/trending", response_model=list[CoinMatchResponse])
def get_trending(
    market: MarketDataService = Depends(get_market_data_service),
) -> list[CoinMatchResponse]:
    """Get trending coins."""
    return [CoinMatchResponse.model_validate(c) for c in market.get_trending()]


@router.get("/global", response_model=GlobalStatsResponse)
def get_global(
    market: MarketDataService = Depends(get_market_data_service),
) -> GlobalStatsResponse:
    """Get global market statistics."""
    return GlobalStatsResponse.model_validate(market.get_global_stats())
