"""CoinGecko market data provider over HTTP."""

import logging
import math
from typing import Any, Iterable, Optional, Sequence

import requests

from cryptotrack.core.exceptions import CoinNotFoundError, UpstreamError
from cryptotrack.domain.views import (
    CoinDetail,
    CoinListing,
    CoinMatch,
    GlobalStats,
    MarketRow,
    PriceHistory,
)
from cryptotrack.providers.market_data_provider import (
    DEFAULT_CURRENCY,
    DEFAULT_HISTORY_DAYS,
    DEFAULT_ORDER,
    DEFAULT_PAGE,
    DEFAULT_PER_PAGE,
    MIN_SEARCH_LENGTH,
    history_interval,
    normalize_coin_id,
    normalize_coin_ids,
    normalize_currency,
    validate_history_days,
    validate_market_page,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.coingecko.com/api/v3"
DEFAULT_TIMEOUT_SECONDS = 10.0


def _price_or_none(value: Any) -> Optional[float]:
    """Return a finite, non-negative float or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(price) or price < 0:
        return None
    return price


def _matches(payload: dict[str, Any]) -> list[CoinMatch]:
    """Coins of a search or trending payload."""
    coins = payload.get("coins")
    if not isinstance(coins, list):
        return []
    return [CoinMatch.from_payload(c) for c in coins if isinstance(c, dict)]


class CoinGeckoProvider:
    """
    Client for the CoinGecko v3 REST API.

    One requests.Session is shared by all calls (connection pooling); every
    call carries the configured timeout. No caching happens here.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str = "CryptoTrack/1.0",
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._session = session or requests.Session()
        self._session.headers.update({
            "Accept": "application/json",
            "User-Agent": user_agent,
        })

    def close(self) -> None:
        """Release pooled connections."""
        self._session.close()

    # -------------------------------------------------------------------------
    # Endpoints
    # -------------------------------------------------------------------------

    def list_coins(self) -> list[CoinListing]:
        payload = self._get("/coins/list", expect=list)
        return [CoinListing.from_payload(item) for item in payload if isinstance(item, dict)]

    def get_market_page(
        self,
        currency: str = DEFAULT_CURRENCY,
        page: int = DEFAULT_PAGE,
        per_page: int = DEFAULT_PER_PAGE,
        order: str = DEFAULT_ORDER,
        price_change_windows: Sequence[str] = ("24h",),
    ) -> list[MarketRow]:
        """Fetch a single page of market rows; callers paginate explicitly."""
        validate_market_page(page, per_page, order)
        payload = self._get("/coins/markets", params={
            "vs_currency": normalize_currency(currency),
            "order": order,
            "per_page": per_page,
            "page": page,
            "sparkline": "false",
            "price_change_percentage": ",".join(price_change_windows),
        }, expect=list)
        return [row for row in payload if isinstance(row, dict)]

    def get_coin_detail(self, coin_id: str) -> CoinDetail:
        coin_id = normalize_coin_id(coin_id)
        payload = self._get(
            f"/coins/{coin_id}",
            params={
                "localization": "false",
                "tickers": "false",
                "market_data": "true",
                "community_data": "false",
                "developer_data": "false",
                "sparkline": "false",
            },
            coin_id=coin_id,
            expect=dict,
        )
        if "error" in payload:
            raise CoinNotFoundError(coin_id)
        return CoinDetail.from_payload(payload)

    def get_simple_prices(
        self,
        coin_ids: Iterable[str],
        currencies: Iterable[str],
    ) -> dict[str, dict[str, float]]:
        """
        Fetch prices for many coins in one call.

        Returns coin_id -> currency -> price for the requested currencies
        only. Coins the provider does not know are omitted.
        """
        ids = normalize_coin_ids(coin_ids)
        if not ids:
            return {}
        vs = sorted({normalize_currency(c) for c in currencies}) or [DEFAULT_CURRENCY]

        payload = self._get("/simple/price", params={
            "ids": ",".join(ids),
            "vs_currencies": ",".join(vs),
            "include_24hr_change": "true",
            "include_24hr_vol": "true",
            "include_market_cap": "true",
            "include_last_updated_at": "true",
        }, expect=dict)

        result: dict[str, dict[str, float]] = {}
        for coin_id in ids:
            data = payload.get(coin_id)
            if not isinstance(data, dict):
                continue
            prices = {}
            for currency in vs:
                price = _price_or_none(data.get(currency))
                if price is not None:
                    prices[currency] = price
            if prices:
                result[coin_id] = prices
        return result

    def get_coins_by_ids(self, coin_ids: Iterable[str], currency: str = DEFAULT_CURRENCY) -> list[MarketRow]:
        ids = normalize_coin_ids(coin_ids)
        if not ids:
            return []
        payload = self._get("/coins/markets", params={
            "ids": ",".join(ids),
            "vs_currency": normalize_currency(currency),
            "order": DEFAULT_ORDER,
            "per_page": len(ids),
            "page": 1,
            "sparkline": "false",
            "price_change_percentage": "24h,7d,30d",
        }, expect=list)
        return [row for row in payload if isinstance(row, dict)]

    def get_history(
        self,
        coin_id: str,
        currency: str = DEFAULT_CURRENCY,
        days: int = DEFAULT_HISTORY_DAYS,
    ) -> PriceHistory:
        coin_id = normalize_coin_id(coin_id)
        validate_history_days(days)
        payload = self._get(
            f"/coins/{coin_id}/market_chart",
            params={
                "vs_currency": normalize_currency(currency),
                "days": days,
                "interval": history_interval(days),
            },
            coin_id=coin_id,
            expect=dict,
        )
        return PriceHistory.from_payload(payload)

    def search(self, query: str, min_length: int = MIN_SEARCH_LENGTH) -> list[CoinMatch]:
        query = (query or "").strip()
        if len(query) < min_length:
            return []
        payload = self._get("/search", params={"query": query}, expect=dict)
        return _matches(payload)

    def get_trending(self) -> list[CoinMatch]:
        return _matches(self._get("/search/trending", expect=dict))

    def get_global_stats(self) -> GlobalStats:
        payload = self._get("/global", expect=dict)
        return GlobalStats.from_payload(payload)

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    def _get(
        self,
        endpoint: str,
        params: Optional[dict[str, Any]] = None,
        coin_id: Optional[str] = None,
        expect: Optional[type] = None,
    ) -> Any:
        """
        GET an endpoint and decode its JSON body.

        A 404 on a coin-scoped endpoint becomes CoinNotFoundError; every
        other failure, including a body that is not of the expected JSON
        type, becomes UpstreamError.
        """
        url = f"{self._base_url}{endpoint}"
        try:
            response = self._session.get(url, params=params, timeout=self._timeout)
        except requests.RequestException as exc:
            logger.warning("Market data request %s failed: %s", endpoint, exc)
            raise UpstreamError(endpoint, exc) from exc

        status = response.status_code
        if status == 404 and coin_id is not None:
            raise CoinNotFoundError(coin_id)
        if not 200 <= status < 300:
            logger.warning("Market data request %s returned HTTP %s", endpoint, status)
            raise UpstreamError(endpoint, f"HTTP {status}")

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("Market data request %s returned an invalid body", endpoint)
            raise UpstreamError(endpoint, "invalid JSON body") from exc

        if expect is not None and not isinstance(payload, expect):
            logger.warning(
                "Market data request %s returned %s, expected %s",
                endpoint, type(payload).__name__, expect.__name__,
            )
            raise UpstreamError(endpoint, "unexpected body")
        return payload
