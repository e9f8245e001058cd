"""Market data service: memoized access to the market data provider."""

import logging
from typing import Any, Callable, Iterable, Sequence, TypeVar

from cryptotrack.core.exceptions import UpstreamError
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
    MarketDataProvider,
    normalize_coin_id,
    normalize_coin_ids,
    normalize_currency,
    validate_history_days,
    validate_market_page,
)
from cryptotrack.repositories.protocols import MemoCache

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MarketDataService:
    """
    Single entry point for market data used by the other services and routes.

    Wraps the provider with the memo cache. Prices are cached per coin so a
    request only fetches the coins that are not already fresh. Price reads
    degrade gracefully on provider failure; every other call propagates
    provider errors to the caller.
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        cache: MemoCache,
        serve_stale_on_error: bool = False,
    ):
        self._provider = provider
        self._cache = cache
        self._serve_stale_on_error = serve_stale_on_error

    # -------------------------------------------------------------------------
    # Prices (best effort)
    # -------------------------------------------------------------------------

    def get_prices_for(self, coin_ids: Iterable[str], currency: str = DEFAULT_CURRENCY) -> dict[str, float]:
        """
        Return coin_id -> price in currency, never raising on provider failure.

        Fresh cached prices are reused; the remaining coins are fetched in one
        batch and cached. Coins the provider does not price are reported as 0
        and logged. If the batch fails, only cached prices are returned (or
        the last known prices, when serving stale prices is enabled).
        """
        ids = normalize_coin_ids(coin_ids)
        if not ids:
            return {}
        currency = normalize_currency(currency)

        result: dict[str, float] = {}
        missing: list[str] = []
        for coin_id in ids:
            price = self._cache.get(self._price_key(currency, coin_id))
            if price is None:
                missing.append(coin_id)
            else:
                result[coin_id] = price

        if not missing:
            return result

        try:
            fresh = self._provider.get_simple_prices(missing, [currency])
        except UpstreamError as exc:
            logger.warning(
                "Price fetch for %d coin(s) in %s failed, serving cached data: %s",
                len(missing), currency, exc.message,
            )
            if self._serve_stale_on_error:
                for coin_id in missing:
                    stale = self._cache.get_stale(self._price_key(currency, coin_id))
                    if stale is not None:
                        result[coin_id] = stale
            return result

        gaps = []
        for coin_id in missing:
            price = (fresh.get(coin_id) or {}).get(currency)
            if price is None:
                gaps.append(coin_id)
                result[coin_id] = 0.0
            else:
                self._cache.set(self._price_key(currency, coin_id), price)
                result[coin_id] = price

        if gaps:
            logger.warning("No %s price available for: %s", currency, ", ".join(gaps))

        return result

    # -------------------------------------------------------------------------
    # Memoized provider calls (errors propagate)
    # -------------------------------------------------------------------------

    def list_coins(self) -> list[CoinListing]:
        return self._cached("coins_list", self._provider.list_coins)

    def get_market_page(
        self,
        currency: str = DEFAULT_CURRENCY,
        page: int = DEFAULT_PAGE,
        per_page: int = DEFAULT_PER_PAGE,
        order: str = DEFAULT_ORDER,
        price_change_windows: Sequence[str] = ("24h",),
    ) -> list[MarketRow]:
        validate_market_page(page, per_page, order)
        currency = normalize_currency(currency)
        windows = tuple(price_change_windows)
        key = f"markets:{currency}:{page}:{per_page}:{order}:{','.join(windows)}"
        return self._cached(key, lambda: self._provider.get_market_page(
            currency=currency,
            page=page,
            per_page=per_page,
            order=order,
            price_change_windows=windows,
        ))

    def get_coin_detail(self, coin_id: str) -> CoinDetail:
        coin_id = normalize_coin_id(coin_id)
        return self._cached(f"coin:{coin_id}", lambda: self._provider.get_coin_detail(coin_id))

    def verify_coin(self, coin_id: str) -> CoinDetail:
        """
        Confirm the provider knows the coin before a write.

        Raises CoinNotFoundError for unknown coins and UpstreamError when the
        provider cannot be asked; neither is swallowed.
        """
        return self.get_coin_detail(coin_id)

    def get_coins_by_ids(self, coin_ids: Iterable[str], currency: str = DEFAULT_CURRENCY) -> list[MarketRow]:
        ids = normalize_coin_ids(coin_ids)
        if not ids:
            return []
        currency = normalize_currency(currency)
        key = f"coins:{','.join(ids)}:{currency}"
        return self._cached(key, lambda: self._provider.get_coins_by_ids(ids, currency))

    def get_history(
        self,
        coin_id: str,
        currency: str = DEFAULT_CURRENCY,
        days: int = DEFAULT_HISTORY_DAYS,
    ) -> PriceHistory:
        coin_id = normalize_coin_id(coin_id)
        validate_history_days(days)
        currency = normalize_currency(currency)
        key = f"history:{coin_id}:{currency}:{days}"
        return self._cached(key, lambda: self._provider.get_history(coin_id, currency, days))

    def search(self, query: str, min_length: int = MIN_SEARCH_LENGTH) -> list[CoinMatch]:
        query = (query or "").strip()
        if len(query) < min_length:
            return []
        return self._cached(
            f"search:{query.lower()}",
            lambda: self._provider.search(query, min_length=min_length),
        )

    def get_trending(self) -> list[CoinMatch]:
        return self._cached("trending", self._provider.get_trending)

    def get_global_stats(self) -> GlobalStats:
        return self._cached("global", self._provider.get_global_stats)

    # -------------------------------------------------------------------------
    # Cache administration
    # -------------------------------------------------------------------------

    def cache_stats(self) -> dict[str, Any]:
        """Return memo cache statistics."""
        return self._cache.stats()

    def clear_cache(self) -> None:
        """Drop every memoized response."""
        self._cache.clear()
        logger.info("Market data cache cleared")

    def _cached(self, key: str, fetch: Callable[[], T]) -> T:
        value = self._cache.get(key)
        if value is not None:
            return value
        value = fetch()
        self._cache.set(key, value)
        return value

    @staticmethod
    def _price_key(currency: str, coin_id: str) -> str:
        return f"price:{currency}:{coin_id}"
