"""Market data provider protocol and shared parameter rules."""

from typing import Iterable, Protocol, Sequence

from cryptotrack.core.exceptions import ValidationError
from cryptotrack.domain.views import (
    CoinDetail,
    CoinListing,
    CoinMatch,
    GlobalStats,
    MarketRow,
    PriceHistory,
)


DEFAULT_CURRENCY = "usd"
DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 100
MAX_PER_PAGE = 250
MAX_HISTORY_DAYS = 365
DEFAULT_HISTORY_DAYS = 7
MIN_SEARCH_LENGTH = 2

MARKET_ORDERS = frozenset({
    "market_cap_desc",
    "market_cap_asc",
    "volume_desc",
    "volume_asc",
    "id_asc",
    "id_desc",
    "gecko_desc",
    "gecko_asc",
})
DEFAULT_ORDER = "market_cap_desc"


class MarketDataProvider(Protocol):
    """
    Protocol for market data providers.

    Implementations raise UpstreamError on transport failure or a non-2xx
    answer and CoinNotFoundError when the provider reports an unknown coin.
    They do not cache.
    """

    def list_coins(self) -> list[CoinListing]:
        """Return every coin the provider knows."""
        ...

    def get_market_page(
        self,
        currency: str = DEFAULT_CURRENCY,
        page: int = DEFAULT_PAGE,
        per_page: int = DEFAULT_PER_PAGE,
        order: str = DEFAULT_ORDER,
        price_change_windows: Sequence[str] = ("24h",),
    ) -> list[MarketRow]:
        """Return one page of market rows."""
        ...

    def get_coin_detail(self, coin_id: str) -> CoinDetail:
        """Return detail for one coin."""
        ...

    def get_simple_prices(
        self,
        coin_ids: Iterable[str],
        currencies: Iterable[str],
    ) -> dict[str, dict[str, float]]:
        """Return coin_id -> currency -> price in one batched call."""
        ...

    def get_coins_by_ids(self, coin_ids: Iterable[str], currency: str = DEFAULT_CURRENCY) -> list[MarketRow]:
        """Return market rows restricted to the given coins."""
        ...

    def get_history(
        self,
        coin_id: str,
        currency: str = DEFAULT_CURRENCY,
        days: int = DEFAULT_HISTORY_DAYS,
    ) -> PriceHistory:
        """Return a price time series for the last `days` days."""
        ...

    def search(self, query: str, min_length: int = MIN_SEARCH_LENGTH) -> list[CoinMatch]:
        """Search coins by name or symbol."""
        ...

    def get_trending(self) -> list[CoinMatch]:
        """Return currently trending coins."""
        ...

    def get_global_stats(self) -> GlobalStats:
        """Return global market statistics."""
        ...


# =============================================================================
# PARAMETER NORMALIZATION (shared by all providers)
# =============================================================================


def normalize_coin_id(coin_id: str) -> str:
    """Strip and lower-case a coin id; reject blanks."""
    normalized = (coin_id or "").strip().lower()
    if not normalized:
        raise ValidationError("coin_id", "Coin ID is required")
    return normalized


def normalize_coin_ids(coin_ids: Iterable[str]) -> list[str]:
    """Return sorted, de-duplicated, lower-cased coin ids (blanks dropped)."""
    return sorted({c.strip().lower() for c in coin_ids if c and c.strip()})


def normalize_currency(currency: str) -> str:
    """Lower-case a currency code, defaulting to usd when blank."""
    return (currency or DEFAULT_CURRENCY).strip().lower() or DEFAULT_CURRENCY


def validate_market_page(page: int, per_page: int, order: str) -> None:
    """Check pagination and sort order of a market page request."""
    if page < 1:
        raise ValidationError("page", "Page must be a positive integer")
    if not 1 <= per_page <= MAX_PER_PAGE:
        raise ValidationError("per_page", f"Per page must be between 1 and {MAX_PER_PAGE}")
    if order not in MARKET_ORDERS:
        raise ValidationError("order", f"Invalid order parameter: {order}")


def validate_history_days(days: int) -> None:
    """Check the history window."""
    if not 1 <= days <= MAX_HISTORY_DAYS:
        raise ValidationError("days", f"Days must be between 1 and {MAX_HISTORY_DAYS}")


def history_interval(days: int) -> str:
    """Hourly points for a one-day window, daily points otherwise."""
    return "hourly" if days <= 1 else "daily"
