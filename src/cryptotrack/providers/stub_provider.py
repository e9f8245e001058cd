"""Stub market data provider for offline/testing use."""

from typing import Iterable, Sequence

from cryptotrack.core.exceptions import CoinNotFoundError
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
    normalize_coin_id,
    normalize_coin_ids,
    normalize_currency,
    validate_history_days,
    validate_market_page,
)


# coin_id -> (symbol, name, usd price, market cap rank)
_STUB_COINS: dict[str, tuple[str, str, float, int]] = {
    "bitcoin": ("btc", "Bitcoin", 65000.0, 1),
    "ethereum": ("eth", "Ethereum", 3200.0, 2),
    "tether": ("usdt", "Tether", 1.0, 3),
    "binancecoin": ("bnb", "BNB", 580.0, 4),
    "solana": ("sol", "Solana", 150.0, 5),
    "ripple": ("xrp", "XRP", 0.52, 6),
    "cardano": ("ada", "Cardano", 0.45, 7),
    "dogecoin": ("doge", "Dogecoin", 0.12, 8),
    "polkadot": ("dot", "Polkadot", 6.8, 9),
    "chainlink": ("link", "Chainlink", 14.5, 10),
}

# usd -> other currency conversion factors
_FX: dict[str, float] = {
    "usd": 1.0,
    "eur": 0.92,
    "btc": 1 / 65000.0,
    "eth": 1 / 3200.0,
}

_DAY_MS = 86_400_000
_HOUR_MS = 3_600_000
_BASE_TS_MS = 1_717_200_000_000


class StubMarketDataProvider:
    """
    Provider with deterministic fake data for offline operation.

    Knows a fixed set of ten coins; unknown coin ids behave like the real
    provider (omitted from batch answers, CoinNotFoundError for detail).
    """

    def list_coins(self) -> list[CoinListing]:
        return [
            CoinListing(id=coin_id, symbol=symbol, name=name)
            for coin_id, (symbol, name, _, _) in _STUB_COINS.items()
        ]

    def get_market_page(
        self,
        currency: str = DEFAULT_CURRENCY,
        page: int = DEFAULT_PAGE,
        per_page: int = DEFAULT_PER_PAGE,
        order: str = DEFAULT_ORDER,
        price_change_windows: Sequence[str] = ("24h",),
    ) -> list[MarketRow]:
        validate_market_page(page, per_page, order)
        rows = [self._row(coin_id, currency) for coin_id in self._ordered_ids()]
        start = (page - 1) * per_page
        return rows[start:start + per_page]

    def get_coin_detail(self, coin_id: str) -> CoinDetail:
        coin_id = normalize_coin_id(coin_id)
        if coin_id not in _STUB_COINS:
            raise CoinNotFoundError(coin_id)
        symbol, name, _, rank = _STUB_COINS[coin_id]
        return CoinDetail(
            id=coin_id,
            symbol=symbol,
            name=name,
            current_price={cur: self._price(coin_id, cur) for cur in _FX},
            market_cap_rank=rank,
        )

    def get_simple_prices(
        self,
        coin_ids: Iterable[str],
        currencies: Iterable[str],
    ) -> dict[str, dict[str, float]]:
        ids = normalize_coin_ids(coin_ids)
        vs = sorted({normalize_currency(c) for c in currencies} & set(_FX)) or [DEFAULT_CURRENCY]
        return {
            coin_id: {cur: self._price(coin_id, cur) for cur in vs}
            for coin_id in ids
            if coin_id in _STUB_COINS
        }

    def get_coins_by_ids(self, coin_ids: Iterable[str], currency: str = DEFAULT_CURRENCY) -> list[MarketRow]:
        ids = normalize_coin_ids(coin_ids)
        return [self._row(coin_id, currency) for coin_id in self._ordered_ids() if coin_id in ids]

    def get_history(
        self,
        coin_id: str,
        currency: str = DEFAULT_CURRENCY,
        days: int = DEFAULT_HISTORY_DAYS,
    ) -> PriceHistory:
        coin_id = normalize_coin_id(coin_id)
        validate_history_days(days)
        if coin_id not in _STUB_COINS:
            raise CoinNotFoundError(coin_id)
        price = self._price(coin_id, currency)
        step, points = (_HOUR_MS, 24) if days <= 1 else (_DAY_MS, days)
        prices = [[float(_BASE_TS_MS + i * step), price] for i in range(points + 1)]
        return PriceHistory(prices=prices)

    def search(self, query: str, min_length: int = MIN_SEARCH_LENGTH) -> list[CoinMatch]:
        query = (query or "").strip().lower()
        if len(query) < min_length:
            return []
        return [
            CoinMatch(id=coin_id, symbol=symbol, name=name, market_cap_rank=rank)
            for coin_id, (symbol, name, _, rank) in _STUB_COINS.items()
            if query in coin_id or query in symbol or query in name.lower()
        ]

    def get_trending(self) -> list[CoinMatch]:
        return [
            CoinMatch(id=coin_id, symbol=symbol, name=name, market_cap_rank=rank)
            for coin_id, (symbol, name, _, rank) in list(_STUB_COINS.items())[:3]
        ]

    def get_global_stats(self) -> GlobalStats:
        total_usd = sum(price * 1_000_000 for _, _, price, _ in _STUB_COINS.values())
        return GlobalStats(
            active_cryptocurrencies=len(_STUB_COINS),
            markets=1,
            total_market_cap={"usd": total_usd},
            total_volume={"usd": total_usd / 20},
            market_cap_percentage={"btc": 52.0, "eth": 17.0},
            market_cap_change_percentage_24h_usd=0.0,
        )

    @staticmethod
    def _ordered_ids() -> list[str]:
        return sorted(_STUB_COINS, key=lambda c: _STUB_COINS[c][3])

    @staticmethod
    def _price(coin_id: str, currency: str) -> float:
        usd = _STUB_COINS[coin_id][2]
        return usd * _FX.get(normalize_currency(currency), 1.0)

    def _row(self, coin_id: str, currency: str) -> MarketRow:
        symbol, name, _, rank = _STUB_COINS[coin_id]
        return {
            "id": coin_id,
            "symbol": symbol,
            "name": name,
            "current_price": self._price(coin_id, currency),
            "market_cap_rank": rank,
            "price_change_percentage_24h": 0.0,
        }
