"""Market data providers module."""

from cryptotrack.providers.market_data_provider import MarketDataProvider
from cryptotrack.providers.coingecko_provider import CoinGeckoProvider
from cryptotrack.providers.stub_provider import StubMarketDataProvider

__all__ = [
    "MarketDataProvider",
    "CoinGeckoProvider",
    "StubMarketDataProvider",
]
