"""
Unit tests for application wiring.

Tests cover:
- Provider selection from settings
- One shared market data service (and cache) per context
- Cache TTL taken from settings
- Concurrent first access building shared objects once
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

from cryptotrack import app_context as app_context_module
from cryptotrack.app_context import AppContext, build_provider
from cryptotrack.config.settings import Settings
from cryptotrack.providers import CoinGeckoProvider, StubMarketDataProvider


class TestBuildProvider:
    def test_stub_selected(self):
        provider = build_provider(Settings(market_data_provider="stub"))

        assert isinstance(provider, StubMarketDataProvider)

    def test_coingecko_selected(self):
        provider = build_provider(Settings(
            market_data_provider="coingecko",
            market_data_base_url="https://api.example.test/api/v3",
        ))

        assert isinstance(provider, CoinGeckoProvider)
        provider.close()


class TestAppContext:
    def test_market_data_shared_across_services(self, session_factory):
        """
        GIVEN one context
        WHEN portfolio and watchlist services are built per request
        THEN they share one market data service and its cache
        """
        context = AppContext(
            settings=Settings(market_data_provider="stub", market_data_cache_ttl_seconds=30),
            session_factory=session_factory,
        )

        context.portfolio()
        context.watchlist()

        assert context.market_data is context.market_data
        assert context.cache.ttl_seconds == 30
        assert context.market_data.cache_stats()["ttl_seconds"] == 30

    def test_prices_cached_across_requests(self, session_factory, counting_provider):
        context = AppContext(
            settings=Settings(market_data_provider="stub"),
            provider=counting_provider,
            session_factory=session_factory,
        )

        context.portfolio().get_snapshot("nobody", "usd")
        context.market_data.get_prices_for(["bitcoin"], "usd")
        context.market_data.get_prices_for(["bitcoin"], "usd")

        assert counting_provider.get_simple_prices.call_count == 1

    def test_concurrent_first_access_builds_once(self, session_factory, monkeypatch):
        """
        GIVEN a context with nothing built yet and a slow provider factory
        WHEN many threads ask for the market data service at once
        THEN one provider, one cache and one service are shared by all
        """
        built = []
        start = threading.Barrier(8)

        def slow_build(settings):
            built.append(settings)
            time.sleep(0.05)
            return StubMarketDataProvider()

        monkeypatch.setattr(app_context_module, "build_provider", slow_build)
        context = AppContext(
            settings=Settings(market_data_provider="stub"),
            session_factory=session_factory,
        )

        def first_access(_):
            start.wait()
            return context.market_data

        with ThreadPoolExecutor(max_workers=8) as pool:
            services = list(pool.map(first_access, range(8)))

        assert len(built) == 1
        assert all(service is services[0] for service in services)
