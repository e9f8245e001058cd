"""
Unit tests for MarketDataService.

Tests cover:
- Price caching per coin and call coalescing
- Partial cache hits fetching only the missing coins
- Cache TTL expiration
- Graceful degradation on provider failure
- Optional stale-price fallback
- Memoized pass-through calls and error propagation
"""

import logging

import pytest

from cryptotrack.core.exceptions import CoinNotFoundError, UpstreamError, ValidationError
from cryptotrack.repositories.memory import InMemoryMemoCache
from cryptotrack.services import MarketDataService

from tests.conftest import FailingMarketProvider, FakeClock


# =============================================================================
# PRICE COALESCING TESTS
# =============================================================================


class TestGetPricesFor:
    """Tests for the best-effort batched price lookup."""

    def test_returns_prices_for_known_coins(self, market_data_service: MarketDataService):
        """
        GIVEN the stub provider
        WHEN I request bitcoin and ethereum in usd
        THEN both prices are returned
        """
        prices = market_data_service.get_prices_for({"bitcoin", "ethereum"}, "usd")

        assert prices == {"bitcoin": 65000.0, "ethereum": 3200.0}

    def test_second_request_within_ttl_served_from_cache(
        self,
        market_data_service: MarketDataService,
        counting_provider,
    ):
        """
        GIVEN a first request for {bitcoin, ethereum}
        WHEN the same set is requested again within the TTL
        THEN the provider was called exactly once
        """
        first = market_data_service.get_prices_for({"bitcoin", "ethereum"}, "usd")
        second = market_data_service.get_prices_for({"ethereum", "bitcoin"}, "usd")

        assert first == second
        assert counting_provider.get_simple_prices.call_count == 1

    def test_partial_hit_fetches_only_missing_coins(
        self,
        market_data_service: MarketDataService,
        counting_provider,
    ):
        """
        GIVEN bitcoin already cached
        WHEN I request bitcoin and solana
        THEN only solana is asked of the provider
        """
        market_data_service.get_prices_for(["bitcoin"], "usd")

        prices = market_data_service.get_prices_for(["bitcoin", "solana"], "usd")

        assert prices == {"bitcoin": 65000.0, "solana": 150.0}
        assert counting_provider.get_simple_prices.call_count == 2
        last_ids, last_currencies = counting_provider.get_simple_prices.call_args.args
        assert list(last_ids) == ["solana"]
        assert list(last_currencies) == ["usd"]

    def test_currencies_cached_separately(
        self,
        market_data_service: MarketDataService,
        counting_provider,
    ):
        market_data_service.get_prices_for(["bitcoin"], "usd")
        eur = market_data_service.get_prices_for(["bitcoin"], "eur")

        assert eur["bitcoin"] == pytest.approx(65000.0 * 0.92)
        assert counting_provider.get_simple_prices.call_count == 2

    def test_expired_prices_are_refetched(
        self,
        market_data_service: MarketDataService,
        counting_provider,
        fake_clock: FakeClock,
    ):
        """
        GIVEN cached prices
        WHEN the TTL elapses and prices are requested again
        THEN the provider is called again
        """
        market_data_service.get_prices_for(["bitcoin"], "usd")
        fake_clock.advance(61)
        market_data_service.get_prices_for(["bitcoin"], "usd")

        assert counting_provider.get_simple_prices.call_count == 2

    def test_empty_request_makes_no_call(
        self,
        market_data_service: MarketDataService,
        counting_provider,
    ):
        assert market_data_service.get_prices_for([], "usd") == {}
        counting_provider.get_simple_prices.assert_not_called()

    def test_unpriced_coin_filled_with_zero_and_logged(
        self,
        market_data_service: MarketDataService,
        counting_provider,
        caplog,
    ):
        """
        GIVEN a coin the provider does not price
        WHEN I request it with a known coin
        THEN it is reported as 0, the gap is logged, and it is not cached
        """
        with caplog.at_level(logging.WARNING):
            prices = market_data_service.get_prices_for(["bitcoin", "madeupcoin"], "usd")

        assert prices == {"bitcoin": 65000.0, "madeupcoin": 0.0}
        assert "madeupcoin" in caplog.text

        market_data_service.get_prices_for(["madeupcoin"], "usd")
        assert counting_provider.get_simple_prices.call_count == 2


# =============================================================================
# DEGRADATION TESTS
# =============================================================================


class TestProviderFailure:
    """Tests for price reads when the provider is down."""

    def test_failure_with_empty_cache_returns_empty_mapping(
        self,
        failing_provider: FailingMarketProvider,
        memo_cache: InMemoryMemoCache,
        caplog,
    ):
        """
        GIVEN a failing provider and an empty cache
        WHEN I request three coins
        THEN an empty mapping is returned, nothing is raised, and the failure is logged
        """
        service = MarketDataService(provider=failing_provider, cache=memo_cache)

        with caplog.at_level(logging.WARNING):
            prices = service.get_prices_for(["bitcoin", "ethereum", "solana"], "usd")

        assert prices == {}
        assert failing_provider.calls == 1
        assert "failed" in caplog.text

    def test_failure_returns_cached_subset(
        self,
        stub_provider,
        failing_provider: FailingMarketProvider,
        memo_cache: InMemoryMemoCache,
    ):
        """
        GIVEN bitcoin cached by a healthy provider
        WHEN the provider fails for bitcoin and ethereum
        THEN the cached bitcoin price is still returned
        """
        MarketDataService(provider=stub_provider, cache=memo_cache).get_prices_for(["bitcoin"], "usd")
        service = MarketDataService(provider=failing_provider, cache=memo_cache)

        prices = service.get_prices_for(["bitcoin", "ethereum"], "usd")

        assert prices == {"bitcoin": 65000.0}

    def test_expired_prices_not_served_by_default(
        self,
        stub_provider,
        failing_provider: FailingMarketProvider,
        memo_cache: InMemoryMemoCache,
        fake_clock: FakeClock,
    ):
        MarketDataService(provider=stub_provider, cache=memo_cache).get_prices_for(["bitcoin"], "usd")
        fake_clock.advance(120)
        service = MarketDataService(provider=failing_provider, cache=memo_cache)

        assert service.get_prices_for(["bitcoin"], "usd") == {}

    def test_stale_prices_served_when_enabled(
        self,
        stub_provider,
        failing_provider: FailingMarketProvider,
        memo_cache: InMemoryMemoCache,
        fake_clock: FakeClock,
    ):
        """
        GIVEN an expired bitcoin price and serving stale prices enabled
        WHEN the provider fails
        THEN the last known bitcoin price is returned
        """
        MarketDataService(provider=stub_provider, cache=memo_cache).get_prices_for(["bitcoin"], "usd")
        fake_clock.advance(120)
        service = MarketDataService(
            provider=failing_provider,
            cache=memo_cache,
            serve_stale_on_error=True,
        )

        prices = service.get_prices_for(["bitcoin", "ethereum"], "usd")

        assert prices == {"bitcoin": 65000.0}


# =============================================================================
# MEMOIZED PASS-THROUGH TESTS
# =============================================================================


class TestMemoizedCalls:
    """Tests for cached provider calls other than prices."""

    def test_list_coins_cached(self, market_data_service, counting_provider):
        first = market_data_service.list_coins()
        second = market_data_service.list_coins()

        assert first == second
        assert len(first) == 10
        assert counting_provider.list_coins.call_count == 1

    def test_market_page_cached_per_shape(self, market_data_service, counting_provider):
        market_data_service.get_market_page("usd", page=1, per_page=5)
        market_data_service.get_market_page("usd", page=1, per_page=5)
        market_data_service.get_market_page("usd", page=2, per_page=5)

        assert counting_provider.get_market_page.call_count == 2

    def test_market_page_validated_before_call(self, market_data_service, counting_provider):
        with pytest.raises(ValidationError):
            market_data_service.get_market_page("usd", page=1, per_page=500)
        counting_provider.get_market_page.assert_not_called()

    def test_history_validated_before_call(self, market_data_service, counting_provider):
        with pytest.raises(ValidationError):
            market_data_service.get_history("bitcoin", "usd", days=400)
        counting_provider.get_history.assert_not_called()

    def test_coins_by_ids_key_ignores_order(self, market_data_service, counting_provider):
        rows = market_data_service.get_coins_by_ids(["solana", "bitcoin"], "usd")
        market_data_service.get_coins_by_ids(["bitcoin", "solana"], "usd")

        assert [r["id"] for r in rows] == ["bitcoin", "solana"]
        assert counting_provider.get_coins_by_ids.call_count == 1

    def test_short_search_skips_provider(self, market_data_service, counting_provider):
        assert market_data_service.search("b") == []
        counting_provider.search.assert_not_called()

    def test_search_cached_case_insensitively(self, market_data_service, counting_provider):
        market_data_service.search("Bit")
        market_data_service.search("bit")

        assert counting_provider.search.call_count == 1

    def test_pass_through_errors_propagate(
        self,
        failing_provider: FailingMarketProvider,
        memo_cache: InMemoryMemoCache,
    ):
        """
        GIVEN a failing provider
        WHEN I call a non-price endpoint
        THEN UpstreamError reaches the caller and nothing is cached
        """
        service = MarketDataService(provider=failing_provider, cache=memo_cache)

        with pytest.raises(UpstreamError):
            service.get_trending()
        with pytest.raises(UpstreamError):
            service.get_global_stats()
        assert memo_cache.stats()["size"] == 0

    def test_verify_unknown_coin_raises(self, market_data_service):
        with pytest.raises(CoinNotFoundError):
            market_data_service.verify_coin("madeupcoin")

    def test_verify_known_coin_returns_detail(self, market_data_service, counting_provider):
        detail = market_data_service.verify_coin(" Bitcoin ")
        market_data_service.get_coin_detail("bitcoin")

        assert detail.id == "bitcoin"
        assert counting_provider.get_coin_detail.call_count == 1


# =============================================================================
# CACHE ADMINISTRATION TESTS
# =============================================================================


class TestCacheAdministration:
    def test_stats_show_per_coin_price_keys(self, market_data_service):
        market_data_service.get_prices_for(["bitcoin", "ethereum"], "usd")

        stats = market_data_service.cache_stats()

        assert stats["size"] == 2
        assert sorted(stats["keys"]) == ["price:usd:bitcoin", "price:usd:ethereum"]

    def test_clear_forces_refetch(self, market_data_service, counting_provider):
        market_data_service.get_prices_for(["bitcoin"], "usd")
        market_data_service.clear_cache()
        market_data_service.get_prices_for(["bitcoin"], "usd")

        assert counting_provider.get_simple_prices.call_count == 2
