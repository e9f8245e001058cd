"""
Unit tests for InMemoryMemoCache.

Tests cover:
- set/get round trip
- TTL lapse without explicit removal
- Stale reads past the TTL
- Stats introspection
- Clear
"""

from cryptotrack.repositories.memory import InMemoryMemoCache
from cryptotrack.repositories.memory.memo_cache import DEFAULT_TTL_SECONDS

from tests.conftest import FakeClock


# =============================================================================
# GET / SET TESTS
# =============================================================================


class TestGetSet:
    """Tests for basic get/set behavior."""

    def test_set_then_get_returns_value(self, memo_cache: InMemoryMemoCache):
        """
        GIVEN an empty cache
        WHEN I set a key and immediately get it
        THEN the stored value is returned
        """
        memo_cache.set("price:usd:bitcoin", 65000.0)

        assert memo_cache.get("price:usd:bitcoin") == 65000.0

    def test_get_missing_key_returns_default(self, memo_cache: InMemoryMemoCache):
        """
        GIVEN an empty cache
        WHEN I get an unknown key
        THEN None (or the given default) is returned
        """
        assert memo_cache.get("nope") is None
        assert memo_cache.get("nope", default="fallback") == "fallback"

    def test_set_overwrites_existing_value(self, memo_cache: InMemoryMemoCache):
        """
        GIVEN a key already stored
        WHEN I set it again
        THEN the last write wins
        """
        memo_cache.set("trending", ["a"])
        memo_cache.set("trending", ["b"])

        assert memo_cache.get("trending") == ["b"]

    def test_default_ttl_is_sixty_seconds(self):
        """
        GIVEN a cache built without arguments
        THEN its TTL is 60 seconds
        """
        assert InMemoryMemoCache().ttl_seconds == DEFAULT_TTL_SECONDS == 60.0


# =============================================================================
# TTL TESTS
# =============================================================================


class TestTtl:
    """Tests for time-to-live expiry."""

    def test_value_available_just_before_ttl(
        self,
        memo_cache: InMemoryMemoCache,
        fake_clock: FakeClock,
    ):
        """
        GIVEN a value stored with a 60s TTL
        WHEN 59.9s pass
        THEN the value is still returned
        """
        memo_cache.set("global", {"markets": 1})
        fake_clock.advance(59.9)

        assert memo_cache.get("global") == {"markets": 1}

    def test_value_absent_once_ttl_elapses(
        self,
        memo_cache: InMemoryMemoCache,
        fake_clock: FakeClock,
    ):
        """
        GIVEN a value stored with a 60s TTL
        WHEN exactly 60s pass
        THEN get behaves as if it was never stored
        """
        memo_cache.set("global", {"markets": 1})
        fake_clock.advance(60)

        assert memo_cache.get("global") is None

    def test_expired_entry_is_not_purged(
        self,
        memo_cache: InMemoryMemoCache,
        fake_clock: FakeClock,
    ):
        """
        GIVEN an expired entry
        WHEN I inspect stats
        THEN it is still physically present
        """
        memo_cache.set("coins_list", [])
        fake_clock.advance(120)

        assert memo_cache.get("coins_list") is None
        assert memo_cache.stats()["size"] == 1

    def test_set_after_expiry_refreshes_entry(
        self,
        memo_cache: InMemoryMemoCache,
        fake_clock: FakeClock,
    ):
        """
        GIVEN an expired entry
        WHEN the key is set again
        THEN it is fresh for another full TTL
        """
        memo_cache.set("trending", ["old"])
        fake_clock.advance(61)
        memo_cache.set("trending", ["new"])
        fake_clock.advance(30)

        assert memo_cache.get("trending") == ["new"]

    def test_get_stale_ignores_ttl(
        self,
        memo_cache: InMemoryMemoCache,
        fake_clock: FakeClock,
    ):
        """
        GIVEN an expired entry
        WHEN I call get_stale
        THEN the last stored value is returned
        """
        memo_cache.set("price:usd:bitcoin", 64000.0)
        fake_clock.advance(3600)

        assert memo_cache.get_stale("price:usd:bitcoin") == 64000.0
        assert memo_cache.get_stale("price:usd:ethereum") is None


# =============================================================================
# ADMINISTRATION TESTS
# =============================================================================


class TestAdministration:
    """Tests for stats and clear."""

    def test_stats_lists_keys_without_mutating(self, memo_cache: InMemoryMemoCache):
        """
        GIVEN two stored keys
        WHEN I call stats twice
        THEN size and keys are reported and unchanged
        """
        memo_cache.set("a", 1)
        memo_cache.set("b", 2)

        first = memo_cache.stats()
        second = memo_cache.stats()

        assert first["size"] == 2
        assert sorted(first["keys"]) == ["a", "b"]
        assert first["ttl_seconds"] == 60
        assert first == second
        assert memo_cache.get("a") == 1

    def test_clear_drops_everything(self, memo_cache: InMemoryMemoCache):
        """
        GIVEN stored keys
        WHEN I clear the cache
        THEN nothing is returned, not even stale values
        """
        memo_cache.set("a", 1)
        memo_cache.clear()

        assert memo_cache.get("a") is None
        assert memo_cache.get_stale("a") is None
        assert memo_cache.stats() == {"size": 0, "keys": [], "ttl_seconds": 60}
