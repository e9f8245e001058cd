"""Watchlist service."""

import logging

from cryptotrack.core.exceptions import (
    CoinNotFoundError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from cryptotrack.core.timezone import now_utc
from cryptotrack.domain.models import Watchlist, MAX_BATCH_ADD_COINS, MAX_WATCHLIST_COINS
from cryptotrack.domain.views import MarketRow, WatchlistBatchResult, WatchlistView
from cryptotrack.providers.market_data_provider import normalize_coin_id
from cryptotrack.repositories.protocols import WatchlistRepository
from cryptotrack.services.market_data_service import MarketDataService

logger = logging.getLogger(__name__)


def _placeholder_row(coin_id: str) -> MarketRow:
    return {
        "id": coin_id,
        "name": "Unknown",
        "symbol": "Unknown",
        "current_price": 0,
        "price_change_percentage_24h": 0,
    }


class WatchlistService:
    """
    Service for the coins a user follows.

    Listing degrades to placeholder rows when market data is unavailable;
    adding a coin requires the provider to confirm it exists.
    """

    def __init__(
        self,
        watchlist_repo: WatchlistRepository,
        market_data_service: MarketDataService,
    ):
        self._watchlists = watchlist_repo
        self._market = market_data_service

    def get_watchlist(self, user_id: str, currency: str) -> WatchlistView:
        """Return the watchlist with market rows in watchlist order."""
        watchlist = self._watchlists.get_or_create(user_id)
        if not watchlist.coin_ids:
            return WatchlistView(watchlist=watchlist)

        try:
            rows = self._market.get_coins_by_ids(watchlist.coin_ids, currency)
        except UpstreamError as exc:
            logger.warning("Watchlist market data unavailable for user %s: %s", user_id, exc.message)
            rows = []

        by_id = {row.get("id"): row for row in rows}
        coins = [by_id.get(coin_id) or _placeholder_row(coin_id) for coin_id in watchlist.coin_ids]
        return WatchlistView(watchlist=watchlist, coins=coins)

    def add_coin(self, user_id: str, coin_id: str) -> Watchlist:
        """Append a verified coin to the watchlist."""
        coin_id = normalize_coin_id(coin_id)
        watchlist = self._watchlists.get_or_create(user_id)
        if watchlist.contains(coin_id):
            raise ValidationError("coin_id", f"{coin_id} is already in the watchlist")
        if len(watchlist.coin_ids) >= MAX_WATCHLIST_COINS:
            raise ValidationError(
                "coin_id", f"Watchlist cannot hold more than {MAX_WATCHLIST_COINS} coins"
            )

        self._market.verify_coin(coin_id)

        watchlist.coin_ids.append(coin_id)
        watchlist.last_modified = now_utc()
        return self._watchlists.save(watchlist)

    def remove_coin(self, user_id: str, coin_id: str) -> Watchlist:
        """Remove a coin from the watchlist."""
        coin_id = normalize_coin_id(coin_id)
        watchlist = self._watchlists.get_or_create(user_id)
        if not watchlist.contains(coin_id):
            raise NotFoundError("Watchlist coin", coin_id)
        watchlist.coin_ids.remove(coin_id)
        watchlist.last_modified = now_utc()
        return self._watchlists.save(watchlist)

    def batch_add(self, user_id: str, coin_ids: list[str]) -> WatchlistBatchResult:
        """
        Add several coins, reporting each one as added, skipped or failed.

        Coins already listed are skipped. Coins the provider cannot confirm,
        or that would exceed the size limit, fail without stopping the rest.
        The watchlist is saved once, and only if something was added.
        """
        if not coin_ids:
            raise ValidationError("coin_ids", "must be a non-empty list")
        if len(coin_ids) > MAX_BATCH_ADD_COINS:
            raise ValidationError(
                "coin_ids", f"Maximum {MAX_BATCH_ADD_COINS} coins can be added at once"
            )
        normalized = [normalize_coin_id(coin_id) for coin_id in coin_ids]

        watchlist = self._watchlists.get_or_create(user_id)
        result = WatchlistBatchResult(watchlist=watchlist)
        for coin_id in normalized:
            if watchlist.contains(coin_id):
                result.skipped[coin_id] = "Already in watchlist"
                continue
            if len(watchlist.coin_ids) >= MAX_WATCHLIST_COINS:
                result.failed[coin_id] = "Watchlist is full"
                continue
            try:
                self._market.verify_coin(coin_id)
            except CoinNotFoundError:
                result.failed[coin_id] = "Coin not found"
                continue
            except UpstreamError as exc:
                logger.warning("Could not verify %s for user %s: %s", coin_id, user_id, exc.message)
                result.failed[coin_id] = "Market data unavailable"
                continue
            watchlist.coin_ids.append(coin_id)
            result.added.append(coin_id)

        if result.added:
            watchlist.last_modified = now_utc()
            result.watchlist = self._watchlists.save(watchlist)
        logger.info(
            "Batch watchlist add for user %s: %d added, %d skipped, %d failed",
            user_id, len(result.added), len(result.skipped), len(result.failed),
        )
        return result

    def reorder(self, user_id: str, coin_ids: list[str]) -> Watchlist:
        """Replace the order of the watchlist; coin_ids must list exactly the current coins."""
        normalized = [normalize_coin_id(coin_id) for coin_id in coin_ids]
        if len(set(normalized)) != len(normalized):
            raise ValidationError("coin_ids", "must not contain duplicates")

        watchlist = self._watchlists.get_or_create(user_id)
        missing = [coin_id for coin_id in normalized if not watchlist.contains(coin_id)]
        if missing:
            raise ValidationError(
                "coin_ids", f"Some coins are not in your watchlist: {', '.join(missing)}"
            )
        extra = [coin_id for coin_id in watchlist.coin_ids if coin_id not in normalized]
        if extra:
            raise ValidationError(
                "coin_ids",
                f"Reorder list is missing some coins from your watchlist: {', '.join(extra)}",
            )

        watchlist.coin_ids = normalized
        watchlist.last_modified = now_utc()
        return self._watchlists.save(watchlist)

    def contains(self, user_id: str, coin_id: str) -> bool:
        """Return True if the coin is on the user's watchlist."""
        coin_id = normalize_coin_id(coin_id)
        return self._watchlists.get_or_create(user_id).contains(coin_id)

    def clear(self, user_id: str) -> int:
        """Empty the watchlist and return how many coins it held."""
        watchlist = self._watchlists.get_or_create(user_id)
        previous_count = len(watchlist.coin_ids)
        watchlist.coin_ids = []
        watchlist.last_modified = now_utc()
        self._watchlists.save(watchlist)
        return previous_count
