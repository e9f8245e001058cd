"""Application context: process-wide service wiring.

The memo cache, market data provider and market data service are built
once here and shared by every request. Route dependencies read them through
get_app_context().
"""

import logging
import threading
from typing import Optional

from sqlalchemy.orm import sessionmaker

from cryptotrack.config.settings import Settings, get_settings
from cryptotrack.providers import CoinGeckoProvider, MarketDataProvider, StubMarketDataProvider
from cryptotrack.repositories.memory import InMemoryMemoCache
from cryptotrack.repositories.protocols import MemoCache
from cryptotrack.repositories.sqlalchemy import (
    SqlAlchemyHoldingRepository,
    SqlAlchemyWatchlistRepository,
    get_session_factory,
)
from cryptotrack.services import MarketDataService, PortfolioService, WatchlistService

logger = logging.getLogger(__name__)


def build_provider(settings: Settings) -> MarketDataProvider:
    """Create the market data provider selected in settings."""
    if settings.market_data_provider == "stub":
        return StubMarketDataProvider()
    return CoinGeckoProvider(
        base_url=settings.market_data_base_url,
        timeout_seconds=settings.market_data_timeout_seconds,
        user_agent=settings.market_data_user_agent,
    )


class AppContext:
    """
    Owns the long-lived objects of the process.

    Any piece can be injected (tests pass a stub provider or a cache with a
    fake clock); the rest is built from settings on first use.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        provider: Optional[MarketDataProvider] = None,
        cache: Optional[MemoCache] = None,
        session_factory: Optional[sessionmaker] = None,
    ):
        self._settings = settings
        self._provider = provider
        self._cache = cache
        self._session_factory = session_factory
        self._market_data_service: Optional[MarketDataService] = None
        # Handlers run in a threadpool; shared objects are built once.
        self._lock = threading.RLock()

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def provider(self) -> MarketDataProvider:
        with self._lock:
            if self._provider is None:
                self._provider = build_provider(self.settings)
                logger.info("Market data provider: %s", type(self._provider).__name__)
            return self._provider

    @property
    def cache(self) -> MemoCache:
        with self._lock:
            if self._cache is None:
                self._cache = InMemoryMemoCache(
                    ttl_seconds=self.settings.market_data_cache_ttl_seconds
                )
            return self._cache

    @property
    def session_factory(self) -> sessionmaker:
        if self._session_factory is None:
            self._session_factory = get_session_factory()
        return self._session_factory

    @property
    def market_data(self) -> MarketDataService:
        """Get the shared MarketDataService instance."""
        with self._lock:
            if self._market_data_service is None:
                self._market_data_service = MarketDataService(
                    provider=self.provider,
                    cache=self.cache,
                    serve_stale_on_error=self.settings.serve_stale_prices_on_error,
                )
            return self._market_data_service

    def portfolio(self) -> PortfolioService:
        """Create a PortfolioService over the shared market data service."""
        return PortfolioService(
            holding_repo=SqlAlchemyHoldingRepository(self.session_factory),
            market_data_service=self.market_data,
            batch_write_max_workers=self.settings.batch_write_max_workers,
        )

    def watchlist(self) -> WatchlistService:
        """Create a WatchlistService over the shared market data service."""
        return WatchlistService(
            watchlist_repo=SqlAlchemyWatchlistRepository(self.session_factory),
            market_data_service=self.market_data,
        )

    def close(self) -> None:
        """Release provider connections."""
        if isinstance(self._provider, CoinGeckoProvider):
            self._provider.close()


# Global application context (one per process)
_app_context: Optional[AppContext] = None
_app_context_lock = threading.Lock()


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    with _app_context_lock:
        if _app_context is None:
            _app_context = AppContext()
        return _app_context


def set_app_context(context: Optional[AppContext]) -> None:
    """Set (or clear) the global application context."""
    global _app_context
    with _app_context_lock:
        _app_context = context
