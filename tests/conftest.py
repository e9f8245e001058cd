"""
Pytest configuration and fixtures for crypto portfolio tests.

This module provides:
- A controllable clock for memo cache TTL tests
- Deterministic, failing and call-counting market data providers
- Temporary SQLite database fixtures
- Factory helpers for holdings
- Service and repository fixtures
- FastAPI test clients wired to a stub or failing provider
"""

import uuid
from datetime import datetime, timedelta
from typing import Callable, Optional
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from cryptotrack.main import app
from cryptotrack.app_context import AppContext, set_app_context
from cryptotrack.config.settings import Settings, reset_settings
from cryptotrack.core.exceptions import UpstreamError
from cryptotrack.core.timezone import UTC
from cryptotrack.domain.models import Holding
from cryptotrack.providers import StubMarketDataProvider
from cryptotrack.repositories.memory import InMemoryMemoCache
from cryptotrack.repositories.sqlalchemy import (
    SqlAlchemyHoldingRepository,
    SqlAlchemyWatchlistRepository,
    get_session_factory,
    init_db_with_url,
    reset_database,
)
from cryptotrack.services import MarketDataService, PortfolioService, WatchlistService


# =============================================================================
# TIME HELPERS
# =============================================================================


def utc_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 12,
    minute: int = 0,
) -> datetime:
    """Create a timezone-aware UTC datetime."""
    return UTC.localize(datetime(year, month, day, hour, minute))


class FakeClock:
    """Monotonic clock the test advances by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a hand-driven clock."""
    return FakeClock()


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class FailingMarketProvider:
    """Market provider whose every call fails like an unreachable upstream."""

    def __init__(self):
        self.calls = 0

    def _fail(self, endpoint: str):
        self.calls += 1
        raise UpstreamError(endpoint, "connection refused")

    def list_coins(self):
        self._fail("/coins/list")

    def get_market_page(self, *args, **kwargs):
        self._fail("/coins/markets")

    def get_coin_detail(self, coin_id):
        self._fail(f"/coins/{coin_id}")

    def get_simple_prices(self, coin_ids, currencies):
        self._fail("/simple/price")

    def get_coins_by_ids(self, coin_ids, currency="usd"):
        self._fail("/coins/markets")

    def get_history(self, coin_id, currency="usd", days=7):
        self._fail(f"/coins/{coin_id}/market_chart")

    def search(self, query, min_length=2):
        self._fail("/search")

    def get_trending(self):
        self._fail("/search/trending")

    def get_global_stats(self):
        self._fail("/global")


@pytest.fixture
def stub_provider() -> StubMarketDataProvider:
    """Provide the deterministic stub provider."""
    return StubMarketDataProvider()


@pytest.fixture
def counting_provider(stub_provider) -> MagicMock:
    """Stub provider wrapped so tests can assert on upstream call counts."""
    return MagicMock(wraps=stub_provider)


@pytest.fixture
def failing_provider() -> FailingMarketProvider:
    """Provide a market provider that always fails."""
    return FailingMarketProvider()


@pytest.fixture
def memo_cache(fake_clock) -> InMemoryMemoCache:
    """Provide a 60s memo cache driven by the fake clock."""
    return InMemoryMemoCache(ttl_seconds=60, clock=fake_clock)


@pytest.fixture
def market_data_service(counting_provider, memo_cache) -> MarketDataService:
    """Provide MarketDataService over the call-counting stub provider."""
    return MarketDataService(provider=counting_provider, cache=memo_cache)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def session_factory(tmp_path):
    """
    Session factory over a temporary SQLite file.

    A file (not :memory:) so sessions opened from worker threads share data.
    """
    reset_settings()
    init_db_with_url(f"sqlite:///{tmp_path / 'test.db'}")
    yield get_session_factory()
    reset_database()


@pytest.fixture
def holding_repo(session_factory) -> SqlAlchemyHoldingRepository:
    """Provide test HoldingRepository."""
    return SqlAlchemyHoldingRepository(session_factory)


@pytest.fixture
def watchlist_repo(session_factory) -> SqlAlchemyWatchlistRepository:
    """Provide test WatchlistRepository."""
    return SqlAlchemyWatchlistRepository(session_factory)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def portfolio_service(holding_repo, market_data_service) -> PortfolioService:
    """Provide test PortfolioService."""
    return PortfolioService(
        holding_repo=holding_repo,
        market_data_service=market_data_service,
        batch_write_max_workers=4,
    )


@pytest.fixture
def watchlist_service(watchlist_repo, market_data_service) -> WatchlistService:
    """Provide test WatchlistService."""
    return WatchlistService(
        watchlist_repo=watchlist_repo,
        market_data_service=market_data_service,
    )


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


def make_holding(
    coin_id: str = "bitcoin",
    amount: float = 1.0,
    buy_price: float = 50000.0,
    user_id: str = "user-1",
    holding_id: Optional[str] = None,
    purchase_date: Optional[datetime] = None,
    notes: str = "",
) -> Holding:
    """Build an unsaved Holding with sensible defaults."""
    return Holding(
        holding_id=holding_id or str(uuid.uuid4()),
        user_id=user_id,
        coin_id=coin_id,
        coin_name=coin_id.title(),
        symbol=coin_id[:3],
        amount=amount,
        buy_price=buy_price,
        purchase_date=purchase_date or utc_datetime(2024, 1, 15),
        notes=notes,
    )


@pytest.fixture
def holding_factory(holding_repo) -> Callable[..., Holding]:
    """Factory that persists holdings directly through the repository."""

    def _create_holding(**kwargs) -> Holding:
        return holding_repo.create(make_holding(**kwargs))

    return _create_holding


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


API_USER = "api-user"


def _client_for(provider, session_factory, tmp_path):
    context = AppContext(
        settings=Settings(
            environment="development",
            market_data_provider="stub",
            database_url=f"sqlite:///{tmp_path / 'test.db'}",
        ),
        provider=provider,
        session_factory=session_factory,
    )
    set_app_context(context)
    with TestClient(app) as c:
        yield c
    set_app_context(None)


@pytest.fixture
def client(session_factory, tmp_path) -> TestClient:
    """Provide FastAPI test client wired to the stub provider and a test database."""
    yield from _client_for(StubMarketDataProvider(), session_factory, tmp_path)


@pytest.fixture
def failing_client(session_factory, tmp_path) -> TestClient:
    """Provide FastAPI test client whose market data provider is down."""
    yield from _client_for(FailingMarketProvider(), session_factory, tmp_path)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Gateway headers for an authenticated user."""
    return {"X-User-Id": API_USER, "X-Currency": "usd"}


def days_ago(days: int) -> datetime:
    """Timezone-aware UTC timestamp `days` days in the past."""
    return datetime.now(UTC) - timedelta(days=days)
