"""SQLAlchemy repository implementations."""

from cryptotrack.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    init_db,
    init_db_with_url,
    reset_database,
    Base,
)
from cryptotrack.repositories.sqlalchemy.holding_repo import SqlAlchemyHoldingRepository
from cryptotrack.repositories.sqlalchemy.watchlist_repo import SqlAlchemyWatchlistRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "init_db",
    "init_db_with_url",
    "reset_database",
    "Base",
    "SqlAlchemyHoldingRepository",
    "SqlAlchemyWatchlistRepository",
]
