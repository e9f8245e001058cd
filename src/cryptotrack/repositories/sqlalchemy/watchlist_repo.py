"""SQLAlchemy implementation of WatchlistRepository."""

import json

from sqlalchemy.orm import sessionmaker

from cryptotrack.core.timezone import to_utc
from cryptotrack.domain.models import Watchlist
from cryptotrack.repositories.sqlalchemy.orm_models import WatchlistORM


class SqlAlchemyWatchlistRepository:
    """SQLAlchemy-backed watchlist repository (coin ids stored as a JSON array)."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def get_or_create(self, user_id: str) -> Watchlist:
        """Return the user's watchlist, creating an empty one if needed."""
        with self._session_factory() as db:
            row = db.query(WatchlistORM).filter(WatchlistORM.user_id == user_id).first()
            if row is None:
                row = WatchlistORM(user_id=user_id, coin_ids_json="[]")
                db.add(row)
                db.commit()
                db.refresh(row)
            return self._to_domain(row)

    def save(self, watchlist: Watchlist) -> Watchlist:
        """Persist the coin list of a watchlist."""
        with self._session_factory() as db:
            row = db.query(WatchlistORM).filter(
                WatchlistORM.user_id == watchlist.user_id
            ).first()
            if row is None:
                row = WatchlistORM(user_id=watchlist.user_id)
                db.add(row)
            row.coin_ids_json = json.dumps(watchlist.coin_ids)
            row.last_modified = watchlist.last_modified
            db.commit()
            db.refresh(row)
            return self._to_domain(row)

    @staticmethod
    def _to_domain(orm: WatchlistORM) -> Watchlist:
        """Convert ORM model to domain model."""
        return Watchlist(
            user_id=orm.user_id,
            coin_ids=list(json.loads(orm.coin_ids_json or "[]")),
            last_modified=to_utc(orm.last_modified) if orm.last_modified else None,
        )
