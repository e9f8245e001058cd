"""SQLAlchemy implementation of HoldingRepository."""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import sessionmaker

from cryptotrack.core.exceptions import NotFoundError
from cryptotrack.core.timezone import to_utc
from cryptotrack.domain.models import Holding
from cryptotrack.domain.views import ValuedHolding
from cryptotrack.repositories.sqlalchemy.orm_models import HoldingORM


class SqlAlchemyHoldingRepository:
    """
    SQLAlchemy-backed holding repository.

    Every call opens its own short-lived session from the factory, so one
    repository instance can be shared by the batch writer's threads.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def list_by_user(self, user_id: str) -> list[Holding]:
        """List a user's holdings, most recent purchase first."""
        with self._session_factory() as db:
            rows = (
                db.query(HoldingORM)
                .filter(HoldingORM.user_id == user_id)
                .order_by(HoldingORM.purchase_date.desc())
                .all()
            )
            return [self._to_domain(r) for r in rows]

    def get(self, user_id: str, holding_id: str) -> Optional[Holding]:
        """Get a holding owned by the user."""
        with self._session_factory() as db:
            row = db.query(HoldingORM).filter(
                HoldingORM.holding_id == holding_id,
                HoldingORM.user_id == user_id,
            ).first()
            return self._to_domain(row) if row else None

    def create(self, holding: Holding) -> Holding:
        """Persist a new holding."""
        with self._session_factory() as db:
            row = HoldingORM(
                holding_id=holding.holding_id,
                user_id=holding.user_id,
                coin_id=holding.coin_id,
                coin_name=holding.coin_name,
                symbol=holding.symbol,
                amount=holding.amount,
                buy_price=holding.buy_price,
                purchase_date=holding.purchase_date,
                notes=holding.notes,
                current_price=holding.current_price,
                current_value=holding.current_value,
                profit_loss=holding.profit_loss,
                profit_loss_percentage=holding.profit_loss_percentage,
                last_updated=holding.last_updated,
                created_at=holding.created_at,
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            return self._to_domain(row)

    def update(self, holding: Holding) -> Holding:
        """Update user-editable fields and the valuation columns."""
        with self._session_factory() as db:
            row = db.query(HoldingORM).filter(
                HoldingORM.holding_id == holding.holding_id,
                HoldingORM.user_id == holding.user_id,
            ).first()
            if row is None:
                raise NotFoundError("Holding", holding.holding_id)
            row.amount = holding.amount
            row.buy_price = holding.buy_price
            row.purchase_date = holding.purchase_date
            row.notes = holding.notes
            row.current_price = holding.current_price
            row.current_value = holding.current_value
            row.profit_loss = holding.profit_loss
            row.profit_loss_percentage = holding.profit_loss_percentage
            row.last_updated = holding.last_updated
            db.commit()
            db.refresh(row)
            return self._to_domain(row)

    def update_valuation(self, valued: ValuedHolding, updated_at: datetime) -> None:
        """Persist the valuation columns of one holding."""
        with self._session_factory() as db:
            row = db.query(HoldingORM).filter(
                HoldingORM.holding_id == valued.holding.holding_id,
            ).first()
            if row is None:
                raise NotFoundError("Holding", valued.holding.holding_id)
            row.current_price = valued.current_price
            row.current_value = valued.current_value
            row.profit_loss = valued.profit_loss
            row.profit_loss_percentage = valued.profit_loss_percentage
            row.last_updated = updated_at
            db.commit()

    def delete(self, user_id: str, holding_id: str) -> bool:
        """Delete a holding owned by the user."""
        with self._session_factory() as db:
            deleted = db.query(HoldingORM).filter(
                HoldingORM.holding_id == holding_id,
                HoldingORM.user_id == user_id,
            ).delete()
            db.commit()
            return deleted > 0

    @staticmethod
    def _to_domain(orm: HoldingORM) -> Holding:
        """Convert ORM model to domain model."""
        return Holding(
            holding_id=orm.holding_id,
            user_id=orm.user_id,
            coin_id=orm.coin_id,
            coin_name=orm.coin_name,
            symbol=orm.symbol,
            amount=orm.amount,
            buy_price=orm.buy_price,
            # SQLite hands back naive datetimes
            purchase_date=to_utc(orm.purchase_date),
            notes=orm.notes or "",
            current_price=orm.current_price or 0.0,
            current_value=orm.current_value or 0.0,
            profit_loss=orm.profit_loss or 0.0,
            profit_loss_percentage=orm.profit_loss_percentage or 0.0,
            last_updated=to_utc(orm.last_updated) if orm.last_updated else None,
            created_at=to_utc(orm.created_at) if orm.created_at else None,
        )
