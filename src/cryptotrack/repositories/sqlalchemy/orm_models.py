"""SQLAlchemy ORM model definitions."""

from sqlalchemy import (
    Column,
    String,
    DateTime,
    Float,
    Text,
    Index,
)

from cryptotrack.repositories.sqlalchemy.database import Base


class HoldingORM(Base):
    """SQLAlchemy model for Holding."""

    __tablename__ = "holdings"
    __table_args__ = (
        Index("ix_holdings_user_coin", "user_id", "coin_id"),
        Index("ix_holdings_user_purchase", "user_id", "purchase_date"),
    )

    holding_id = Column(String(36), primary_key=True)
    user_id = Column(String(64), nullable=False)
    coin_id = Column(String(100), nullable=False)
    coin_name = Column(String(255), nullable=False)
    symbol = Column(String(20), nullable=False)
    amount = Column(Float, nullable=False)
    buy_price = Column(Float, nullable=False)
    purchase_date = Column(DateTime(timezone=True), nullable=False)
    notes = Column(Text, nullable=False, default="")

    # Last persisted revaluation
    current_price = Column(Float, nullable=False, default=0.0)
    current_value = Column(Float, nullable=False, default=0.0)
    profit_loss = Column(Float, nullable=False, default=0.0)
    profit_loss_percentage = Column(Float, nullable=False, default=0.0)
    last_updated = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=True)


class WatchlistORM(Base):
    """SQLAlchemy model for Watchlist (one row per user)."""

    __tablename__ = "watchlists"

    user_id = Column(String(64), primary_key=True)
    coin_ids_json = Column(Text, nullable=False, default="[]")
    last_modified = Column(DateTime(timezone=True), nullable=True)
