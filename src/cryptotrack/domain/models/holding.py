"""Holding domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


MIN_AMOUNT = 1e-8
MAX_NOTES_LENGTH = 500


@dataclass
class Holding:
    """
    A user's recorded position in one coin.

    amount and buy_price are the source of truth. The valuation columns
    (current_price .. last_updated) hold the last persisted revaluation and
    are never authoritative; read paths recompute them from live prices.
    """

    holding_id: str
    user_id: str
    coin_id: str
    coin_name: str
    symbol: str
    amount: float
    buy_price: float
    purchase_date: datetime
    notes: str = ""
    current_price: float = 0.0
    current_value: float = 0.0
    profit_loss: float = 0.0
    profit_loss_percentage: float = 0.0
    last_updated: Optional[datetime] = field(default=None)
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        self.coin_id = self.coin_id.strip().lower()
        self.symbol = self.symbol.strip().upper()

    @property
    def total_investment(self) -> float:
        """Amount paid for the position."""
        return self.amount * self.buy_price
