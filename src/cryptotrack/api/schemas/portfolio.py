"""Pydantic schemas for portfolio endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from cryptotrack.domain.models import MIN_AMOUNT, MAX_NOTES_LENGTH
from cryptotrack.domain.views import AllocationItem, PortfolioTotals, ValuedHolding


class HoldingCreateRequest(BaseModel):
    """Request schema for adding a holding."""

    coin_id: str = Field(..., min_length=1)
    coin_name: str = Field(..., min_length=1)
    symbol: str = Field(..., min_length=1)
    amount: float = Field(..., ge=MIN_AMOUNT)
    buy_price: float = Field(..., ge=0)
    purchase_date: Optional[datetime] = None
    notes: str = Field(default="", max_length=MAX_NOTES_LENGTH)


class HoldingUpdateRequest(BaseModel):
    """Request schema for editing a holding (all fields optional)."""

    amount: Optional[float] = Field(default=None, ge=MIN_AMOUNT)
    buy_price: Optional[float] = Field(default=None, ge=0)
    purchase_date: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)


class HoldingResponse(BaseModel):
    """A holding with live valuation fields."""

    holding_id: str
    coin_id: str
    coin_name: str
    symbol: str
    amount: float
    buy_price: float
    purchase_date: datetime
    notes: str
    investment: float
    current_price: float
    current_value: float
    profit_loss: float
    profit_loss_percentage: float
    last_updated: Optional[datetime] = None

    @classmethod
    def from_valued(cls, valued: ValuedHolding) -> "HoldingResponse":
        h = valued.holding
        return cls(
            holding_id=h.holding_id,
            coin_id=h.coin_id,
            coin_name=h.coin_name,
            symbol=h.symbol,
            amount=h.amount,
            buy_price=h.buy_price,
            purchase_date=h.purchase_date,
            notes=h.notes,
            investment=valued.investment,
            current_price=valued.current_price,
            current_value=valued.current_value,
            profit_loss=valued.profit_loss,
            profit_loss_percentage=valued.profit_loss_percentage,
            last_updated=h.last_updated,
        )


class PortfolioTotalsResponse(BaseModel):
    """Aggregate totals of a portfolio."""

    total_holdings: int
    total_investment: float
    total_current_value: float
    total_profit_loss: float
    total_profit_loss_percentage: float

    @classmethod
    def from_totals(cls, totals: PortfolioTotals, count: int) -> "PortfolioTotalsResponse":
        return cls(
            total_holdings=count,
            total_investment=totals.total_investment,
            total_current_value=totals.total_current_value,
            total_profit_loss=totals.total_profit_loss,
            total_profit_loss_percentage=totals.total_profit_loss_percentage,
        )


class PortfolioResponse(BaseModel):
    """Portfolio snapshot."""

    currency: str
    summary: PortfolioTotalsResponse
    holdings: list[HoldingResponse]


class AllocationItemResponse(BaseModel):
    """Single allocation row."""

    model_config = {"from_attributes": True}

    coin_id: str
    amount: float
    percentage: float

    @classmethod
    def from_item(cls, item: AllocationItem) -> "AllocationItemResponse":
        return cls(coin_id=item.coin_id, amount=item.amount, percentage=item.percentage)


class AnalyticsResponse(BaseModel):
    """Portfolio analytics."""

    currency: str
    summary: PortfolioTotalsResponse
    top_performers: list[HoldingResponse]
    worst_performers: list[HoldingResponse]
    allocation_by_value: list[AllocationItemResponse]
    allocation_by_investment: list[AllocationItemResponse]


class RefreshResponse(BaseModel):
    """Result of persisting revalued holdings."""

    currency: str
    summary: PortfolioTotalsResponse
    updated: int
    failed: int
    warnings: list[str]
    refreshed_at: Optional[datetime] = None
