"""Portfolio service: holdings CRUD and live valuation."""

import logging
import math
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from cryptotrack.core.exceptions import NotFoundError, ValidationError
from cryptotrack.core.timezone import now_utc, to_utc
from cryptotrack.csv import portfolio_to_csv
from cryptotrack.domain.models import Holding, MIN_AMOUNT, MAX_NOTES_LENGTH
from cryptotrack.domain.views import (
    PortfolioAnalytics,
    PortfolioSnapshot,
    PortfolioTotals,
    RefreshResult,
    ValuedHolding,
)
from cryptotrack.repositories.protocols import HoldingRepository
from cryptotrack.services.batch_writer import DEFAULT_MAX_WORKERS, run_independent
from cryptotrack.services.market_data_service import MarketDataService
from cryptotrack.services.valuation_engine import (
    aggregate,
    allocation_breakdown,
    build_snapshot,
    rank_performers,
    stored_valuation,
    value_holding,
)

logger = logging.getLogger(__name__)

DEFAULT_PERFORMER_COUNT = 5


@dataclass
class HoldingCreate:
    """Input data for adding a holding."""

    coin_id: str
    coin_name: str
    symbol: str
    amount: float
    buy_price: float
    purchase_date: Optional[datetime] = None
    notes: str = ""


@dataclass
class HoldingUpdate:
    """Partial update data for editing a holding."""

    amount: Optional[float] = None
    buy_price: Optional[float] = None
    purchase_date: Optional[datetime] = None
    notes: Optional[str] = None


class PortfolioService:
    """
    Service for a user's holdings and their valuation.

    Read paths (snapshot, analytics, single holding) never fail because of
    the market data provider; missing prices value a holding at 0. Adding a
    holding must verify the coin first and propagates provider errors.
    """

    def __init__(
        self,
        holding_repo: HoldingRepository,
        market_data_service: MarketDataService,
        batch_write_max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        self._holdings = holding_repo
        self._market = market_data_service
        self._max_workers = batch_write_max_workers

    # -------------------------------------------------------------------------
    # Read paths
    # -------------------------------------------------------------------------

    def get_snapshot(self, user_id: str, currency: str) -> PortfolioSnapshot:
        """Value all of the user's holdings at current prices."""
        holdings = self._holdings.list_by_user(user_id)
        if not holdings:
            return PortfolioSnapshot(totals=PortfolioTotals(), currency=currency)

        prices = self._market.get_prices_for({h.coin_id for h in holdings}, currency)
        return build_snapshot(holdings, prices, currency)

    def get_analytics(
        self,
        user_id: str,
        currency: str,
        n: int = DEFAULT_PERFORMER_COUNT,
    ) -> PortfolioAnalytics:
        """
        Snapshot plus top/worst performers and allocation breakdowns.

        Allocation by value leaves out holdings currently worth nothing.
        Both allocations are ordered largest first.
        """
        snapshot = self.get_snapshot(user_id, currency)
        ranking = rank_performers(snapshot.holdings, n)

        by_value = [
            item for item in allocation_breakdown(snapshot.holdings, by="value")
            if item.amount > 0
        ]
        by_value.sort(key=lambda item: item.amount, reverse=True)

        by_investment = allocation_breakdown(snapshot.holdings, by="investment")
        by_investment.sort(key=lambda item: item.amount, reverse=True)

        return PortfolioAnalytics(
            snapshot=snapshot,
            top_performers=ranking.top,
            worst_performers=ranking.worst,
            allocation_by_value=by_value,
            allocation_by_investment=by_investment,
        )

    def get_summary(self, user_id: str, currency: str) -> PortfolioSnapshot:
        """
        Totals from the valuations last persisted on each holding.

        Makes no market data calls; values are as fresh as the last add,
        update or refresh.
        """
        valued = [stored_valuation(h) for h in self._holdings.list_by_user(user_id)]
        return PortfolioSnapshot(totals=aggregate(valued), holdings=valued, currency=currency)

    def export_csv(self, user_id: str, currency: str) -> str:
        """Live-valued portfolio as CSV, most recent purchase first."""
        snapshot = self.get_snapshot(user_id, currency)
        if not snapshot.holdings:
            raise NotFoundError("Holdings to export", user_id)
        return portfolio_to_csv(snapshot)

    def get_holding(self, user_id: str, holding_id: str, currency: str) -> ValuedHolding:
        """Get one holding valued at the current price."""
        holding = self._require(user_id, holding_id)
        return self._value(holding, currency)

    # -------------------------------------------------------------------------
    # Write paths
    # -------------------------------------------------------------------------

    def add_holding(self, user_id: str, data: HoldingCreate, currency: str) -> ValuedHolding:
        """
        Validate, verify the coin with the provider, then persist.

        Raises ValidationError before any provider call, and lets
        CoinNotFoundError / UpstreamError from the verification propagate.
        """
        coin_id = self._required_text("coin_id", data.coin_id).lower()
        coin_name = self._required_text("coin_name", data.coin_name)
        symbol = self._required_text("symbol", data.symbol).upper()
        self._validate_amount(data.amount)
        self._validate_buy_price(data.buy_price)
        self._validate_investment(data.amount, data.buy_price)
        purchase_date = self._validate_purchase_date(data.purchase_date or now_utc())
        notes = self._validate_notes(data.notes or "")

        self._market.verify_coin(coin_id)

        now = now_utc()
        holding = Holding(
            holding_id=str(uuid.uuid4()),
            user_id=user_id,
            coin_id=coin_id,
            coin_name=coin_name,
            symbol=symbol,
            amount=float(data.amount),
            buy_price=float(data.buy_price),
            purchase_date=purchase_date,
            notes=notes,
            last_updated=now,
            created_at=now,
        )
        valued = self._value(holding, currency)
        self._apply_valuation(holding, valued, now)
        created = self._holdings.create(holding)
        return value_holding(created, valued.current_price)

    def update_holding(
        self,
        user_id: str,
        holding_id: str,
        data: HoldingUpdate,
        currency: str,
    ) -> ValuedHolding:
        """Apply a partial update and revalue the holding."""
        holding = self._require(user_id, holding_id)

        if data.amount is not None:
            self._validate_amount(data.amount)
            holding.amount = float(data.amount)
        if data.buy_price is not None:
            self._validate_buy_price(data.buy_price)
            holding.buy_price = float(data.buy_price)
        self._validate_investment(holding.amount, holding.buy_price)
        if data.purchase_date is not None:
            holding.purchase_date = self._validate_purchase_date(data.purchase_date)
        if data.notes is not None:
            holding.notes = self._validate_notes(data.notes)

        now = now_utc()
        valued = self._value(holding, currency)
        self._apply_valuation(holding, valued, now)
        updated = self._holdings.update(holding)
        return value_holding(updated, valued.current_price)

    def delete_holding(self, user_id: str, holding_id: str) -> None:
        """Delete a holding owned by the user."""
        if not self._holdings.delete(user_id, holding_id):
            raise NotFoundError("Holding", holding_id)

    def refresh_valuations(self, user_id: str, currency: str) -> RefreshResult:
        """
        Revalue every holding and persist the results.

        Each holding is written independently and in parallel; failed writes
        are counted in the result instead of aborting the others.
        """
        snapshot = self.get_snapshot(user_id, currency)
        refreshed_at = now_utc()
        writes = run_independent(
            snapshot.holdings,
            lambda valued: self._holdings.update_valuation(valued, refreshed_at),
            max_workers=self._max_workers,
            describe=lambda valued: valued.holding.holding_id,
        )
        if writes.failed:
            logger.warning(
                "Refreshed %d of %d holdings for user %s",
                writes.succeeded, snapshot.total_holdings, user_id,
            )
        return RefreshResult(snapshot=snapshot, writes=writes, refreshed_at=refreshed_at)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _require(self, user_id: str, holding_id: str) -> Holding:
        holding = self._holdings.get(user_id, holding_id)
        if holding is None:
            raise NotFoundError("Holding", holding_id)
        return holding

    def _value(self, holding: Holding, currency: str) -> ValuedHolding:
        prices = self._market.get_prices_for([holding.coin_id], currency)
        return value_holding(holding, prices.get(holding.coin_id))

    @staticmethod
    def _apply_valuation(holding: Holding, valued: ValuedHolding, now: datetime) -> None:
        """Copy a valuation onto the holding; a zero price keeps the last one."""
        if valued.current_price <= 0:
            return
        holding.current_price = valued.current_price
        holding.current_value = valued.current_value
        holding.profit_loss = valued.profit_loss
        holding.profit_loss_percentage = valued.profit_loss_percentage
        holding.last_updated = now

    @staticmethod
    def _required_text(field: str, value: Optional[str]) -> str:
        text = (value or "").strip()
        if not text:
            raise ValidationError(field, "must not be empty")
        return text

    @staticmethod
    def _validate_amount(amount: float) -> None:
        if not isinstance(amount, (int, float)) or not math.isfinite(amount) or amount < MIN_AMOUNT:
            raise ValidationError("amount", "Amount must be greater than 0")

    @staticmethod
    def _validate_buy_price(buy_price: float) -> None:
        if not isinstance(buy_price, (int, float)) or not math.isfinite(buy_price) or buy_price < 0:
            raise ValidationError("buy_price", "Buy price must be greater than or equal to 0")

    @staticmethod
    def _validate_investment(amount: float, buy_price: float) -> None:
        if not math.isfinite(float(amount) * float(buy_price)):
            raise ValidationError("amount", "Amount times buy price is too large")

    @staticmethod
    def _validate_purchase_date(purchase_date: datetime) -> datetime:
        purchase_date = to_utc(purchase_date)
        if purchase_date > now_utc():
            raise ValidationError("purchase_date", "Purchase date cannot be in the future")
        return purchase_date

    @staticmethod
    def _validate_notes(notes: str) -> str:
        notes = notes.strip()
        if len(notes) > MAX_NOTES_LENGTH:
            raise ValidationError("notes", f"Notes cannot exceed {MAX_NOTES_LENGTH} characters")
        return notes
