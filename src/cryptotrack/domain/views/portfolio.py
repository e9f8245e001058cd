"""View models for valuation and analytics outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from cryptotrack.domain.models import Holding


@dataclass
class ValuedHolding:
    """A holding augmented with derived, non-persisted valuation fields."""

    holding: Holding
    investment: float
    current_price: float
    current_value: float
    profit_loss: float
    profit_loss_percentage: float

    @property
    def coin_id(self) -> str:
        return self.holding.coin_id

    @property
    def amount(self) -> float:
        return self.holding.amount


@dataclass
class PortfolioTotals:
    """Aggregate totals across a set of valued holdings."""

    total_investment: float = 0.0
    total_current_value: float = 0.0
    total_profit_loss: float = 0.0
    total_profit_loss_percentage: float = 0.0


@dataclass
class PortfolioSnapshot:
    """Freshly computed portfolio valuation; never cached or persisted."""

    totals: PortfolioTotals
    holdings: list[ValuedHolding] = field(default_factory=list)
    currency: str = "usd"

    @property
    def total_holdings(self) -> int:
        return len(self.holdings)


@dataclass
class PerformerRanking:
    """Top and worst performers by profit/loss percentage."""

    top: list[ValuedHolding] = field(default_factory=list)
    worst: list[ValuedHolding] = field(default_factory=list)


@dataclass
class AllocationItem:
    """Single row in an allocation breakdown."""

    coin_id: str
    amount: float
    percentage: float


@dataclass
class PortfolioAnalytics:
    """Snapshot plus rankings and allocation breakdowns."""

    snapshot: PortfolioSnapshot
    top_performers: list[ValuedHolding] = field(default_factory=list)
    worst_performers: list[ValuedHolding] = field(default_factory=list)
    allocation_by_value: list[AllocationItem] = field(default_factory=list)
    allocation_by_investment: list[AllocationItem] = field(default_factory=list)


@dataclass
class BatchWriteSummary:
    """Outcome counts of a fan-out of independent writes."""

    succeeded: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)


@dataclass
class RefreshResult:
    """Result of revaluing and persisting all of a user's holdings."""

    snapshot: PortfolioSnapshot
    writes: BatchWriteSummary
    refreshed_at: Optional[datetime] = None

    @property
    def warning_count(self) -> int:
        return self.writes.failed
