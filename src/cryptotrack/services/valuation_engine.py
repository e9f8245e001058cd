"""
Valuation engine: profit/loss math over holdings.

Pure functions, no I/O. Numeric inputs that are missing, non-numeric, NaN
or infinite are treated as 0, so no NaN ever reaches an output and nothing
here raises on bad numbers.
"""

import math
from typing import Any, Iterable, Literal, Mapping, Optional

from cryptotrack.domain.models import Holding
from cryptotrack.domain.views import (
    AllocationItem,
    PerformerRanking,
    PortfolioSnapshot,
    PortfolioTotals,
    ValuedHolding,
)


AllocationBasis = Literal["value", "investment"]


def safe_number(value: Any) -> float:
    """Coerce value to a finite float, using 0 for anything else."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def percentage_of(part: float, whole: float) -> float:
    """part / whole * 100, or 0 when whole is not positive."""
    if whole <= 0:
        return 0.0
    return part / whole * 100


def value_holding(holding: Holding, current_price: Optional[float]) -> ValuedHolding:
    """
    Value one holding at the given price.

    An absent or zero price yields current_value 0 and a loss equal to the
    full investment.
    """
    amount = safe_number(holding.amount)
    buy_price = safe_number(holding.buy_price)
    price = safe_number(current_price)

    # Products of finite inputs can still overflow; every output is re-checked.
    investment = safe_number(amount * buy_price)
    current_value = safe_number(amount * price)
    profit_loss = safe_number(current_value - investment)

    return ValuedHolding(
        holding=holding,
        investment=investment,
        current_price=price,
        current_value=current_value,
        profit_loss=profit_loss,
        profit_loss_percentage=safe_number(percentage_of(profit_loss, investment)),
    )


def aggregate(valued: Iterable[ValuedHolding]) -> PortfolioTotals:
    """Sum investment, value and P/L across holdings."""
    totals = PortfolioTotals()
    for v in valued:
        totals.total_investment += safe_number(v.investment)
        totals.total_current_value += safe_number(v.current_value)
        totals.total_profit_loss += safe_number(v.profit_loss)
    totals.total_investment = safe_number(totals.total_investment)
    totals.total_current_value = safe_number(totals.total_current_value)
    totals.total_profit_loss = safe_number(totals.total_profit_loss)
    totals.total_profit_loss_percentage = safe_number(percentage_of(
        totals.total_profit_loss, totals.total_investment
    ))
    return totals


def rank_performers(valued: Iterable[ValuedHolding], n: int) -> PerformerRanking:
    """
    Return the n best and n worst holdings by P/L percentage.

    Both sorts are stable: equal percentages keep their input order.
    """
    items = list(valued)
    if n <= 0:
        return PerformerRanking()

    def key(v: ValuedHolding) -> float:
        return safe_number(v.profit_loss_percentage)

    top = sorted(items, key=key, reverse=True)[:n]
    worst = sorted(items, key=key)[:n]
    return PerformerRanking(top=top, worst=worst)


def allocation_breakdown(
    valued: Iterable[ValuedHolding],
    by: AllocationBasis = "value",
) -> list[AllocationItem]:
    """
    Share of each holding in the total current value or total investment.

    Rows follow input order. With a zero total every row gets 0%. Any basis
    other than "investment" is treated as "value".
    """
    if by == "investment":
        rows = [(v.coin_id, safe_number(v.investment)) for v in valued]
    else:
        rows = [(v.coin_id, safe_number(v.current_value)) for v in valued]

    total = sum(amount for _, amount in rows)
    return [
        AllocationItem(coin_id=coin_id, amount=amount, percentage=percentage_of(amount, total))
        for coin_id, amount in rows
    ]


def build_snapshot(
    holdings: Iterable[Holding],
    prices: Mapping[str, float],
    currency: str,
) -> PortfolioSnapshot:
    """Value every holding at prices[coin_id] (0 when absent) and total them."""
    valued = [value_holding(h, prices.get(h.coin_id)) for h in holdings]
    return PortfolioSnapshot(totals=aggregate(valued), holdings=valued, currency=currency)


def stored_valuation(holding: Holding) -> ValuedHolding:
    """Valuation last persisted on the holding, without any live price."""
    return ValuedHolding(
        holding=holding,
        investment=safe_number(safe_number(holding.amount) * safe_number(holding.buy_price)),
        current_price=safe_number(holding.current_price),
        current_value=safe_number(holding.current_value),
        profit_loss=safe_number(holding.profit_loss),
        profit_loss_percentage=safe_number(holding.profit_loss_percentage),
    )
