"""Portfolio endpoints (authenticated)."""

from fastapi import APIRouter, Depends, Response

from cryptotrack.api.deps import CurrentUser, get_current_user, get_portfolio_service
from cryptotrack.api.schemas import (
    AllocationItemResponse,
    AnalyticsResponse,
    HoldingCreateRequest,
    HoldingResponse,
    HoldingUpdateRequest,
    MessageResponse,
    PortfolioResponse,
    PortfolioTotalsResponse,
    RefreshResponse,
)
from cryptotrack.services import HoldingCreate, HoldingUpdate, PortfolioService

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("", response_model=PortfolioResponse)
def get_portfolio(
    user: CurrentUser = Depends(get_current_user),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioResponse:
    """
    Return the user's holdings valued at current prices.

    Served even when market data is unavailable; affected holdings are
    valued at 0.
    """
    snapshot = portfolio.get_snapshot(user.user_id, user.currency)
    return PortfolioResponse(
        currency=snapshot.currency,
        summary=PortfolioTotalsResponse.from_totals(snapshot.totals, snapshot.total_holdings),
        holdings=[HoldingResponse.from_valued(v) for v in snapshot.holdings],
    )


@router.get("/analytics", response_model=AnalyticsResponse)
def get_analytics(
    user: CurrentUser = Depends(get_current_user),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> AnalyticsResponse:
    """Return performers and allocation breakdowns."""
    analytics = portfolio.get_analytics(user.user_id, user.currency)
    snapshot = analytics.snapshot
    return AnalyticsResponse(
        currency=snapshot.currency,
        summary=PortfolioTotalsResponse.from_totals(snapshot.totals, snapshot.total_holdings),
        top_performers=[HoldingResponse.from_valued(v) for v in analytics.top_performers],
        worst_performers=[HoldingResponse.from_valued(v) for v in analytics.worst_performers],
        allocation_by_value=[
            AllocationItemResponse.from_item(i) for i in analytics.allocation_by_value
        ],
        allocation_by_investment=[
            AllocationItemResponse.from_item(i) for i in analytics.allocation_by_investment
        ],
    )


@router.get("/summary", response_model=PortfolioResponse)
def get_summary(
    user: CurrentUser = Depends(get_current_user),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioResponse:
    """Return totals from the last stored valuations, without live prices."""
    summary = portfolio.get_summary(user.user_id, user.currency)
    return PortfolioResponse(
        currency=summary.currency,
        summary=PortfolioTotalsResponse.from_totals(summary.totals, summary.total_holdings),
        holdings=[HoldingResponse.from_valued(v) for v in summary.holdings],
    )


@router.get("/export/csv")
def export_portfolio_csv(
    user: CurrentUser = Depends(get_current_user),
    portfolio: PortfolioService = Depends(get_portfolio_service),
):
    """Download the live-valued portfolio as a CSV file with a TOTAL row."""
    csv_text = portfolio.export_csv(user.user_id, user.currency)
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="portfolio.csv"'},
    )


@router.post("/refresh", response_model=RefreshResponse)
def refresh_portfolio(
    user: CurrentUser = Depends(get_current_user),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> RefreshResponse:
    """Revalue all holdings and store the results; failed writes are reported, not fatal."""
    result = portfolio.refresh_valuations(user.user_id, user.currency)
    snapshot = result.snapshot
    return RefreshResponse(
        currency=snapshot.currency,
        summary=PortfolioTotalsResponse.from_totals(snapshot.totals, snapshot.total_holdings),
        updated=result.writes.succeeded,
        failed=result.warning_count,
        warnings=result.writes.errors,
        refreshed_at=result.refreshed_at,
    )


@router.post("/holdings", response_model=HoldingResponse, status_code=201)
def add_holding(
    data: HoldingCreateRequest,
    user: CurrentUser = Depends(get_current_user),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> HoldingResponse:
    """Add a holding after confirming the coin exists."""
    valued = portfolio.add_holding(
        user.user_id,
        HoldingCreate(
            coin_id=data.coin_id,
            coin_name=data.coin_name,
            symbol=data.symbol,
            amount=data.amount,
            buy_price=data.buy_price,
            purchase_date=data.purchase_date,
            notes=data.notes,
        ),
        user.currency,
    )
    return HoldingResponse.from_valued(valued)


@router.get("/holdings/{holding_id}", response_model=HoldingResponse)
def get_holding(
    holding_id: str,
    user: CurrentUser = Depends(get_current_user),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> HoldingResponse:
    """Get one holding with its current valuation."""
    return HoldingResponse.from_valued(
        portfolio.get_holding(user.user_id, holding_id, user.currency)
    )


@router.put("/holdings/{holding_id}", response_model=HoldingResponse)
def update_holding(
    holding_id: str,
    data: HoldingUpdateRequest,
    user: CurrentUser = Depends(get_current_user),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> HoldingResponse:
    """Edit amount, buy price, purchase date or notes."""
    valued = portfolio.update_holding(
        user.user_id,
        holding_id,
        HoldingUpdate(
            amount=data.amount,
            buy_price=data.buy_price,
            purchase_date=data.purchase_date,
            notes=data.notes,
        ),
        user.currency,
    )
    return HoldingResponse.from_valued(valued)


@router.delete("/holdings/{holding_id}", response_model=MessageResponse)
def delete_holding(
    holding_id: str,
    user: CurrentUser = Depends(get_current_user),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> MessageResponse:
    """Delete a holding."""
    portfolio.delete_holding(user.user_id, holding_id)
    return MessageResponse(message="Holding deleted successfully")
