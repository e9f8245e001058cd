"""Watchlist endpoints (authenticated)."""

from fastapi import APIRouter, Depends

from cryptotrack.api.deps import CurrentUser, get_current_user, get_watchlist_service
from cryptotrack.api.schemas import (
    WatchlistBatchResponse,
    WatchlistCheckResponse,
    WatchlistClearResponse,
    WatchlistCoinsRequest,
    WatchlistResponse,
    WatchlistUpdateResponse,
)
from cryptotrack.services import WatchlistService

router = APIRouter(prefix="/watchlist", tags=["watchlist"])


@router.get("", response_model=WatchlistResponse)
def get_watchlist(
    user: CurrentUser = Depends(get_current_user),
    watchlist: WatchlistService = Depends(get_watchlist_service),
) -> WatchlistResponse:
    """Get the user's watchlist with market data."""
    view = watchlist.get_watchlist(user.user_id, user.currency)
    return WatchlistResponse(
        coin_ids=view.watchlist.coin_ids,
        coins=view.coins,
        last_modified=view.watchlist.last_modified,
    )


@router.delete("", response_model=WatchlistClearResponse)
def clear_watchlist(
    user: CurrentUser = Depends(get_current_user),
    watchlist: WatchlistService = Depends(get_watchlist_service),
) -> WatchlistClearResponse:
    """Remove every coin from the watchlist."""
    return WatchlistClearResponse(previous_count=watchlist.clear(user.user_id))


@router.post("/batch", response_model=WatchlistBatchResponse)
def batch_add_to_watchlist(
    data: WatchlistCoinsRequest,
    user: CurrentUser = Depends(get_current_user),
    watchlist: WatchlistService = Depends(get_watchlist_service),
) -> WatchlistBatchResponse:
    """Add up to 50 coins; each is reported as added, skipped or failed."""
    result = watchlist.batch_add(user.user_id, data.coin_ids)
    return WatchlistBatchResponse(
        added=result.added,
        skipped=result.skipped,
        failed=result.failed,
        coin_ids=result.watchlist.coin_ids,
        last_modified=result.watchlist.last_modified,
    )


@router.put("/reorder", response_model=WatchlistUpdateResponse)
def reorder_watchlist(
    data: WatchlistCoinsRequest,
    user: CurrentUser = Depends(get_current_user),
    watchlist: WatchlistService = Depends(get_watchlist_service),
) -> WatchlistUpdateResponse:
    """Set a new order; the list must contain exactly the current coins."""
    updated = watchlist.reorder(user.user_id, data.coin_ids)
    return WatchlistUpdateResponse(coin_ids=updated.coin_ids, last_modified=updated.last_modified)


@router.get("/check/{coin_id}", response_model=WatchlistCheckResponse)
def check_watchlist(
    coin_id: str,
    user: CurrentUser = Depends(get_current_user),
    watchlist: WatchlistService = Depends(get_watchlist_service),
) -> WatchlistCheckResponse:
    """Report whether a coin is on the watchlist."""
    return WatchlistCheckResponse(
        coin_id=coin_id.strip().lower(),
        in_watchlist=watchlist.contains(user.user_id, coin_id),
    )


@router.post("/{coin_id}", response_model=WatchlistUpdateResponse, status_code=201)
def add_to_watchlist(
    coin_id: str,
    user: CurrentUser = Depends(get_current_user),
    watchlist: WatchlistService = Depends(get_watchlist_service),
) -> WatchlistUpdateResponse:
    """Add a coin after confirming it exists."""
    updated = watchlist.add_coin(user.user_id, coin_id)
    return WatchlistUpdateResponse(coin_ids=updated.coin_ids, last_modified=updated.last_modified)


@router.delete("/{coin_id}", response_model=WatchlistUpdateResponse)
def remove_from_watchlist(
    coin_id: str,
    user: CurrentUser = Depends(get_current_user),
    watchlist: WatchlistService = Depends(get_watchlist_service),
) -> WatchlistUpdateResponse:
    """Remove a coin from the watchlist."""
    updated = watchlist.remove_coin(user.user_id, coin_id)
    return WatchlistUpdateResponse(coin_ids=updated.coin_ids, last_modified=updated.last_modified)
