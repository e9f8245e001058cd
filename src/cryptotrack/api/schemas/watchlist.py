"""Pydantic schemas for watchlist endpoints."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel


class WatchlistResponse(BaseModel):
    """Watchlist with market rows in stored order."""

    coin_ids: list[str]
    coins: list[dict[str, Any]]
    last_modified: Optional[datetime] = None


class WatchlistUpdateResponse(BaseModel):
    """Watchlist after adding or removing a coin."""

    coin_ids: list[str]
    last_modified: Optional[datetime] = None


class WatchlistCoinsRequest(BaseModel):
    """Request schema carrying a list of coin ids."""

    coin_ids: list[str]


class WatchlistBatchResponse(BaseModel):
    """Per-coin outcome of a batch add."""

    added: list[str]
    skipped: dict[str, str]
    failed: dict[str, str]
    coin_ids: list[str]
    last_modified: Optional[datetime] = None


class WatchlistCheckResponse(BaseModel):
    """Whether a coin is on the watchlist."""

    coin_id: str
    in_watchlist: bool


class WatchlistClearResponse(BaseModel):
    """Result of clearing the watchlist."""

    previous_count: int
    current_count: int = 0
