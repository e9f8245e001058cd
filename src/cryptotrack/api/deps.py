"""Dependency injection for FastAPI."""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, HTTPException

from cryptotrack.app_context import AppContext, get_app_context
from cryptotrack.core.exceptions import ValidationError
from cryptotrack.services import MarketDataService, PortfolioService, WatchlistService


# Currencies offered by the UI; the market data client itself accepts any code
SUPPORTED_CURRENCIES = ("usd", "eur", "btc", "eth")


@dataclass(frozen=True)
class CurrentUser:
    """Identity and preferences forwarded by the auth gateway."""

    user_id: str
    currency: str


def validate_currency(currency: Optional[str], default: str = "usd") -> str:
    """Lower-case and check a currency code against the supported set."""
    value = (currency or default).strip().lower()
    if value not in SUPPORTED_CURRENCIES:
        raise ValidationError("currency", f"Invalid currency: {value}")
    return value


def get_context() -> AppContext:
    """Provide the process-wide AppContext."""
    return get_app_context()


def get_current_user(
    x_user_id: Optional[str] = Header(None),
    x_currency: Optional[str] = Header(None),
    context: AppContext = Depends(get_context),
) -> CurrentUser:
    """
    Read the authenticated user from the gateway headers.

    X-User-Id is set by the auth layer in front of this service; X-Currency
    carries the user's preferred currency.
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Authentication required")
    currency = validate_currency(x_currency, default=context.settings.default_currency)
    return CurrentUser(user_id=x_user_id.strip(), currency=currency)


def get_market_data_service(context: AppContext = Depends(get_context)) -> MarketDataService:
    """Provide the shared MarketDataService instance."""
    return context.market_data


def get_portfolio_service(context: AppContext = Depends(get_context)) -> PortfolioService:
    """Provide PortfolioService instance."""
    return context.portfolio()


def get_watchlist_service(context: AppContext = Depends(get_context)) -> WatchlistService:
    """Provide WatchlistService instance."""
    return context.watchlist()
