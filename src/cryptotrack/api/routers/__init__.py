"""API routers package."""

from cryptotrack.api.routers.crypto import router as crypto_router
from cryptotrack.api.routers.portfolio import router as portfolio_router
from cryptotrack.api.routers.watchlist import router as watchlist_router
from cryptotrack.api.routers.admin import router as admin_router

__all__ = [
    "crypto_router",
    "portfolio_router",
    "watchlist_router",
    "admin_router",
]
