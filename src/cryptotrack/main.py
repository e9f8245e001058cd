"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cryptotrack.app_context import get_app_context
from cryptotrack.config.settings import Settings, get_settings
from cryptotrack.config.logging_config import setup_logging
from cryptotrack.repositories.sqlalchemy.database import init_db
from cryptotrack.api.routers import admin_router, crypto_router, portfolio_router, watchlist_router
from cryptotrack.core.exceptions import (
    AppError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)

logger = logging.getLogger(__name__)


_STATUS_BY_ERROR: list[tuple[type[AppError], int]] = [
    (ValidationError, 400),
    (NotFoundError, 404),
    (UpstreamError, 502),
]


def status_for(exc: AppError) -> int:
    """HTTP status for an application error."""
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 400


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    # Build the shared cache and market data service before serving requests
    get_app_context().market_data
    yield
    # Shutdown
    get_app_context().close()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Cryptocurrency portfolio tracking with live market prices",
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.include_router(crypto_router)
    app.include_router(portfolio_router)
    app.include_router(watchlist_router)
    if not settings.is_production:
        app.include_router(admin_router)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Global handler for application errors."""
        status = status_for(exc)
        if status >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        body = {"error": exc.code, "message": exc.message}
        if isinstance(exc, ValidationError):
            body["field"] = exc.field
        return JSONResponse(status_code=status, content=body)

    @app.get("/health")
    def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/")
    def root() -> dict[str, str]:
        """Root endpoint with API info."""
        return {
            "app": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
        }

    return app


app = create_app()
