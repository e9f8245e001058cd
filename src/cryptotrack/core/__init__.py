"""Core utilities and shared functionality."""

from cryptotrack.core.timezone import (
    now_utc,
    to_utc,
    parse_datetime_utc,
    UTC,
)
from cryptotrack.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    CoinNotFoundError,
    UpstreamError,
)

__all__ = [
    "now_utc",
    "to_utc",
    "parse_datetime_utc",
    "UTC",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "CoinNotFoundError",
    "UpstreamError",
]
