"""Application-level exceptions."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when caller input is malformed, before any upstream call."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}", code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class CoinNotFoundError(NotFoundError):
    """Raised when the market-data provider reports no such coin."""

    def __init__(self, coin_id: str):
        self.coin_id = coin_id
        super().__init__("Coin", coin_id)


class UpstreamError(AppError):
    """
    Raised when the market-data provider cannot be reached or answers non-2xx.

    `endpoint` is the upstream path that failed; `cause` is the underlying
    exception or a short description of the bad response.
    """

    def __init__(self, endpoint: str, cause: Optional[object] = None):
        self.endpoint = endpoint
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(
            f"Market data request failed for {endpoint}{detail}",
            code="UPSTREAM_ERROR",
        )
