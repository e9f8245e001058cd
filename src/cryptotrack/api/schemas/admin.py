"""Pydantic schemas for admin endpoints."""

from pydantic import BaseModel


class CacheStatsResponse(BaseModel):
    """Memo cache statistics."""

    size: int
    keys: list[str]
    ttl_seconds: float


class MessageResponse(BaseModel):
    message: str
