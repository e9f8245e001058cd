"""Market-data vocabulary shaped from provider payloads."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from cryptotrack.core.timezone import parse_datetime_utc


# Market rows carry dozens of provider fields; they pass through unchanged.
MarketRow = dict[str, Any]


def _as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _as_datetime(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value:
        return None
    try:
        return parse_datetime_utc(value)
    except (ValueError, OverflowError):
        return None


@dataclass(frozen=True)
class CoinListing:
    """Entry of the full coin list."""

    id: str
    symbol: str
    name: str

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "CoinListing":
        return cls(
            id=str(payload.get("id", "")),
            symbol=str(payload.get("symbol", "")),
            name=str(payload.get("name", "")),
        )


@dataclass(frozen=True)
class CoinMatch:
    """Search or trending result."""

    id: str
    symbol: str
    name: str
    market_cap_rank: Optional[int] = None
    thumb: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "CoinMatch":
        # Trending results wrap each coin in {"item": {...}}
        item = payload.get("item", payload)
        rank = item.get("market_cap_rank")
        return cls(
            id=str(item.get("id", "")),
            symbol=str(item.get("symbol", "")),
            name=str(item.get("name", "")),
            market_cap_rank=int(rank) if isinstance(rank, (int, float)) else None,
            thumb=item.get("thumb") or item.get("small"),
        )


@dataclass
class CoinDetail:
    """Detail of a single coin with its current prices per currency."""

    id: str
    symbol: str
    name: str
    current_price: dict[str, float] = field(default_factory=dict)
    market_cap_rank: Optional[int] = None
    image: Optional[str] = None
    last_updated: Optional[datetime] = None
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "CoinDetail":
        market_data = payload.get("market_data") or {}
        prices: dict[str, float] = {}
        for currency, value in (market_data.get("current_price") or {}).items():
            price = _as_float(value)
            if price is not None:
                prices[currency] = price
        image = payload.get("image")
        if isinstance(image, dict):
            image = image.get("large") or image.get("small") or image.get("thumb")
        rank = payload.get("market_cap_rank")
        return cls(
            id=str(payload.get("id", "")),
            symbol=str(payload.get("symbol", "")),
            name=str(payload.get("name", "")),
            current_price=prices,
            market_cap_rank=int(rank) if isinstance(rank, (int, float)) else None,
            image=image,
            last_updated=_as_datetime(payload.get("last_updated")),
            raw=payload,
        )


@dataclass
class PriceHistory:
    """Time series of [timestamp_ms, value] pairs."""

    prices: list[list[float]] = field(default_factory=list)
    market_caps: list[list[float]] = field(default_factory=list)
    total_volumes: list[list[float]] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "PriceHistory":
        return cls(
            prices=list(payload.get("prices") or []),
            market_caps=list(payload.get("market_caps") or []),
            total_volumes=list(payload.get("total_volumes") or []),
        )


@dataclass
class GlobalStats:
    """Global crypto market statistics."""

    active_cryptocurrencies: int = 0
    markets: int = 0
    total_market_cap: dict[str, float] = field(default_factory=dict)
    total_volume: dict[str, float] = field(default_factory=dict)
    market_cap_percentage: dict[str, float] = field(default_factory=dict)
    market_cap_change_percentage_24h_usd: Optional[float] = None
    updated_at: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "GlobalStats":
        data = payload.get("data", payload)
        if not isinstance(data, dict):
            data = {}
        return cls(
            active_cryptocurrencies=int(data.get("active_cryptocurrencies") or 0),
            markets=int(data.get("markets") or 0),
            total_market_cap=dict(data.get("total_market_cap") or {}),
            total_volume=dict(data.get("total_volume") or {}),
            market_cap_percentage=dict(data.get("market_cap_percentage") or {}),
            market_cap_change_percentage_24h_usd=_as_float(
                data.get("market_cap_change_percentage_24h_usd")
            ),
            updated_at=data.get("updated_at"),
        )
