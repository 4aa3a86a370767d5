"""Pydantic schemas for tickers, observations, alert state and API payloads."""
from pydantic import BaseModel, Field, field_validator, model_validator

from rr_alerts.providers.core.exceptions import InvalidRangeError
from rr_alerts.providers.core.utils import (normalize_stock_symbol,
                                            positive_finite)


class TickerSpec(BaseModel):
    """One tracked instrument with its low/high reference lines."""

    model_config = {"frozen": True}

    symbol: str
    low: float
    high: float
    price: float | None = None  # optional pre-supplied reference price
    pick_type: str = ""

    @field_validator("symbol", mode="before")
    @classmethod
    def _normalize_symbol(cls, value: object) -> str:
        symbol = normalize_stock_symbol(str(value or ""))
        if not symbol:
            raise ValueError("symbol is empty")
        return symbol

    @field_validator("price", mode="before")
    @classmethod
    def _finite_price(cls, value: object) -> float | None:
        return positive_finite(value)

    @model_validator(mode="after")
    def _check_band(self) -> "TickerSpec":
        if not (0 < self.low < self.high):
            raise InvalidRangeError(
                f"{self.symbol}: band requires 0 < low < high (got {self.low}, {self.high})"
            )
        return self


class PriceObservation(BaseModel):
    """Latest price for a symbol as produced by the price resolver."""

    symbol: str
    price: float = Field(gt=0)
    as_of_date: str
    source: str = "oracle"


class AlertState(BaseModel):
    """Persisted per-ticker record: last zone, last successful email, last price."""

    last_zone: int | None = None
    last_email_at: float = 0.0  # unix seconds; 0 means never emailed
    last_observed_price: float | None = None
    last_observed_date: str | None = None
    zone_scheme: str | None = None


class BatchSummary(BaseModel):
    """Result of one batch invocation, returned by the trigger endpoint."""

    processed: int = 0
    total: int = 0
    sent: int = 0
    skipped: int = 0
    next_cursor: int = Field(default=0, serialization_alias="nextCursor")
    rate_limited: bool = Field(default=False, serialization_alias="rateLimited")


class TickerStatus(BaseModel):
    """Band plus cached state for one ticker (GET /tickers)."""

    symbol: str
    low: float
    high: float
    pick_type: str = ""
    last_price: float | None = None
    last_date: str | None = None
    score: float | None = None
    zone: int | None = None
    zone_name: str | None = None
    last_email_at: float | None = None


__all__ = [
    "AlertState",
    "BatchSummary",
    "PriceObservation",
    "TickerSpec",
    "TickerStatus",
]
