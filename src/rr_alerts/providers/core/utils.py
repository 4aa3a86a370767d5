"""Shared utilities for price, ticker and mail providers."""
import math
import re
from datetime import datetime, timezone

DECIMALS = 2

_SYMBOL_CHARS = re.compile(r"[^A-Za-z0-9.\-]")
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_stock_symbol(symbol: str) -> str:
    """Normalize a stock symbol (strip stray characters, uppercase)."""
    return _SYMBOL_CHARS.sub("", symbol or "").upper()


def normalize_email(email: str | None) -> str:
    """Trim and lower-case an email address."""
    return str(email or "").strip().lower()


def positive_finite(value: object) -> float | None:
    """Return value as float when it is a finite number > 0, else None."""
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def today_iso() -> str:
    """Current UTC date as YYYY-MM-DD."""
    return datetime.now(timezone.utc).date().isoformat()


def round2(x: float | None) -> float | None:
    """Round a value to 2 decimal places; preserve None."""
    if x is None:
        return None
    return round(float(x), DECIMALS)
