"""Logarithmic risk/reward score of a price inside its low/high band.

The low line maps to the top of the scale and the high line to the bottom:

    score = floor + (ceiling - floor) * ln(high / p) / ln(high / low)

with p clamped into [low, high], so prices outside the band saturate.
"""
import math

from rr_alerts.providers.core.exceptions import InvalidRangeError

SCORE_FLOOR = 0.0
SCORE_CEILING = 10.0


def _check_band(low: float, high: float) -> None:
    if not (math.isfinite(low) and math.isfinite(high)):
        raise InvalidRangeError(f"band must be finite (got {low}, {high})")
    if low <= 0 or high <= low:
        raise InvalidRangeError(f"band requires 0 < low < high (got {low}, {high})")


def score(
    price: float,
    low: float,
    high: float,
    *,
    floor: float = SCORE_FLOOR,
    ceiling: float = SCORE_CEILING,
) -> float:
    """Score a price on the log scale of its band.

    Raises:
        InvalidRangeError: low <= 0, high <= low, or a non-finite input.
    """
    _check_band(low, high)
    if not math.isfinite(price):
        raise InvalidRangeError(f"price must be finite (got {price})")
    p = min(max(price, low), high)
    s = floor + (ceiling - floor) * (math.log(high / p) / math.log(high / low))
    return min(max(s, floor), ceiling)


def price_at_score(
    low: float,
    high: float,
    s: float,
    *,
    floor: float = SCORE_FLOOR,
    ceiling: float = SCORE_CEILING,
) -> float:
    """Inverse of score(): the price that sits at score s inside the band."""
    _check_band(low, high)
    fraction = (s - floor) / (ceiling - floor)
    return high / math.pow(high / low, fraction)
