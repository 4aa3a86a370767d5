"""Scoring, zone classification and crossing detection (pure functions)."""
from rr_alerts.scoring.crossing import Crossing, crossing, price_direction
from rr_alerts.scoring.scale import (SCORE_CEILING, SCORE_FLOOR,
                                     price_at_score, score)
from rr_alerts.scoring.zones import DEFAULT_SCHEME, ZoneScheme, zone_of

__all__ = [
    "Crossing",
    "DEFAULT_SCHEME",
    "SCORE_CEILING",
    "SCORE_FLOOR",
    "ZoneScheme",
    "crossing",
    "price_at_score",
    "price_direction",
    "score",
    "zone_of",
]
