"""Detection of zone-boundary crossings between two observations."""
from dataclasses import dataclass
from typing import Literal

from rr_alerts.scoring.zones import DEFAULT_SCHEME, ZoneScheme

PriceDirection = Literal["UP", "DOWN", "FLAT"]


@dataclass(frozen=True)
class Crossing:
    """Outcome of comparing a previous zone with a new one.

    boundary_score is the threshold nearest to the originating zone; boundaries
    lists every threshold crossed, starting from that one.
    """

    occurred: bool
    boundary_score: float | None = None
    price_direction: PriceDirection = "FLAT"
    boundaries: tuple[float, ...] = ()


def price_direction(from_zone: int, to_zone: int) -> PriceDirection:
    """Direction of the price move; a lower zone index means the price went up."""
    if to_zone < from_zone:
        return "UP"
    if to_zone > from_zone:
        return "DOWN"
    return "FLAT"


def crossing(
    from_zone: int | None,
    to_zone: int,
    scheme: ZoneScheme = DEFAULT_SCHEME,
) -> Crossing:
    """Compare two zone indices of the same ticker.

    A missing from_zone is the first sighting of a ticker and seeds history
    rather than counting as a crossing.
    """
    if from_zone is None or from_zone == to_zone:
        return Crossing(occurred=False)

    if to_zone > from_zone:
        # thresholds[i] separates zone i from zone i + 1
        crossed = scheme.thresholds[from_zone:to_zone]
    else:
        crossed = tuple(reversed(scheme.thresholds[to_zone:from_zone]))

    return Crossing(
        occurred=True,
        boundary_score=crossed[0] if crossed else None,
        price_direction=price_direction(from_zone, to_zone),
        boundaries=tuple(crossed),
    )
