"""Fixed zone scheme and score-to-zone classification.

Zone indices grow with the score, so a higher index means a lower price
relative to the band: 0 is the Sell Zone (near the high line), the last index
is the Buy Zone (near the low line).
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class ZoneScheme:
    """Ascending score thresholds and one name per zone.

    scheme_id is persisted next to every stored zone index; a stored index
    whose scheme_id differs from the active scheme is discarded, not reused.
    """

    scheme_id: str
    thresholds: tuple[float, ...]
    names: tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.names) != len(self.thresholds) + 1:
            raise ValueError("a scheme needs exactly one more name than thresholds")
        if list(self.thresholds) != sorted(set(self.thresholds)):
            raise ValueError("thresholds must be strictly ascending")

    @property
    def zone_count(self) -> int:
        return len(self.names)

    def name(self, zone: int | None) -> str:
        if zone is None or not 0 <= zone < self.zone_count:
            return "Unknown"
        return self.names[zone]


DEFAULT_SCHEME = ZoneScheme(
    scheme_id="log4-2-5-7",
    thresholds=(2.0, 5.0, 7.0),
    names=("Sell Zone", "Above Halfway Point", "Below Halfway Point", "Buy Zone"),
)


def zone_of(score: float, scheme: ZoneScheme = DEFAULT_SCHEME) -> int:
    """Zone index for a score; a score equal to a threshold belongs to the higher zone."""
    for index in range(len(scheme.thresholds) - 1, -1, -1):
        if score >= scheme.thresholds[index]:
            return index + 1
    return 0
