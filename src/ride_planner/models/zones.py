"""Training zone data models."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Tuple


class ZoneMetric(str, Enum):
    """Physiological metric a zone set is expressed in."""
    HEART_RATE = "heart_rate"
    POWER = "power"
    RPE = "rpe"


ZONE_NAMES: Tuple[str, ...] = (
    "recovery",
    "endurance",
    "tempo",
    "threshold",
    "vo2max",
    "neuromuscular",
)


@dataclass(frozen=True)
class ZoneBand:
    """A single {min, max} band of a zone set."""
    min: int
    max: int

    def to_dict(self) -> Dict[str, int]:
        return {"min": self.min, "max": self.max}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ZoneBand":
        return cls(min=data["min"], max=data["max"])


@dataclass(frozen=True)
class TrainingZoneSet:
    """
    Six named training bands tagged by metric kind.

    Bands are listed from easiest (recovery) to hardest (neuromuscular).
    """
    metric: ZoneMetric
    recovery: ZoneBand
    endurance: ZoneBand
    tempo: ZoneBand
    threshold: ZoneBand
    vo2max: ZoneBand
    neuromuscular: ZoneBand

    def bands(self) -> List[Tuple[str, ZoneBand]]:
        """All bands as (name, band) pairs in zone order."""
        return [(name, getattr(self, name)) for name in ZONE_NAMES]

    def is_monotonic(self) -> bool:
        """True if bands do not overlap and increase in zone order."""
        bands = [band for _, band in self.bands()]
        for lower, upper in zip(bands, bands[1:]):
            if lower.max > upper.min or lower.min >= upper.min:
                return False
        return all(band.min <= band.max for band in bands)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "type": self.metric.value,
            "values": {name: band.to_dict() for name, band in self.bands()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrainingZoneSet":
        """Create from dictionary."""
        values = data["values"]
        return cls(
            metric=ZoneMetric(data["type"]),
            **{name: ZoneBand.from_dict(values[name]) for name in ZONE_NAMES},
        )
