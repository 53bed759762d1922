"""Heart rate zone calculations."""

import logging
from typing import Dict, Optional, Tuple

from ..models.ai_response import AIZones
from ..models.profile import Profile
from ..models.zones import ZONE_NAMES, TrainingZoneSet, ZoneBand, ZoneMetric
from .load import round_half_up


logger = logging.getLogger(__name__)

# Fractions of max HR per zone: [low, high)
ZONE_FRACTIONS: Dict[str, Tuple[float, float]] = {
    "recovery": (0.50, 0.60),
    "endurance": (0.60, 0.70),
    "tempo": (0.70, 0.80),
    "threshold": (0.80, 0.90),
    "vo2max": (0.90, 0.95),
    "neuromuscular": (0.95, 1.00),
}

# Used slot by slot when an AI zone table leaves a zone out.
DEFAULT_HEART_RATE_BANDS: Dict[str, ZoneBand] = {
    "recovery": ZoneBand(100, 130),
    "endurance": ZoneBand(130, 150),
    "tempo": ZoneBand(150, 165),
    "threshold": ZoneBand(165, 175),
    "vo2max": ZoneBand(175, 190),
    "neuromuscular": ZoneBand(190, 220),
}


def default_zone_set() -> TrainingZoneSet:
    """Zone set made entirely of the default AI fallback bands."""
    return TrainingZoneSet(metric=ZoneMetric.HEART_RATE, **DEFAULT_HEART_RATE_BANDS)


def estimate_max_hr(age: int) -> int:
    """
    Estimate maximum heart rate from age.

    Uses the classic 220 - age formula.
    """
    return 220 - age


def calculate_hr_zones_max_hr(max_hr: int) -> TrainingZoneSet:
    """
    Six heart rate zones as fixed fractions of max HR.

    Zone boundaries (% of max HR):
    - Recovery: 50-60%
    - Endurance: 60-70%
    - Tempo: 70-80%
    - Threshold: 80-90%
    - VO2max: 90-95%
    - Neuromuscular: 95-100%

    Args:
        max_hr: Maximum heart rate

    Returns:
        TrainingZoneSet with bounds rounded to whole bpm
    """
    bands = {
        name: ZoneBand(round_half_up(max_hr * low), round_half_up(max_hr * high))
        for name, (low, high) in ZONE_FRACTIONS.items()
    }
    return TrainingZoneSet(metric=ZoneMetric.HEART_RATE, **bands)


def zones_from_ai(ai_zones: AIZones) -> Optional[TrainingZoneSet]:
    """
    Map an AI heart rate table onto the six named zones.

    zone1..zone6 map positionally onto recovery..neuromuscular. A missing or
    unusable entry takes the default band for its slot. Returns None if the
    payload has no heart rate table.
    """
    if ai_zones.heart_rate is None:
        return None

    bands: Dict[str, ZoneBand] = {}
    for name, entry in zip(ZONE_NAMES, ai_zones.heart_rate.positional()):
        if entry is not None and entry.is_usable:
            bands[name] = ZoneBand(round_half_up(entry.min), round_half_up(entry.max))
        else:
            bands[name] = DEFAULT_HEART_RATE_BANDS[name]
    return TrainingZoneSet(metric=ZoneMetric.HEART_RATE, **bands)


def compute_zones(profile: Profile, ai_zones: Optional[AIZones] = None) -> TrainingZoneSet:
    """
    Training zones for a rider.

    Prefers an AI-supplied heart rate table; otherwise derives zones from
    age (max HR = 220 - age). Always returns a complete zone set.
    """
    if ai_zones is not None:
        zones = zones_from_ai(ai_zones)
        if zones is not None:
            logger.debug("Using AI-supplied heart rate zones")
            return zones

    max_hr = estimate_max_hr(profile.basic_info.age)
    return calculate_hr_zones_max_hr(max_hr)
