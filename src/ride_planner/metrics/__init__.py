"""Zone and training load calculations."""

from .load import (
    calculate_tss,
    phase_load_multiplier,
    round_half_up,
    structured_load_multiplier,
    weekly_load,
)
from .zones import (
    DEFAULT_HEART_RATE_BANDS,
    ZONE_FRACTIONS,
    calculate_hr_zones_max_hr,
    compute_zones,
    default_zone_set,
    estimate_max_hr,
    zones_from_ai,
)

__all__ = [
    "calculate_tss",
    "phase_load_multiplier",
    "round_half_up",
    "structured_load_multiplier",
    "weekly_load",
    "DEFAULT_HEART_RATE_BANDS",
    "ZONE_FRACTIONS",
    "calculate_hr_zones_max_hr",
    "compute_zones",
    "default_zone_set",
    "estimate_max_hr",
    "zones_from_ai",
]
