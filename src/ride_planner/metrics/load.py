"""Training load calculations (TSS and weekly load progression)."""

import math
from typing import Callable, Dict, Optional, Tuple

from ..models.plans import WeekType


DEFAULT_BASE_LOAD = 200

# Multiplier per AI phase focus, as a function of plan progress (week / total).
PHASE_FOCUS_MULTIPLIERS: Dict[str, Callable[[float], float]] = {
    "base building": lambda progress: 0.8 + progress * 0.2,
    "build": lambda progress: 1.0 + progress * 0.3,
    "peak": lambda progress: 1.2,
    "recovery": lambda progress: 0.6,
    "taper": lambda progress: 0.5,
}
DEFAULT_PHASE_MULTIPLIER = 0.8

# Share of the plan given to base and build in the rule-based schedule;
# peak takes the remainder.
BASE_SHARE = 0.6
BUILD_SHARE = 0.3
PEAK_MULTIPLIER = 0.7
RECOVERY_MULTIPLIER = 0.6
RECOVERY_EVERY_N_WEEKS = 4


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going up."""
    return int(math.floor(value + 0.5))


def calculate_tss(duration_min: float, intensity_factor: float) -> int:
    """
    Training Stress Score estimate from duration and intensity factor.

    TSS = (duration_hours * IF^2) * 100, so one hour at threshold (IF=1.0)
    scores 100.

    Args:
        duration_min: Workout duration in minutes
        intensity_factor: Effort relative to threshold (0-1 for most rides)

    Returns:
        TSS rounded to the nearest integer
    """
    return round_half_up((duration_min / 60) * (intensity_factor ** 2) * 100)


def phase_load_multiplier(focus: Optional[str], week_number: int, total_weeks: int) -> float:
    """
    Load multiplier for a week inside an AI-supplied phase.

    Looked up by the phase focus (case-insensitive); unknown or missing
    focus gives 0.8.
    """
    progress = week_number / total_weeks if total_weeks > 0 else 0.0
    if focus is None:
        return DEFAULT_PHASE_MULTIPLIER
    rule = PHASE_FOCUS_MULTIPLIERS.get(focus.strip().lower())
    if rule is None:
        return DEFAULT_PHASE_MULTIPLIER
    return rule(progress)


def structured_load_multiplier(week_number: int, total_weeks: int) -> Tuple[WeekType, float]:
    """
    Week type and load multiplier for the rule-based schedule.

    The first 60% of weeks are base (0.8 rising to 1.0), the next 30% build
    (1.0 rising to 1.3), the rest peak (0.7). Every 4th week is a recovery
    week at 0.6 whatever segment it falls in.
    """
    base_weeks = math.floor(total_weeks * BASE_SHARE)
    build_weeks = math.floor(total_weeks * BUILD_SHARE)

    if week_number <= base_weeks:
        week_type = WeekType.BASE
        multiplier = 0.8 + (week_number / base_weeks) * 0.2
    elif week_number <= base_weeks + build_weeks:
        week_type = WeekType.BUILD
        multiplier = 1.0 + ((week_number - base_weeks) / build_weeks) * 0.3
    else:
        week_type = WeekType.PEAK
        multiplier = PEAK_MULTIPLIER

    if week_number % RECOVERY_EVERY_N_WEEKS == 0:
        week_type = WeekType.RECOVERY
        multiplier = RECOVERY_MULTIPLIER

    return week_type, multiplier


def weekly_load(multiplier: float, base_load: int = DEFAULT_BASE_LOAD) -> int:
    """Weekly load target in TSS units."""
    return round_half_up(base_load * multiplier)
