"""
Periodization planning.

Decides how long a plan runs and lays out its weeks: either following an
advisor-supplied phase list or a rule-based base/build/peak schedule with a
recovery week every fourth week.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from ..metrics.load import (
    DEFAULT_BASE_LOAD,
    phase_load_multiplier,
    structured_load_multiplier,
    weekly_load,
)
from ..models.ai_response import AIPeriodization, AIPhase
from ..models.plans import PhaseGuidance, TrainingWeek, WeekType
from ..models.profile import ExperienceLevel, PrimaryGoal, Profile
from ..models.workouts import Workout


logger = logging.getLogger(__name__)

GOAL_DURATION_WEEKS: Dict[PrimaryGoal, int] = {
    PrimaryGoal.WEIGHT_LOSS: 12,
    PrimaryGoal.ENDURANCE: 16,
    PrimaryGoal.SPEED: 12,
    PrimaryGoal.EVENT_TRAINING: 20,
    PrimaryGoal.GENERAL_FITNESS: 8,
    PrimaryGoal.POWER: 14,
}
DEFAULT_DURATION_WEEKS = 12

MIN_BEGINNER_WEEKS = 8
MAX_EXPERT_WEEKS = 24
EXPERIENCE_ADJUSTMENT_WEEKS = 4


def plan_duration(profile: Profile) -> int:
    """
    Plan length in weeks for a rider.

    Looked up by primary goal, then shortened for beginners (never below 8)
    and lengthened for experts (never above 24).
    """
    weeks = GOAL_DURATION_WEEKS.get(profile.goals.primary_goal, DEFAULT_DURATION_WEEKS)

    level = profile.experience.level
    if level == ExperienceLevel.BEGINNER:
        weeks = max(MIN_BEGINNER_WEEKS, weeks - EXPERIENCE_ADJUSTMENT_WEEKS)
    elif level == ExperienceLevel.EXPERT:
        weeks = min(MAX_EXPERT_WEEKS, weeks + EXPERIENCE_ADJUSTMENT_WEEKS)

    return weeks


def phase_guidance(phase: AIPhase, week_in_phase: int) -> PhaseGuidance:
    focus = phase.focus or ""
    guidance = f"Week {week_in_phase} of {phase.name} phase"
    if focus:
        guidance = f"{guidance}: {focus}"
    return PhaseGuidance(phase_name=phase.name, focus=focus, guidance=guidance)


def structured_week(
    week_number: int,
    total_weeks: int,
    workout_ids: Tuple[str, ...],
    base_load: int,
) -> TrainingWeek:
    """One week of the rule-based schedule."""
    week_type, multiplier = structured_load_multiplier(week_number, total_weeks)
    return TrainingWeek(
        week_number=week_number,
        week_type=week_type,
        total_load=weekly_load(multiplier, base_load),
        workout_ids=workout_ids,
    )


def build_weeks(
    workouts: Sequence[Workout],
    ai_periodization: Optional[AIPeriodization],
    total_weeks: int,
    base_load: int = DEFAULT_BASE_LOAD,
) -> List[TrainingWeek]:
    """
    Lay out every week of the plan.

    Args:
        workouts: The plan's workout catalog; every week references all of it
        ai_periodization: Advisor phase list, used when it has phases
        total_weeks: Number of weeks to produce
        base_load: Weekly load (TSS) at multiplier 1.0

    Returns:
        Exactly ``total_weeks`` weeks numbered from 1
    """
    workout_ids = tuple(w.id for w in workouts)
    weeks: List[TrainingWeek] = []

    if ai_periodization is not None and ai_periodization.phases:
        for phase in ai_periodization.phases:
            remaining = total_weeks - len(weeks)
            if remaining <= 0:
                break
            for offset in range(min(phase.weeks, remaining)):
                week_number = len(weeks) + 1
                multiplier = phase_load_multiplier(phase.focus, week_number, total_weeks)
                weeks.append(TrainingWeek(
                    week_number=week_number,
                    week_type=WeekType.from_phase_name(phase.name),
                    total_load=weekly_load(multiplier, base_load),
                    workout_ids=workout_ids,
                    phase=phase_guidance(phase, offset + 1),
                ))

        if len(weeks) < total_weeks:
            logger.info(
                f"Advisor phases cover {len(weeks)} of {total_weeks} weeks; "
                f"scheduling the rest by rule"
            )
    else:
        logger.debug(f"Building {total_weeks} weeks from the rule-based schedule")

    for week_number in range(len(weeks) + 1, total_weeks + 1):
        weeks.append(structured_week(week_number, total_weeks, workout_ids, base_load))

    return weeks
