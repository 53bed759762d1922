"""
Plan assembly.

Orchestrates zone calculation, workout synthesis and periodization into one
immutable TrainingPlan. The advisor is consulted first; anything it fails to
supply (or supplies malformed) is filled from the rule-based computations,
so a valid profile always yields a complete plan.
"""

import asyncio
import logging
from datetime import date, timedelta
from typing import Optional, Sequence

from ..agents.advisor_agent import ADVISOR_FAILURES, PlanAdvisor
from ..config import Settings, get_settings
from ..metrics.load import round_half_up
from ..metrics.zones import compute_zones
from ..models.ai_response import AIPlanResponse, AIWeeklyStructure
from ..models.plans import (
    AIInsights,
    MotivationalAdvice,
    PlanDuration,
    TrainingPlan,
    WeeklyStructure,
)
from ..models.profile import PrimaryGoal, Profile
from ..models.workouts import Workout
from .periodization import build_weeks, plan_duration
from .workout_synthesizer import synthesize_workouts_with_coaching


logger = logging.getLogger(__name__)

PLAN_NAMES = {
    PrimaryGoal.ENDURANCE: "Endurance Development Plan",
    PrimaryGoal.SPEED: "Speed & Power Plan",
    PrimaryGoal.EVENT_TRAINING: "Event Preparation Plan",
    PrimaryGoal.WEIGHT_LOSS: "Fitness & Weight Management Plan",
    PrimaryGoal.GENERAL_FITNESS: "General Fitness Plan",
    PrimaryGoal.POWER: "Power Development Plan",
}
DEFAULT_PLAN_NAME = "Personalized Training Plan"
DEFAULT_PHILOSOPHY = "Personalized training approach"

DEFAULT_FOCUS_AREAS = ("Build aerobic base", "Improve consistency")
DEFAULT_PROGRESSION_STRATEGY = "Gradual progression with proper recovery"
DEFAULT_KEY_WORKOUTS = ("Long endurance rides", "Interval sessions")
DEFAULT_NUTRITION_TIPS = ("Stay hydrated", "Eat adequate carbohydrates")
DEFAULT_RECOVERY_GUIDELINES = ("Prioritize sleep", "Easy days truly easy")

ENHANCED_FEATURES = (
    "Personalized coaching cues",
    "Adaptive nutrition guidance",
    "Motivational messaging",
    "Smart periodization",
)


def plan_name_for_goal(goal: PrimaryGoal) -> str:
    return PLAN_NAMES.get(goal, DEFAULT_PLAN_NAME)


def compute_weekly_structure(
    profile: Profile,
    workouts: Sequence[Workout] = (),
    km_per_hour: float = 25.0,
) -> WeeklyStructure:
    """
    Weekly volume from the rider's schedule.

    hours = round(days * average session minutes / 60),
    distance = round(hours * km_per_hour).
    """
    schedule = profile.schedule
    total_hours = round_half_up(schedule.days_per_week * schedule.session_duration.average / 60)
    return WeeklyStructure(
        total_hours=total_hours,
        total_distance=round_half_up(total_hours * km_per_hour),
        number_of_workouts=schedule.days_per_week,
        workout_types=tuple(dict.fromkeys(w.workout_type.value for w in workouts)),
    )


def weekly_structure_from_ai(ai_structure: AIWeeklyStructure, fallback: WeeklyStructure) -> WeeklyStructure:
    """Advisor weekly volume, field by field over the computed one."""
    return WeeklyStructure(
        total_hours=(
            round_half_up(ai_structure.total_hours)
            if ai_structure.total_hours is not None else fallback.total_hours
        ),
        total_distance=(
            round_half_up(ai_structure.total_distance)
            if ai_structure.total_distance is not None else fallback.total_distance
        ),
        number_of_workouts=(
            ai_structure.number_of_workouts
            if ai_structure.number_of_workouts is not None else fallback.number_of_workouts
        ),
        workout_types=tuple(ai_structure.workout_types) or fallback.workout_types,
        typical_week=ai_structure.typical_week,
    )


def default_insights() -> AIInsights:
    """Coaching narrative used when the advisor supplied nothing."""
    return AIInsights(
        focus_areas=DEFAULT_FOCUS_AREAS,
        progression_strategy=DEFAULT_PROGRESSION_STRATEGY,
        key_workouts=DEFAULT_KEY_WORKOUTS,
        nutrition_tips=DEFAULT_NUTRITION_TIPS,
        recovery_guidelines=DEFAULT_RECOVERY_GUIDELINES,
        ai_powered=False,
    )


def insights_from_ai(ai: AIPlanResponse) -> AIInsights:
    """Coaching narrative from advisor data; each missing part uses its default."""
    focus_areas = tuple(ai.focus_areas) if ai.focus_areas else DEFAULT_FOCUS_AREAS

    progression_strategy = DEFAULT_PROGRESSION_STRATEGY
    if ai.periodization is not None and ai.periodization.progression_strategy:
        progression_strategy = ai.periodization.progression_strategy

    key_workouts = DEFAULT_KEY_WORKOUTS
    if ai.key_workouts:
        names = tuple(w.name for w in ai.key_workouts if w.name)
        key_workouts = names or DEFAULT_KEY_WORKOUTS

    nutrition_tips = DEFAULT_NUTRITION_TIPS
    if ai.nutrition is not None and ai.nutrition.tips():
        nutrition_tips = tuple(ai.nutrition.tips())

    recovery_guidelines = DEFAULT_RECOVERY_GUIDELINES
    if ai.recovery is not None and ai.recovery.guidelines():
        recovery_guidelines = tuple(ai.recovery.guidelines())

    motivational_advice = None
    if ai.motivation is not None:
        motivational_advice = MotivationalAdvice(
            mental_approach=ai.motivation.mental_approach,
            consistency_tips=tuple(ai.motivation.consistency_tips),
            setback_strategies=ai.motivation.setback_strategies,
        )

    return AIInsights(
        focus_areas=focus_areas,
        progression_strategy=progression_strategy,
        key_workouts=key_workouts,
        nutrition_tips=nutrition_tips,
        recovery_guidelines=recovery_guidelines,
        ai_powered=True,
        motivational_advice=motivational_advice,
        enhanced_features=ENHANCED_FEATURES,
    )


async def request_advisor_plan(
    advisor: Optional[PlanAdvisor],
    profile: Profile,
    timeout: float,
) -> Optional[AIPlanResponse]:
    """
    Ask the advisor for plan data.

    Returns None when there is no advisor, the call fails or times out, or
    the answer is unusable. Advisor errors never propagate.
    """
    if advisor is None:
        logger.info("No plan advisor configured, using rule-based plan")
        return None

    try:
        result = await asyncio.wait_for(advisor.generate_plan(profile), timeout=timeout)
    except ADVISOR_FAILURES as e:
        logger.warning(f"Plan advisor failed, using rule-based plan: {e!r}")
        return None

    if not result.available:
        logger.info(f"Plan advisor unavailable ({result.reason}), using rule-based plan")
        return None

    if not result.data.has_content():
        logger.info("Plan advisor returned no usable content, using rule-based plan")
        return None

    return result.data


async def generate_plan(
    profile: Profile,
    advisor: Optional[PlanAdvisor] = None,
    *,
    start_date: Optional[date] = None,
    settings: Optional[Settings] = None,
) -> TrainingPlan:
    """
    Generate a complete training plan for a validated profile.

    Args:
        profile: Validated rider profile
        advisor: Optional plan advisor; None builds the plan from rules only
        start_date: First day of the plan (defaults to today)
        settings: Settings override (defaults to the cached settings)

    Returns:
        An immutable TrainingPlan
    """
    settings = settings or get_settings()
    start = start_date or date.today()

    ai = await request_advisor_plan(advisor, profile, settings.ai_plan_timeout_seconds)

    total_weeks = plan_duration(profile)
    philosophy = DEFAULT_PHILOSOPHY
    if ai is not None and ai.duration is not None:
        if ai.duration.weeks is not None:
            total_weeks = ai.duration.weeks
        if ai.duration.philosophy:
            philosophy = ai.duration.philosophy

    zones = compute_zones(profile, ai.zones if ai is not None else None)

    templates = None
    if ai is not None and ai.key_workouts:
        templates = [t for t in ai.key_workouts if t.has_content()] or None
    workouts = await synthesize_workouts_with_coaching(
        profile,
        templates,
        advisor,
        timeout=settings.ai_coaching_timeout_seconds,
    )

    weeks = build_weeks(
        workouts,
        ai.periodization if ai is not None else None,
        total_weeks,
        base_load=settings.base_weekly_load,
    )

    weekly_structure = compute_weekly_structure(profile, workouts, settings.km_per_hour)
    if ai is not None and ai.weekly_structure is not None:
        weekly_structure = weekly_structure_from_ai(ai.weekly_structure, weekly_structure)

    plan_name = plan_name_for_goal(profile.goals.primary_goal)
    if ai is not None and ai.plan_name:
        plan_name = ai.plan_name

    plan = TrainingPlan(
        plan_name=plan_name,
        duration=PlanDuration(
            weeks=total_weeks,
            start_date=start,
            end_date=start + timedelta(weeks=total_weeks),
            philosophy=philosophy,
        ),
        weekly_structure=weekly_structure,
        zones=zones,
        weeks=tuple(weeks),
        workouts=tuple(workouts),
        ai_insights=insights_from_ai(ai) if ai is not None else default_insights(),
        ai_generated=ai is not None,
    )

    logger.info(
        f"Generated {'AI-assisted' if plan.ai_generated else 'rule-based'} plan "
        f"'{plan.plan_name}': {plan.total_weeks} weeks, {len(plan.workouts)} workouts"
    )
    return plan


def generate_plan_sync(
    profile: Profile,
    advisor: Optional[PlanAdvisor] = None,
    *,
    start_date: Optional[date] = None,
    settings: Optional[Settings] = None,
) -> TrainingPlan:
    """
    Synchronous wrapper for plan generation.

    Runs in a worker thread with its own event loop when called from inside
    a running loop.
    """
    coro = generate_plan(profile, advisor, start_date=start_date, settings=settings)

    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    import concurrent.futures
    with concurrent.futures.ThreadPoolExecutor() as executor:
        return executor.submit(asyncio.run, coro).result()
