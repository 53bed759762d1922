"""
Workout synthesis.

Builds the plan's workout catalog either from AI key-workout templates
(free text mapped onto structured fields) or from three canonical
archetypes: a recovery ride, an endurance ride and an interval session.
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..agents.advisor_agent import ADVISOR_FAILURES, PlanAdvisor
from ..metrics.load import calculate_tss, round_half_up
from ..models.ai_response import AIWorkoutTemplate
from ..models.profile import DayOfWeek, PrimaryGoal, Profile
from ..models.workouts import (
    CoachingAdvice,
    EquipmentTags,
    MainSetSegment,
    Segment,
    Workout,
    WorkoutIntensity,
    WorkoutStructure,
    WorkoutType,
)


logger = logging.getLogger(__name__)


# ============================================================================
# Lookup tables
# ============================================================================

# Free-text workout type -> canonical type. Default: ENDURANCE.
WORKOUT_TYPE_MAP: Dict[str, WorkoutType] = {
    "endurance": WorkoutType.ENDURANCE,
    "intervals": WorkoutType.VO2MAX,
    "tempo": WorkoutType.TEMPO,
    "recovery": WorkoutType.RECOVERY,
    "threshold": WorkoutType.THRESHOLD,
    "sprint": WorkoutType.SPRINT,
}

# Perceived effort (1-10) by free-text workout type. Default: 6.
INTENSITY_SCORES: Dict[str, int] = {
    "recovery": 3,
    "endurance": 6,
    "tempo": 7,
    "threshold": 8,
    "intervals": 8,
    "vo2max": 9,
    "sprint": 9,
}
DEFAULT_INTENSITY_SCORE = 6

# Checked in order after an explicit "zone N". Default: "Zone 2".
INTENSITY_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("hard", "Zone 4-5"),
    ("moderate", "Zone 3"),
    ("easy", "Zone 1-2"),
)
DEFAULT_INTENSITY_LABEL = "Zone 2"

# Main-set keyword -> named zone, checked in order. Default: "Endurance".
ZONE_NAME_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("recovery", "Recovery"),
    ("endurance", "Endurance"),
    ("tempo", "Tempo"),
    ("threshold", "Threshold"),
    ("vo2", "VO2 Max"),
    ("sprint", "Neuromuscular"),
)
DEFAULT_ZONE_NAME = "Endurance"

# Interval flavour per primary goal. Default: TEMPO.
GOAL_INTERVAL_TYPES: Dict[PrimaryGoal, WorkoutType] = {
    PrimaryGoal.ENDURANCE: WorkoutType.TEMPO,
    PrimaryGoal.SPEED: WorkoutType.VO2MAX,
    PrimaryGoal.POWER: WorkoutType.THRESHOLD,
    PrimaryGoal.EVENT_TRAINING: WorkoutType.THRESHOLD,
}

# Scheduling slot per free-text workout type. Besides the literal "long" and
# "hard" keys, endurance rides share the long slot and the interval family
# shares the hard slot, so canonical and template workouts spread over the
# week instead of all landing on the first preferred day. Types not listed
# have no slot and go on the rider's first preferred day.
DAY_SLOTS: Dict[str, str] = {
    "long": "long",
    "endurance": "long",
    "hard": "hard",
    "intervals": "hard",
    "tempo": "hard",
    "threshold": "hard",
    "vo2max": "hard",
    "sprint": "hard",
}

SLOT_DAYS: Dict[str, Tuple[DayOfWeek, ...]] = {
    "long": (DayOfWeek.SATURDAY, DayOfWeek.SUNDAY),
    "hard": (DayOfWeek.TUESDAY, DayOfWeek.THURSDAY),
}

# Static coaching text used when the advisor cannot be reached. Unknown
# types fall back to the endurance entry.
FALLBACK_COACHING: Dict[str, CoachingAdvice] = {
    "endurance": CoachingAdvice(
        coach_notes="Focus on maintaining a conversational pace throughout",
        nutrition_guidance="Hydrate well and bring snacks for rides over 90 minutes",
        motivational_tip="This builds the foundation for all your cycling fitness!",
    ),
    "intervals": CoachingAdvice(
        coach_notes="Execute each interval with controlled intensity and full recovery",
        nutrition_guidance="Well-fueled before, recovery drink within 30 minutes after",
        motivational_tip="Each interval makes you stronger - embrace the challenge!",
    ),
    "recovery": CoachingAdvice(
        coach_notes="Keep it truly easy: light gear, high cadence, no surges",
        nutrition_guidance="Water is enough; eat a normal balanced meal afterwards",
        motivational_tip="Easy days are what make the hard days count.",
    ),
    "tempo": CoachingAdvice(
        coach_notes="Settle into a steady, comfortably hard effort and hold it",
        nutrition_guidance="Eat a carbohydrate snack 1-2 hours before; sip a sports drink during",
        motivational_tip="Tempo work turns fitness into sustained speed.",
    ),
    "threshold": CoachingAdvice(
        coach_notes="Ride right at the edge of sustainable; pace the first minutes conservatively",
        nutrition_guidance="Start well fueled and take carbohydrates on longer efforts",
        motivational_tip="Every threshold block raises the ceiling of what you can hold.",
    ),
    "vo2max": CoachingAdvice(
        coach_notes="Go hard but even across each repetition; recover fully between them",
        nutrition_guidance="Fuel 2-3 hours before and have a recovery drink within 30 minutes",
        motivational_tip="Short and hard: finish the last rep as strong as the first.",
    ),
    "sprint": CoachingAdvice(
        coach_notes="Maximal, seated-to-standing efforts with long easy recoveries",
        nutrition_guidance="Light carbohydrate snack beforehand; rehydrate after",
        motivational_tip="Explosive power is built one sprint at a time.",
    ),
    "strength": CoachingAdvice(
        coach_notes="Low cadence, high torque; keep the upper body quiet",
        nutrition_guidance="Include protein within an hour afterwards",
        motivational_tip="Strength on the bike makes every climb easier.",
    ),
    "rest": CoachingAdvice(
        coach_notes="Take the day off the bike; light stretching or a walk is fine",
        nutrition_guidance="Eat normally and stay hydrated",
        motivational_tip="Rest is where the adaptation happens.",
    ),
}

WARMUP_MIN = 15
COOLDOWN_MIN = 10
AI_TEMPLATE_INTENSITY_FACTOR = 0.7
DEFAULT_TEMPLATE_DURATION_MIN = 60

ZONE_PATTERN = re.compile(r"zone\s*(\d+)", re.IGNORECASE)
REPETITION_PATTERN = re.compile(r"(\d+)\s*x\s*\d+", re.IGNORECASE)

CANONICAL_WORKOUTS: Tuple[str, ...] = ("recovery", "endurance", "intervals")


# ============================================================================
# Free-text mapping helpers
# ============================================================================

def map_workout_type(raw_type: Optional[str]) -> WorkoutType:
    """Map an advisor workout type onto the canonical enum."""
    if not raw_type:
        return WorkoutType.ENDURANCE
    return WORKOUT_TYPE_MAP.get(raw_type.strip().lower(), WorkoutType.ENDURANCE)


def extract_intensity(main_set: Optional[str]) -> str:
    """Intensity label ("Zone N" or a zone range) from a main-set description."""
    if not main_set:
        return DEFAULT_INTENSITY_LABEL

    match = ZONE_PATTERN.search(main_set)
    if match:
        return f"Zone {match.group(1)}"

    text = main_set.lower()
    for keyword, label in INTENSITY_KEYWORDS:
        if keyword in text:
            return label
    return DEFAULT_INTENSITY_LABEL


def extract_zone_name(main_set: Optional[str]) -> str:
    """Named training zone mentioned in a main-set description."""
    if not main_set:
        return DEFAULT_ZONE_NAME

    text = main_set.lower()
    for keyword, zone_name in ZONE_NAME_KEYWORDS:
        if keyword in text:
            return zone_name
    return DEFAULT_ZONE_NAME


def extract_repetitions(main_set: Optional[str]) -> int:
    """Repetition count from an "N x M" pattern; 1 if none."""
    if not main_set:
        return 1
    match = REPETITION_PATTERN.search(main_set)
    if match:
        return int(match.group(1))
    return 1


def estimate_intensity(raw_type: Optional[str]) -> int:
    """1-10 effort score for an advisor workout type."""
    if not raw_type:
        return DEFAULT_INTENSITY_SCORE
    return INTENSITY_SCORES.get(raw_type.strip().lower(), DEFAULT_INTENSITY_SCORE)


def select_interval_type(goal: PrimaryGoal) -> WorkoutType:
    return GOAL_INTERVAL_TYPES.get(goal, WorkoutType.TEMPO)


def day_slot(raw_type: Optional[str]) -> Optional[str]:
    """
    Scheduling slot ("long" or "hard") for a workout type, if any.

    Matching is by workout family, not only the literal slot names:
    "endurance" is a long ride and "tempo", "threshold", "vo2max", "sprint"
    and "intervals" are hard sessions.
    """
    if not raw_type:
        return None
    return DAY_SLOTS.get(raw_type.strip().lower())


def preferred_day(preferred_days: Sequence[DayOfWeek], slot: Optional[str]) -> DayOfWeek:
    """
    Pick the day for a workout.

    Long rides go on Saturday, else Sunday; hard sessions on Tuesday, else
    Thursday; when the slot's days are not available, the rider's first
    preferred day is used, and Saturday if no days were given.
    """
    for day in SLOT_DAYS.get(slot, ()) if slot else ():
        if day in preferred_days:
            return day
    if preferred_days:
        return preferred_days[0]
    return DayOfWeek.SATURDAY


def fallback_coaching(workout_type: str) -> CoachingAdvice:
    return FALLBACK_COACHING.get(workout_type, FALLBACK_COACHING["endurance"])


def equipment_tags(profile: Profile) -> EquipmentTags:
    """Equipment tags for a workout given what the rider owns."""
    optional = ["heart_rate_monitor"]
    if profile.equipment.has_power_meter:
        optional.append("power_meter")
    if profile.equipment.has_trainer:
        optional.append("trainer")
    return EquipmentTags(required=("bike",), optional=tuple(optional))


def workout_id(index: int) -> str:
    """Stable workout identity within a plan (1-based)."""
    return f"wkt-{index:02d}"


# ============================================================================
# AI template path
# ============================================================================

def workout_from_template(
    template: AIWorkoutTemplate,
    index: int,
    profile: Profile,
) -> Workout:
    """Build a structured workout from one advisor key-workout template."""
    schedule = profile.schedule
    raw_type = template.type.strip().lower() if template.type else None

    requested = template.duration if template.duration is not None else DEFAULT_TEMPLATE_DURATION_MIN
    duration = min(round_half_up(requested), schedule.session_duration.max)

    structure = template.structure
    warmup_text = structure.warmup if structure is not None and structure.warmup else None
    main_text = structure.main_set if structure is not None and structure.main_set else None
    cooldown_text = structure.cooldown if structure is not None and structure.cooldown else None

    cues = tuple(template.coaching_cues)

    return Workout(
        id=workout_id(index),
        name=template.name if template.name else f"Key Workout {index}",
        description=template.description if template.description else "Structured workout",
        day_of_week=preferred_day(schedule.preferred_days, day_slot(raw_type)),
        workout_type=map_workout_type(raw_type),
        duration_min=duration,
        structure=WorkoutStructure(
            warmup=Segment(
                duration=WARMUP_MIN,
                intensity="Zone 1-2",
                description=warmup_text or "Gradual warm-up",
            ),
            main_set=(
                MainSetSegment(
                    duration=max(0, duration - WARMUP_MIN - COOLDOWN_MIN),
                    intensity=extract_intensity(main_text),
                    zone=extract_zone_name(main_text),
                    description=main_text or "Main workout set",
                    repetitions=extract_repetitions(main_text),
                ),
            ),
            cooldown=Segment(
                duration=COOLDOWN_MIN,
                intensity="Zone 1",
                description=cooldown_text or "Easy cool-down",
            ),
        ),
        intensity=WorkoutIntensity(
            average=estimate_intensity(raw_type),
            tss=calculate_tss(duration, AI_TEMPLATE_INTENSITY_FACTOR),
            intensity_factor=AI_TEMPLATE_INTENSITY_FACTOR,
        ),
        equipment=equipment_tags(profile),
        indoor_alternative=template.indoor_option or "Use indoor trainer",
        outdoor_alternative=template.outdoor_option or "Outdoor equivalent",
        coach_notes=" ".join(cues) if cues else "Focus on good form and pacing",
        nutrition_guidance="Follow pre/during/post workout nutrition guidelines",
        coaching_cues=cues,
        ai_generated=True,
    )


# ============================================================================
# Canonical archetypes (fallback path)
# ============================================================================

@dataclass(frozen=True)
class WorkoutArchetype:
    """Fixed template for one of the canonical workouts."""
    name: str
    description: str
    workout_type: WorkoutType
    duration_min: int
    structure: WorkoutStructure
    average_intensity: int
    intensity_factor: float


INTERVAL_NAMES: Dict[WorkoutType, str] = {
    WorkoutType.TEMPO: "Tempo Intervals",
    WorkoutType.THRESHOLD: "Threshold Intervals",
    WorkoutType.VO2MAX: "VO2max Intervals",
}


def _recovery_archetype(max_session: int) -> WorkoutArchetype:
    return WorkoutArchetype(
        name="Recovery Ride",
        description="Active recovery with relaxed, easy pacing",
        workout_type=WorkoutType.RECOVERY,
        duration_min=min(60, max_session),
        structure=WorkoutStructure(
            warmup=Segment(5, "Zone 1", "Very easy spinning"),
            main_set=(
                MainSetSegment(
                    duration=max(0, min(50, max_session - 10)),
                    intensity="Zone 1-2",
                    zone="Recovery",
                    description="Maintain conversation pace, focus on smooth pedaling",
                ),
            ),
            cooldown=Segment(5, "Zone 1", "Easy spin and stretch"),
        ),
        average_intensity=3,
        intensity_factor=0.55,
    )


def _endurance_archetype(max_session: int) -> WorkoutArchetype:
    return WorkoutArchetype(
        name="Endurance Builder",
        description="Aerobic base building at a steady, sustainable pace",
        workout_type=WorkoutType.ENDURANCE,
        duration_min=max_session,
        structure=WorkoutStructure(
            warmup=Segment(15, "Zone 1-2", "Gradual warm-up to endurance pace"),
            main_set=(
                MainSetSegment(
                    duration=max(0, max_session - 25),
                    intensity="Zone 2",
                    zone="Endurance",
                    description="Steady, sustainable pace. Should be able to hold conversation.",
                ),
            ),
            cooldown=Segment(10, "Zone 1", "Easy spinning to cool down"),
        ),
        average_intensity=6,
        intensity_factor=0.65,
    )


def _intervals_archetype(max_session: int, goal: PrimaryGoal) -> WorkoutArchetype:
    interval_type = select_interval_type(goal)
    return WorkoutArchetype(
        name=INTERVAL_NAMES.get(interval_type, "Interval Session"),
        description="Structured intervals with controlled recoveries",
        workout_type=interval_type,
        duration_min=min(90, max_session),
        structure=WorkoutStructure(
            warmup=Segment(20, "Zone 1-3", "Progressive warm-up with openers"),
            main_set=(
                MainSetSegment(
                    duration=5,
                    intensity="Zone 4-5",
                    zone="Threshold/VO2",
                    description="Controlled high intensity effort",
                    repetitions=4,
                    recovery_duration=3,
                    recovery_intensity="Zone 1",
                ),
            ),
            cooldown=Segment(15, "Zone 1", "Easy spinning to clear lactate"),
        ),
        average_intensity=8,
        intensity_factor=0.85,
    )


def canonical_archetypes(profile: Profile) -> Dict[str, WorkoutArchetype]:
    """The three canonical workouts keyed recovery/endurance/intervals."""
    max_session = profile.schedule.session_duration.max
    return {
        "recovery": _recovery_archetype(max_session),
        "endurance": _endurance_archetype(max_session),
        "intervals": _intervals_archetype(max_session, profile.goals.primary_goal),
    }


def workout_from_archetype(
    key: str,
    archetype: WorkoutArchetype,
    index: int,
    profile: Profile,
    advice: CoachingAdvice,
) -> Workout:
    """Build a canonical workout, decorated with coaching text."""
    return Workout(
        id=workout_id(index),
        name=archetype.name,
        description=archetype.description,
        day_of_week=preferred_day(profile.schedule.preferred_days, day_slot(key)),
        workout_type=archetype.workout_type,
        duration_min=archetype.duration_min,
        structure=archetype.structure,
        intensity=WorkoutIntensity(
            average=archetype.average_intensity,
            tss=calculate_tss(archetype.duration_min, archetype.intensity_factor),
            intensity_factor=archetype.intensity_factor,
        ),
        equipment=equipment_tags(profile),
        coach_notes=advice.coach_notes or archetype.description,
        nutrition_guidance=advice.nutrition_guidance or "Stay hydrated and fuel appropriately",
        motivational_tip=advice.motivational_tip or None,
    )


# ============================================================================
# Entry points
# ============================================================================

def synthesize_workouts(
    profile: Profile,
    ai_templates: Optional[Sequence[AIWorkoutTemplate]] = None,
    coaching: Optional[Mapping[str, CoachingAdvice]] = None,
) -> List[Workout]:
    """
    Build the workout catalog for a plan.

    Args:
        profile: Validated rider profile
        ai_templates: Advisor key workouts; used when non-empty
        coaching: Coaching text per canonical workout key; missing keys use
            the static fallback table

    Returns:
        One workout per AI template, or the three canonical workouts
    """
    if ai_templates:
        logger.debug(f"Synthesizing {len(ai_templates)} workouts from AI templates")
        return [
            workout_from_template(template, index, profile)
            for index, template in enumerate(ai_templates, start=1)
        ]

    logger.debug("Synthesizing canonical workouts")
    coaching = coaching or {}
    workouts = []
    for index, (key, archetype) in enumerate(canonical_archetypes(profile).items(), start=1):
        advice = coaching[key] if key in coaching else fallback_coaching(key)
        workouts.append(workout_from_archetype(key, archetype, index, profile, advice))
    return workouts


async def _coaching_for(
    advisor: PlanAdvisor,
    profile: Profile,
    key: str,
    week_number: int,
    timeout: float,
) -> CoachingAdvice:
    try:
        return await asyncio.wait_for(
            advisor.get_coaching_advice(profile, key, week_number),
            timeout=timeout,
        )
    except ADVISOR_FAILURES as e:
        logger.warning(f"Coaching advice for {key} unavailable, using static text: {e!r}")
        return fallback_coaching(key)


async def gather_coaching(
    profile: Profile,
    advisor: Optional[PlanAdvisor],
    timeout: float = 15.0,
    week_number: int = 1,
) -> Dict[str, CoachingAdvice]:
    """
    Fetch coaching text for each canonical workout concurrently.

    Each call is independent: a failure only affects its own workout.
    """
    if advisor is None:
        return {key: fallback_coaching(key) for key in CANONICAL_WORKOUTS}

    results = await asyncio.gather(*(
        _coaching_for(advisor, profile, key, week_number, timeout)
        for key in CANONICAL_WORKOUTS
    ))
    return dict(zip(CANONICAL_WORKOUTS, results))


async def synthesize_workouts_with_coaching(
    profile: Profile,
    ai_templates: Optional[Sequence[AIWorkoutTemplate]],
    advisor: Optional[PlanAdvisor],
    timeout: float = 15.0,
) -> List[Workout]:
    """Synthesize workouts, asking the advisor for coaching on the fallback path."""
    if ai_templates:
        return synthesize_workouts(profile, ai_templates)
    coaching = await gather_coaching(profile, advisor, timeout=timeout)
    return synthesize_workouts(profile, coaching=coaching)
