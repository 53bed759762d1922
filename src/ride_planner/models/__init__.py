"""Data models for the Ride Planner."""

from .profile import (
    # Enums
    BikeType,
    DayOfWeek,
    EventType,
    ExperienceLevel,
    Gender,
    PreferredTime,
    PrimaryGoal,
    # Profile sections
    BasicInfo,
    Bike,
    Equipment,
    Experience,
    Goals,
    Profile,
    Schedule,
    SessionDuration,
    TargetEvent,
    parse_profile,
)

from .zones import (
    ZONE_NAMES,
    TrainingZoneSet,
    ZoneBand,
    ZoneMetric,
)

from .workouts import (
    CoachingAdvice,
    Environment,
    EquipmentTags,
    MainSetSegment,
    Segment,
    Workout,
    WorkoutIntensity,
    WorkoutStructure,
    WorkoutType,
)

from .plans import (
    AIInsights,
    MotivationalAdvice,
    PhaseGuidance,
    PlanDuration,
    TrainingPlan,
    TrainingWeek,
    WeeklyStructure,
    WeekType,
)

from .ai_response import (
    AdvisorResult,
    AIPeriodization,
    AIPhase,
    AIPlanResponse,
    AIWorkoutTemplate,
    AIZones,
    CoachingAdviceResponse,
)

__all__ = [
    "BikeType",
    "DayOfWeek",
    "EventType",
    "ExperienceLevel",
    "Gender",
    "PreferredTime",
    "PrimaryGoal",
    "BasicInfo",
    "Bike",
    "Equipment",
    "Experience",
    "Goals",
    "Profile",
    "Schedule",
    "SessionDuration",
    "TargetEvent",
    "parse_profile",
    "ZONE_NAMES",
    "TrainingZoneSet",
    "ZoneBand",
    "ZoneMetric",
    "CoachingAdvice",
    "Environment",
    "EquipmentTags",
    "MainSetSegment",
    "Segment",
    "Workout",
    "WorkoutIntensity",
    "WorkoutStructure",
    "WorkoutType",
    "AIInsights",
    "MotivationalAdvice",
    "PhaseGuidance",
    "PlanDuration",
    "TrainingPlan",
    "TrainingWeek",
    "WeeklyStructure",
    "WeekType",
    "AdvisorResult",
    "AIPeriodization",
    "AIPhase",
    "AIPlanResponse",
    "AIWorkoutTemplate",
    "AIZones",
    "CoachingAdviceResponse",
]
