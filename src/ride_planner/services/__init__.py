"""Plan generation services."""

from .periodization import build_weeks, plan_duration
from .plan_service import (
    compute_weekly_structure,
    default_insights,
    generate_plan,
    generate_plan_sync,
    plan_name_for_goal,
)
from .workout_synthesizer import (
    synthesize_workouts,
    synthesize_workouts_with_coaching,
)

__all__ = [
    "build_weeks",
    "plan_duration",
    "compute_weekly_structure",
    "default_insights",
    "generate_plan",
    "generate_plan_sync",
    "plan_name_for_goal",
    "synthesize_workouts",
    "synthesize_workouts_with_coaching",
]
