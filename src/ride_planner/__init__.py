"""Ride Planner - periodized cycling training plans with an optional AI coach."""

__version__ = "0.1.0"

from .agents.advisor_agent import LLMPlanAdvisor, OfflineAdvisor, PlanAdvisor
from .exceptions import ProfileValidationError, RidePlannerError
from .models.plans import TrainingPlan
from .models.profile import Profile, parse_profile
from .services.plan_service import generate_plan, generate_plan_sync

__all__ = [
    "LLMPlanAdvisor",
    "OfflineAdvisor",
    "PlanAdvisor",
    "ProfileValidationError",
    "RidePlannerError",
    "TrainingPlan",
    "Profile",
    "parse_profile",
    "generate_plan",
    "generate_plan_sync",
]
