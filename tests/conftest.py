"""Shared fixtures for Ride Planner tests."""

import asyncio
import copy
from typing import Any, Dict, Optional

import pytest

from ride_planner.config import Settings
from ride_planner.exceptions import AdvisorUnavailableError
from ride_planner.models.ai_response import AdvisorResult, AIPlanResponse
from ride_planner.models.profile import Profile, parse_profile
from ride_planner.models.workouts import CoachingAdvice


# ============================================================================
# Profiles
# ============================================================================

BASE_PROFILE: Dict[str, Any] = {
    "basicInfo": {"age": 30, "weight": 72, "height": 178, "gender": "male"},
    "experience": {
        "level": "intermediate",
        "yearsOfCycling": 4,
        "currentWeeklyHours": 5,
        "currentWeeklyDistance": 120,
    },
    "goals": {"primaryGoal": "endurance", "specificGoals": ["Ride a century"]},
    "equipment": {
        "bikes": [{"type": "road", "hasPowerMeter": False, "hasSmartTrainer": True}],
        "hasHeartRateMonitor": True,
    },
    "schedule": {
        "daysPerWeek": 4,
        "preferredDays": ["tuesday", "thursday", "saturday", "sunday"],
        "sessionDuration": {"min": 45, "max": 90},
        "preferredTime": "morning",
    },
}


@pytest.fixture
def profile_data() -> Dict[str, Any]:
    """Raw camelCase profile; safe to mutate per test."""
    return copy.deepcopy(BASE_PROFILE)


@pytest.fixture
def profile(profile_data) -> Profile:
    """Age 30 intermediate endurance rider, 4 days of 45-90 minutes."""
    return parse_profile(profile_data)


@pytest.fixture
def make_profile(profile_data):
    """Build a profile with section-level overrides."""
    def _make(**sections: Dict[str, Any]) -> Profile:
        data = copy.deepcopy(profile_data)
        for section, values in sections.items():
            data[section].update(values)
        return parse_profile(data)
    return _make


@pytest.fixture
def fast_settings() -> Settings:
    """Settings with short advisor timeouts and no API key."""
    return Settings(
        openai_api_key="",
        ai_plan_timeout_seconds=0.05,
        ai_coaching_timeout_seconds=0.05,
    )


# ============================================================================
# Advisor payloads
# ============================================================================

@pytest.fixture
def ai_plan_payload() -> Dict[str, Any]:
    """A well-formed advisor plan response (camelCase, as the LLM returns it)."""
    return {
        "planName": "Fondo Builder",
        "duration": {"weeks": 10, "philosophy": "Polarized volume build"},
        "focusAreas": ["Aerobic durability", "Climbing"],
        "zones": {
            "heartRate": {
                "zone1": {"min": 100, "max": 120, "description": "Recovery"},
                "zone2": {"min": 120, "max": 140},
                "zone3": {"min": 140, "max": 155},
                "zone4": {"min": 155, "max": 170},
                "zone5": {"min": 170, "max": 185},
            },
        },
        "weeklyStructure": {"totalHours": 6.5, "totalDistance": 160},
        "periodization": {
            "phases": [
                {"name": "Base", "weeks": 4, "focus": "base building"},
                {"name": "Build", "weeks": 4, "focus": "build"},
                {"name": "Taper", "weeks": 1, "focus": "taper"},
            ],
            "progressionStrategy": "Add ten percent volume per week",
        },
        "keyWorkouts": [
            {
                "name": "Long Ride",
                "type": "endurance",
                "duration": 180,
                "description": "Long steady ride",
                "structure": {
                    "warmup": "Easy 15 minutes",
                    "mainSet": "Steady zone 2 riding",
                    "cooldown": "Spin easy",
                },
                "coachingCues": ["Eat every 30 minutes", "Stay seated on climbs"],
                "indoorOption": "Trainer endurance ride",
                "outdoorOption": "Rolling loop",
            },
            {
                "name": "Threshold Repeats",
                "type": "threshold",
                "duration": 75,
                "structure": {"mainSet": "3 x 12 min threshold efforts"},
            },
            {"name": "Spin", "type": "recovery", "duration": 40},
        ],
        "nutrition": {"preWorkout": "Oats two hours before", "postWorkout": "Protein shake"},
        "motivation": {"mentalApproach": "One ride at a time", "consistencyTips": ["Plan the week"]},
    }


# ============================================================================
# Fake advisors
# ============================================================================

class ScriptedAdvisor:
    """Advisor returning canned data; optionally slow or failing."""

    def __init__(
        self,
        payload: Optional[Dict[str, Any]] = None,
        error: Optional[BaseException] = None,
        delay: float = 0.0,
        coaching: Optional[Dict[str, Any]] = None,
    ):
        self.payload = payload
        self.error = error
        self.delay = delay
        self.coaching = coaching or {}
        self.coaching_calls = []

    async def generate_plan(self, profile: Profile) -> AdvisorResult:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.payload is None:
            return AdvisorResult.unavailable("no payload")
        return AdvisorResult.ok(AIPlanResponse.model_validate(self.payload))

    async def get_coaching_advice(
        self,
        profile: Profile,
        workout_type: str,
        week_number: int,
    ) -> CoachingAdvice:
        self.coaching_calls.append((workout_type, week_number))
        outcome = self.coaching.get(workout_type)
        if outcome is None:
            raise AdvisorUnavailableError()
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def scripted_advisor():
    return ScriptedAdvisor
