"""
Plan advisor agents.

An advisor proposes plan content (zones, periodization, key workouts,
coaching text). Plan generation treats every advisor as untrusted: its
output is schema-checked and any failure falls back to rule-based content.
"""

import asyncio
import logging
from typing import Optional, Protocol, Tuple, Type

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import AdvisorUnavailableError, LLMError
from ..llm.prompts import (
    COACHING_ADVICE_SYSTEM,
    COACHING_ADVICE_USER,
    PLAN_GENERATION_SYSTEM,
    PLAN_GENERATION_USER,
)
from ..llm.providers import LLMClient, ModelType, get_llm_client
from ..models.ai_response import AdvisorResult, AIPlanResponse, CoachingAdviceResponse
from ..models.profile import Profile
from ..models.workouts import CoachingAdvice


logger = logging.getLogger(__name__)

# Everything an advisor call may raise that plan generation recovers from.
ADVISOR_FAILURES: Tuple[Type[BaseException], ...] = (
    LLMError,
    AdvisorUnavailableError,
    asyncio.TimeoutError,
    PydanticValidationError,
    ValueError,
    OSError,
)


class PlanAdvisor(Protocol):
    """Anything that can propose plan content for a rider."""

    async def generate_plan(self, profile: Profile) -> AdvisorResult:
        """Propose a full plan. Unusable answers come back as unavailable."""
        ...

    async def get_coaching_advice(
        self,
        profile: Profile,
        workout_type: str,
        week_number: int,
    ) -> CoachingAdvice:
        """Coaching text for one workout type in a given week."""
        ...


def format_plan_prompt(profile: Profile) -> str:
    """Render the plan generation prompt for a rider."""
    info = profile.basic_info
    experience = profile.experience
    goals = profile.goals
    schedule = profile.schedule

    target_event = "No specific event"
    event = goals.target_event
    if event is not None and event.event_type is not None:
        target_event = event.event_type.value
        if event.event_date is not None:
            target_event = f"{target_event} on {event.event_date.isoformat()}"

    return PLAN_GENERATION_USER.format(
        age=info.age,
        weight=info.weight,
        height=info.height,
        gender=info.gender.value,
        level=experience.level.value,
        years_of_cycling=experience.years_of_cycling,
        current_weekly_hours=experience.current_weekly_hours,
        current_weekly_distance=experience.current_weekly_distance,
        primary_goal=goals.primary_goal.value,
        target_event=target_event,
        specific_goals=", ".join(goals.specific_goals) or "General improvement",
        days_per_week=schedule.days_per_week,
        preferred_days=", ".join(day.value for day in schedule.preferred_days) or "any",
        session_min=schedule.session_duration.min,
        session_max=schedule.session_duration.max,
        preferred_time=schedule.preferred_time.value if schedule.preferred_time else "flexible",
        equipment=profile.equipment.describe(),
    )


class LLMPlanAdvisor:
    """
    Advisor backed by the OpenAI chat API.

    Transport and API errors propagate as LLMError; a reply that parses but
    fails the payload schema, or carries no recognized field, is returned as
    an unavailable AdvisorResult.
    """

    def __init__(self, llm_client: Optional[LLMClient] = None):
        """
        Initialize the advisor.

        Args:
            llm_client: LLM client to use. If None, the shared client is
                created on first use.
        """
        self._llm_client = llm_client

    @property
    def llm_client(self) -> LLMClient:
        """Get or create the LLM client."""
        if self._llm_client is None:
            self._llm_client = get_llm_client()
        return self._llm_client

    async def generate_plan(self, profile: Profile) -> AdvisorResult:
        raw = await self.llm_client.completion_json(
            system=PLAN_GENERATION_SYSTEM,
            user=format_plan_prompt(profile),
            model=ModelType.SMART,
            max_tokens=4000,
        )

        try:
            payload = AIPlanResponse.model_validate(raw)
        except PydanticValidationError as e:
            logger.warning(f"Advisor plan payload failed validation: {e.error_count()} error(s)")
            return AdvisorResult.unavailable("malformed advisor payload")

        if not payload.has_content():
            logger.warning("Advisor plan payload has no usable content")
            return AdvisorResult.unavailable("empty advisor payload")

        return AdvisorResult.ok(payload)

    async def get_coaching_advice(
        self,
        profile: Profile,
        workout_type: str,
        week_number: int,
    ) -> CoachingAdvice:
        raw = await self.llm_client.completion_json(
            system=COACHING_ADVICE_SYSTEM,
            user=COACHING_ADVICE_USER.format(
                level=profile.experience.level.value,
                age=profile.basic_info.age,
                primary_goal=profile.goals.primary_goal.value,
                workout_type=workout_type,
                week_number=week_number,
            ),
            model=ModelType.FAST,
            max_tokens=500,
        )
        advice = CoachingAdviceResponse.model_validate(raw)
        return CoachingAdvice(
            coach_notes=advice.coach_notes,
            nutrition_guidance=advice.nutrition_guidance,
            motivational_tip=advice.motivational_tip,
        )


class OfflineAdvisor:
    """Advisor that never answers; plans are built from rules only."""

    async def generate_plan(self, profile: Profile) -> AdvisorResult:
        return AdvisorResult.unavailable("offline")

    async def get_coaching_advice(
        self,
        profile: Profile,
        workout_type: str,
        week_number: int,
    ) -> CoachingAdvice:
        raise AdvisorUnavailableError("Offline advisor provides no coaching advice")
