"""Plan advisors."""

from .advisor_agent import (
    ADVISOR_FAILURES,
    LLMPlanAdvisor,
    OfflineAdvisor,
    PlanAdvisor,
    format_plan_prompt,
)

__all__ = [
    "ADVISOR_FAILURES",
    "LLMPlanAdvisor",
    "OfflineAdvisor",
    "PlanAdvisor",
    "format_plan_prompt",
]
