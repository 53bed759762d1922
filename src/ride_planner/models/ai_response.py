"""
Schemas for the AI advisor payload.

The advisor is an untrusted collaborator: its JSON is validated here before
any field reaches plan generation. Every field is optional; consumers check
for presence explicitly and substitute a named default.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _AIPayload(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    def has_content(self) -> bool:
        """True if at least one field carries a usable value."""
        return any(_has_value(getattr(self, name)) for name in type(self).model_fields)


def _has_value(value: Any) -> bool:
    """Whether a parsed payload value would change the generated plan."""
    if value is None:
        return False
    if isinstance(value, _AIPayload):
        return value.has_content()
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple)):
        return any(_has_value(item) for item in value)
    if isinstance(value, dict):
        return any(_has_value(item) for item in value.values())
    return True


class ZoneBandPayload(_AIPayload):
    min: Optional[float] = None
    max: Optional[float] = None
    description: Optional[str] = None

    @property
    def is_usable(self) -> bool:
        return self.min is not None and self.max is not None and self.min <= self.max

    def has_content(self) -> bool:
        return self.is_usable


class HeartRateZoneTable(_AIPayload):
    zone1: Optional[ZoneBandPayload] = None
    zone2: Optional[ZoneBandPayload] = None
    zone3: Optional[ZoneBandPayload] = None
    zone4: Optional[ZoneBandPayload] = None
    zone5: Optional[ZoneBandPayload] = None
    zone6: Optional[ZoneBandPayload] = None

    def positional(self) -> List[Optional[ZoneBandPayload]]:
        """Zone entries in order zone1..zone6."""
        return [self.zone1, self.zone2, self.zone3, self.zone4, self.zone5, self.zone6]


class AIZones(_AIPayload):
    heart_rate: Optional[HeartRateZoneTable] = None
    rpe: Optional[Dict[str, Any]] = None

    def has_content(self) -> bool:
        # rpe is informational only; zones come from the heart-rate table
        return _has_value(self.heart_rate)


class AIDuration(_AIPayload):
    weeks: Optional[int] = Field(default=None, ge=1, le=52)
    philosophy: Optional[str] = None


class AIWeeklyStructure(_AIPayload):
    total_hours: Optional[float] = Field(default=None, ge=0)
    total_distance: Optional[float] = Field(default=None, ge=0)
    number_of_workouts: Optional[int] = Field(default=None, ge=0)
    workout_types: List[str] = Field(default_factory=list)
    typical_week: Optional[str] = None


class AIPhase(_AIPayload):
    name: str
    weeks: int = Field(..., ge=0)
    focus: Optional[str] = None

    def has_content(self) -> bool:
        return self.weeks > 0


class AIPeriodization(_AIPayload):
    phases: List[AIPhase] = Field(default_factory=list)
    progression_strategy: Optional[str] = None


class AIWorkoutStructure(_AIPayload):
    warmup: Optional[str] = None
    main_set: Optional[str] = None
    cooldown: Optional[str] = None


class AIWorkoutTemplate(_AIPayload):
    """A key workout described in free text by the advisor."""
    name: Optional[str] = None
    type: Optional[str] = None
    duration: Optional[float] = Field(default=None, gt=0)  # minutes
    description: Optional[str] = None
    structure: Optional[AIWorkoutStructure] = None
    coaching_cues: List[str] = Field(default_factory=list)
    indoor_option: Optional[str] = None
    outdoor_option: Optional[str] = None


class AINutrition(_AIPayload):
    pre_workout: Optional[str] = None
    during_workout: Optional[str] = None
    post_workout: Optional[str] = None
    daily_guidance: Optional[str] = None

    def tips(self) -> List[str]:
        values = [self.pre_workout, self.during_workout, self.post_workout, self.daily_guidance]
        return [v for v in values if v]


class AIRecovery(_AIPayload):
    sleep_guidance: Optional[str] = None
    rest_day_activities: Optional[str] = None
    recovery_markers: Optional[str] = None

    def guidelines(self) -> List[str]:
        values = [self.sleep_guidance, self.rest_day_activities, self.recovery_markers]
        return [v for v in values if v]


class AIMotivation(_AIPayload):
    mental_approach: Optional[str] = None
    consistency_tips: List[str] = Field(default_factory=list)
    setback_strategies: Optional[str] = None


class AIPlanResponse(_AIPayload):
    """Top-level plan payload returned by the advisor."""
    plan_name: Optional[str] = None
    duration: Optional[AIDuration] = None
    focus_areas: Optional[List[str]] = None
    zones: Optional[AIZones] = None
    weekly_structure: Optional[AIWeeklyStructure] = None
    periodization: Optional[AIPeriodization] = None
    key_workouts: Optional[List[AIWorkoutTemplate]] = None
    nutrition: Optional[AINutrition] = None
    recovery: Optional[AIRecovery] = None
    motivation: Optional[AIMotivation] = None


class CoachingAdviceResponse(_AIPayload):
    coach_notes: str = ""
    nutrition_guidance: str = ""
    motivational_tip: str = ""


@dataclass(frozen=True)
class AdvisorResult:
    """
    Outcome of a plan advisor call.

    Either well-formed AI data is available, or it is absent/invalid and
    ``reason`` says why.
    """
    data: Optional[AIPlanResponse] = None
    reason: Optional[str] = None

    @property
    def available(self) -> bool:
        return self.data is not None

    @classmethod
    def ok(cls, data: AIPlanResponse) -> "AdvisorResult":
        return cls(data=data)

    @classmethod
    def unavailable(cls, reason: str) -> "AdvisorResult":
        return cls(data=None, reason=reason)
