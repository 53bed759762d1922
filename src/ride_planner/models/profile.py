"""Rider profile input schema."""

from datetime import date
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ..exceptions import ProfileValidationError


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    PREFER_NOT_TO_SAY = "prefer_not_to_say"


class ExperienceLevel(str, Enum):
    """Self-reported cycling experience."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class PrimaryGoal(str, Enum):
    """What the rider wants the plan to achieve."""
    WEIGHT_LOSS = "weight_loss"
    ENDURANCE = "endurance"
    SPEED = "speed"
    EVENT_TRAINING = "event_training"
    GENERAL_FITNESS = "general_fitness"
    POWER = "power"


class EventType(str, Enum):
    CENTURY = "century"
    GRAN_FONDO = "gran_fondo"
    CRITERIUM = "criterium"
    TIME_TRIAL = "time_trial"
    STAGE_RACE = "stage_race"
    NONE = "none"


class BikeType(str, Enum):
    ROAD = "road"
    MOUNTAIN = "mountain"
    GRAVEL = "gravel"
    HYBRID = "hybrid"
    TT = "tt"
    TRACK = "track"


class DayOfWeek(str, Enum):
    """Days of the week, Monday first."""
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


class PreferredTime(str, Enum):
    EARLY_MORNING = "early_morning"
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    FLEXIBLE = "flexible"


class _ProfileSection(BaseModel):
    """Shared config: camelCase on the wire, snake_case in Python, immutable."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class BasicInfo(_ProfileSection):
    age: int = Field(..., ge=13, le=100)
    weight: float = Field(..., ge=30, le=300)  # kg
    height: float = Field(..., ge=120, le=250)  # cm
    gender: Gender


class Experience(_ProfileSection):
    level: ExperienceLevel
    years_of_cycling: float = Field(default=0, ge=0)
    current_weekly_hours: float = Field(default=0, ge=0)
    current_weekly_distance: float = Field(default=0, ge=0)  # km


class TargetEvent(_ProfileSection):
    event_type: Optional[EventType] = None
    event_date: Optional[date] = None
    event_name: Optional[str] = None


class Goals(_ProfileSection):
    primary_goal: PrimaryGoal
    target_event: Optional[TargetEvent] = None
    specific_goals: Tuple[str, ...] = ()


class Bike(_ProfileSection):
    type: Optional[BikeType] = None
    has_power_meter: bool = False
    has_smart_trainer: bool = False


class Equipment(_ProfileSection):
    bikes: Tuple[Bike, ...] = ()
    has_heart_rate_monitor: bool = False
    has_cycling_computer: bool = False
    has_indoor_trainer: bool = False

    @property
    def has_power_meter(self) -> bool:
        return any(bike.has_power_meter for bike in self.bikes)

    @property
    def has_trainer(self) -> bool:
        """True if the rider can ride indoors."""
        return self.has_indoor_trainer or any(bike.has_smart_trainer for bike in self.bikes)

    def describe(self) -> str:
        """Render the equipment as a short sentence for prompts."""
        items: List[str] = []
        for bike in self.bikes:
            bike_type = bike.type.value if bike.type else "unspecified"
            suffix = " with power meter" if bike.has_power_meter else ""
            items.append(f"{bike_type} bike{suffix}")
        if self.has_heart_rate_monitor:
            items.append("heart rate monitor")
        if self.has_indoor_trainer:
            items.append("indoor trainer")
        if self.has_cycling_computer:
            items.append("cycling computer")
        return ", ".join(items) if items else "Basic bike setup"


class SessionDuration(_ProfileSection):
    min: int = Field(default=30, gt=0)  # minutes
    max: int = Field(default=120, gt=0)  # minutes

    @model_validator(mode="after")
    def _check_order(self) -> "SessionDuration":
        if self.min > self.max:
            raise ValueError("session duration min must not exceed max")
        return self

    @property
    def average(self) -> float:
        return (self.min + self.max) / 2


class Schedule(_ProfileSection):
    days_per_week: int = Field(..., ge=1, le=7)
    preferred_days: Tuple[DayOfWeek, ...] = ()
    session_duration: SessionDuration = Field(default_factory=SessionDuration)
    preferred_time: Optional[PreferredTime] = None


class Profile(_ProfileSection):
    """
    A rider's self-reported profile.

    Immutable once validated. Plan generation assumes the profile has been
    validated with ``parse_profile`` (or constructed directly) beforehand.
    """

    basic_info: BasicInfo
    experience: Experience
    goals: Goals
    equipment: Equipment = Field(default_factory=Equipment)
    schedule: Schedule

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase JSON representation."""
        return self.model_dump(mode="json", by_alias=True)


def parse_profile(data: Mapping[str, Any]) -> Profile:
    """
    Validate raw profile data.

    Args:
        data: Profile mapping using camelCase keys (``basicInfo``, ``schedule``...)

    Returns:
        The validated Profile

    Raises:
        ProfileValidationError: listing every failing field
    """
    try:
        return Profile.model_validate(data)
    except PydanticValidationError as e:
        errors = [
            {
                "field": ".".join(str(part) for part in err["loc"]) or "profile",
                "message": err["msg"],
            }
            for err in e.errors()
        ]
        raise ProfileValidationError(
            message=f"Invalid rider profile ({len(errors)} error(s))",
            errors=errors,
        ) from e
