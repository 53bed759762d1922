"""Data models for periodized training plans."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
import json

from .workouts import Workout
from .zones import TrainingZoneSet


class WeekType(str, Enum):
    """Periodization phase a week belongs to."""
    BASE = "base"           # Aerobic foundation building
    BUILD = "build"         # Progressive load increase
    PEAK = "peak"           # Event-specific intensity
    RECOVERY = "recovery"   # Deload week
    TAPER = "taper"         # Pre-event volume reduction

    @classmethod
    def from_phase_name(cls, name: str) -> "WeekType":
        """
        Map a free-text phase name to a week type.

        Unknown names map to BASE.
        """
        return PHASE_NAME_ALIASES.get(name.strip().lower(), cls.BASE)


PHASE_NAME_ALIASES: Dict[str, WeekType] = {
    "base": WeekType.BASE,
    "base building": WeekType.BASE,
    "foundation": WeekType.BASE,
    "preparation": WeekType.BASE,
    "build": WeekType.BUILD,
    "building": WeekType.BUILD,
    "development": WeekType.BUILD,
    "peak": WeekType.PEAK,
    "peaking": WeekType.PEAK,
    "race": WeekType.PEAK,
    "specialty": WeekType.PEAK,
    "recovery": WeekType.RECOVERY,
    "rest": WeekType.RECOVERY,
    "deload": WeekType.RECOVERY,
    "taper": WeekType.TAPER,
    "tapering": WeekType.TAPER,
}


@dataclass(frozen=True)
class PhaseGuidance:
    """Phase context attached to weeks that follow an AI phase list."""
    phase_name: str
    focus: str
    guidance: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "phase_name": self.phase_name,
            "focus": self.focus,
            "guidance": self.guidance,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PhaseGuidance":
        return cls(
            phase_name=data["phase_name"],
            focus=data["focus"],
            guidance=data["guidance"],
        )


@dataclass(frozen=True)
class TrainingWeek:
    """
    One week of the plan.

    ``workout_ids`` are non-owning references into ``TrainingPlan.workouts``.
    """
    week_number: int
    week_type: WeekType
    total_load: int
    workout_ids: Tuple[str, ...]
    phase: Optional[PhaseGuidance] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "week_number": self.week_number,
            "week_type": self.week_type.value,
            "total_load": self.total_load,
            "workout_ids": list(self.workout_ids),
            "phase": self.phase.to_dict() if self.phase else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrainingWeek":
        return cls(
            week_number=data["week_number"],
            week_type=WeekType(data["week_type"]),
            total_load=data["total_load"],
            workout_ids=tuple(data["workout_ids"]),
            phase=PhaseGuidance.from_dict(data["phase"]) if data.get("phase") else None,
        )


@dataclass(frozen=True)
class PlanDuration:
    weeks: int
    start_date: date
    end_date: date
    philosophy: str = "Personalized training approach"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weeks": self.weeks,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "philosophy": self.philosophy,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlanDuration":
        return cls(
            weeks=data["weeks"],
            start_date=date.fromisoformat(data["start_date"]),
            end_date=date.fromisoformat(data["end_date"]),
            philosophy=data.get("philosophy", "Personalized training approach"),
        )


@dataclass(frozen=True)
class WeeklyStructure:
    """Aggregate weekly volume summary."""
    total_hours: int
    total_distance: int  # km
    number_of_workouts: int
    workout_types: Tuple[str, ...] = ()
    typical_week: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_hours": self.total_hours,
            "total_distance": self.total_distance,
            "number_of_workouts": self.number_of_workouts,
            "workout_types": list(self.workout_types),
            "typical_week": self.typical_week,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WeeklyStructure":
        return cls(
            total_hours=data["total_hours"],
            total_distance=data["total_distance"],
            number_of_workouts=data["number_of_workouts"],
            workout_types=tuple(data.get("workout_types", ())),
            typical_week=data.get("typical_week"),
        )


@dataclass(frozen=True)
class MotivationalAdvice:
    mental_approach: Optional[str] = None
    consistency_tips: Tuple[str, ...] = ()
    setback_strategies: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mental_approach": self.mental_approach,
            "consistency_tips": list(self.consistency_tips),
            "setback_strategies": self.setback_strategies,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MotivationalAdvice":
        return cls(
            mental_approach=data.get("mental_approach"),
            consistency_tips=tuple(data.get("consistency_tips", ())),
            setback_strategies=data.get("setback_strategies"),
        )


@dataclass(frozen=True)
class AIInsights:
    """Coaching narrative attached to a plan."""
    focus_areas: Tuple[str, ...]
    progression_strategy: str
    key_workouts: Tuple[str, ...]
    nutrition_tips: Tuple[str, ...]
    recovery_guidelines: Tuple[str, ...]
    ai_powered: bool
    motivational_advice: Optional[MotivationalAdvice] = None
    enhanced_features: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "focus_areas": list(self.focus_areas),
            "progression_strategy": self.progression_strategy,
            "key_workouts": list(self.key_workouts),
            "nutrition_tips": list(self.nutrition_tips),
            "recovery_guidelines": list(self.recovery_guidelines),
            "ai_powered": self.ai_powered,
            "motivational_advice": (
                self.motivational_advice.to_dict() if self.motivational_advice else None
            ),
            "enhanced_features": list(self.enhanced_features),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AIInsights":
        motivation = data.get("motivational_advice")
        return cls(
            focus_areas=tuple(data.get("focus_areas", ())),
            progression_strategy=data.get("progression_strategy", ""),
            key_workouts=tuple(data.get("key_workouts", ())),
            nutrition_tips=tuple(data.get("nutrition_tips", ())),
            recovery_guidelines=tuple(data.get("recovery_guidelines", ())),
            ai_powered=data["ai_powered"],
            motivational_advice=MotivationalAdvice.from_dict(motivation) if motivation else None,
            enhanced_features=tuple(data.get("enhanced_features", ())),
        )


@dataclass(frozen=True)
class TrainingPlan:
    """
    A complete periodized training plan.

    Built once per profile and never mutated; regenerating produces a new plan.
    The plan owns ``workouts``; each week references them by id.
    """
    plan_name: str
    duration: PlanDuration
    weekly_structure: WeeklyStructure
    zones: TrainingZoneSet
    weeks: Tuple[TrainingWeek, ...]
    workouts: Tuple[Workout, ...]
    ai_insights: AIInsights
    ai_generated: bool = False
    _index: Dict[str, Workout] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_index", {w.id: w for w in self.workouts})

    @property
    def total_weeks(self) -> int:
        return len(self.weeks)

    def workout(self, workout_id: str) -> Workout:
        """Resolve a workout reference. Raises KeyError for unknown ids."""
        return self._index[workout_id]

    def workouts_for_week(self, week_number: int) -> List[Workout]:
        """Workouts scheduled in a week (1-based)."""
        for week in self.weeks:
            if week.week_number == week_number:
                return [self.workout(wid) for wid in week.workout_ids]
        raise KeyError(f"Week {week_number} not in plan")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "plan_name": self.plan_name,
            "duration": self.duration.to_dict(),
            "weekly_structure": self.weekly_structure.to_dict(),
            "zones": self.zones.to_dict(),
            "weeks": [week.to_dict() for week in self.weeks],
            "workouts": [workout.to_dict() for workout in self.workouts],
            "ai_insights": self.ai_insights.to_dict(),
            "ai_generated": self.ai_generated,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrainingPlan":
        """Create from dictionary."""
        return cls(
            plan_name=data["plan_name"],
            duration=PlanDuration.from_dict(data["duration"]),
            weekly_structure=WeeklyStructure.from_dict(data["weekly_structure"]),
            zones=TrainingZoneSet.from_dict(data["zones"]),
            weeks=tuple(TrainingWeek.from_dict(w) for w in data["weeks"]),
            workouts=tuple(Workout.from_dict(w) for w in data["workouts"]),
            ai_insights=AIInsights.from_dict(data["ai_insights"]),
            ai_generated=data.get("ai_generated", False),
        )

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, payload: str) -> "TrainingPlan":
        return cls.from_dict(json.loads(payload))
