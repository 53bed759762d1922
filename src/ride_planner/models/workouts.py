"""Workout data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .profile import DayOfWeek


class WorkoutType(str, Enum):
    """Categories of cycling workouts."""
    ENDURANCE = "endurance"
    RECOVERY = "recovery"
    INTERVALS = "intervals"  # read from stored plans; synthesis picks a specific interval type
    TEMPO = "tempo"
    THRESHOLD = "threshold"
    VO2MAX = "vo2max"
    SPRINT = "sprint"
    STRENGTH = "strength"
    REST = "rest"


class Environment(str, Enum):
    """Where a workout can be ridden."""
    INDOOR = "indoor"
    OUTDOOR = "outdoor"
    EITHER = "either"


@dataclass(frozen=True)
class Segment:
    """Warmup or cooldown block."""
    duration: int  # minutes
    intensity: str  # e.g. "Zone 1-2"
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "duration": self.duration,
            "intensity": self.intensity,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Segment":
        return cls(
            duration=data["duration"],
            intensity=data["intensity"],
            description=data["description"],
        )


@dataclass(frozen=True)
class MainSetSegment:
    """
    One block of the main set.

    ``duration`` is per repetition for interval blocks.
    """
    duration: int  # minutes
    intensity: str
    zone: str  # Named zone, e.g. "Endurance"
    description: str
    repetitions: int = 1
    recovery_duration: Optional[int] = None
    recovery_intensity: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "duration": self.duration,
            "intensity": self.intensity,
            "zone": self.zone,
            "description": self.description,
            "repetitions": self.repetitions,
            "recovery_duration": self.recovery_duration,
            "recovery_intensity": self.recovery_intensity,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MainSetSegment":
        return cls(
            duration=data["duration"],
            intensity=data["intensity"],
            zone=data["zone"],
            description=data["description"],
            repetitions=data.get("repetitions", 1),
            recovery_duration=data.get("recovery_duration"),
            recovery_intensity=data.get("recovery_intensity"),
        )


@dataclass(frozen=True)
class WorkoutStructure:
    """Warmup, ordered main-set blocks and cooldown."""
    warmup: Segment
    main_set: Tuple[MainSetSegment, ...]
    cooldown: Segment

    def to_dict(self) -> Dict[str, Any]:
        return {
            "warmup": self.warmup.to_dict(),
            "main_set": [segment.to_dict() for segment in self.main_set],
            "cooldown": self.cooldown.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkoutStructure":
        return cls(
            warmup=Segment.from_dict(data["warmup"]),
            main_set=tuple(MainSetSegment.from_dict(s) for s in data["main_set"]),
            cooldown=Segment.from_dict(data["cooldown"]),
        )


@dataclass(frozen=True)
class WorkoutIntensity:
    """Effort estimates for a workout."""
    average: int  # 1-10 perceived effort
    tss: int
    intensity_factor: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "average": self.average,
            "tss": self.tss,
            "intensity_factor": self.intensity_factor,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkoutIntensity":
        return cls(
            average=data["average"],
            tss=data["tss"],
            intensity_factor=data["intensity_factor"],
        )


@dataclass(frozen=True)
class EquipmentTags:
    required: Tuple[str, ...] = ("bike",)
    optional: Tuple[str, ...] = ("heart_rate_monitor",)

    def to_dict(self) -> Dict[str, Any]:
        return {"required": list(self.required), "optional": list(self.optional)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EquipmentTags":
        return cls(
            required=tuple(data.get("required", ())),
            optional=tuple(data.get("optional", ())),
        )


@dataclass(frozen=True)
class CoachingAdvice:
    """Per-workout coaching text."""
    coach_notes: str
    nutrition_guidance: str
    motivational_tip: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "coach_notes": self.coach_notes,
            "nutrition_guidance": self.nutrition_guidance,
            "motivational_tip": self.motivational_tip,
        }


@dataclass(frozen=True)
class Workout:
    """
    A fully structured workout.

    Created once per plan generation and owned by the plan; weeks refer to it
    by ``id``.
    """
    id: str
    name: str
    description: str
    day_of_week: DayOfWeek
    workout_type: WorkoutType
    duration_min: int
    structure: WorkoutStructure
    intensity: WorkoutIntensity
    equipment: EquipmentTags = field(default_factory=EquipmentTags)
    environment: Environment = Environment.EITHER
    indoor_alternative: Optional[str] = None
    outdoor_alternative: Optional[str] = None
    coach_notes: str = ""
    nutrition_guidance: str = ""
    motivational_tip: Optional[str] = None
    coaching_cues: Tuple[str, ...] = ()
    ai_generated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "day_of_week": self.day_of_week.value,
            "workout_type": self.workout_type.value,
            "duration_min": self.duration_min,
            "structure": self.structure.to_dict(),
            "intensity": self.intensity.to_dict(),
            "equipment": self.equipment.to_dict(),
            "environment": self.environment.value,
            "indoor_alternative": self.indoor_alternative,
            "outdoor_alternative": self.outdoor_alternative,
            "coach_notes": self.coach_notes,
            "nutrition_guidance": self.nutrition_guidance,
            "motivational_tip": self.motivational_tip,
            "coaching_cues": list(self.coaching_cues),
            "ai_generated": self.ai_generated,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Workout":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            description=data["description"],
            day_of_week=DayOfWeek(data["day_of_week"]),
            workout_type=WorkoutType(data["workout_type"]),
            duration_min=data["duration_min"],
            structure=WorkoutStructure.from_dict(data["structure"]),
            intensity=WorkoutIntensity.from_dict(data["intensity"]),
            equipment=EquipmentTags.from_dict(data.get("equipment", {})),
            environment=Environment(data.get("environment", "either")),
            indoor_alternative=data.get("indoor_alternative"),
            outdoor_alternative=data.get("outdoor_alternative"),
            coach_notes=data.get("coach_notes", ""),
            nutrition_guidance=data.get("nutrition_guidance", ""),
            motivational_tip=data.get("motivational_tip"),
            coaching_cues=tuple(data.get("coaching_cues", ())),
            ai_generated=data.get("ai_generated", False),
        )
