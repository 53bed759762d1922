"""Tests for profile validation and plan data models."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from ride_planner.config import Settings
from ride_planner.exceptions import ErrorCode, ProfileValidationError
from ride_planner.models.ai_response import AIPhase, AIPlanResponse, ZoneBandPayload
from ride_planner.models.plans import TrainingPlan, WeekType
from ride_planner.models.profile import (
    DayOfWeek,
    Equipment,
    ExperienceLevel,
    PrimaryGoal,
    parse_profile,
)
from ride_planner.models.workouts import WorkoutType
from ride_planner.services.plan_service import generate_plan_sync


def _fields(exc: ProfileValidationError):
    return [err["field"] for err in exc.errors]


class TestParseProfile:
    """Tests for rider profile validation."""

    def test_valid_profile(self, profile_data):
        profile = parse_profile(profile_data)

        assert profile.basic_info.age == 30
        assert profile.experience.level == ExperienceLevel.INTERMEDIATE
        assert profile.goals.primary_goal == PrimaryGoal.ENDURANCE
        assert profile.schedule.preferred_days[0] == DayOfWeek.TUESDAY
        assert profile.schedule.session_duration.average == 67.5

    def test_snake_case_keys(self, profile_data):
        profile_data["basic_info"] = profile_data.pop("basicInfo")
        assert parse_profile(profile_data).basic_info.age == 30

    def test_missing_section(self, profile_data):
        del profile_data["schedule"]

        with pytest.raises(ProfileValidationError) as exc_info:
            parse_profile(profile_data)

        assert _fields(exc_info.value) == ["schedule"]
        assert exc_info.value.code == ErrorCode.PROFILE_VALIDATION_ERROR

    def test_days_per_week_out_of_range(self, profile_data):
        profile_data["schedule"]["daysPerWeek"] = 8

        with pytest.raises(ProfileValidationError) as exc_info:
            parse_profile(profile_data)

        assert "schedule.daysPerWeek" in _fields(exc_info.value)

    def test_age_out_of_range(self, profile_data):
        profile_data["basicInfo"]["age"] = 12

        with pytest.raises(ProfileValidationError) as exc_info:
            parse_profile(profile_data)

        assert "basicInfo.age" in _fields(exc_info.value)

    def test_session_min_above_max(self, profile_data):
        profile_data["schedule"]["sessionDuration"] = {"min": 120, "max": 60}

        with pytest.raises(ProfileValidationError) as exc_info:
            parse_profile(profile_data)

        assert "schedule.sessionDuration" in _fields(exc_info.value)

    def test_reports_every_error(self, profile_data):
        profile_data["basicInfo"]["age"] = 200
        profile_data["goals"]["primaryGoal"] = "fame"

        with pytest.raises(ProfileValidationError) as exc_info:
            parse_profile(profile_data)

        fields = _fields(exc_info.value)
        assert "basicInfo.age" in fields
        assert "goals.primaryGoal" in fields

    def test_profile_is_immutable(self, profile):
        with pytest.raises(PydanticValidationError):
            profile.basic_info.age = 40

    def test_to_dict_uses_camel_case(self, profile):
        data = profile.to_dict()
        assert data["basicInfo"]["age"] == 30
        assert data["schedule"]["sessionDuration"] == {"min": 45, "max": 90}


class TestEquipment:
    def test_describe_empty(self):
        assert Equipment().describe() == "Basic bike setup"

    def test_describe_with_gear(self, profile):
        assert profile.equipment.describe() == "road bike, heart rate monitor"

    def test_trainer_from_smart_bike(self, profile):
        assert profile.equipment.has_trainer
        assert not profile.equipment.has_power_meter


class TestAIPayloads:
    """Tests for advisor payload schemas."""

    def test_has_content(self, ai_plan_payload):
        assert AIPlanResponse.model_validate(ai_plan_payload).has_content()
        assert not AIPlanResponse.model_validate({}).has_content()
        assert not AIPlanResponse.model_validate({"unknown": 1}).has_content()

    @pytest.mark.parametrize("data", [
        {"nutrition": {}},
        {"zones": {}},
        {"zones": {"rpe": {"zone1": "easy"}}},
        {"zones": {"heartRate": {"zone1": {"min": 150, "max": 100}}}},
        {"periodization": {"phases": [{"name": "Base", "weeks": 0}]}},
        {"duration": {"philosophy": "  "}},
        {"keyWorkouts": [{}], "focusAreas": []},
    ])
    def test_empty_sub_objects_have_no_content(self, data):
        """Objects that would leave every plan field at its default are not content."""
        assert not AIPlanResponse.model_validate(data).has_content()

    def test_single_usable_field_is_content(self):
        assert AIPlanResponse.model_validate({"nutrition": {"preWorkout": "Oats"}}).has_content()
        assert AIPlanResponse.model_validate(
            {"zones": {"heartRate": {"zone2": {"min": 120, "max": 140}}}}
        ).has_content()

    def test_band_usability(self):
        assert ZoneBandPayload(min=100, max=120).is_usable
        assert ZoneBandPayload(min=120, max=120).is_usable
        assert not ZoneBandPayload(min=130, max=120).is_usable
        assert not ZoneBandPayload(min=130).is_usable

    def test_negative_phase_weeks_rejected(self):
        with pytest.raises(PydanticValidationError):
            AIPhase.model_validate({"name": "Base", "weeks": -1})

    def test_nutrition_tips_skip_missing(self, ai_plan_payload):
        payload = AIPlanResponse.model_validate(ai_plan_payload)
        assert payload.nutrition.tips() == ["Oats two hours before", "Protein shake"]


class TestWeekType:
    @pytest.mark.parametrize("name,expected", [
        ("Base", WeekType.BASE),
        ("  build ", WeekType.BUILD),
        ("Peaking", WeekType.PEAK),
        ("Deload", WeekType.RECOVERY),
        ("Taper", WeekType.TAPER),
        ("Consolidation", WeekType.BASE),
    ])
    def test_from_phase_name(self, name, expected):
        assert WeekType.from_phase_name(name) == expected


class TestTrainingPlanLookup:
    def test_unknown_workout_id(self, profile):
        plan = generate_plan_sync(profile, settings=Settings(openai_api_key=""))

        assert plan.workout("wkt-01").name == "Recovery Ride"
        with pytest.raises(KeyError):
            plan.workout("wkt-99")
        with pytest.raises(KeyError):
            plan.workouts_for_week(plan.total_weeks + 1)

    def test_stored_generic_interval_type_loads(self, profile):
        """Plans stored with the generic "intervals" type still load."""
        data = generate_plan_sync(profile, settings=Settings(openai_api_key="")).to_dict()
        data["workouts"][2]["workout_type"] = "intervals"

        plan = TrainingPlan.from_dict(data)

        assert plan.workout("wkt-03").workout_type == WorkoutType.INTERVALS
