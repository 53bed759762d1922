"""Tests for workout synthesis."""

import pytest

from ride_planner.exceptions import LLMTimeoutError
from ride_planner.metrics.load import calculate_tss
from ride_planner.models.ai_response import AIWorkoutTemplate
from ride_planner.models.profile import DayOfWeek, PrimaryGoal
from ride_planner.models.workouts import CoachingAdvice, WorkoutType
from ride_planner.services.workout_synthesizer import (
    FALLBACK_COACHING,
    day_slot,
    estimate_intensity,
    extract_intensity,
    extract_repetitions,
    extract_zone_name,
    fallback_coaching,
    gather_coaching,
    map_workout_type,
    preferred_day,
    select_interval_type,
    synthesize_workouts,
    synthesize_workouts_with_coaching,
)


# ============================================================================
# Lookup tables
# ============================================================================

class TestMapWorkoutType:
    @pytest.mark.parametrize("raw,expected", [
        ("endurance", WorkoutType.ENDURANCE),
        ("Intervals", WorkoutType.VO2MAX),
        ("tempo", WorkoutType.TEMPO),
        ("recovery", WorkoutType.RECOVERY),
        ("THRESHOLD", WorkoutType.THRESHOLD),
        ("sprint", WorkoutType.SPRINT),
        ("hill repeats", WorkoutType.ENDURANCE),
        (None, WorkoutType.ENDURANCE),
    ])
    def test_mapping(self, raw, expected):
        assert map_workout_type(raw) == expected


class TestExtractIntensity:
    def test_explicit_zone_wins(self):
        assert extract_intensity("4 x 5min hard in Zone 4") == "Zone 4"
        assert extract_intensity("zone3 tempo") == "Zone 3"

    @pytest.mark.parametrize("text,expected", [
        ("Hard efforts uphill", "Zone 4-5"),
        ("moderate steady block", "Zone 3"),
        ("easy spin", "Zone 1-2"),
        ("steady riding", "Zone 2"),
        (None, "Zone 2"),
    ])
    def test_keywords_and_default(self, text, expected):
        assert extract_intensity(text) == expected


class TestExtractZoneName:
    @pytest.mark.parametrize("text,expected", [
        ("recovery spin", "Recovery"),
        ("endurance ride", "Endurance"),
        ("tempo blocks", "Tempo"),
        ("threshold intervals", "Threshold"),
        ("VO2 repeats", "VO2 Max"),
        ("sprint practice", "Neuromuscular"),
        ("hill climbs", "Endurance"),
        (None, "Endurance"),
    ])
    def test_keywords(self, text, expected):
        assert extract_zone_name(text) == expected

    def test_first_keyword_in_table_order_wins(self):
        assert extract_zone_name("endurance ride with recovery breaks") == "Recovery"


class TestExtractRepetitions:
    def test_patterns(self):
        assert extract_repetitions("5x3min at VO2") == 5
        assert extract_repetitions("3 x 12 min threshold") == 3
        assert extract_repetitions("steady two hours") == 1
        assert extract_repetitions(None) == 1


class TestEstimateIntensity:
    def test_scores(self):
        assert estimate_intensity("recovery") == 3
        assert estimate_intensity("VO2MAX") == 9
        assert estimate_intensity("intervals") == 8
        assert estimate_intensity("unknown") == 6
        assert estimate_intensity(None) == 6


class TestSelectIntervalType:
    @pytest.mark.parametrize("goal,expected", [
        (PrimaryGoal.ENDURANCE, WorkoutType.TEMPO),
        (PrimaryGoal.SPEED, WorkoutType.VO2MAX),
        (PrimaryGoal.POWER, WorkoutType.THRESHOLD),
        (PrimaryGoal.EVENT_TRAINING, WorkoutType.THRESHOLD),
        (PrimaryGoal.GENERAL_FITNESS, WorkoutType.TEMPO),
        (PrimaryGoal.WEIGHT_LOSS, WorkoutType.TEMPO),
    ])
    def test_by_goal(self, goal, expected):
        assert select_interval_type(goal) == expected


class TestPreferredDay:
    def test_long_prefers_saturday_then_sunday(self):
        assert preferred_day([DayOfWeek.SUNDAY, DayOfWeek.SATURDAY], "long") == DayOfWeek.SATURDAY
        assert preferred_day([DayOfWeek.MONDAY, DayOfWeek.SUNDAY], "long") == DayOfWeek.SUNDAY

    def test_hard_prefers_tuesday_then_thursday(self):
        assert preferred_day([DayOfWeek.THURSDAY, DayOfWeek.TUESDAY], "hard") == DayOfWeek.TUESDAY
        assert preferred_day([DayOfWeek.WEDNESDAY, DayOfWeek.THURSDAY], "hard") == DayOfWeek.THURSDAY

    def test_falls_back_to_first_preferred_day(self):
        assert preferred_day([DayOfWeek.WEDNESDAY, DayOfWeek.FRIDAY], "hard") == DayOfWeek.WEDNESDAY
        assert preferred_day([DayOfWeek.FRIDAY], None) == DayOfWeek.FRIDAY

    def test_no_days_gives_saturday(self):
        assert preferred_day((), "hard") == DayOfWeek.SATURDAY
        assert preferred_day((), None) == DayOfWeek.SATURDAY

    @pytest.mark.parametrize("raw_type,slot", [
        ("long", "long"),
        ("Endurance", "long"),
        ("hard", "hard"),
        ("intervals", "hard"),
        (" tempo ", "hard"),
        ("vo2max", "hard"),
        ("recovery", None),
        (None, None),
    ])
    def test_day_slot_groups_workout_families(self, raw_type, slot):
        assert day_slot(raw_type) == slot


class TestFallbackCoaching:
    def test_every_workout_type_has_an_entry(self):
        for workout_type in WorkoutType:
            assert workout_type.value in FALLBACK_COACHING

    def test_unknown_type_uses_endurance_entry(self):
        assert fallback_coaching("gravel") == FALLBACK_COACHING["endurance"]


# ============================================================================
# Canonical workouts
# ============================================================================

class TestCanonicalWorkouts:
    """Tests for the three rule-based workouts."""

    def test_three_workouts_in_order(self, profile):
        workouts = synthesize_workouts(profile)

        assert [w.id for w in workouts] == ["wkt-01", "wkt-02", "wkt-03"]
        assert [w.workout_type for w in workouts] == [
            WorkoutType.RECOVERY,
            WorkoutType.ENDURANCE,
            WorkoutType.TEMPO,
        ]
        assert not any(w.ai_generated for w in workouts)

    def test_recovery_ride(self, profile):
        recovery = synthesize_workouts(profile)[0]

        assert recovery.duration_min == 60
        assert recovery.day_of_week == DayOfWeek.TUESDAY
        assert recovery.structure.warmup.duration == 5
        assert recovery.structure.main_set[0].duration == 50
        assert recovery.structure.main_set[0].zone == "Recovery"
        assert recovery.intensity.intensity_factor == 0.55
        assert recovery.intensity.average == 3
        assert recovery.intensity.tss == 30

    def test_endurance_ride(self, profile):
        endurance = synthesize_workouts(profile)[1]

        assert endurance.duration_min == 90
        assert endurance.day_of_week == DayOfWeek.SATURDAY
        assert endurance.structure.main_set[0].duration == 65
        assert endurance.structure.main_set[0].intensity == "Zone 2"
        assert endurance.intensity.tss == 63

    def test_interval_session(self, profile):
        intervals = synthesize_workouts(profile)[2]
        main = intervals.structure.main_set[0]

        assert intervals.name == "Tempo Intervals"
        assert intervals.duration_min == 90
        assert intervals.day_of_week == DayOfWeek.TUESDAY
        assert main.repetitions == 4
        assert main.duration == 5
        assert main.recovery_duration == 3
        assert main.recovery_intensity == "Zone 1"
        assert intervals.intensity.tss == 108

    def test_interval_type_follows_goal(self, make_profile):
        profile = make_profile(goals={"primaryGoal": "speed"})
        intervals = synthesize_workouts(profile)[2]
        assert intervals.workout_type == WorkoutType.VO2MAX
        assert intervals.name == "VO2max Intervals"

    def test_short_sessions_clamp_durations(self, make_profile):
        profile = make_profile(schedule={"sessionDuration": {"min": 20, "max": 20}})
        recovery, endurance, intervals = synthesize_workouts(profile)

        assert recovery.duration_min == 20
        assert recovery.structure.main_set[0].duration == 10
        assert endurance.duration_min == 20
        assert endurance.structure.main_set[0].duration == 0
        assert intervals.duration_min == 20

    def test_static_coaching_when_none_supplied(self, profile):
        recovery, endurance, intervals = synthesize_workouts(profile)

        assert endurance.coach_notes == FALLBACK_COACHING["endurance"].coach_notes
        assert intervals.motivational_tip == FALLBACK_COACHING["intervals"].motivational_tip
        assert recovery.nutrition_guidance == FALLBACK_COACHING["recovery"].nutrition_guidance

    def test_empty_coaching_text_uses_defaults(self, profile):
        coaching = {"recovery": CoachingAdvice("", "", "")}
        recovery = synthesize_workouts(profile, coaching=coaching)[0]

        assert recovery.coach_notes == recovery.description
        assert recovery.nutrition_guidance == "Stay hydrated and fuel appropriately"
        assert recovery.motivational_tip is None

    def test_equipment_tags_follow_profile(self, profile):
        workout = synthesize_workouts(profile)[0]
        assert workout.equipment.required == ("bike",)
        assert workout.equipment.optional == ("heart_rate_monitor", "trainer")


# ============================================================================
# AI templates
# ============================================================================

class TestTemplateWorkouts:
    """Tests for workouts built from advisor templates."""

    @pytest.fixture
    def templates(self, ai_plan_payload):
        return [AIWorkoutTemplate.model_validate(t) for t in ai_plan_payload["keyWorkouts"]]

    def test_one_workout_per_template(self, profile, templates):
        workouts = synthesize_workouts(profile, templates)

        assert [w.name for w in workouts] == ["Long Ride", "Threshold Repeats", "Spin"]
        assert all(w.ai_generated for w in workouts)

    def test_duration_capped_at_session_max(self, profile, templates):
        long_ride = synthesize_workouts(profile, templates)[0]

        assert long_ride.duration_min == 90
        assert long_ride.structure.main_set[0].duration == 65
        assert long_ride.intensity.tss == calculate_tss(90, 0.7)
        assert long_ride.intensity.intensity_factor == 0.7

    def test_free_text_is_mapped(self, profile, templates):
        long_ride, repeats, spin = synthesize_workouts(profile, templates)

        assert long_ride.workout_type == WorkoutType.ENDURANCE
        assert long_ride.day_of_week == DayOfWeek.SATURDAY
        assert long_ride.structure.main_set[0].intensity == "Zone 2"
        assert long_ride.coach_notes == "Eat every 30 minutes Stay seated on climbs"
        assert long_ride.indoor_alternative == "Trainer endurance ride"

        assert repeats.workout_type == WorkoutType.THRESHOLD
        assert repeats.day_of_week == DayOfWeek.TUESDAY
        assert repeats.structure.main_set[0].repetitions == 3
        assert repeats.structure.main_set[0].zone == "Threshold"
        assert repeats.intensity.average == 8

        assert spin.workout_type == WorkoutType.RECOVERY
        assert spin.day_of_week == DayOfWeek.TUESDAY
        assert spin.intensity.average == 3

    def test_missing_template_fields_use_defaults(self, profile):
        workout = synthesize_workouts(profile, [AIWorkoutTemplate()])[0]

        assert workout.duration_min == 60
        assert workout.workout_type == WorkoutType.ENDURANCE
        assert workout.structure.warmup.description == "Gradual warm-up"
        assert workout.structure.main_set[0].description == "Main workout set"
        assert workout.structure.cooldown.description == "Easy cool-down"
        assert workout.indoor_alternative == "Use indoor trainer"
        assert workout.outdoor_alternative == "Outdoor equivalent"
        assert workout.coach_notes == "Focus on good form and pacing"
        assert workout.nutrition_guidance == "Follow pre/during/post workout nutrition guidelines"

    def test_raw_slot_types_schedule_directly(self, profile):
        workouts = synthesize_workouts(profile, [
            AIWorkoutTemplate(type="long"),
            AIWorkoutTemplate(type="hard"),
        ])
        assert [w.day_of_week for w in workouts] == [DayOfWeek.SATURDAY, DayOfWeek.TUESDAY]


# ============================================================================
# Coaching calls
# ============================================================================

class TestGatherCoaching:
    """Tests for per-workout coaching advice."""

    @pytest.mark.asyncio
    async def test_no_advisor_uses_static_table(self, profile):
        coaching = await gather_coaching(profile, None)
        assert coaching == {
            "recovery": FALLBACK_COACHING["recovery"],
            "endurance": FALLBACK_COACHING["endurance"],
            "intervals": FALLBACK_COACHING["intervals"],
        }

    @pytest.mark.asyncio
    async def test_failures_are_isolated(self, profile, scripted_advisor):
        custom = CoachingAdvice("Ride the rollers smoothly", "Bring two bottles", "You got this")
        advisor = scripted_advisor(coaching={
            "endurance": custom,
            "intervals": LLMTimeoutError(),
        })

        coaching = await gather_coaching(profile, advisor)

        assert coaching["endurance"] == custom
        assert coaching["intervals"] == FALLBACK_COACHING["intervals"]
        assert coaching["recovery"] == FALLBACK_COACHING["recovery"]
        assert sorted(call[0] for call in advisor.coaching_calls) == [
            "endurance", "intervals", "recovery",
        ]
        assert all(call[1] == 1 for call in advisor.coaching_calls)

    @pytest.mark.asyncio
    async def test_ai_templates_skip_coaching_calls(self, profile, scripted_advisor, ai_plan_payload):
        advisor = scripted_advisor()
        templates = [AIWorkoutTemplate.model_validate(t) for t in ai_plan_payload["keyWorkouts"]]

        workouts = await synthesize_workouts_with_coaching(profile, templates, advisor)

        assert len(workouts) == 3
        assert advisor.coaching_calls == []

    @pytest.mark.asyncio
    async def test_coaching_decorates_canonical_workouts(self, profile, scripted_advisor):
        custom = CoachingAdvice("Smooth pedaling", "Carbs before", "Enjoy the ride")
        advisor = scripted_advisor(coaching={"endurance": custom})

        workouts = await synthesize_workouts_with_coaching(profile, None, advisor)

        assert workouts[1].coach_notes == "Smooth pedaling"
        assert workouts[1].motivational_tip == "Enjoy the ride"
        assert workouts[0].coach_notes == FALLBACK_COACHING["recovery"].coach_notes
