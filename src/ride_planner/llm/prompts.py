"""LLM prompt templates for the Ride Planner."""

# ============================================================================
# PLAN GENERATION PROMPTS
# ============================================================================

PLAN_GENERATION_SYSTEM = """You are an expert cycling coach with 20+ years of experience creating personalized training plans.

Create plans that are progressive, include recovery, and respect the athlete's available time.
Session durations must stay within the athlete's stated minimum and maximum.

Always respond with a single valid JSON object and nothing else."""

PLAN_GENERATION_USER = """Create a comprehensive cycling training plan for this athlete profile:

ATHLETE PROFILE:
- Age: {age}, Weight: {weight}kg, Height: {height}cm
- Gender: {gender}
- Experience: {level} cyclist with {years_of_cycling} years of cycling
- Current training: {current_weekly_hours} hours/week, {current_weekly_distance}km/week
- Primary goal: {primary_goal}
- Target event: {target_event}
- Specific goals: {specific_goals}
- Available days: {days_per_week} days per week ({preferred_days})
- Session duration: {session_min}-{session_max} minutes
- Preferred time: {preferred_time}
- Equipment: {equipment}

The plan should cover:
1. Plan name, duration in weeks, and training philosophy
2. Key focus areas for this athlete
3. Heart rate zones based on estimated max HR, plus RPE guidance
4. Weekly structure: total time and distance, workout types
5. Periodization phases with a progression strategy, including recovery weeks
6. 3-4 key workouts with warm-up, main set, cool-down, indoor/outdoor options and coaching cues
7. Nutrition and recovery guidance
8. Motivation and mindset

Return JSON with this structure:
{{
  "planName": "string",
  "duration": {{ "weeks": number, "philosophy": "string" }},
  "focusAreas": ["string"],
  "zones": {{
    "heartRate": {{ "zone1": {{ "min": number, "max": number, "description": "string" }}, ... "zone6": {{ ... }} }},
    "rpe": {{ "zone1": {{ "value": number, "description": "string" }}, ... }}
  }},
  "weeklyStructure": {{
    "totalHours": number,
    "totalDistance": number,
    "workoutTypes": ["string"],
    "typicalWeek": "string"
  }},
  "periodization": {{
    "phases": [{{ "name": "string", "weeks": number, "focus": "string" }}],
    "progressionStrategy": "string"
  }},
  "keyWorkouts": [
    {{
      "name": "string",
      "type": "endurance|intervals|tempo|threshold|recovery|sprint",
      "duration": number,
      "description": "string",
      "structure": {{ "warmup": "string", "mainSet": "string", "cooldown": "string" }},
      "coachingCues": ["string"],
      "indoorOption": "string",
      "outdoorOption": "string"
    }}
  ],
  "nutrition": {{
    "preWorkout": "string",
    "duringWorkout": "string",
    "postWorkout": "string",
    "dailyGuidance": "string"
  }},
  "recovery": {{
    "sleepGuidance": "string",
    "restDayActivities": "string",
    "recoveryMarkers": "string"
  }},
  "motivation": {{
    "mentalApproach": "string",
    "consistencyTips": ["string"],
    "setbackStrategies": "string"
  }}
}}"""


# ============================================================================
# COACHING ADVICE PROMPTS
# ============================================================================

COACHING_ADVICE_SYSTEM = """You are an expert cycling coach giving short, specific advice for a single workout.

Always respond with a single valid JSON object and nothing else."""

COACHING_ADVICE_USER = """Provide coaching advice for this workout:

ATHLETE: {level} cyclist, age {age}, goal: {primary_goal}
WORKOUT: {workout_type} in week {week_number} of the training plan

Return JSON:
{{
  "coachNotes": "Specific technique and pacing advice for this workout",
  "nutritionGuidance": "What to eat/drink before, during, and after this workout",
  "motivationalTip": "Encouraging, personalized message for this workout"
}}"""
