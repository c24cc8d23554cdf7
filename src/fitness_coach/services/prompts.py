"""Prompt construction for fitness plan generation."""

from dataclasses import asdict, dataclass

from fitness_coach.domain.errors import ProgramMissingError
from fitness_coach.domain.profiles import AdaptiveProgram, GoalBasedProgram, Profile

SYSTEM_PROMPT = (
    "You are a certified adaptive fitness specialist and physical therapist. "
    "You design safe, modified exercise programs for people with physical "
    "limitations.\n\n"
    "RULES:\n"
    "1. NEVER suggest exercises that could harm someone with their specific "
    "limitations\n"
    "2. If a user has leg limitations: NO squats, lunges, jumping, or "
    "weight-bearing exercises\n"
    "3. If a user has arm limitations: NO push-ups, planks, or exercises "
    "requiring arm support\n"
    "4. Always provide seated or supported alternatives\n"
    "5. Focus on pain-free range of motion and functional movements\n"
    "6. Respond with valid JSON only, no markdown"
)

_NOT_SPECIFIED = "Not specified"

_UPPER_BODY_KEYWORDS = ("arm", "upper body", "shoulder")
_LOWER_BODY_KEYWORDS = ("leg", "knee", "lower body", "foot")
_CORE_KEYWORDS = ("back", "spine", "core")

_OUTPUT_FORMAT = """
OUTPUT FORMAT:
You MUST respond with VALID JSON ONLY. No markdown, no code blocks, no extra text.

Return a JSON object with this EXACT structure:

{
  "overview": {
    "totalDays": <number>,
    "activeDays": <number>,
    "restDays": <number>,
    "estimatedWeeklyCaloriesBurned": <number>
  },
  "days": [
    {
      "day": 1,
      "type": "workout" or "rest",
      "workout": {
        "focus": "string",
        "caloriesBurned": <number>,
        "intensity": "low/medium/high",
        "warmup": {"description": "string", "duration": "string"},
        "exercises": [
          {
            "name": "string",
            "description": "string",
            "steps": ["step1", "step2", "step3"],
            "setsReps": "string",
            "tips": ["tip1", "tip2"]
          }
        ],
        "cooldown": {"description": "string", "duration": "string"}
      },
      "nutrition": {
        "breakfast": {"description": "string", "calories": <number>},
        "lunch": {"description": "string", "calories": <number>},
        "dinner": {"description": "string", "calories": <number>},
        "snack": {"description": "string", "calories": <number>},
        "totalCalories": <number>,
        "explanation": "string"
      }
    }
  ],
  "safetyNotes": ["note1", "note2", "note3"]
}

CRITICAL: Return ONLY the JSON object. No text before or after.
"""


@dataclass(frozen=True)
class PlanPrompt:
    """Prompt text plus the program it was built from."""

    plan_type: str
    program_snapshot: dict[str, object]
    prompt: str


def build_prompt(profile: Profile, plan_days: int = 7) -> PlanPrompt:
    """Build the user prompt for a profile's program.

    A goal-based program takes precedence when a profile carries both.
    """
    sections = [_base_user_info(profile)]
    plan_type: str | None = None
    program: AdaptiveProgram | GoalBasedProgram | None = None

    if profile.adaptive_program is not None:
        plan_type = "adaptive"
        program = profile.adaptive_program
        sections.append(_adaptive_details(profile.adaptive_program))
    if profile.goal_based_program is not None:
        plan_type = "goalBased"
        program = profile.goal_based_program
        sections.append(_goal_based_details(profile.goal_based_program))
    if plan_type is None or program is None:
        raise ProgramMissingError

    sections.append(_day_constraints(plan_days))
    sections.append(_content_requirements(is_adaptive=plan_type == "adaptive"))
    sections.append(_OUTPUT_FORMAT)
    snapshot = {key: _jsonable(value) for key, value in asdict(program).items()}
    return PlanPrompt(
        plan_type=plan_type,
        program_snapshot=snapshot,
        prompt="\n".join(sections),
    )


def _jsonable(value: object) -> object:
    if isinstance(value, list):
        return [_jsonable(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def _or_default(value: object) -> str:
    if value is None or value == "" or value == []:
        return _NOT_SPECIFIED
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    return str(value)


def _base_user_info(profile: Profile) -> str:
    return (
        "Create a personalized fitness plan using the details below.\n\n"
        "**Personal Information:**\n"
        f"- Gender: {_or_default(profile.gender)}\n"
        f"- Age: {_or_default(profile.age)}\n"
        f"- Height: {_or_default(profile.height_cm)} cm\n"
        f"- Current Weight: {_or_default(profile.current_weight_kg)} kg\n"
        f"- Target Weight: {_or_default(profile.target_weight_kg)} kg\n"
        f"- Commitment Level: {_or_default(profile.commitment)}\n"
        f"- Workout Days: {_or_default(profile.workout_days)}\n"
    )


def _adaptive_details(program: AdaptiveProgram) -> str:
    return (
        "**Adaptive Program Details:**\n"
        f"- Affected Limbs: {_or_default(program.affected_limbs)}\n"
        f"- Purposes: {_or_default(program.purposes)}\n"
        f"{adaptive_constraints(program.affected_limbs)}\n"
    )


def _goal_based_details(program: GoalBasedProgram) -> str:
    target_areas = ", ".join(program.target_areas) or "None"
    equipment = ", ".join(program.available_equipment) or "None"
    return (
        "**Goal-Based Program Details:**\n"
        f"- Primary Goal: {_or_default(program.primary_goal)}\n"
        f"- Fitness Level: {_or_default(program.fitness_level)}\n"
        f"- Target Areas: {target_areas}\n"
        f"- Equipment: {equipment}\n"
    )


def adaptive_constraints(affected_limbs: str | None) -> str:
    """Return safety constraints for the limbs a user has trouble with."""
    limbs = (affected_limbs or "").lower()
    lines = ["", "**CRITICAL ADAPTIVE CONSTRAINTS:**"]

    if any(keyword in limbs for keyword in _UPPER_BODY_KEYWORDS):
        lines += [
            f"- User has upper body limitations: {limbs}",
            "- AVOID exercises that put pressure on the affected arm(s)",
            "- Use seated or supported exercises when needed",
            "- Focus on range-of-motion exercises within pain-free limits",
            "- Include unilateral exercises for unaffected side if appropriate",
        ]
    if any(keyword in limbs for keyword in _LOWER_BODY_KEYWORDS):
        lines += [
            f"- User has lower body limitations: {limbs}",
            "- ABSOLUTELY NO squats, lunges, or exercises that require full "
            "weight-bearing on affected leg(s)",
            "- Use seated or non-weight-bearing exercises",
            "- Focus on chair exercises, resistance bands, or water-based "
            "exercise simulations",
            "- Include isometric contractions if safe",
        ]
    if any(keyword in limbs for keyword in _CORE_KEYWORDS):
        lines += [
            f"- User has back/core limitations: {limbs}",
            "- AVOID exercises that compress the spine",
            "- No heavy lifting or twisting motions",
            "- Focus on gentle core activation and stabilization",
            "- Use supported positions (leaning forward, seated)",
        ]

    lines += [
        "",
        "**GENERAL ADAPTIVE RULES:**",
        "- Only include exercises that are SAFE for the specific limitations "
        "mentioned",
        "- If unsure about an exercise's safety, DO NOT include it",
        "- All exercises must be modifiable or have clear alternatives",
        "- Focus on functional movements that support daily activities",
        "- Progress slowly with emphasis on form over intensity",
        "- Include rest periods as needed within each session",
    ]
    return "\n".join(lines)


def _day_constraints(plan_days: int) -> str:
    return (
        "IMPORTANT CONSTRAINTS:\n"
        f"- Create a plan for EXACTLY {plan_days} days (Day 1 to Day {plan_days})\n"
        f"- Do NOT exceed {plan_days} days\n"
        "- Include at least 1 active recovery day\n"
    )


def _content_requirements(*, is_adaptive: bool) -> str:
    lines = [
        "CONTENT REQUIREMENTS:",
        "",
        "EXERCISES:",
        "- Explain WHAT the exercise is",
        "- Step-by-step HOW TO DO IT",
        "- Form tips & common mistakes",
        "- Sets/reps or duration",
    ]
    if is_adaptive:
        lines += [
            "",
            "**ADAPTIVE EXERCISE REQUIREMENTS:**",
            "- Each exercise MUST be modified for the user's specific limitations",
            "- Clearly state modifications for affected limbs",
            "- Include alternative exercises if certain movements aren't possible",
            "- Focus on seated or supported positions when necessary",
            "- Emphasize safety and pain-free range of motion",
            "- Do NOT suggest exercises that could aggravate the condition",
        ]
    lines += [
        "",
        "WORKOUT:",
        "- Estimated calories burned per day",
        "- Explain workout intensity",
        "",
        "NUTRITION:",
        "- Daily meals: Breakfast, Lunch, Dinner, Snack",
        "- Calories per meal",
        "- Total daily calories",
        "- Explain why nutrition supports recovery and adaptation",
        "",
        "SAFETY:",
        "- Beginner-friendly language",
        "- Warm-up & cool-down included",
        "- Injury safety notes",
        "- Stop-immediately warnings for pain or discomfort",
    ]
    return "\n".join(lines)
