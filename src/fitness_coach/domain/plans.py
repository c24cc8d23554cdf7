"""Domain models for generated fitness plans."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

MEAL_TYPES = ("breakfast", "lunch", "dinner", "snack")
DAY_TYPES = ("workout", "rest")


@dataclass(frozen=True)
class PlanExercise:
    """Single target exercise within a workout day."""

    exercise_number: int
    name: str
    sets_reps: str
    description: str | None = None
    steps: list[str] = field(default_factory=list)
    tips: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PlanMeal:
    """Target meal for a plan day."""

    description: str | None
    calories: float


@dataclass(frozen=True)
class PlanDay:
    """One day of a generated plan. Read-only once generated."""

    day: int
    day_type: str
    exercises: list[PlanExercise] = field(default_factory=list)
    meals: dict[str, PlanMeal] = field(default_factory=dict)
    total_calories: float = 0
    focus: str | None = None
    intensity: str | None = None
    calories_burned: float | None = None
    nutrition_explanation: str | None = None

    @property
    def is_rest_day(self) -> bool:
        """Return True when the day carries no workout."""
        return self.day_type != "workout"


@dataclass(frozen=True)
class PlanOverview:
    """Summary counts for a plan."""

    total_days: int
    active_days: int
    rest_days: int
    estimated_weekly_calories_burned: float | None = None


@dataclass(frozen=True)
class FitnessPlan:
    """Generated multi-day plan attached to a profile."""

    id: UUID
    profile_id: UUID
    plan_type: str
    overview: PlanOverview
    days: list[PlanDay]
    generated_at: datetime
    safety_notes: list[str] = field(default_factory=list)
    program_snapshot: dict[str, object] = field(default_factory=dict)

    def find_day(self, day: int) -> PlanDay | None:
        """Return the plan day with the given number, if present."""
        for plan_day in self.days:
            if plan_day.day == day:
                return plan_day
        return None


@dataclass(frozen=True)
class GeneratedPlanResult:
    """Outcome of a plan generation request."""

    plan_id: UUID
    regenerated: bool


@dataclass(frozen=True)
class WorkoutCatalog:
    """Unique workout focuses and exercise names across stored plans."""

    workout_focuses: list[str]
    exercises: list[str]

    @property
    def total_workout_types(self) -> int:
        """Return the number of distinct workout focuses."""
        return len(self.workout_focuses)

    @property
    def total_exercises(self) -> int:
        """Return the number of distinct exercise names."""
        return len(self.exercises)


@dataclass(frozen=True)
class ExerciseSteps:
    """Distinct step-by-step variants recorded for an exercise."""

    name: str
    steps: list[list[str]]


@dataclass(frozen=True)
class WorkoutDetail:
    """A workout focus with the intensities it was prescribed at."""

    name: str
    intensities: list[str]
    occurrences: int


@dataclass(frozen=True)
class ExerciseDetail:
    """Every distinct description, step list, prescription and tip seen."""

    name: str
    descriptions: list[str]
    steps: list[list[str]]
    sets_reps: list[str]
    tips: list[str]
    occurrences: int


@dataclass(frozen=True)
class DetailedWorkoutCatalog:
    """Workout and exercise details across all stored plans."""

    workouts: list[WorkoutDetail]
    exercises: list[ExerciseDetail]
    total_plans_analyzed: int

    @property
    def total_unique_workouts(self) -> int:
        return len(self.workouts)

    @property
    def total_unique_exercises(self) -> int:
        return len(self.exercises)
