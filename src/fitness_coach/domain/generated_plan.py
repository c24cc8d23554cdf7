"""Models for validating AI-generated plan payloads."""

from pydantic import BaseModel, ConfigDict, Field

from fitness_coach.domain.plans import MEAL_TYPES, PlanDay, PlanExercise, PlanMeal


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class GeneratedExercise(_CamelModel):
    """Exercise entry from the generator."""

    name: str
    description: str | None = None
    steps: list[str] = Field(default_factory=list)
    sets_reps: str = Field(default="", alias="setsReps")
    tips: list[str] = Field(default_factory=list)


class GeneratedWorkout(_CamelModel):
    """Workout block for a workout day."""

    focus: str | None = None
    calories_burned: float | None = Field(default=None, alias="caloriesBurned")
    intensity: str | None = None
    exercises: list[GeneratedExercise] = Field(default_factory=list)


class GeneratedMeal(_CamelModel):
    """Single meal target."""

    description: str | None = None
    calories: float = Field(default=0, ge=0)


class GeneratedNutrition(_CamelModel):
    """Daily meal targets."""

    breakfast: GeneratedMeal | None = None
    lunch: GeneratedMeal | None = None
    dinner: GeneratedMeal | None = None
    snack: GeneratedMeal | None = None
    total_calories: float | None = Field(default=None, alias="totalCalories")
    explanation: str | None = None


class GeneratedDay(_CamelModel):
    """One generated day."""

    day: int = Field(ge=1)
    type: str = "workout"
    workout: GeneratedWorkout | None = None
    nutrition: GeneratedNutrition | None = None

    def to_plan_day(self) -> PlanDay:
        """Convert into the immutable domain representation."""
        day_type = "workout" if self.type == "workout" else "rest"
        exercises: list[PlanExercise] = []
        if day_type == "workout" and self.workout:
            exercises = [
                PlanExercise(
                    exercise_number=index,
                    name=exercise.name,
                    sets_reps=exercise.sets_reps,
                    description=exercise.description,
                    steps=list(exercise.steps),
                    tips=list(exercise.tips),
                )
                for index, exercise in enumerate(self.workout.exercises, start=1)
            ]
        meals: dict[str, PlanMeal] = {}
        total_calories = 0.0
        explanation = None
        if self.nutrition:
            for meal_type in MEAL_TYPES:
                meal = getattr(self.nutrition, meal_type)
                if meal is not None:
                    meals[meal_type] = PlanMeal(
                        description=meal.description, calories=meal.calories
                    )
            total_calories = self.nutrition.total_calories or 0.0
            explanation = self.nutrition.explanation
        return PlanDay(
            day=self.day,
            day_type=day_type,
            exercises=exercises,
            meals=meals,
            total_calories=total_calories,
            focus=self.workout.focus if self.workout else None,
            intensity=self.workout.intensity if self.workout else None,
            calories_burned=self.workout.calories_burned if self.workout else None,
            nutrition_explanation=explanation,
        )


class GeneratedOverview(_CamelModel):
    """Plan overview counts."""

    total_days: int = Field(alias="totalDays", ge=1)
    active_days: int = Field(default=0, alias="activeDays", ge=0)
    rest_days: int = Field(default=0, alias="restDays", ge=0)
    estimated_weekly_calories_burned: float | None = Field(
        default=None, alias="estimatedWeeklyCaloriesBurned"
    )


class GeneratedPlan(_CamelModel):
    """Structured plan returned by the generator."""

    overview: GeneratedOverview
    days: list[GeneratedDay] = Field(min_length=1)
    safety_notes: list[str] = Field(default_factory=list, alias="safetyNotes")
