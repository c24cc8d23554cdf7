"""Combined statistics across exercise and nutrition logs."""

from dataclasses import dataclass

from fitness_coach.domain.exercise_logs import ExerciseSummaryStats
from fitness_coach.domain.meal_logs import NutritionSummary


@dataclass(frozen=True)
class DashboardStats:
    """Exercise and nutrition summaries for the same trailing window."""

    period_days: int
    exercise: ExerciseSummaryStats
    nutrition: NutritionSummary
