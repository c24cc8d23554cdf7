"""Combined exercise and nutrition statistics."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from fitness_coach.domain.stats import DashboardStats
from fitness_coach.services.exercise_logs import ExerciseLogService
from fitness_coach.services.meal_logs import MealLogService

_PERIOD_NAMES = {7: "week", 30: "month"}


@dataclass
class StatsService:
    """Service building the dashboard from both log services."""

    exercise_logs: ExerciseLogService
    meal_logs: MealLogService

    def dashboard(
        self, user_id: UUID, days: int = 7, today: date | None = None
    ) -> DashboardStats:
        """Return exercise and nutrition summaries for a trailing window.

        Seven days maps to the weekly nutrition summary, thirty to the
        monthly one, and any other length to the six-month summary.
        """
        exercise = self.exercise_logs.summary_stats(user_id, days=days, today=today)
        nutrition = self.meal_logs.summary(
            user_id, _PERIOD_NAMES.get(days, "6months"), today=today
        )
        return DashboardStats(period_days=days, exercise=exercise, nutrition=nutrition)
