"""Domain models and derivations for daily meal logs."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from fitness_coach.domain.plans import MEAL_TYPES

MEAL_STATUSES = ("pending", "completed", "skipped")
NUTRITION_PERIODS = {"week": 7, "month": 30, "6months": 180}


@dataclass(frozen=True)
class MealSlotLog:
    """State of one meal slot for a day."""

    status: str = "pending"
    description: str | None = None
    calories: float = 0
    skip_reason: str | None = None
    completed_at: datetime | None = None


@dataclass(frozen=True)
class MealLogEntry:
    """Per-user, per-day nutrition record with four meal slots."""

    user_id: UUID
    day: int
    date: datetime
    total_calories: float
    meals: dict[str, MealSlotLog]
    consumed_calories: float = 0
    id: UUID | None = None


@dataclass(frozen=True)
class MealUpdate:
    """Fields supplied when logging a single meal."""

    description: str | None = None
    calories: float | None = None
    status: str | None = None
    skip_reason: str | None = None
    total_calories: float | None = None


@dataclass(frozen=True)
class DailyNutrition:
    """One day's calorie totals inside a nutrition summary."""

    date: datetime
    day: int
    total_calories: float
    consumed_calories: float
    completion_percentage: float
    meals: dict[str, MealSlotLog]


@dataclass(frozen=True)
class NutritionSummary:
    """Calorie and meal totals over a trailing period."""

    total_days: int
    total_target_calories: float
    total_consumed_calories: float
    average_target_calories: float
    average_consumed_calories: float
    completion_rate: float
    meals_completed: int
    meals_skipped: int
    meals_pending: int
    daily_data: list[DailyNutrition]


@dataclass(frozen=True)
class MonthlyNutrition:
    """Per-month calorie averages."""

    year: int
    month: int
    average_target_calories: float
    average_consumed_calories: float
    days_count: int
    completion_rate: float


@dataclass(frozen=True)
class CalendarDay:
    """One calendar date and the meal log recorded on it, if any."""

    day: int
    date: date
    has_data: bool
    total_calories: float = 0
    consumed_calories: float = 0
    completion_percentage: float = 0
    meals: dict[str, MealSlotLog] | None = None


def empty_meals() -> dict[str, MealSlotLog]:
    """Return all four slots in the pending state."""
    return {meal_type: MealSlotLog() for meal_type in MEAL_TYPES}


def compute_consumed_calories(meals: dict[str, MealSlotLog]) -> float:
    """Sum calories over completed meals; never negative."""
    total = sum(
        max(meal.calories or 0, 0)
        for meal in meals.values()
        if meal.status == "completed"
    )
    return max(total, 0)


def calorie_percentage(consumed: float, target: float) -> float:
    """Return consumed over target as a percentage with two decimals."""
    if target <= 0:
        return 0
    return round(consumed / target * 100, 2)
