"""Daily nutrition logging service."""

import calendar
from collections import defaultdict
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime, time, timedelta
from typing import Protocol
from uuid import UUID

from fitness_coach.domain.errors import InvalidMealError, MealLogNotFoundError
from fitness_coach.domain.meal_logs import (
    MEAL_STATUSES,
    NUTRITION_PERIODS,
    CalendarDay,
    DailyNutrition,
    MealLogEntry,
    MealSlotLog,
    MealUpdate,
    MonthlyNutrition,
    NutritionSummary,
    calorie_percentage,
    compute_consumed_calories,
    empty_meals,
)
from fitness_coach.domain.plans import MEAL_TYPES
from fitness_coach.services.data_access import data_access

HISTORY_MONTHS = 6


class MealLogRepository(Protocol):
    """Persistence interface for per-day meal logs."""

    def find_meal_log(self, user_id: UUID, day: int) -> MealLogEntry | None:
        """Return the meal log for a user and plan day, if present."""

    def list_meal_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealLogEntry]:
        """Return meal logs dated within the bounds, oldest first."""

    def save_meal_log(self, entry: MealLogEntry) -> MealLogEntry:
        """Insert or replace the meal log for the entry's user and day."""


@dataclass
class MealLogService:
    """Service that records meal slots and keeps consumed calories current."""

    repository: MealLogRepository

    def get_day(self, user_id: UUID, day: int) -> MealLogEntry | None:
        """Return the meal log for a plan day, if any."""
        with data_access("load meal log"):
            return self.repository.find_meal_log(user_id, day)

    def update_single_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: int,
        date: datetime,
        meal_type: str,
        update: MealUpdate,
    ) -> MealLogEntry:
        """Record one meal slot, creating the day's document if needed."""
        status = update.status or "pending"
        _validate_meal_type(meal_type)
        _validate_status(status)
        _validate_calories(update.calories, update.total_calories)
        if day < 1:
            raise InvalidMealError("day must be a positive integer")

        entry = self._entry_for_update(user_id, day, date, update.total_calories)
        _check_transition(entry.meals.get(meal_type), status)
        slot = MealSlotLog(
            status=status,
            description=update.description,
            calories=update.calories or 0,
            skip_reason=update.skip_reason if status == "skipped" else None,
            completed_at=datetime.now(tz=UTC) if status == "completed" else None,
        )
        return self._save(entry, {meal_type: slot})

    def save_day(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: int,
        date: datetime,
        meals: dict[str, MealUpdate],
        total_calories: float | None = None,
    ) -> MealLogEntry:
        """Create or merge a whole day's meal log in one write.

        Fields left unset on a meal keep their stored values.
        """
        if day < 1:
            raise InvalidMealError("day must be a positive integer")
        _validate_calories(total_calories)
        entry = self._entry_for_update(user_id, day, date, total_calories)

        slots: dict[str, MealSlotLog] = {}
        for meal_type, update in meals.items():
            _validate_meal_type(meal_type)
            _validate_calories(update.calories)
            current = entry.meals.get(meal_type, MealSlotLog())
            status = update.status or current.status
            _validate_status(status)
            _check_transition(current, status)
            slots[meal_type] = _merge_slot(current, update, status)
        return self._save(entry, slots)

    def update_meal_status(
        self,
        user_id: UUID,
        day: int,
        meal_type: str,
        status: str,
        skip_reason: str | None = None,
    ) -> MealLogEntry:
        """Change the status of a single meal slot on an existing day."""
        _validate_meal_type(meal_type)
        _validate_status(status)
        entry = self.get_day(user_id, day)
        if entry is None:
            raise MealLogNotFoundError

        current = entry.meals.get(meal_type, MealSlotLog())
        _check_transition(current, status)
        if status == "completed":
            slot = replace(
                current,
                status=status,
                completed_at=datetime.now(tz=UTC),
                skip_reason=None,
            )
        elif status == "skipped":
            slot = replace(
                current,
                status=status,
                skip_reason=skip_reason or current.skip_reason,
                completed_at=None,
            )
        else:
            slot = replace(current, status=status, completed_at=None)
        return self._save(entry, {meal_type: slot})

    def list_range(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealLogEntry]:
        """Return meal logs dated between ``start`` and ``end`` inclusive."""
        if start > end:
            raise InvalidMealError("startDate must be before endDate")
        with data_access("list meal logs"):
            return self.repository.list_meal_logs(user_id, start, end)

    def get_period(
        self, user_id: UUID, period: str, today: date | None = None
    ) -> list[MealLogEntry] | list[MonthlyNutrition]:
        """Return raw logs for today, week or month, or monthly averages."""
        current = today or datetime.now(tz=UTC).date()
        if period == "today":
            return self.list_range(user_id, *_day_bounds(current, current))
        if period == "week":
            return self.list_range(
                user_id, *_day_bounds(current - timedelta(days=6), current)
            )
        if period == "month":
            return self.list_range(
                user_id, *_day_bounds(current - timedelta(days=29), current)
            )
        if period == "6months":
            return self.monthly_averages(user_id, today=current)
        raise InvalidMealError("Invalid period. Use: today, week, month, 6months")

    def monthly_averages(
        self, user_id: UUID, today: date | None = None
    ) -> list[MonthlyNutrition]:
        """Average target and consumed calories per month over six months."""
        current = today or datetime.now(tz=UTC).date()
        first = _first_of_month(current, HISTORY_MONTHS - 1)
        entries = self.list_range(user_id, *_day_bounds(first, current))

        months: dict[tuple[int, int], list[MealLogEntry]] = defaultdict(list)
        for entry in entries:
            months[(entry.date.year, entry.date.month)].append(entry)

        result = []
        for (year, month), month_entries in sorted(months.items()):
            target = sum(item.total_calories for item in month_entries)
            consumed = sum(item.consumed_calories for item in month_entries)
            result.append(
                MonthlyNutrition(
                    year=year,
                    month=month,
                    average_target_calories=round(target / len(month_entries), 2),
                    average_consumed_calories=round(
                        consumed / len(month_entries), 2
                    ),
                    days_count=len(month_entries),
                    completion_rate=calorie_percentage(consumed, target),
                )
            )
        return result

    def summary(
        self, user_id: UUID, period: str, today: date | None = None
    ) -> NutritionSummary:
        """Summarize calories and meal statuses over week, month or 6months."""
        if period not in NUTRITION_PERIODS:
            raise InvalidMealError("Invalid period. Use: week, month, 6months")
        current = today or datetime.now(tz=UTC).date()
        start = current - timedelta(days=NUTRITION_PERIODS[period] - 1)
        entries = self.list_range(user_id, *_day_bounds(start, current))

        statuses = [
            slot.status for entry in entries for slot in entry.meals.values()
        ]
        target = sum(entry.total_calories for entry in entries)
        consumed = sum(entry.consumed_calories for entry in entries)
        count = len(entries)
        return NutritionSummary(
            total_days=count,
            total_target_calories=target,
            total_consumed_calories=consumed,
            average_target_calories=round(target / count, 2) if count else 0,
            average_consumed_calories=round(consumed / count, 2) if count else 0,
            completion_rate=calorie_percentage(consumed, target),
            meals_completed=statuses.count("completed"),
            meals_skipped=statuses.count("skipped"),
            meals_pending=len(statuses)
            - statuses.count("completed")
            - statuses.count("skipped"),
            daily_data=[
                DailyNutrition(
                    date=entry.date,
                    day=entry.day,
                    total_calories=entry.total_calories,
                    consumed_calories=entry.consumed_calories,
                    completion_percentage=calorie_percentage(
                        entry.consumed_calories, entry.total_calories
                    ),
                    meals=entry.meals,
                )
                for entry in entries
            ],
        )

    def month_calendar(
        self, user_id: UUID, year: int, month: int
    ) -> list[CalendarDay]:
        """Return one entry per date of the month with any logged meals."""
        if not 2000 <= year <= 2100:
            raise InvalidMealError("Invalid year. Must be between 2000 and 2100")
        if not 1 <= month <= 12:
            raise InvalidMealError("Invalid month. Must be between 1 and 12")
        days_in_month = calendar.monthrange(year, month)[1]
        first = date(year, month, 1)
        last = date(year, month, days_in_month)
        by_date = {
            entry.date.date(): entry
            for entry in self.list_range(user_id, *_day_bounds(first, last))
        }

        result = []
        for offset in range(days_in_month):
            current = first + timedelta(days=offset)
            entry = by_date.get(current)
            if entry is None:
                result.append(
                    CalendarDay(day=current.day, date=current, has_data=False)
                )
                continue
            result.append(
                CalendarDay(
                    day=current.day,
                    date=current,
                    has_data=True,
                    total_calories=entry.total_calories,
                    consumed_calories=entry.consumed_calories,
                    completion_percentage=calorie_percentage(
                        entry.consumed_calories, entry.total_calories
                    ),
                    meals=entry.meals,
                )
            )
        return result

    def _entry_for_update(
        self,
        user_id: UUID,
        day: int,
        date: datetime,
        total_calories: float | None,
    ) -> MealLogEntry:
        existing = self.get_day(user_id, day)
        if existing is None:
            return MealLogEntry(
                user_id=user_id,
                day=day,
                date=date,
                total_calories=total_calories or 0,
                meals=empty_meals(),
            )
        if total_calories is not None:
            return replace(existing, total_calories=total_calories)
        return existing

    def _save(
        self, entry: MealLogEntry, slots: dict[str, MealSlotLog]
    ) -> MealLogEntry:
        meals = {**empty_meals(), **entry.meals, **slots}
        updated = replace(
            entry,
            meals=meals,
            consumed_calories=compute_consumed_calories(meals),
        )
        with data_access("save meal log"):
            return self.repository.save_meal_log(updated)


def _merge_slot(
    current: MealSlotLog, update: MealUpdate, status: str
) -> MealSlotLog:
    completed_at = current.completed_at
    if status == "completed" and current.status != "completed":
        completed_at = datetime.now(tz=UTC)
    elif status != "completed":
        completed_at = None
    skip_reason = update.skip_reason or current.skip_reason
    return MealSlotLog(
        status=status,
        description=(
            current.description if update.description is None else update.description
        ),
        calories=current.calories if update.calories is None else update.calories,
        skip_reason=skip_reason if status == "skipped" else None,
        completed_at=completed_at,
    )


def _check_transition(current: MealSlotLog | None, status: str) -> None:
    # completed and skipped are terminal
    if current is not None and current.status != "pending" and status == "pending":
        raise InvalidMealError(
            f"A {current.status} meal cannot be moved back to pending"
        )


def _day_bounds(first: date, last: date) -> tuple[datetime, datetime]:
    return (
        datetime.combine(first, time.min, tzinfo=UTC),
        datetime.combine(last, time.max, tzinfo=UTC),
    )


def _first_of_month(today: date, months_back: int) -> date:
    index = today.year * 12 + today.month - 1 - months_back
    return date(index // 12, index % 12 + 1, 1)


def _validate_meal_type(meal_type: str) -> None:
    if meal_type not in MEAL_TYPES:
        raise InvalidMealError(
            "Invalid mealType. Must be one of: breakfast, lunch, dinner, snack"
        )


def _validate_status(status: str) -> None:
    if status not in MEAL_STATUSES:
        raise InvalidMealError(
            "Invalid status. Must be one of: pending, completed, skipped"
        )


def _validate_calories(*values: float | None) -> None:
    if any(value is not None and value < 0 for value in values):
        raise InvalidMealError("calories and totalCalories must not be negative")
