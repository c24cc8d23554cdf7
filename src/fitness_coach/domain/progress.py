"""Day progress snapshots and the pure functions that derive them.

A snapshot combines a plan day's targets with the user's exercise and meal
logs. Completed and skipped slots both count as "done": skipping resolves an
obligation, so a day where every exercise was skipped is exercise-complete.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from fitness_coach.domain.exercise_logs import ExerciseLogEntry
from fitness_coach.domain.meal_logs import MealLogEntry, compute_consumed_calories
from fitness_coach.domain.plans import MEAL_TYPES, PlanDay

TOTAL_MEALS = len(MEAL_TYPES)


@dataclass(frozen=True)
class ExerciseSlotProgress:
    """Live state of one planned exercise."""

    exercise_number: int
    exercise_name: str
    target_sets_reps: str
    status: str = "pending"
    actual_sets: int | None = None
    actual_reps: int | None = None
    skip_reason: str | None = None
    log_id: UUID | None = None


@dataclass(frozen=True)
class MealSlotProgress:
    """Live state of one planned meal."""

    target_description: str | None = None
    target_calories: float = 0
    status: str = "pending"
    actual_description: str | None = None
    actual_calories: float | None = None
    skip_reason: str | None = None
    completed_at: datetime | None = None


@dataclass(frozen=True)
class ExerciseProgress:
    """Exercise counters for a day."""

    total: int
    completed: int
    skipped: int
    pending: int
    completion_percentage: int
    exercises: list[ExerciseSlotProgress] = field(default_factory=list)


@dataclass(frozen=True)
class NutritionProgress:
    """Meal counters for a day."""

    total_meals: int
    completed: int
    skipped: int
    pending: int
    completion_percentage: int
    target_calories: float
    consumed_calories: float
    calories_percentage: int
    meals: dict[str, MealSlotProgress] = field(default_factory=dict)


@dataclass(frozen=True)
class OverallProgress:
    """Day-level completion flags."""

    is_exercise_complete: bool
    is_nutrition_complete: bool
    is_day_complete: bool
    completion_percentage: int


@dataclass(frozen=True)
class DayProgressSnapshot:
    """Persisted per-day progress, one per user and day."""

    user_id: UUID
    fitness_plan_id: UUID
    day: int
    date: datetime
    day_type: str
    exercise_progress: ExerciseProgress
    nutrition_progress: NutritionProgress
    overall_progress: OverallProgress
    last_updated: datetime


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return math.floor(value + 0.5)


def percentage(part: float, whole: float) -> int:
    """Return ``part / whole`` as a rounded percentage, or 0 for an empty whole."""
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)


def latest_logs_by_exercise(
    logs: Iterable[ExerciseLogEntry],
) -> dict[int, ExerciseLogEntry]:
    """Pick the most recent log for each exercise number."""
    ordered = sorted(
        logs,
        key=lambda log: (
            log.date,
            log.created_at or log.date,
        ),
    )
    latest: dict[int, ExerciseLogEntry] = {}
    for log in ordered:
        latest[log.exercise_number] = log
    return latest


def build_exercise_progress(
    plan_day: PlanDay, logs: Iterable[ExerciseLogEntry]
) -> ExerciseProgress:
    """Reconcile planned exercises against the user's logs."""
    if plan_day.is_rest_day:
        return ExerciseProgress(
            total=0,
            completed=0,
            skipped=0,
            pending=0,
            completion_percentage=100,
        )

    latest = latest_logs_by_exercise(logs)
    slots: list[ExerciseSlotProgress] = []
    for exercise in plan_day.exercises:
        log = latest.get(exercise.exercise_number)
        if log is None:
            slots.append(
                ExerciseSlotProgress(
                    exercise_number=exercise.exercise_number,
                    exercise_name=exercise.name,
                    target_sets_reps=exercise.sets_reps,
                )
            )
            continue
        completed = log.status == "completed"
        slots.append(
            ExerciseSlotProgress(
                exercise_number=exercise.exercise_number,
                exercise_name=exercise.name,
                target_sets_reps=exercise.sets_reps,
                status=log.status,
                actual_sets=log.actual_sets if completed else None,
                actual_reps=log.actual_reps if completed else None,
                skip_reason=None if completed else log.skip_reason,
                log_id=log.id,
            )
        )

    total = len(slots)
    completed_count = sum(1 for slot in slots if slot.status == "completed")
    skipped_count = sum(1 for slot in slots if slot.status == "skipped")
    return ExerciseProgress(
        total=total,
        completed=completed_count,
        skipped=skipped_count,
        pending=total - completed_count - skipped_count,
        completion_percentage=percentage(completed_count + skipped_count, total),
        exercises=slots,
    )


def build_nutrition_progress(
    plan_day: PlanDay, meal_log: MealLogEntry | None
) -> NutritionProgress:
    """Reconcile planned meals against the day's meal log."""
    slots: dict[str, MealSlotProgress] = {}
    for meal_type in MEAL_TYPES:
        target = plan_day.meals.get(meal_type)
        logged = meal_log.meals.get(meal_type) if meal_log else None
        slot = MealSlotProgress(
            target_description=target.description if target else None,
            target_calories=target.calories if target else 0,
        )
        if logged is not None:
            slot = MealSlotProgress(
                target_description=slot.target_description,
                target_calories=slot.target_calories,
                status=logged.status,
                actual_description=logged.description,
                actual_calories=logged.calories,
                skip_reason=logged.skip_reason,
                completed_at=logged.completed_at,
            )
        slots[meal_type] = slot

    completed = sum(1 for slot in slots.values() if slot.status == "completed")
    skipped = sum(1 for slot in slots.values() if slot.status == "skipped")
    consumed = compute_consumed_calories(meal_log.meals) if meal_log else 0
    target_calories = plan_day.total_calories or 0
    return NutritionProgress(
        total_meals=TOTAL_MEALS,
        completed=completed,
        skipped=skipped,
        pending=TOTAL_MEALS - completed - skipped,
        completion_percentage=percentage(completed + skipped, TOTAL_MEALS),
        target_calories=target_calories,
        consumed_calories=consumed,
        calories_percentage=percentage(consumed, target_calories),
        meals=slots,
    )


def build_overall_progress(
    day_type: str, exercise: ExerciseProgress, nutrition: NutritionProgress
) -> OverallProgress:
    """Combine exercise and nutrition state with a fixed 50/50 weighting."""
    if day_type == "workout":
        is_exercise_complete = exercise.pending == 0 and exercise.total > 0
    else:
        is_exercise_complete = True
    is_nutrition_complete = nutrition.pending == 0
    return OverallProgress(
        is_exercise_complete=is_exercise_complete,
        is_nutrition_complete=is_nutrition_complete,
        is_day_complete=is_exercise_complete and is_nutrition_complete,
        completion_percentage=round_half_up(
            (exercise.completion_percentage + nutrition.completion_percentage) / 2
        ),
    )


def build_snapshot(  # noqa: PLR0913
    *,
    user_id: UUID,
    fitness_plan_id: UUID,
    plan_day: PlanDay,
    exercise_logs: Iterable[ExerciseLogEntry],
    meal_log: MealLogEntry | None,
    date: datetime,
    now: datetime,
) -> DayProgressSnapshot:
    """Derive a full snapshot for a plan day from the current logs."""
    day_type = "rest" if plan_day.is_rest_day else "workout"
    exercise = build_exercise_progress(plan_day, exercise_logs)
    nutrition = build_nutrition_progress(plan_day, meal_log)
    return DayProgressSnapshot(
        user_id=user_id,
        fitness_plan_id=fitness_plan_id,
        day=plan_day.day,
        date=date,
        day_type=day_type,
        exercise_progress=exercise,
        nutrition_progress=nutrition,
        overall_progress=build_overall_progress(day_type, exercise, nutrition),
        last_updated=now,
    )


@dataclass(frozen=True)
class ExerciseStats:
    """Exercise totals folded over several days."""

    total: int = 0
    completed: int = 0
    skipped: int = 0
    pending: int = 0
    done: int = 0
    completion_rate: int = 0


@dataclass(frozen=True)
class NutritionStats:
    """Meal and calorie totals folded over several days."""

    total_meals: int = 0
    completed: int = 0
    skipped: int = 0
    pending: int = 0
    done: int = 0
    completion_rate: int = 0
    total_target_calories: float = 0
    total_consumed_calories: float = 0
    calorie_completion_rate: int = 0
    avg_daily_calories: int = 0


def fold_snapshots(
    snapshots: list[DayProgressSnapshot],
) -> tuple[ExerciseStats, NutritionStats]:
    """Sum per-day counters and derive done-based rates."""
    ex_total = ex_completed = ex_skipped = ex_pending = 0
    meal_total = meal_completed = meal_skipped = meal_pending = 0
    target_calories = 0.0
    consumed_calories = 0.0
    for snapshot in snapshots:
        exercise = snapshot.exercise_progress
        nutrition = snapshot.nutrition_progress
        ex_total += exercise.total
        ex_completed += exercise.completed
        ex_skipped += exercise.skipped
        ex_pending += exercise.pending
        meal_total += nutrition.total_meals
        meal_completed += nutrition.completed
        meal_skipped += nutrition.skipped
        meal_pending += nutrition.pending
        target_calories += nutrition.target_calories
        consumed_calories += nutrition.consumed_calories

    ex_done = ex_completed + ex_skipped
    meal_done = meal_completed + meal_skipped
    exercise_stats = ExerciseStats(
        total=ex_total,
        completed=ex_completed,
        skipped=ex_skipped,
        pending=ex_pending,
        done=ex_done,
        completion_rate=percentage(ex_done, ex_total),
    )
    nutrition_stats = NutritionStats(
        total_meals=meal_total,
        completed=meal_completed,
        skipped=meal_skipped,
        pending=meal_pending,
        done=meal_done,
        completion_rate=percentage(meal_done, meal_total),
        total_target_calories=target_calories,
        total_consumed_calories=consumed_calories,
        calorie_completion_rate=percentage(consumed_calories, target_calories),
        avg_daily_calories=(
            round_half_up(consumed_calories / len(snapshots)) if snapshots else 0
        ),
    )
    return exercise_stats, nutrition_stats


@dataclass(frozen=True)
class WeeklySummary:
    """Progress folded over one seven-day week."""

    week_number: int
    start_day: int
    end_day: int
    total_days: int
    completed_days: int
    workout_days: int
    rest_days: int
    average_completion: int
    exercise_stats: ExerciseStats
    nutrition_stats: NutritionStats
    days: list[DayProgressSnapshot]


@dataclass(frozen=True)
class ProgramInfo:
    """Plan-level day counts."""

    total_days: int
    active_days: int
    rest_days: int


@dataclass(frozen=True)
class ProgramProgress:
    """Whole-program day tracking."""

    days_tracked: int
    days_completed: int
    current_day: int
    overall_completion_percentage: int


@dataclass(frozen=True)
class OverallSummary:
    """Progress folded over every tracked day of the program."""

    program_info: ProgramInfo
    progress: ProgramProgress
    exercises: ExerciseStats
    nutrition: NutritionStats
    recent_days: list[DayProgressSnapshot]
