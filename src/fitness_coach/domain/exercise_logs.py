"""Domain models for exercise logging."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

EXERCISE_LOG_STATUSES = ("completed", "skipped")


@dataclass(frozen=True)
class ExerciseLogEntry:
    """A completed or skipped exercise for a plan day."""

    id: UUID
    user_id: UUID
    day_number: int
    exercise_number: int
    date: datetime
    exercise_name: str
    target_sets_reps: str
    status: str
    actual_sets: int | None = None
    actual_reps: int | None = None
    skip_reason: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class ExerciseLogInput:
    """Fields supplied when logging or updating an exercise."""

    day_number: int
    exercise_number: int
    exercise_name: str
    target_sets_reps: str
    status: str
    date: datetime | None = None
    actual_sets: int | None = None
    actual_reps: int | None = None
    skip_reason: str | None = None


@dataclass(frozen=True)
class LogFilters:
    """Optional filters for listing exercise logs."""

    start: datetime | None = None
    end: datetime | None = None
    status: str | None = None
    day_number: int | None = None


@dataclass(frozen=True)
class ExerciseSummaryStats:
    """Exercise logging statistics over a trailing window."""

    period_days: int
    total_exercises: int
    completed: int
    skipped: int
    completion_rate: float
    unique_days: int
    avg_exercises_per_day: float
    current_streak: int
    longest_streak: int


@dataclass(frozen=True)
class DailyCompletion:
    """Logged exercise counts for one calendar date."""

    date: date
    total_exercises: int
    completed: int
    skipped: int
    completion_rate: float


@dataclass(frozen=True)
class ExerciseFrequency:
    exercise_name: str
    count: int


@dataclass(frozen=True)
class WeekdayActivity:
    total: int = 0
    completed: int = 0


@dataclass(frozen=True)
class TimelineStats:
    """Exercise patterns over a trailing window."""

    top_exercises: list[ExerciseFrequency]
    day_of_week_stats: dict[str, WeekdayActivity]
    total_workout_days: int
    current_streak: int
    longest_streak: int
