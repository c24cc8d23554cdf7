"""Exercise logging service."""

from collections import Counter, defaultdict
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime, time, timedelta
from typing import Protocol
from uuid import UUID

from fitness_coach.config import WEEKDAYS
from fitness_coach.domain.errors import (
    ExerciseLogNotFoundError,
    InvalidLogError,
)
from fitness_coach.domain.exercise_logs import (
    EXERCISE_LOG_STATUSES,
    DailyCompletion,
    ExerciseFrequency,
    ExerciseLogEntry,
    ExerciseLogInput,
    ExerciseSummaryStats,
    LogFilters,
    TimelineStats,
    WeekdayActivity,
)
from fitness_coach.services.data_access import data_access

TOP_EXERCISES = 5


class ExerciseLogRepository(Protocol):
    """Persistence interface for exercise logs."""

    def create_log(self, user_id: UUID, data: ExerciseLogInput) -> ExerciseLogEntry:
        """Insert a log and return it."""

    def find_logs(self, user_id: UUID, day_number: int) -> list[ExerciseLogEntry]:
        """Return every log for a plan day."""

    def list_logs(self, user_id: UUID, filters: LogFilters) -> list[ExerciseLogEntry]:
        """Return logs matching the filters, newest first."""

    def find_by_exercise(
        self,
        user_id: UUID,
        day_number: int,
        exercise_number: int,
        start: datetime | None,
        end: datetime | None,
    ) -> list[ExerciseLogEntry]:
        """Return logs for one exercise slot, newest first."""

    def get_log(self, log_id: UUID, user_id: UUID) -> ExerciseLogEntry | None:
        """Return a log owned by the user, if present."""

    def update_log(
        self, log_id: UUID, user_id: UUID, updates: dict[str, object]
    ) -> ExerciseLogEntry | None:
        """Apply updates to a log and return the new row."""

    def delete_log(self, log_id: UUID, user_id: UUID) -> bool:
        """Delete a log and return True when a row was removed."""


@dataclass
class ExerciseLogService:
    """Service for recording and querying completed or skipped exercises."""

    repository: ExerciseLogRepository

    def create_log(self, user_id: UUID, data: ExerciseLogInput) -> ExerciseLogEntry:
        """Validate and store a new exercise log."""
        normalized = _normalize_input(data)
        with data_access("create exercise log"):
            return self.repository.create_log(user_id, normalized)

    def find_logs(self, user_id: UUID, day_number: int) -> list[ExerciseLogEntry]:
        """Return every log recorded for a plan day."""
        with data_access("load exercise logs"):
            return self.repository.find_logs(user_id, day_number)

    def get_by_day_and_exercise(
        self,
        user_id: UUID,
        day_number: int,
        exercise_number: int,
        on_date: date | None = None,
    ) -> list[ExerciseLogEntry]:
        """Return logs for an exercise slot, optionally limited to one date."""
        start = end = None
        if on_date is not None:
            start = datetime.combine(on_date, time.min, tzinfo=UTC)
            end = datetime.combine(on_date, time.max, tzinfo=UTC)
        with data_access("load exercise logs"):
            return self.repository.find_by_exercise(
                user_id, day_number, exercise_number, start, end
            )

    def list_logs(
        self, user_id: UUID, filters: LogFilters | None = None
    ) -> list[ExerciseLogEntry]:
        """Return the user's logs with optional filters applied."""
        resolved = filters or LogFilters()
        if resolved.status is not None and resolved.status not in (
            EXERCISE_LOG_STATUSES
        ):
            raise InvalidLogError('Status must be either "completed" or "skipped"')
        with data_access("list exercise logs"):
            return self.repository.list_logs(user_id, resolved)

    def get_log(self, log_id: UUID, user_id: UUID) -> ExerciseLogEntry:
        """Return a single log or raise ``ExerciseLogNotFoundError``."""
        with data_access("load exercise log"):
            log = self.repository.get_log(log_id, user_id)
        if log is None:
            raise ExerciseLogNotFoundError
        return log

    def update_log(
        self, log_id: UUID, user_id: UUID, updates: dict[str, object]
    ) -> ExerciseLogEntry:
        """Apply a partial update to a log."""
        status = updates.get("status")
        if status is not None and status not in EXERCISE_LOG_STATUSES:
            raise InvalidLogError('Status must be either "completed" or "skipped"')
        if status == "completed" and (
            not updates.get("actual_sets") or not updates.get("actual_reps")
        ):
            raise InvalidLogError(
                "actualSets and actualReps are required for completed exercises"
            )
        with data_access("update exercise log"):
            log = self.repository.update_log(log_id, user_id, updates)
        if log is None:
            raise ExerciseLogNotFoundError
        return log

    def delete_log(self, log_id: UUID, user_id: UUID) -> None:
        """Delete a log or raise ``ExerciseLogNotFoundError``."""
        with data_access("delete exercise log"):
            deleted = self.repository.delete_log(log_id, user_id)
        if not deleted:
            raise ExerciseLogNotFoundError

    def summary_stats(
        self, user_id: UUID, days: int = 7, today: date | None = None
    ) -> ExerciseSummaryStats:
        """Summarize logging activity over the trailing ``days`` days."""
        current = today or datetime.now(tz=UTC).date()
        logs = self._window_logs(user_id, days, current)

        completed = sum(1 for log in logs if log.status == "completed")
        skipped = sum(1 for log in logs if log.status == "skipped")
        active_dates = {log.date.date() for log in logs}
        return ExerciseSummaryStats(
            period_days=days,
            total_exercises=len(logs),
            completed=completed,
            skipped=skipped,
            completion_rate=round(completed / len(logs) * 100, 1) if logs else 0,
            unique_days=len(active_dates),
            avg_exercises_per_day=round(len(logs) / days, 1),
            current_streak=current_streak(active_dates, current),
            longest_streak=longest_streak(active_dates),
        )

    def completion_stats(
        self, user_id: UUID, days: int = 7, today: date | None = None
    ) -> list[DailyCompletion]:
        """Group the trailing window's logs by calendar date, oldest first."""
        current = today or datetime.now(tz=UTC).date()
        by_date: dict[date, list[ExerciseLogEntry]] = defaultdict(list)
        for log in self._window_logs(user_id, days, current):
            by_date[log.date.date()].append(log)

        result = []
        for logged_on in sorted(by_date):
            logs = by_date[logged_on]
            completed = sum(1 for log in logs if log.status == "completed")
            result.append(
                DailyCompletion(
                    date=logged_on,
                    total_exercises=len(logs),
                    completed=completed,
                    skipped=sum(1 for log in logs if log.status == "skipped"),
                    completion_rate=round(completed / len(logs) * 100, 1),
                )
            )
        return result

    def timeline_stats(
        self, user_id: UUID, days: int = 30, today: date | None = None
    ) -> TimelineStats:
        """Return top exercises, weekday activity and streaks."""
        current = today or datetime.now(tz=UTC).date()
        logs = self._window_logs(user_id, days, current)

        frequency = Counter(
            log.exercise_name for log in logs if log.status == "completed"
        )
        weekdays = {name: [0, 0] for name in WEEKDAYS}
        for log in logs:
            counts = weekdays[WEEKDAYS[log.date.weekday()]]
            counts[0] += 1
            if log.status == "completed":
                counts[1] += 1

        active_dates = {log.date.date() for log in logs}
        return TimelineStats(
            top_exercises=[
                ExerciseFrequency(exercise_name=name, count=count)
                for name, count in frequency.most_common(TOP_EXERCISES)
            ],
            day_of_week_stats={
                name: WeekdayActivity(total=total, completed=completed)
                for name, (total, completed) in weekdays.items()
            },
            total_workout_days=len(active_dates),
            current_streak=current_streak(active_dates, current),
            longest_streak=longest_streak(active_dates),
        )

    def _window_logs(
        self, user_id: UUID, days: int, today: date
    ) -> list[ExerciseLogEntry]:
        if days < 1:
            raise InvalidLogError("period must be a positive number of days")
        start = datetime.combine(today - timedelta(days=days), time.min, tzinfo=UTC)
        end = datetime.combine(today, time.max, tzinfo=UTC)
        return self.list_logs(user_id, LogFilters(start=start, end=end))


def current_streak(active_dates: set[date], today: date) -> int:
    """Count consecutive active days ending today."""
    streak = 0
    check = today
    while check in active_dates:
        streak += 1
        check -= timedelta(days=1)
    return streak


def longest_streak(active_dates: set[date]) -> int:
    """Return the longest run of consecutive active days."""
    if not active_dates:
        return 0
    ordered = sorted(active_dates)
    longest = current = 1
    for previous, day in zip(ordered, ordered[1:], strict=False):
        if (day - previous).days == 1:
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest


def _normalize_input(data: ExerciseLogInput) -> ExerciseLogInput:
    if (
        not data.day_number
        or not data.exercise_number
        or not data.exercise_name
        or not data.target_sets_reps
        or not data.status
    ):
        raise InvalidLogError(
            "Missing required fields: dayNumber, exerciseNumber, exerciseName, "
            "targetSetsReps, status"
        )
    if data.day_number < 1 or data.exercise_number < 1:
        raise InvalidLogError("dayNumber and exerciseNumber must be positive")
    if data.status not in EXERCISE_LOG_STATUSES:
        raise InvalidLogError('Status must be either "completed" or "skipped"')
    logged_at = data.date or datetime.now(tz=UTC)
    if data.status == "completed":
        if not data.actual_sets or not data.actual_reps:
            raise InvalidLogError(
                "actualSets and actualReps are required for completed exercises"
            )
        return replace(data, date=logged_at, skip_reason=None)
    return replace(
        data,
        date=logged_at,
        actual_sets=None,
        actual_reps=None,
        skip_reason=data.skip_reason or "",
    )
