"""Day, week and whole-program progress aggregation."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from fitness_coach.domain.errors import (
    DayNotFoundInPlanError,
    InvalidDayNumberError,
    InvalidRangeError,
    SnapshotNotFoundError,
)
from fitness_coach.domain.exercise_logs import ExerciseLogEntry
from fitness_coach.domain.meal_logs import MealLogEntry
from fitness_coach.domain.progress import (
    DayProgressSnapshot,
    OverallSummary,
    ProgramInfo,
    ProgramProgress,
    WeeklySummary,
    build_snapshot,
    fold_snapshots,
    percentage,
    round_half_up,
)
from fitness_coach.services.data_access import data_access
from fitness_coach.services.plans import PlanService

DAYS_PER_WEEK = 7
RECENT_DAYS = 7

_logger = logging.getLogger(__name__)


class ExerciseLogProvider(Protocol):
    """Source of exercise logs for a plan day."""

    def find_logs(self, user_id: UUID, day_number: int) -> list[ExerciseLogEntry]:
        """Return every log for the user and day."""


class MealLogProvider(Protocol):
    """Source of the meal log for a plan day."""

    def find_meal_log(self, user_id: UUID, day: int) -> MealLogEntry | None:
        """Return the user's meal log for the day, if any."""


class SnapshotRepository(Protocol):
    """Persistence interface for day progress snapshots."""

    def find_snapshot(self, user_id: UUID, day: int) -> DayProgressSnapshot | None:
        """Return the stored snapshot for a user and day."""

    def upsert_snapshot(self, snapshot: DayProgressSnapshot) -> None:
        """Insert or replace the snapshot keyed by user and day."""

    def list_snapshots(self, user_id: UUID) -> list[DayProgressSnapshot]:
        """Return every snapshot for a user ordered by day."""

    def delete_snapshot(self, user_id: UUID, day: int) -> bool:
        """Delete a snapshot and return True when one existed."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class DayProgressService:
    """Reconciles plan targets with logs into per-day snapshots."""

    plan_service: PlanService
    exercise_logs: ExerciseLogProvider
    meal_logs: MealLogProvider
    snapshots: SnapshotRepository
    clock: Callable[[], datetime] = field(default=_utc_now)

    def get_day_progress(self, user_id: UUID, day: int) -> DayProgressSnapshot:
        """Return an up-to-date snapshot for a day, creating it on first read."""
        _require_positive(day, "day")
        plan = self.plan_service.get_plan_for_user(user_id)
        plan_day = plan.find_day(day)
        if plan_day is None:
            raise DayNotFoundInPlanError(day)

        with data_access("load day progress"):
            existing = self.snapshots.find_snapshot(user_id, day)
            exercise_logs = (
                []
                if plan_day.is_rest_day
                else self.exercise_logs.find_logs(user_id, day)
            )
            meal_log = self.meal_logs.find_meal_log(user_id, day)

        now = self.clock()
        snapshot = build_snapshot(
            user_id=user_id,
            fitness_plan_id=plan.id,
            plan_day=plan_day,
            exercise_logs=exercise_logs,
            meal_log=meal_log,
            date=existing.date if existing else now,
            now=now,
        )
        with data_access("save day progress"):
            self.snapshots.upsert_snapshot(snapshot)
        return snapshot

    def refresh_day_progress(self, user_id: UUID, day: int) -> DayProgressSnapshot:
        """Force a recompute of a day's snapshot."""
        return self.get_day_progress(user_id, day)

    def delete_day_progress(self, user_id: UUID, day: int) -> None:
        """Remove a stored snapshot or raise ``SnapshotNotFoundError``."""
        _require_positive(day, "day")
        with data_access("delete day progress"):
            deleted = self.snapshots.delete_snapshot(user_id, day)
        if not deleted:
            raise SnapshotNotFoundError

    def get_progress_range(
        self, user_id: UUID, start_day: int, end_day: int
    ) -> list[DayProgressSnapshot]:
        """Return snapshots for ``start_day..end_day``, skipping days that fail."""
        if start_day < 1 or end_day < start_day:
            raise InvalidRangeError
        results: list[DayProgressSnapshot] = []
        for day in range(start_day, end_day + 1):
            try:
                results.append(self.get_day_progress(user_id, day))
            except Exception as exc:  # noqa: BLE001
                _logger.warning("Skipping progress for day %s: %s", day, exc)
        return results

    def get_weekly_progress(self, user_id: UUID, week_number: int) -> WeeklySummary:
        """Fold one week's snapshots into a summary."""
        _require_positive(week_number, "week")
        start_day = (week_number - 1) * DAYS_PER_WEEK + 1
        end_day = week_number * DAYS_PER_WEEK
        days = self.get_progress_range(user_id, start_day, end_day)
        exercise_stats, nutrition_stats = fold_snapshots(days)
        average = (
            round_half_up(
                sum(day.overall_progress.completion_percentage for day in days)
                / len(days)
            )
            if days
            else 0
        )
        return WeeklySummary(
            week_number=week_number,
            start_day=start_day,
            end_day=end_day,
            total_days=len(days),
            completed_days=sum(
                1 for day in days if day.overall_progress.is_day_complete
            ),
            workout_days=sum(1 for day in days if day.day_type == "workout"),
            rest_days=sum(1 for day in days if day.day_type == "rest"),
            average_completion=average,
            exercise_stats=exercise_stats,
            nutrition_stats=nutrition_stats,
            days=days,
        )

    def get_overall_progress(self, user_id: UUID) -> OverallSummary:
        """Fold every stored snapshot for the user into a program summary."""
        plan = self.plan_service.get_plan_for_user(user_id)
        with data_access("list day progress"):
            snapshots = sorted(
                self.snapshots.list_snapshots(user_id), key=lambda item: item.day
            )
        exercise_stats, nutrition_stats = fold_snapshots(snapshots)
        total_days = plan.overview.total_days
        days_completed = sum(
            1 for snapshot in snapshots if snapshot.overall_progress.is_day_complete
        )
        return OverallSummary(
            program_info=ProgramInfo(
                total_days=total_days,
                active_days=plan.overview.active_days,
                rest_days=plan.overview.rest_days,
            ),
            progress=ProgramProgress(
                days_tracked=len(snapshots),
                days_completed=days_completed,
                current_day=max((snapshot.day for snapshot in snapshots), default=0),
                overall_completion_percentage=percentage(days_completed, total_days),
            ),
            exercises=exercise_stats,
            nutrition=nutrition_stats,
            recent_days=snapshots[-RECENT_DAYS:],
        )

    def get_current_day_progress(
        self, user_id: UUID
    ) -> tuple[int, DayProgressSnapshot]:
        """Return the latest tracked day (day 1 if none) and its snapshot."""
        overall = self.get_overall_progress(user_id)
        current_day = overall.progress.current_day or 1
        return current_day, self.get_day_progress(user_id, current_day)


def _require_positive(value: int, label: str) -> None:
    if value < 1:
        raise InvalidDayNumberError(label)
