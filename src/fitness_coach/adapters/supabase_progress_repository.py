"""Supabase repository for day progress snapshots."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fitness_coach.domain.progress import (
    DayProgressSnapshot,
    ExerciseProgress,
    ExerciseSlotProgress,
    MealSlotProgress,
    NutritionProgress,
    OverallProgress,
)
from fitness_coach.services.progress import SnapshotRepository

_SNAPSHOT_COLUMNS = (
    "user_id, fitness_plan_id, day, date, day_type, exercise_progress, "
    "nutrition_progress, overall_progress, last_updated"
)


@dataclass
class SupabaseProgressRepository(SnapshotRepository):
    """Supabase implementation keyed by ``(user_id, day)``."""

    client: Client

    def find_snapshot(self, user_id: UUID, day: int) -> DayProgressSnapshot | None:
        """Return the snapshot for a user and day."""
        response = (
            self.client.table("day_progress")
            .select(_SNAPSHOT_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("day", day)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_snapshot(response.data[0])

    def upsert_snapshot(self, snapshot: DayProgressSnapshot) -> None:
        """Insert or replace a snapshot."""
        self.client.table("day_progress").upsert(
            _snapshot_row(snapshot), on_conflict="user_id,day"
        ).execute()

    def list_snapshots(self, user_id: UUID) -> list[DayProgressSnapshot]:
        """Return all snapshots for a user ordered by day."""
        response = (
            self.client.table("day_progress")
            .select(_SNAPSHOT_COLUMNS)
            .eq("user_id", str(user_id))
            .order("day", desc=False)
            .execute()
        )
        return [_parse_snapshot(row) for row in response.data or []]

    def delete_snapshot(self, user_id: UUID, day: int) -> bool:
        """Delete a snapshot."""
        response = (
            self.client.table("day_progress")
            .delete()
            .eq("user_id", str(user_id))
            .eq("day", day)
            .execute()
        )
        return bool(response.data)


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _parse_datetime(value: object) -> datetime | None:
    return datetime.fromisoformat(str(value)) if value else None


def _snapshot_row(snapshot: DayProgressSnapshot) -> dict[str, object]:
    exercise = snapshot.exercise_progress
    nutrition = snapshot.nutrition_progress
    overall = snapshot.overall_progress
    return {
        "user_id": str(snapshot.user_id),
        "fitness_plan_id": str(snapshot.fitness_plan_id),
        "day": snapshot.day,
        "date": snapshot.date.isoformat(),
        "day_type": snapshot.day_type,
        "exercise_progress": {
            "total": exercise.total,
            "completed": exercise.completed,
            "skipped": exercise.skipped,
            "pending": exercise.pending,
            "completion_percentage": exercise.completion_percentage,
            "exercises": [
                {
                    "exercise_number": slot.exercise_number,
                    "exercise_name": slot.exercise_name,
                    "target_sets_reps": slot.target_sets_reps,
                    "status": slot.status,
                    "actual_sets": slot.actual_sets,
                    "actual_reps": slot.actual_reps,
                    "skip_reason": slot.skip_reason,
                    "log_id": str(slot.log_id) if slot.log_id else None,
                }
                for slot in exercise.exercises
            ],
        },
        "nutrition_progress": {
            "total_meals": nutrition.total_meals,
            "completed": nutrition.completed,
            "skipped": nutrition.skipped,
            "pending": nutrition.pending,
            "completion_percentage": nutrition.completion_percentage,
            "target_calories": nutrition.target_calories,
            "consumed_calories": nutrition.consumed_calories,
            "calories_percentage": nutrition.calories_percentage,
            "meals": {
                name: {
                    "target_description": slot.target_description,
                    "target_calories": slot.target_calories,
                    "status": slot.status,
                    "actual_description": slot.actual_description,
                    "actual_calories": slot.actual_calories,
                    "skip_reason": slot.skip_reason,
                    "completed_at": _isoformat(slot.completed_at),
                }
                for name, slot in nutrition.meals.items()
            },
        },
        "overall_progress": {
            "is_exercise_complete": overall.is_exercise_complete,
            "is_nutrition_complete": overall.is_nutrition_complete,
            "is_day_complete": overall.is_day_complete,
            "completion_percentage": overall.completion_percentage,
        },
        "last_updated": snapshot.last_updated.isoformat(),
    }


def _parse_snapshot(row: dict[str, object]) -> DayProgressSnapshot:
    exercise = row.get("exercise_progress") or {}
    nutrition = row.get("nutrition_progress") or {}
    overall = row.get("overall_progress") or {}
    return DayProgressSnapshot(
        user_id=UUID(row["user_id"]),
        fitness_plan_id=UUID(row["fitness_plan_id"]),
        day=int(row["day"]),
        date=datetime.fromisoformat(row["date"]),
        day_type=str(row.get("day_type", "workout")),
        exercise_progress=ExerciseProgress(
            total=int(exercise.get("total", 0)),
            completed=int(exercise.get("completed", 0)),
            skipped=int(exercise.get("skipped", 0)),
            pending=int(exercise.get("pending", 0)),
            completion_percentage=int(exercise.get("completion_percentage", 0)),
            exercises=[
                ExerciseSlotProgress(
                    exercise_number=int(slot["exercise_number"]),
                    exercise_name=str(slot.get("exercise_name", "")),
                    target_sets_reps=str(slot.get("target_sets_reps", "")),
                    status=str(slot.get("status", "pending")),
                    actual_sets=slot.get("actual_sets"),
                    actual_reps=slot.get("actual_reps"),
                    skip_reason=slot.get("skip_reason"),
                    log_id=UUID(slot["log_id"]) if slot.get("log_id") else None,
                )
                for slot in exercise.get("exercises") or []
            ],
        ),
        nutrition_progress=NutritionProgress(
            total_meals=int(nutrition.get("total_meals", 4)),
            completed=int(nutrition.get("completed", 0)),
            skipped=int(nutrition.get("skipped", 0)),
            pending=int(nutrition.get("pending", 0)),
            completion_percentage=int(nutrition.get("completion_percentage", 0)),
            target_calories=float(nutrition.get("target_calories", 0)),
            consumed_calories=float(nutrition.get("consumed_calories", 0)),
            calories_percentage=int(nutrition.get("calories_percentage", 0)),
            meals={
                name: MealSlotProgress(
                    target_description=slot.get("target_description"),
                    target_calories=float(slot.get("target_calories") or 0),
                    status=str(slot.get("status", "pending")),
                    actual_description=slot.get("actual_description"),
                    actual_calories=slot.get("actual_calories"),
                    skip_reason=slot.get("skip_reason"),
                    completed_at=_parse_datetime(slot.get("completed_at")),
                )
                for name, slot in (nutrition.get("meals") or {}).items()
            },
        ),
        overall_progress=OverallProgress(
            is_exercise_complete=bool(overall.get("is_exercise_complete", False)),
            is_nutrition_complete=bool(overall.get("is_nutrition_complete", False)),
            is_day_complete=bool(overall.get("is_day_complete", False)),
            completion_percentage=int(overall.get("completion_percentage", 0)),
        ),
        last_updated=datetime.fromisoformat(row["last_updated"]),
    )
