"""Supabase repository for exercise logs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fitness_coach.domain.exercise_logs import (
    ExerciseLogEntry,
    ExerciseLogInput,
    LogFilters,
)
from fitness_coach.services.exercise_logs import ExerciseLogRepository

_LOG_COLUMNS = (
    "id, user_id, day_number, exercise_number, date, exercise_name, "
    "target_sets_reps, status, actual_sets, actual_reps, skip_reason, created_at"
)


@dataclass
class SupabaseExerciseLogRepository(ExerciseLogRepository):
    """Supabase implementation for exercise logs."""

    client: Client

    def create_log(self, user_id: UUID, data: ExerciseLogInput) -> ExerciseLogEntry:
        """Insert a log row and return it."""
        response = (
            self.client.table("exercise_logs")
            .insert(
                {
                    "user_id": str(user_id),
                    "day_number": data.day_number,
                    "exercise_number": data.exercise_number,
                    "date": data.date.isoformat() if data.date else None,
                    "exercise_name": data.exercise_name,
                    "target_sets_reps": data.target_sets_reps,
                    "status": data.status,
                    "actual_sets": data.actual_sets,
                    "actual_reps": data.actual_reps,
                    "skip_reason": data.skip_reason,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create exercise log")
        return _parse_log(response.data[0])

    def find_logs(self, user_id: UUID, day_number: int) -> list[ExerciseLogEntry]:
        """Return every log for a plan day in recording order."""
        response = (
            self.client.table("exercise_logs")
            .select(_LOG_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("day_number", day_number)
            .order("date", desc=False)
            .execute()
        )
        return [_parse_log(row) for row in response.data or []]

    def list_logs(self, user_id: UUID, filters: LogFilters) -> list[ExerciseLogEntry]:
        """Return logs matching the filters, newest first."""
        query = (
            self.client.table("exercise_logs")
            .select(_LOG_COLUMNS)
            .eq("user_id", str(user_id))
        )
        if filters.start is not None:
            query = query.gte("date", filters.start.isoformat())
        if filters.end is not None:
            query = query.lte("date", filters.end.isoformat())
        if filters.status is not None:
            query = query.eq("status", filters.status)
        if filters.day_number is not None:
            query = query.eq("day_number", filters.day_number)
        response = query.order("date", desc=True).execute()
        return [_parse_log(row) for row in response.data or []]

    def find_by_exercise(
        self,
        user_id: UUID,
        day_number: int,
        exercise_number: int,
        start: datetime | None,
        end: datetime | None,
    ) -> list[ExerciseLogEntry]:
        """Return logs for one exercise slot, newest first."""
        query = (
            self.client.table("exercise_logs")
            .select(_LOG_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("day_number", day_number)
            .eq("exercise_number", exercise_number)
        )
        if start is not None:
            query = query.gte("date", start.isoformat())
        if end is not None:
            query = query.lte("date", end.isoformat())
        response = query.order("date", desc=True).execute()
        return [_parse_log(row) for row in response.data or []]

    def get_log(self, log_id: UUID, user_id: UUID) -> ExerciseLogEntry | None:
        """Return a log owned by the user."""
        response = (
            self.client.table("exercise_logs")
            .select(_LOG_COLUMNS)
            .eq("id", str(log_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_log(response.data[0])

    def update_log(
        self, log_id: UUID, user_id: UUID, updates: dict[str, object]
    ) -> ExerciseLogEntry | None:
        """Apply updates to a log owned by the user."""
        payload = {
            key: value.isoformat() if isinstance(value, datetime) else value
            for key, value in updates.items()
        }
        response = (
            self.client.table("exercise_logs")
            .update(payload)
            .eq("id", str(log_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_log(response.data[0])

    def delete_log(self, log_id: UUID, user_id: UUID) -> bool:
        """Delete a log owned by the user."""
        response = (
            self.client.table("exercise_logs")
            .delete()
            .eq("id", str(log_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)


def _parse_log(row: dict[str, object]) -> ExerciseLogEntry:
    created_at = row.get("created_at")
    return ExerciseLogEntry(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        day_number=int(row["day_number"]),
        exercise_number=int(row["exercise_number"]),
        date=datetime.fromisoformat(row["date"]),
        exercise_name=str(row.get("exercise_name", "")),
        target_sets_reps=str(row.get("target_sets_reps", "")),
        status=str(row["status"]),
        actual_sets=row.get("actual_sets"),
        actual_reps=row.get("actual_reps"),
        skip_reason=row.get("skip_reason"),
        created_at=datetime.fromisoformat(created_at) if created_at else None,
    )
