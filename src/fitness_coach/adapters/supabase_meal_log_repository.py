"""Supabase repository for per-day meal logs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fitness_coach.domain.meal_logs import MealLogEntry, MealSlotLog
from fitness_coach.services.meal_logs import MealLogRepository


@dataclass
class SupabaseMealLogRepository(MealLogRepository):
    """Supabase implementation storing the four meal slots as JSON."""

    client: Client

    def find_meal_log(self, user_id: UUID, day: int) -> MealLogEntry | None:
        """Return the meal log row for a user and day."""
        response = (
            self.client.table("meal_logs")
            .select("id, user_id, day, date, total_calories, consumed_calories, meals")
            .eq("user_id", str(user_id))
            .eq("day", day)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def list_meal_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealLogEntry]:
        """Return meal logs dated within the bounds, oldest first."""
        response = (
            self.client.table("meal_logs")
            .select("id, user_id, day, date, total_calories, consumed_calories, meals")
            .eq("user_id", str(user_id))
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date")
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def save_meal_log(self, entry: MealLogEntry) -> MealLogEntry:
        """Upsert the meal log keyed by user and day."""
        response = (
            self.client.table("meal_logs")
            .upsert(
                {
                    "user_id": str(entry.user_id),
                    "day": entry.day,
                    "date": entry.date.isoformat(),
                    "total_calories": entry.total_calories,
                    "consumed_calories": entry.consumed_calories,
                    "meals": {
                        name: _slot_document(slot)
                        for name, slot in entry.meals.items()
                    },
                },
                on_conflict="user_id,day",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save meal log")
        return _parse_entry(response.data[0])


def _slot_document(slot: MealSlotLog) -> dict[str, object]:
    return {
        "status": slot.status,
        "description": slot.description,
        "calories": slot.calories,
        "skip_reason": slot.skip_reason,
        "completed_at": slot.completed_at.isoformat() if slot.completed_at else None,
    }


def _parse_slot(document: dict[str, object]) -> MealSlotLog:
    completed_at = document.get("completed_at")
    return MealSlotLog(
        status=str(document.get("status") or "pending"),
        description=document.get("description"),
        calories=float(document.get("calories") or 0),
        skip_reason=document.get("skip_reason"),
        completed_at=datetime.fromisoformat(completed_at) if completed_at else None,
    )


def _parse_entry(row: dict[str, object]) -> MealLogEntry:
    return MealLogEntry(
        id=UUID(row["id"]) if row.get("id") else None,
        user_id=UUID(row["user_id"]),
        day=int(row["day"]),
        date=datetime.fromisoformat(row["date"]),
        total_calories=float(row.get("total_calories") or 0),
        consumed_calories=float(row.get("consumed_calories") or 0),
        meals={
            name: _parse_slot(document)
            for name, document in (row.get("meals") or {}).items()
        },
    )
