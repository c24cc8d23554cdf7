"""Supabase-backed user repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from fitness_coach.domain.models import UserRecord
from fitness_coach.services.users import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user plan references."""

    client: Client

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user row for an id, if present."""
        response = (
            self.client.table("users")
            .select("id, email, profile_id, fitness_plan_id")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return UserRecord(
            id=UUID(row["id"]),
            email=row.get("email"),
            profile_id=_optional_uuid(row.get("profile_id")),
            fitness_plan_id=_optional_uuid(row.get("fitness_plan_id")),
        )

    def assign_plan(self, profile_id: UUID, plan_id: UUID) -> int:
        """Point every user with the profile at the plan."""
        response = (
            self.client.table("users")
            .update({"fitness_plan_id": str(plan_id)})
            .eq("profile_id", str(profile_id))
            .execute()
        )
        return len(response.data or [])

    def clear_plan(self, profile_id: UUID) -> None:
        """Remove the plan reference from users with the profile."""
        self.client.table("users").update({"fitness_plan_id": None}).eq(
            "profile_id", str(profile_id)
        ).execute()


def _optional_uuid(value: object) -> UUID | None:
    return UUID(str(value)) if value else None
