"""Supabase repository for profiles and their intake programs."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from fitness_coach.config import parse_workout_days
from fitness_coach.domain.profiles import AdaptiveProgram, GoalBasedProgram, Profile
from fitness_coach.services.plan_generation import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Read-only Supabase access to profiles."""

    client: Client

    def get_profile(self, profile_id: UUID) -> Profile | None:
        """Return a profile with whichever program is attached to it."""
        response = (
            self.client.table("profiles")
            .select(
                "id, gender, age, height_cm, current_weight_kg, target_weight_kg, "
                "commitment, workout_days"
            )
            .eq("id", str(profile_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return Profile(
            id=UUID(row["id"]),
            gender=row.get("gender"),
            age=_optional_int(row.get("age")),
            height_cm=_optional_float(row.get("height_cm")),
            current_weight_kg=_optional_float(row.get("current_weight_kg")),
            target_weight_kg=_optional_float(row.get("target_weight_kg")),
            commitment=row.get("commitment"),
            workout_days=parse_workout_days(row.get("workout_days")),
            adaptive_program=self._adaptive_program(profile_id),
            goal_based_program=self._goal_based_program(profile_id),
        )

    def _adaptive_program(self, profile_id: UUID) -> AdaptiveProgram | None:
        response = (
            self.client.table("adaptive_programs")
            .select("id, affected_limbs, purposes, program_name")
            .eq("profile_id", str(profile_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return AdaptiveProgram(
            id=UUID(row["id"]),
            affected_limbs=str(row.get("affected_limbs") or ""),
            purposes=list(row.get("purposes") or []),
            program_name=row.get("program_name"),
        )

    def _goal_based_program(self, profile_id: UUID) -> GoalBasedProgram | None:
        response = (
            self.client.table("goal_based_programs")
            .select(
                "id, primary_goal, fitness_level, target_areas, "
                "available_equipment, program_name"
            )
            .eq("profile_id", str(profile_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return GoalBasedProgram(
            id=UUID(row["id"]),
            primary_goal=row.get("primary_goal"),
            fitness_level=row.get("fitness_level"),
            target_areas=list(row.get("target_areas") or []),
            available_equipment=list(row.get("available_equipment") or []),
            program_name=row.get("program_name"),
        )


def _optional_int(value: object) -> int | None:
    return int(value) if value is not None else None


def _optional_float(value: object) -> float | None:
    return float(value) if value is not None else None
