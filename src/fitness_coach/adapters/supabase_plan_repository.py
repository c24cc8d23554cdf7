"""Supabase repository for generated fitness plans."""

from dataclasses import asdict, dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fitness_coach.domain.plans import (
    FitnessPlan,
    PlanDay,
    PlanExercise,
    PlanMeal,
    PlanOverview,
)
from fitness_coach.services.plans import PlanRepository

_PLAN_COLUMNS = (
    "id, profile_id, plan_type, overview, days, safety_notes, program_snapshot, "
    "generated_at"
)


@dataclass
class SupabasePlanRepository(PlanRepository):
    """Supabase implementation for plans stored as JSON documents."""

    client: Client

    def get_plan(self, plan_id: UUID) -> FitnessPlan | None:
        """Return a plan by id."""
        response = (
            self.client.table("fitness_plans")
            .select(_PLAN_COLUMNS)
            .eq("id", str(plan_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_plan(response.data[0])

    def get_latest_for_profile(self, profile_id: UUID) -> FitnessPlan | None:
        """Return the newest plan generated for a profile."""
        response = (
            self.client.table("fitness_plans")
            .select(_PLAN_COLUMNS)
            .eq("profile_id", str(profile_id))
            .order("generated_at", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_plan(response.data[0])

    def list_plans(self) -> list[FitnessPlan]:
        """Return every plan, newest first."""
        response = (
            self.client.table("fitness_plans")
            .select(_PLAN_COLUMNS)
            .order("generated_at", desc=True)
            .execute()
        )
        return [_parse_plan(row) for row in response.data or []]

    def save_plan(
        self, plan: FitnessPlan, profile_snapshot: dict[str, object]
    ) -> None:
        """Insert a plan row."""
        response = (
            self.client.table("fitness_plans")
            .insert(
                {
                    "id": str(plan.id),
                    "profile_id": str(plan.profile_id),
                    "plan_type": plan.plan_type,
                    "overview": asdict(plan.overview),
                    "days": [_day_document(day) for day in plan.days],
                    "safety_notes": list(plan.safety_notes),
                    "program_snapshot": plan.program_snapshot,
                    "profile_snapshot": profile_snapshot,
                    "generated_at": plan.generated_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save fitness plan")

    def delete_plan(self, plan_id: UUID) -> bool:
        """Delete a plan row."""
        response = (
            self.client.table("fitness_plans")
            .delete()
            .eq("id", str(plan_id))
            .execute()
        )
        return bool(response.data)


def _day_document(day: PlanDay) -> dict[str, object]:
    document = asdict(day)
    document["meals"] = {name: asdict(meal) for name, meal in day.meals.items()}
    return document


def _parse_plan(row: dict[str, object]) -> FitnessPlan:
    overview = row.get("overview") or {}
    return FitnessPlan(
        id=UUID(row["id"]),
        profile_id=UUID(row["profile_id"]),
        plan_type=str(row.get("plan_type", "")),
        overview=PlanOverview(
            total_days=int(overview.get("total_days", 0)),
            active_days=int(overview.get("active_days", 0)),
            rest_days=int(overview.get("rest_days", 0)),
            estimated_weekly_calories_burned=overview.get(
                "estimated_weekly_calories_burned"
            ),
        ),
        days=[_parse_day(day) for day in row.get("days") or []],
        generated_at=datetime.fromisoformat(row["generated_at"]),
        safety_notes=list(row.get("safety_notes") or []),
        program_snapshot=row.get("program_snapshot") or {},
    )


def _parse_day(document: dict[str, object]) -> PlanDay:
    exercises = [
        PlanExercise(
            exercise_number=int(item.get("exercise_number", index)),
            name=str(item.get("name", "")),
            sets_reps=str(item.get("sets_reps", "")),
            description=item.get("description"),
            steps=list(item.get("steps") or []),
            tips=list(item.get("tips") or []),
        )
        for index, item in enumerate(document.get("exercises") or [], start=1)
    ]
    meals = {
        name: PlanMeal(
            description=meal.get("description"),
            calories=float(meal.get("calories") or 0),
        )
        for name, meal in (document.get("meals") or {}).items()
    }
    return PlanDay(
        day=int(document["day"]),
        day_type=str(document.get("day_type", "rest")),
        exercises=exercises,
        meals=meals,
        total_calories=float(document.get("total_calories") or 0),
        focus=document.get("focus"),
        intensity=document.get("intensity"),
        calories_burned=document.get("calories_burned"),
        nutrition_explanation=document.get("nutrition_explanation"),
    )
