"""Admin API endpoints with simple token auth."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request

from fitness_coach.api.dependencies import get_container, require_admin
from fitness_coach.api.serialization import success

router = APIRouter(
    prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)]
)


@router.get("/health")
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/plans")
async def list_plans(request: Request) -> dict[str, object]:
    """Return every stored plan."""
    plans = get_container(request).plan_service.list_plans()
    return {**success(plans), "count": len(plans)}


@router.delete("/plans/{plan_id}")
async def delete_plan(plan_id: UUID, request: Request) -> dict[str, object]:
    """Delete a plan and detach it from its users."""
    get_container(request).plan_service.delete_plan(plan_id)
    return {"success": True, "message": "Fitness plan deleted"}


@router.get("/workouts/names")
async def workout_names(request: Request) -> dict[str, object]:
    """Return unique workout focuses and exercise names."""
    catalog = get_container(request).plan_service.workout_catalog()
    return success(
        {
            "workoutFocuses": catalog.workout_focuses,
            "exercises": catalog.exercises,
            "totalWorkoutTypes": catalog.total_workout_types,
            "totalExercises": catalog.total_exercises,
        }
    )


@router.get("/exercises/steps")
async def exercise_steps(request: Request) -> dict[str, object]:
    """Return exercises with their distinct step lists."""
    return success(get_container(request).plan_service.exercises_with_steps())


@router.get("/workouts/detailed")
async def detailed_workouts(request: Request) -> dict[str, object]:
    """Return workouts and exercises with every variant seen across plans."""
    catalog = get_container(request).plan_service.detailed_workouts()
    return success(
        {
            "workouts": catalog.workouts,
            "exercises": catalog.exercises,
            "summary": {
                "totalUniqueWorkouts": catalog.total_unique_workouts,
                "totalUniqueExercises": catalog.total_unique_exercises,
                "totalPlansAnalyzed": catalog.total_plans_analyzed,
            },
        }
    )
