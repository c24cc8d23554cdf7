"""Exercise logging endpoints."""

from datetime import UTC, date, datetime, time
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from fitness_coach.api.dependencies import current_user_id, get_container
from fitness_coach.api.request_models import (
    ExerciseLogCreateRequest,
    ExerciseLogUpdateRequest,
)
from fitness_coach.api.serialization import success
from fitness_coach.domain.errors import ExerciseLogNotFoundError
from fitness_coach.domain.exercise_logs import ExerciseLogInput, LogFilters

router = APIRouter(prefix="/exercise", tags=["exercise"])


@router.post("/logs", status_code=status.HTTP_201_CREATED)
async def create_log(
    body: ExerciseLogCreateRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Record a completed or skipped exercise."""
    service = get_container(request).exercise_log_service
    log = service.create_log(user_id, ExerciseLogInput(**body.model_dump()))
    return success(log)


@router.get("/logs/exercise")
async def logs_for_exercise(  # noqa: PLR0913
    request: Request,
    day_number: int = Query(alias="dayNumber"),
    exercise_number: int = Query(alias="exerciseNumber"),
    on_date: date | None = Query(default=None, alias="date"),
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return the logs for one exercise slot, newest first."""
    service = get_container(request).exercise_log_service
    logs = service.get_by_day_and_exercise(
        user_id, day_number, exercise_number, on_date
    )
    if not logs:
        raise ExerciseLogNotFoundError
    return success(logs)


@router.get("/logs")
async def list_logs(  # noqa: PLR0913
    request: Request,
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    log_status: str | None = Query(default=None, alias="status"),
    day_number: int | None = Query(default=None, alias="dayNumber"),
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return the caller's logs with optional filters."""
    filters = LogFilters(
        start=(
            datetime.combine(start_date, time.min, tzinfo=UTC) if start_date else None
        ),
        end=datetime.combine(end_date, time.max, tzinfo=UTC) if end_date else None,
        status=log_status,
        day_number=day_number,
    )
    service = get_container(request).exercise_log_service
    return success(service.list_logs(user_id, filters))


@router.get("/logs/{log_id}")
async def get_log(
    log_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return a single log."""
    service = get_container(request).exercise_log_service
    return success(service.get_log(log_id, user_id))


@router.put("/logs/{log_id}")
async def update_log(
    log_id: UUID,
    body: ExerciseLogUpdateRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Apply a partial update to a log."""
    service = get_container(request).exercise_log_service
    updates = body.model_dump(exclude_unset=True)
    return success(service.update_log(log_id, user_id, updates))


@router.delete("/logs/{log_id}")
async def delete_log(
    log_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Delete a log."""
    get_container(request).exercise_log_service.delete_log(log_id, user_id)
    return {"success": True, "message": "Exercise log deleted"}


@router.get("/stats/summary")
async def summary_stats(
    request: Request,
    period: int = 7,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return logging statistics over the trailing period in days."""
    service = get_container(request).exercise_log_service
    return success(service.summary_stats(user_id, days=period))
