"""Day, week and program progress endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request

from fitness_coach.api.dependencies import current_user_id, get_container
from fitness_coach.api.request_models import RefreshProgressRequest
from fitness_coach.api.serialization import success

router = APIRouter(prefix="/progress", tags=["progress"])


@router.get("/current")
async def current_progress(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return the latest tracked day and its refreshed snapshot."""
    service = get_container(request).progress_service
    current_day, snapshot = service.get_current_day_progress(user_id)
    return success({"currentDay": current_day, "progress": snapshot})


@router.get("/day/{day}")
async def day_progress(
    day: int, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return the progress snapshot for a plan day."""
    service = get_container(request).progress_service
    return success(service.get_day_progress(user_id, day))


@router.get("/range")
async def progress_range(
    request: Request,
    start_day: int = Query(alias="startDay"),
    end_day: int = Query(alias="endDay"),
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return snapshots for every retrievable day in a range."""
    service = get_container(request).progress_service
    return success(service.get_progress_range(user_id, start_day, end_day))


@router.get("/week/{week_number}")
async def weekly_progress(
    week_number: int, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return the summary for one seven-day week."""
    service = get_container(request).progress_service
    return success(service.get_weekly_progress(user_id, week_number))


@router.get("/overall")
async def overall_progress(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return progress folded over every tracked day."""
    service = get_container(request).progress_service
    return success(service.get_overall_progress(user_id))


@router.post("/refresh")
async def refresh_progress(
    body: RefreshProgressRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Recompute a day's snapshot from the current logs."""
    service = get_container(request).progress_service
    return success(service.refresh_day_progress(user_id, body.day))


@router.delete("/day/{day}")
async def delete_progress(
    day: int, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Delete a stored snapshot."""
    get_container(request).progress_service.delete_day_progress(user_id, day)
    return {"success": True, "message": "Day progress deleted"}
