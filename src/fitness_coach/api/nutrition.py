"""Meal logging endpoints."""

from datetime import UTC, date, datetime, time
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request

from fitness_coach.api.dependencies import current_user_id, get_container
from fitness_coach.api.request_models import (
    MealLogRequest,
    MealStatusRequest,
    NutritionDayRequest,
)
from fitness_coach.api.serialization import success
from fitness_coach.domain.errors import MealLogNotFoundError
from fitness_coach.domain.meal_logs import MealUpdate

router = APIRouter(prefix="/nutrition", tags=["nutrition"])


@router.post("/meal")
async def log_meal(
    body: MealLogRequest, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Record one meal slot for a day."""
    service = get_container(request).meal_log_service
    entry = service.update_single_meal(
        user_id,
        body.day,
        body.date or datetime.now(tz=UTC),
        body.meal_type,
        MealUpdate(
            description=body.description,
            calories=body.calories,
            status=body.status,
            skip_reason=body.skip_reason,
            total_calories=body.total_calories,
        ),
    )
    return success(entry)


@router.put("/meal-status")
async def update_meal_status(
    body: MealStatusRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Change the status of a logged meal."""
    service = get_container(request).meal_log_service
    entry = service.update_meal_status(
        user_id, body.day, body.meal_type, body.status, body.skip_reason
    )
    return success(entry)


@router.get("/day/{day}")
async def get_day(
    day: int, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return the meal log for a day."""
    entry = get_container(request).meal_log_service.get_day(user_id, day)
    if entry is None:
        raise MealLogNotFoundError
    return success(entry)


@router.post("")
async def save_day(
    body: NutritionDayRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Create or merge a whole day's meal log."""
    service = get_container(request).meal_log_service
    entry = service.save_day(
        user_id,
        body.day,
        body.date,
        {
            meal_type: MealUpdate(**slot.model_dump(exclude_unset=True))
            for meal_type, slot in body.meals.items()
        },
        total_calories=body.total_calories,
    )
    return {**success(entry), "message": "Nutrition data saved successfully"}


@router.get("/period/{period}")
async def get_period(
    period: str, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return logs for today, week or month, or monthly averages for 6months."""
    service = get_container(request).meal_log_service
    return success(service.get_period(user_id, period))


@router.get("/range")
async def get_range(
    request: Request,
    start_date: date = Query(alias="startDate"),
    end_date: date = Query(alias="endDate"),
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return meal logs dated between two calendar dates inclusive."""
    service = get_container(request).meal_log_service
    entries = service.list_range(
        user_id,
        datetime.combine(start_date, time.min, tzinfo=UTC),
        datetime.combine(end_date, time.max, tzinfo=UTC),
    )
    return success(entries)
