"""Exercise, nutrition and combined statistics endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request

from fitness_coach.api.dependencies import current_user_id, get_container
from fitness_coach.api.serialization import success

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/exercise/summary")
async def exercise_summary(
    request: Request, period: int = 7, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    service = get_container(request).exercise_log_service
    return success(service.summary_stats(user_id, days=period))


@router.get("/exercise/completion")
async def exercise_completion(
    request: Request, period: int = 7, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return per-date completion counts over the trailing period."""
    service = get_container(request).exercise_log_service
    daily = service.completion_stats(user_id, days=period)
    return {**success(daily), "period": f"{period} days"}


@router.get("/exercise/timeline")
async def exercise_timeline(
    request: Request, period: int = 30, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return top exercises, weekday activity and streaks."""
    service = get_container(request).exercise_log_service
    timeline = service.timeline_stats(user_id, days=period)
    return {**success(timeline), "period": f"{period} days"}


@router.get("/nutrition/summary/{period}")
async def nutrition_summary(
    period: str, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    service = get_container(request).meal_log_service
    return success(service.summary(user_id, period))


@router.get("/nutrition/calendar/{year}/{month}")
async def nutrition_calendar(
    year: int,
    month: int,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return one entry per date of the month."""
    service = get_container(request).meal_log_service
    return success(service.month_calendar(user_id, year, month))


@router.get("/dashboard")
async def dashboard(
    request: Request, period: int = 7, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return exercise and nutrition summaries side by side."""
    stats = get_container(request).stats_service.dashboard(user_id, days=period)
    return {
        **success({"exercise": stats.exercise, "nutrition": stats.nutrition}),
        "period": f"{stats.period_days} days",
    }
