"""Plan generation and retrieval endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request

from fitness_coach.api.dependencies import current_user_id, get_container
from fitness_coach.api.request_models import GeneratePlanRequest
from fitness_coach.api.serialization import success

router = APIRouter(prefix="/plans", tags=["plans"])


@router.post("/generate", dependencies=[Depends(current_user_id)])
async def generate_plan(
    body: GeneratePlanRequest, request: Request
) -> dict[str, object]:
    """Generate a plan for a profile, replacing the previous one."""
    service = get_container(request).plan_generation_service
    result = await service.generate_plan(body.profile_id)
    return success(result)


@router.get("/me")
async def my_plan(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return the caller's assigned plan."""
    service = get_container(request).plan_service
    return success(service.get_plan_for_user(user_id))


@router.get("/{plan_id}", dependencies=[Depends(current_user_id)])
async def get_plan(plan_id: UUID, request: Request) -> dict[str, object]:
    """Return a plan by id."""
    return success(get_container(request).plan_service.get_plan(plan_id))
