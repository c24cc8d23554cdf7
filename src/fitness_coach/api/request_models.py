"""Request bodies accepted by the HTTP API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _RequestModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RefreshProgressRequest(_RequestModel):
    day: int


class ExerciseLogCreateRequest(_RequestModel):
    day_number: int
    exercise_number: int
    exercise_name: str
    target_sets_reps: str
    status: str
    date: datetime | None = None
    actual_sets: int | None = None
    actual_reps: int | None = None
    skip_reason: str | None = None


class ExerciseLogUpdateRequest(_RequestModel):
    """Partial update; only fields present in the body are applied."""

    status: str | None = None
    actual_sets: int | None = None
    actual_reps: int | None = None
    skip_reason: str | None = None
    date: datetime | None = None


class MealLogRequest(_RequestModel):
    day: int
    meal_type: str
    date: datetime | None = None
    description: str | None = None
    calories: float | None = Field(default=None, ge=0)
    status: str = "pending"
    skip_reason: str | None = None
    total_calories: float | None = Field(default=None, ge=0)


class MealStatusRequest(_RequestModel):
    day: int
    meal_type: str
    status: str
    skip_reason: str | None = None


class GeneratePlanRequest(_RequestModel):
    profile_id: UUID


class MealSlotRequest(_RequestModel):
    """One meal inside a whole-day save; unset fields keep stored values."""

    status: str | None = None
    description: str | None = None
    calories: float | None = Field(default=None, ge=0)
    skip_reason: str | None = None


class NutritionDayRequest(_RequestModel):
    day: int
    date: datetime
    total_calories: float | None = Field(default=None, ge=0)
    meals: dict[str, MealSlotRequest] = Field(default_factory=dict)
