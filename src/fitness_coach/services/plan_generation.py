"""Fitness plan generation via an LLM client."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from pydantic import ValidationError as PydanticValidationError

from fitness_coach.domain.errors import PlanGenerationError, ProfileNotFoundError
from fitness_coach.domain.generated_plan import GeneratedPlan
from fitness_coach.domain.plans import FitnessPlan, GeneratedPlanResult, PlanOverview
from fitness_coach.domain.profiles import Profile
from fitness_coach.services.data_access import data_access
from fitness_coach.services.plans import PlanService
from fitness_coach.services.prompts import SYSTEM_PROMPT, build_prompt
from fitness_coach.services.users import UserService

_logger = logging.getLogger(__name__)

PLAN_SCHEMA: dict[str, object] = GeneratedPlan.model_json_schema(by_alias=True)


class ProfileRepository(Protocol):
    """Read-only access to profiles and their programs."""

    def get_profile(self, profile_id: UUID) -> Profile | None:
        """Return a profile with its program attached, if present."""


class PlanClient(Protocol):
    """Interface for LLM plan generation."""

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        system_prompt: str,
        prompt: str,
        schema: dict[str, object],
        temperature: float,
        max_output_tokens: int,
    ) -> dict[str, object]:
        """Return plan JSON conforming to ``schema``."""


@dataclass
class PlanGenerationService:
    """Service that builds prompts, calls the generator and stores plans."""

    client: PlanClient
    profile_repository: ProfileRepository
    plan_service: PlanService
    user_service: UserService
    model: str
    temperature: float = 0.7
    max_output_tokens: int = 4000
    plan_days: int = 7

    async def generate_plan(self, profile_id: UUID) -> GeneratedPlanResult:
        """Generate a plan for a profile, replacing any previous plan."""
        with data_access("load profile"):
            profile = self.profile_repository.get_profile(profile_id)
        if profile is None:
            raise ProfileNotFoundError

        plan_prompt = build_prompt(profile, plan_days=self.plan_days)
        try:
            raw = await self.client.generate(
                model=self.model,
                system_prompt=SYSTEM_PROMPT,
                prompt=plan_prompt.prompt,
                schema=PLAN_SCHEMA,
                temperature=self.temperature,
                max_output_tokens=self.max_output_tokens,
            )
        except Exception as exc:
            _logger.exception("Plan generation failed for profile %s", profile_id)
            raise PlanGenerationError("Failed to generate plan") from exc

        try:
            generated = GeneratedPlan.model_validate(raw)
        except PydanticValidationError as exc:
            _logger.warning("Generated plan failed validation: %s", exc)
            raise PlanGenerationError("Generated plan was malformed") from exc

        existing = self.plan_service.get_plan_for_profile(profile_id)
        plan = FitnessPlan(
            id=uuid4(),
            profile_id=profile_id,
            plan_type=plan_prompt.plan_type,
            overview=PlanOverview(
                total_days=generated.overview.total_days,
                active_days=generated.overview.active_days,
                rest_days=generated.overview.rest_days,
                estimated_weekly_calories_burned=(
                    generated.overview.estimated_weekly_calories_burned
                ),
            ),
            days=[day.to_plan_day() for day in generated.days],
            generated_at=datetime.now(tz=UTC),
            safety_notes=list(generated.safety_notes),
            program_snapshot=plan_prompt.program_snapshot,
        )
        with data_access("save fitness plan"):
            self.plan_service.repository.save_plan(plan, _profile_snapshot(profile))
        assigned = self.user_service.assign_plan(profile_id, plan.id)
        _logger.info("Plan %s assigned to %s user(s)", plan.id, assigned)
        if existing is not None:
            _logger.info("Deleting previous plan %s", existing.id)
            with data_access("delete previous plan"):
                self.plan_service.repository.delete_plan(existing.id)
        return GeneratedPlanResult(plan_id=plan.id, regenerated=existing is not None)


def _profile_snapshot(profile: Profile) -> dict[str, object]:
    return {
        "gender": profile.gender,
        "age": profile.age,
        "height_cm": profile.height_cm,
        "current_weight_kg": profile.current_weight_kg,
        "target_weight_kg": profile.target_weight_kg,
        "commitment": profile.commitment,
        "workout_days": list(profile.workout_days),
    }
