"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from fitness_coach.adapters.openai_plan_client import OpenAIPlanClient
from fitness_coach.adapters.supabase_exercise_log_repository import (
    SupabaseExerciseLogRepository,
)
from fitness_coach.adapters.supabase_meal_log_repository import (
    SupabaseMealLogRepository,
)
from fitness_coach.adapters.supabase_plan_repository import SupabasePlanRepository
from fitness_coach.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from fitness_coach.adapters.supabase_progress_repository import (
    SupabaseProgressRepository,
)
from fitness_coach.adapters.supabase_user_repository import SupabaseUserRepository
from fitness_coach.config import Settings
from fitness_coach.services.exercise_logs import ExerciseLogService
from fitness_coach.services.meal_logs import MealLogService
from fitness_coach.services.plan_generation import PlanGenerationService
from fitness_coach.services.plans import PlanService
from fitness_coach.services.progress import DayProgressService
from fitness_coach.services.stats import StatsService
from fitness_coach.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    plan_service: PlanService
    plan_generation_service: PlanGenerationService
    exercise_log_service: ExerciseLogService
    meal_log_service: MealLogService
    progress_service: DayProgressService
    stats_service: StatsService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    exercise_log_repository = SupabaseExerciseLogRepository(supabase_client)
    meal_log_repository = SupabaseMealLogRepository(supabase_client)
    exercise_log_service = ExerciseLogService(exercise_log_repository)
    meal_log_service = MealLogService(meal_log_repository)
    user_service = UserService(SupabaseUserRepository(supabase_client))
    plan_service = PlanService(SupabasePlanRepository(supabase_client), user_service)
    plan_client = OpenAIPlanClient.create(resolved_settings.openai_api_key)
    plan_generation_service = PlanGenerationService(
        client=plan_client,
        profile_repository=SupabaseProfileRepository(supabase_client),
        plan_service=plan_service,
        user_service=user_service,
        model=resolved_settings.openai_model,
        temperature=resolved_settings.openai_temperature,
        max_output_tokens=resolved_settings.openai_max_output_tokens,
        plan_days=resolved_settings.plan_days,
    )
    progress_service = DayProgressService(
        plan_service=plan_service,
        exercise_logs=exercise_log_repository,
        meal_logs=meal_log_repository,
        snapshots=SupabaseProgressRepository(supabase_client),
    )

    async def close_resources() -> None:
        await plan_client.close()

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        plan_service=plan_service,
        plan_generation_service=plan_generation_service,
        exercise_log_service=exercise_log_service,
        meal_log_service=meal_log_service,
        progress_service=progress_service,
        stats_service=StatsService(exercise_log_service, meal_log_service),
        close_resources=close_resources,
    )
