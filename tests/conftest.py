"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from fitness_coach.config import Settings
from fitness_coach.containers import AppContainer
from fitness_coach.domain.exercise_logs import (
    ExerciseLogEntry,
    ExerciseLogInput,
    LogFilters,
)
from fitness_coach.domain.meal_logs import MealLogEntry, MealUpdate
from fitness_coach.domain.models import UserRecord
from fitness_coach.domain.plans import (
    MEAL_TYPES,
    FitnessPlan,
    PlanDay,
    PlanExercise,
    PlanMeal,
    PlanOverview,
)
from fitness_coach.domain.profiles import AdaptiveProgram, Profile
from fitness_coach.domain.progress import DayProgressSnapshot
from fitness_coach.services.exercise_logs import (
    ExerciseLogRepository,
    ExerciseLogService,
)
from fitness_coach.services.meal_logs import MealLogRepository, MealLogService
from fitness_coach.services.plan_generation import (
    PlanClient,
    PlanGenerationService,
    ProfileRepository,
)
from fitness_coach.services.plans import PlanRepository, PlanService
from fitness_coach.services.progress import DayProgressService, SnapshotRepository
from fitness_coach.services.stats import StatsService
from fitness_coach.services.users import UserRepository, UserService

MEAL_CALORIES = {"breakfast": 400, "lunch": 600, "dinner": 700, "snack": 300}
BASE_TIME = datetime(2024, 3, 1, 8, 0, tzinfo=UTC)


def make_plan_day(day: int, day_type: str = "workout", exercises: int = 3) -> PlanDay:
    return PlanDay(
        day=day,
        day_type=day_type,
        exercises=[
            PlanExercise(
                exercise_number=number,
                name=f"Exercise {number}",
                sets_reps="3x10",
                steps=["Sit tall", "Breathe"],
            )
            for number in range(1, exercises + 1)
        ]
        if day_type == "workout"
        else [],
        meals={
            meal_type: PlanMeal(description=f"{meal_type} plate", calories=calories)
            for meal_type, calories in MEAL_CALORIES.items()
        },
        total_calories=sum(MEAL_CALORIES.values()),
        focus="Upper body" if day_type == "workout" else None,
    )


def make_plan(
    profile_id: UUID | None = None,
    rest_days: tuple[int, ...] = (3, 7),
    total_days: int = 7,
) -> FitnessPlan:
    return FitnessPlan(
        id=uuid4(),
        profile_id=profile_id or uuid4(),
        plan_type="adaptive",
        overview=PlanOverview(
            total_days=total_days,
            active_days=total_days - len(rest_days),
            rest_days=len(rest_days),
        ),
        days=[
            make_plan_day(day, "rest" if day in rest_days else "workout")
            for day in range(1, total_days + 1)
        ],
        generated_at=BASE_TIME,
    )


def make_log(  # noqa: PLR0913
    user_id: UUID,
    day_number: int,
    exercise_number: int,
    status: str,
    date: datetime = BASE_TIME,
    created_at: datetime | None = None,
) -> ExerciseLogEntry:
    completed = status == "completed"
    return ExerciseLogEntry(
        id=uuid4(),
        user_id=user_id,
        day_number=day_number,
        exercise_number=exercise_number,
        date=date,
        exercise_name=f"Exercise {exercise_number}",
        target_sets_reps="3x10",
        status=status,
        actual_sets=3 if completed else None,
        actual_reps=10 if completed else None,
        skip_reason=None if completed else "sore",
        created_at=created_at or date,
    )


def generated_plan_payload(days: int = 2) -> dict[str, object]:
    return {
        "overview": {
            "totalDays": days,
            "activeDays": days - 1,
            "restDays": 1,
            "estimatedWeeklyCaloriesBurned": 1200,
        },
        "days": [
            {
                "day": day,
                "type": "rest" if day == days else "workout",
                "workout": None
                if day == days
                else {
                    "focus": "Seated strength",
                    "caloriesBurned": 180,
                    "intensity": "low",
                    "exercises": [
                        {
                            "name": "Seated row",
                            "description": "Band row",
                            "steps": ["Loop band", "Pull"],
                            "setsReps": "3x12",
                            "tips": ["Keep back straight"],
                        },
                        {"name": "Arm circles", "setsReps": "2x20"},
                    ],
                },
                "nutrition": {
                    meal_type: {"description": meal_type, "calories": calories}
                    for meal_type, calories in MEAL_CALORIES.items()
                }
                | {"totalCalories": 2000, "explanation": "Balanced"},
            }
            for day in range(1, days + 1)
        ],
        "safetyNotes": ["Stop if you feel pain"],
    }


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)

    def add_user(
        self,
        profile_id: UUID | None = None,
        fitness_plan_id: UUID | None = None,
    ) -> UserRecord:
        user = UserRecord(
            id=uuid4(),
            email="user@example.com",
            profile_id=profile_id,
            fitness_plan_id=fitness_plan_id,
        )
        self.users[user.id] = user
        return user

    def get_user(self, user_id: UUID) -> UserRecord | None:
        return self.users.get(user_id)

    def assign_plan(self, profile_id: UUID, plan_id: UUID) -> int:
        count = 0
        for user_id, user in list(self.users.items()):
            if user.profile_id == profile_id:
                self.users[user_id] = replace(user, fitness_plan_id=plan_id)
                count += 1
        return count

    def clear_plan(self, profile_id: UUID) -> None:
        for user_id, user in list(self.users.items()):
            if user.profile_id == profile_id:
                self.users[user_id] = replace(user, fitness_plan_id=None)


@dataclass
class InMemoryPlanRepository(PlanRepository):
    """In-memory plan repository for tests."""

    plans: dict[UUID, FitnessPlan] = field(default_factory=dict)
    profile_snapshots: dict[UUID, dict[str, object]] = field(default_factory=dict)

    def get_plan(self, plan_id: UUID) -> FitnessPlan | None:
        return self.plans.get(plan_id)

    def get_latest_for_profile(self, profile_id: UUID) -> FitnessPlan | None:
        candidates = [
            plan for plan in self.plans.values() if plan.profile_id == profile_id
        ]
        return max(candidates, key=lambda plan: plan.generated_at, default=None)

    def list_plans(self) -> list[FitnessPlan]:
        return sorted(
            self.plans.values(), key=lambda plan: plan.generated_at, reverse=True
        )

    def save_plan(
        self, plan: FitnessPlan, profile_snapshot: dict[str, object]
    ) -> None:
        self.plans[plan.id] = plan
        self.profile_snapshots[plan.id] = profile_snapshot

    def delete_plan(self, plan_id: UUID) -> bool:
        return self.plans.pop(plan_id, None) is not None


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, Profile] = field(default_factory=dict)

    def get_profile(self, profile_id: UUID) -> Profile | None:
        return self.profiles.get(profile_id)


@dataclass
class InMemoryExerciseLogRepository(ExerciseLogRepository):
    """In-memory exercise log repository with optional per-day failures."""

    logs: list[ExerciseLogEntry] = field(default_factory=list)
    fail_days: set[int] = field(default_factory=set)

    def create_log(self, user_id: UUID, data: ExerciseLogInput) -> ExerciseLogEntry:
        log = ExerciseLogEntry(
            id=uuid4(),
            user_id=user_id,
            day_number=data.day_number,
            exercise_number=data.exercise_number,
            date=data.date or datetime.now(tz=UTC),
            exercise_name=data.exercise_name,
            target_sets_reps=data.target_sets_reps,
            status=data.status,
            actual_sets=data.actual_sets,
            actual_reps=data.actual_reps,
            skip_reason=data.skip_reason,
            created_at=datetime.now(tz=UTC),
        )
        self.logs.append(log)
        return log

    def find_logs(self, user_id: UUID, day_number: int) -> list[ExerciseLogEntry]:
        if day_number in self.fail_days:
            raise RuntimeError("storage unavailable")
        return [
            log
            for log in self.logs
            if log.user_id == user_id and log.day_number == day_number
        ]

    def list_logs(self, user_id: UUID, filters: LogFilters) -> list[ExerciseLogEntry]:
        matches = [
            log
            for log in self.logs
            if log.user_id == user_id
            and (filters.start is None or log.date >= filters.start)
            and (filters.end is None or log.date <= filters.end)
            and (filters.status is None or log.status == filters.status)
            and (filters.day_number is None or log.day_number == filters.day_number)
        ]
        return sorted(matches, key=lambda log: log.date, reverse=True)

    def find_by_exercise(
        self,
        user_id: UUID,
        day_number: int,
        exercise_number: int,
        start: datetime | None,
        end: datetime | None,
    ) -> list[ExerciseLogEntry]:
        filters = LogFilters(start=start, end=end, day_number=day_number)
        return [
            log
            for log in self.list_logs(user_id, filters)
            if log.exercise_number == exercise_number
        ]

    def get_log(self, log_id: UUID, user_id: UUID) -> ExerciseLogEntry | None:
        for log in self.logs:
            if log.id == log_id and log.user_id == user_id:
                return log
        return None

    def update_log(
        self, log_id: UUID, user_id: UUID, updates: dict[str, object]
    ) -> ExerciseLogEntry | None:
        for index, log in enumerate(self.logs):
            if log.id == log_id and log.user_id == user_id:
                self.logs[index] = replace(log, **updates)
                return self.logs[index]
        return None

    def delete_log(self, log_id: UUID, user_id: UUID) -> bool:
        before = len(self.logs)
        self.logs = [
            log
            for log in self.logs
            if not (log.id == log_id and log.user_id == user_id)
        ]
        return len(self.logs) < before


@dataclass
class InMemoryMealLogRepository(MealLogRepository):
    """In-memory meal log repository for tests."""

    entries: dict[tuple[UUID, int], MealLogEntry] = field(default_factory=dict)

    def find_meal_log(self, user_id: UUID, day: int) -> MealLogEntry | None:
        return self.entries.get((user_id, day))

    def list_meal_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealLogEntry]:
        matches = [
            entry
            for (owner, _), entry in self.entries.items()
            if owner == user_id and start <= entry.date <= end
        ]
        return sorted(matches, key=lambda entry: entry.date)

    def save_meal_log(self, entry: MealLogEntry) -> MealLogEntry:
        saved = entry if entry.id is not None else replace(entry, id=uuid4())
        self.entries[(entry.user_id, entry.day)] = saved
        return saved


@dataclass
class InMemorySnapshotRepository(SnapshotRepository):
    """In-memory snapshot store keyed by user and day."""

    snapshots: dict[tuple[UUID, int], DayProgressSnapshot] = field(
        default_factory=dict
    )
    upserts: int = 0

    def find_snapshot(self, user_id: UUID, day: int) -> DayProgressSnapshot | None:
        return self.snapshots.get((user_id, day))

    def upsert_snapshot(self, snapshot: DayProgressSnapshot) -> None:
        self.upserts += 1
        self.snapshots[(snapshot.user_id, snapshot.day)] = snapshot

    def list_snapshots(self, user_id: UUID) -> list[DayProgressSnapshot]:
        return sorted(
            (item for key, item in self.snapshots.items() if key[0] == user_id),
            key=lambda item: item.day,
        )

    def delete_snapshot(self, user_id: UUID, day: int) -> bool:
        return self.snapshots.pop((user_id, day), None) is not None


@dataclass
class FakePlanClient(PlanClient):
    """Fake plan client returning a fixed payload or raising."""

    payload: dict[str, object] = field(default_factory=generated_plan_payload)
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)
    schemas: list[dict[str, object]] = field(default_factory=list)

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
        self.prompts.append(prompt)
        self.schemas.append(schema)
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class FixedStepClock:
    """Deterministic clock advancing one minute per call."""

    current: datetime = BASE_TIME

    def __call__(self) -> datetime:
        self.current += timedelta(minutes=1)
        return self.current


@dataclass
class Harness:
    """Services wired to in-memory repositories."""

    users: InMemoryUserRepository
    plans: InMemoryPlanRepository
    profiles: InMemoryProfileRepository
    exercise_logs: InMemoryExerciseLogRepository
    meal_logs: InMemoryMealLogRepository
    snapshots: InMemorySnapshotRepository
    plan_client: FakePlanClient
    user_service: UserService
    plan_service: PlanService
    plan_generation_service: PlanGenerationService
    exercise_log_service: ExerciseLogService
    meal_log_service: MealLogService
    progress_service: DayProgressService

    def user_with_plan(
        self, plan: FitnessPlan | None = None
    ) -> tuple[UUID, FitnessPlan]:
        resolved = plan or make_plan()
        self.plans.plans[resolved.id] = resolved
        user = self.users.add_user(
            profile_id=resolved.profile_id, fitness_plan_id=resolved.id
        )
        return user.id, resolved

    def log_meal(self, user_id: UUID, day: int, meal_type: str, status: str) -> None:
        self.meal_log_service.update_single_meal(
            user_id,
            day,
            BASE_TIME,
            meal_type,
            MealUpdate(
                description=meal_type,
                calories=MEAL_CALORIES[meal_type],
                status=status,
                skip_reason="busy" if status == "skipped" else None,
            ),
        )

    def complete_day(self, user_id: UUID, plan: FitnessPlan, day: int) -> None:
        plan_day = plan.find_day(day)
        assert plan_day is not None
        for exercise in plan_day.exercises:
            self.exercise_logs.logs.append(
                make_log(user_id, day, exercise.exercise_number, "completed")
            )
        for meal_type in MEAL_TYPES:
            self.log_meal(user_id, day, meal_type, "completed")


def build_harness() -> Harness:
    users = InMemoryUserRepository()
    plans = InMemoryPlanRepository()
    profiles = InMemoryProfileRepository()
    exercise_logs = InMemoryExerciseLogRepository()
    meal_logs = InMemoryMealLogRepository()
    snapshots = InMemorySnapshotRepository()
    plan_client = FakePlanClient()
    user_service = UserService(users)
    plan_service = PlanService(plans, user_service)
    return Harness(
        users=users,
        plans=plans,
        profiles=profiles,
        exercise_logs=exercise_logs,
        meal_logs=meal_logs,
        snapshots=snapshots,
        plan_client=plan_client,
        user_service=user_service,
        plan_service=plan_service,
        plan_generation_service=PlanGenerationService(
            client=plan_client,
            profile_repository=profiles,
            plan_service=plan_service,
            user_service=user_service,
            model="gpt-4o-mini",
        ),
        exercise_log_service=ExerciseLogService(exercise_logs),
        meal_log_service=MealLogService(meal_logs),
        progress_service=DayProgressService(
            plan_service=plan_service,
            exercise_logs=exercise_logs,
            meal_logs=meal_logs,
            snapshots=snapshots,
            clock=FixedStepClock(),
        ),
    )


def adaptive_profile(affected_limbs: str = "left leg") -> Profile:
    return Profile(
        id=uuid4(),
        gender="female",
        age=42,
        height_cm=165,
        current_weight_kg=70,
        target_weight_kg=65,
        commitment="3 days per week",
        workout_days=["Monday", "Wednesday", "Friday"],
        adaptive_program=AdaptiveProgram(
            id=uuid4(),
            affected_limbs=affected_limbs,
            purposes=["mobility", "strength"],
        ),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        admin_token="admin-token",
        openai_api_key="openai-key",
    )


@pytest.fixture
def harness() -> Harness:
    return build_harness()


@pytest.fixture
def container(settings: Settings, harness: Harness) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        user_service=harness.user_service,
        plan_service=harness.plan_service,
        plan_generation_service=harness.plan_generation_service,
        exercise_log_service=harness.exercise_log_service,
        meal_log_service=harness.meal_log_service,
        progress_service=harness.progress_service,
        stats_service=StatsService(
            harness.exercise_log_service, harness.meal_log_service
        ),
        close_resources=close_resources,
    )
