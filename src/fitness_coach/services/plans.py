"""Plan store access for users and administrators."""

from dataclasses import dataclass, replace
from typing import Any, Protocol
from uuid import UUID

from fitness_coach.domain.errors import NoPlanAssignedError, PlanNotFoundError
from fitness_coach.domain.plans import (
    DetailedWorkoutCatalog,
    ExerciseDetail,
    ExerciseSteps,
    FitnessPlan,
    WorkoutCatalog,
    WorkoutDetail,
)
from fitness_coach.services.data_access import data_access
from fitness_coach.services.users import UserService


class PlanRepository(Protocol):
    """Persistence interface for generated plans."""

    def get_plan(self, plan_id: UUID) -> FitnessPlan | None:
        """Return a plan by id, if present."""

    def get_latest_for_profile(self, profile_id: UUID) -> FitnessPlan | None:
        """Return the most recently generated plan for a profile."""

    def list_plans(self) -> list[FitnessPlan]:
        """Return all plans, newest first."""

    def save_plan(
        self, plan: FitnessPlan, profile_snapshot: dict[str, object]
    ) -> None:
        """Persist a newly generated plan."""

    def delete_plan(self, plan_id: UUID) -> bool:
        """Delete a plan and return True when a row was removed."""


@dataclass
class PlanService:
    """Service for reading and managing stored plans."""

    repository: PlanRepository
    user_service: UserService

    def get_plan_for_user(self, user_id: UUID) -> FitnessPlan:
        """Return the plan assigned to a user.

        Raises ``NoPlanAssignedError`` when the user has no plan reference and
        ``PlanNotFoundError`` when the reference points at a missing plan.
        """
        user = self.user_service.get_user(user_id)
        if user is None or user.fitness_plan_id is None:
            raise NoPlanAssignedError
        return self.get_plan(user.fitness_plan_id)

    def get_plan(self, plan_id: UUID) -> FitnessPlan:
        """Return a plan by id or raise ``PlanNotFoundError``."""
        with data_access("load fitness plan"):
            plan = self.repository.get_plan(plan_id)
        if plan is None:
            raise PlanNotFoundError
        return plan

    def get_plan_for_profile(self, profile_id: UUID) -> FitnessPlan | None:
        """Return the newest plan for a profile, if any."""
        with data_access("load profile plan"):
            return self.repository.get_latest_for_profile(profile_id)

    def list_plans(self) -> list[FitnessPlan]:
        """Return every stored plan."""
        with data_access("list fitness plans"):
            return self.repository.list_plans()

    def delete_plan(self, plan_id: UUID) -> None:
        """Delete a plan and detach it from the profile's users."""
        plan = self.get_plan(plan_id)
        with data_access("delete fitness plan"):
            self.repository.delete_plan(plan_id)
        self.user_service.clear_plan(plan.profile_id)

    def workout_catalog(self) -> WorkoutCatalog:
        """Collect unique workout focuses and exercise names."""
        focuses: set[str] = set()
        exercises: set[str] = set()
        for plan in self.list_plans():
            for day in plan.days:
                if day.is_rest_day:
                    continue
                if day.focus:
                    focuses.add(day.focus)
                exercises.update(exercise.name for exercise in day.exercises)
        return WorkoutCatalog(
            workout_focuses=sorted(focuses), exercises=sorted(exercises)
        )

    def exercises_with_steps(self) -> list[ExerciseSteps]:
        """Return exercises with each distinct list of steps seen for them."""
        variants: dict[str, list[list[str]]] = {}
        for plan in self.list_plans():
            for day in plan.days:
                for exercise in day.exercises:
                    if not exercise.steps:
                        continue
                    known = variants.setdefault(exercise.name, [])
                    if exercise.steps not in known:
                        known.append(list(exercise.steps))
        return [
            ExerciseSteps(name=name, steps=variants[name]) for name in sorted(variants)
        ]

    def detailed_workouts(self) -> DetailedWorkoutCatalog:
        """Collect workout and exercise details, most frequent first."""
        plans = self.list_plans()
        workouts: dict[str, WorkoutDetail] = {}
        exercises: dict[str, ExerciseDetail] = {}
        for plan in plans:
            for day in plan.days:
                if day.is_rest_day:
                    continue
                if day.focus:
                    workout = workouts.setdefault(
                        day.focus,
                        WorkoutDetail(name=day.focus, intensities=[], occurrences=0),
                    )
                    _append_unique(workout.intensities, day.intensity)
                    workouts[day.focus] = replace(
                        workout, occurrences=workout.occurrences + 1
                    )
                for exercise in day.exercises:
                    detail = exercises.setdefault(
                        exercise.name,
                        ExerciseDetail(
                            name=exercise.name,
                            descriptions=[],
                            steps=[],
                            sets_reps=[],
                            tips=[],
                            occurrences=0,
                        ),
                    )
                    _append_unique(detail.descriptions, exercise.description)
                    if exercise.steps:
                        _append_unique(detail.steps, list(exercise.steps))
                    _append_unique(detail.sets_reps, exercise.sets_reps)
                    for tip in exercise.tips:
                        _append_unique(detail.tips, tip)
                    exercises[exercise.name] = replace(
                        detail, occurrences=detail.occurrences + 1
                    )
        return DetailedWorkoutCatalog(
            workouts=sorted(
                workouts.values(), key=lambda item: item.occurrences, reverse=True
            ),
            exercises=sorted(
                exercises.values(), key=lambda item: item.occurrences, reverse=True
            ),
            total_plans_analyzed=len(plans),
        )


def _append_unique(values: list[Any], value: Any) -> None:
    if value and value not in values:
        values.append(value)
