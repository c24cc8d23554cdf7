"""User lookups and plan assignment."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fitness_coach.domain.models import UserRecord
from fitness_coach.services.data_access import data_access


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user by id, if present."""

    def assign_plan(self, profile_id: UUID, plan_id: UUID) -> int:
        """Point every user of a profile at a plan and return the count."""

    def clear_plan(self, profile_id: UUID) -> None:
        """Remove the plan reference from users of a profile."""


@dataclass
class UserService:
    """Application service for user plan references."""

    repository: UserRepository

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return a user record, if present."""
        with data_access("load user"):
            return self.repository.get_user(user_id)

    def assign_plan(self, profile_id: UUID, plan_id: UUID) -> int:
        """Assign a plan to all users sharing a profile."""
        with data_access("assign plan"):
            return self.repository.assign_plan(profile_id, plan_id)

    def clear_plan(self, profile_id: UUID) -> None:
        """Detach the plan from all users sharing a profile."""
        with data_access("clear plan"):
            self.repository.clear_plan(profile_id)
