"""Domain models for application users."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    email: str | None
    profile_id: UUID | None
    fitness_plan_id: UUID | None
