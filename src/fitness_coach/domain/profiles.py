"""Profile and intake-program models read during plan generation."""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True)
class AdaptiveProgram:
    """Limitation-based intake program."""

    id: UUID
    affected_limbs: str
    purposes: list[str]
    program_name: str | None = None


@dataclass(frozen=True)
class GoalBasedProgram:
    """Goal-based intake program."""

    id: UUID
    primary_goal: str | None
    fitness_level: str | None
    target_areas: list[str] = field(default_factory=list)
    available_equipment: list[str] = field(default_factory=list)
    program_name: str | None = None


@dataclass(frozen=True)
class Profile:
    """User body profile with at most one attached program."""

    id: UUID
    gender: str | None = None
    age: int | None = None
    height_cm: float | None = None
    current_weight_kg: float | None = None
    target_weight_kg: float | None = None
    commitment: str | None = None
    workout_days: list[str] = field(default_factory=list)
    adaptive_program: AdaptiveProgram | None = None
    goal_based_program: GoalBasedProgram | None = None
