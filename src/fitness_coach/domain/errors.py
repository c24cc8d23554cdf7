"""Error taxonomy shared by services and the HTTP layer."""


class FitnessCoachError(Exception):
    """Base class for application errors."""

    status_code = 500


class NotFoundError(FitnessCoachError):
    """A requested resource does not exist."""

    status_code = 404


class NoPlanAssignedError(NotFoundError):
    """The user has no fitness plan assigned."""

    def __init__(self) -> None:
        super().__init__("User has no fitness plan")


class PlanNotFoundError(NotFoundError):
    """The referenced fitness plan does not exist."""

    def __init__(self) -> None:
        super().__init__("Fitness plan not found")


class DayNotFoundInPlanError(NotFoundError):
    """The requested day is outside the plan's day range."""

    def __init__(self, day: int) -> None:
        super().__init__(f"Day {day} not found in fitness plan")
        self.day = day


class SnapshotNotFoundError(NotFoundError):
    """No progress snapshot exists for the user and day."""

    def __init__(self) -> None:
        super().__init__("Day progress not found")


class ExerciseLogNotFoundError(NotFoundError):
    """The exercise log does not exist or belongs to another user."""

    def __init__(self) -> None:
        super().__init__("Exercise log not found")


class MealLogNotFoundError(NotFoundError):
    """No nutrition entry exists for the user and day."""

    def __init__(self) -> None:
        super().__init__("Nutrition entry not found")


class ProfileNotFoundError(NotFoundError):
    """The profile used for plan generation does not exist."""

    def __init__(self) -> None:
        super().__init__("Profile not found")


class ValidationError(FitnessCoachError):
    """Input failed validation."""

    status_code = 400


class InvalidDayNumberError(ValidationError):
    """A day or week number is not a positive integer."""

    def __init__(self, label: str = "day") -> None:
        super().__init__(f"Invalid {label} number. Must be a positive integer")


class InvalidRangeError(ValidationError):
    """A day range has non-positive or inverted bounds."""

    def __init__(self) -> None:
        super().__init__(
            "Invalid day range. startDay and endDay must be positive integers, "
            "and startDay must be <= endDay"
        )


class InvalidLogError(ValidationError):
    """An exercise log payload is inconsistent."""


class InvalidMealError(ValidationError):
    """A meal payload names an unknown slot or status."""


class ProgramMissingError(ValidationError):
    """The profile has neither an adaptive nor a goal-based program."""

    def __init__(self) -> None:
        super().__init__("No program (adaptive or goal-based) found")


class PlanGenerationError(FitnessCoachError):
    """The plan generator failed or returned an unusable plan."""

    status_code = 502


class InternalError(FitnessCoachError):
    """A data-access operation failed."""

    status_code = 500
