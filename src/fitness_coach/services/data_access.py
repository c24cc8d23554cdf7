"""Translation of storage failures into application errors."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fitness_coach.domain.errors import FitnessCoachError, InternalError

_logger = logging.getLogger(__name__)


@contextmanager
def data_access(action: str) -> Iterator[None]:
    """Re-raise unexpected storage exceptions as ``InternalError``."""
    try:
        yield
    except FitnessCoachError:
        raise
    except Exception as exc:
        _logger.exception("Data access failed: %s", action)
        raise InternalError(f"Failed to {action}") from exc
