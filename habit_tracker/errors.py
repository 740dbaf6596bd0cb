"""Exceptions raised by the habit tracker."""


class HabitTrackerError(Exception):
    """Base class for all habit tracker errors."""


class ValidationError(HabitTrackerError, ValueError):
    """Input rejected before any mutation (empty name, rating out of range)."""


class NotFoundError(HabitTrackerError, LookupError):
    """An operation targets an id that is not in its collection."""

    def __init__(self, kind: str, entity_id: str) -> None:
        super().__init__(f"{kind} not found: {entity_id}")
        self.kind = kind
        self.entity_id = entity_id


class PersistenceError(HabitTrackerError):
    """Reading from or writing to the durable store failed."""
