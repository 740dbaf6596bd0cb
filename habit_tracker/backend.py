"""Persistence backend interface for the habit tracker."""

from abc import ABC, abstractmethod
from typing import Any


class Backend(ABC):
    """Abstract base class for key-value persistence backends.

    Each key holds one whole collection, stored as a list of plain records.
    Implementations raise PersistenceError when the underlying store fails.
    """

    @abstractmethod
    def load(self, key: str) -> list[dict[str, Any]] | None:
        """Load the records stored under key, or None if nothing is stored."""
        pass

    @abstractmethod
    def save(self, key: str, records: list[dict[str, Any]]) -> None:
        """Replace the records stored under key."""
        pass
