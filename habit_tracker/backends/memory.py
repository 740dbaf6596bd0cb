"""In-memory backend, used for tests and throwaway sessions."""

import copy
from typing import Any

import structlog

from habit_tracker.backend import Backend

logger = structlog.get_logger()


class MemoryBackend(Backend):
    """Dictionary-backed backend. Nothing survives the process."""

    def __init__(self, initial: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self.data: dict[str, list[dict[str, Any]]] = copy.deepcopy(initial) if initial else {}
        self.save_count = 0
        logger.debug("Memory backend initialized", keys=list(self.data.keys()))

    def load(self, key: str) -> list[dict[str, Any]] | None:
        records = self.data.get(key)
        return copy.deepcopy(records) if records is not None else None

    def save(self, key: str, records: list[dict[str, Any]]) -> None:
        self.data[key] = copy.deepcopy(records)
        self.save_count += 1
