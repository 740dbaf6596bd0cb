"""JSON file backend: one file per collection in a data directory."""

import json
import os
from pathlib import Path
from typing import Any

import structlog

from habit_tracker.backend import Backend
from habit_tracker.errors import PersistenceError

logger = structlog.get_logger()


class JsonFileBackend(Backend):
    """Stores each collection as ``<data_dir>/<key>.json``."""

    def __init__(self, data_dir: str | Path) -> None:
        """Initialize JSON file backend.

        Args:
            data_dir: Directory holding the collection files (created on first save)
        """
        self.data_dir = Path(data_dir).expanduser()
        logger.debug("Initializing JSON file backend", data_dir=str(self.data_dir))

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def load(self, key: str) -> list[dict[str, Any]] | None:
        """Load a collection file.

        Returns:
            The stored records, or None if the file does not exist
        """
        path = self._path(key)
        if not path.exists():
            logger.debug("Collection file does not exist", key=key, path=str(path))
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                records = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("Failed to load collection", key=key, path=str(path), error=str(e))
            raise PersistenceError(f"Failed to load {key} from {path}: {e}") from e

        if not isinstance(records, list):
            raise PersistenceError(f"Expected a list in {path}, got {type(records).__name__}")

        logger.debug("Collection loaded", key=key, count=len(records))
        return records

    def save(self, key: str, records: list[dict[str, Any]]) -> None:
        """Write a collection file atomically."""
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2)
            os.replace(tmp_path, path)
        except OSError as e:
            logger.error("Failed to save collection", key=key, path=str(path), error=str(e))
            raise PersistenceError(f"Failed to save {key} to {path}: {e}") from e

        logger.debug("Collection saved", key=key, count=len(records))
