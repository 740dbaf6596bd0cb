"""Backend implementations."""

from habit_tracker.backends.json_file import JsonFileBackend
from habit_tracker.backends.memory import MemoryBackend

__all__ = ["JsonFileBackend", "MemoryBackend"]
