"""Habit tracker - daily habits, results and the metrics that connect them."""

from habit_tracker.errors import HabitTrackerError, NotFoundError, PersistenceError, ValidationError
from habit_tracker.models import Habit, HabitEntry, Result, ResultEntry

__all__ = [
    "Habit",
    "HabitEntry",
    "HabitTrackerError",
    "NotFoundError",
    "PersistenceError",
    "Result",
    "ResultEntry",
    "ValidationError",
]
