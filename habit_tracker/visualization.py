"""Time series that line up a result's ratings with its linked habits."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any

import structlog

from habit_tracker.models import MAX_RATING, Result
from habit_tracker.resolver import DailyStateResolver
from habit_tracker.store import EntityStore

logger = structlog.get_logger()


@dataclass
class HabitCompletion:
    name: str
    completed: bool


@dataclass
class SeriesPoint:
    """One day of a result's series."""

    date: date
    result_value: int
    habit_completion_rate: float
    habits: dict[str, HabitCompletion] = field(default_factory=dict)

    @property
    def display_date(self) -> str:
        """Short chart label, e.g. "Feb 1"."""
        return f"{self.date:%b} {self.date.day}"

    def as_record(self) -> dict[str, Any]:
        """Flatten into a chart record keyed like ``habit_<id>`` / ``habit_<id>_name``."""
        record: dict[str, Any] = {
            "date": self.date.isoformat(),
            "displayDate": self.display_date,
            "resultValue": self.result_value,
        }
        for habit_id, completion in self.habits.items():
            record[f"habit_{habit_id}"] = 1 if completion.completed else 0
            record[f"habit_{habit_id}_name"] = completion.name
        record["habitCompletionRate"] = self.habit_completion_rate
        return record


class VisualizationAggregator:
    """Builds the date-aligned series behind the result chart.

    Every call reads the store afresh; nothing is cached between calls.
    """

    def __init__(self, store: EntityStore) -> None:
        self.store = store
        self.resolver = DailyStateResolver(store)

    def series_for(self, result: Result | str) -> list[SeriesPoint]:
        """Return one point per day on which the result or a linked habit has an entry.

        Args:
            result: The result, or its id

        Raises:
            NotFoundError: If the result is not in the store
        """
        result_id = result.id if isinstance(result, Result) else result
        result = self.store.get_result(result_id)
        habits = [self.store.get_habit(habit_id) for habit_id in result.linked_habit_ids]

        days = {entry.date for entry in self.store.entries_for_result(result.id)}
        for habit in habits:
            days.update(entry.date for entry in self.store.entries_for_habit(habit.id))

        points = []
        for day in sorted(days):
            completions = {
                habit.id: HabitCompletion(name=habit.name, completed=self.resolver.habit_completed_on(habit.id, day))
                for habit in habits
            }
            completed = sum(1 for completion in completions.values() if completion.completed)
            rate = completed / len(habits) * MAX_RATING if habits else 0.0
            points.append(
                SeriesPoint(
                    date=day,
                    result_value=self.resolver.result_value_on(result.id, day),
                    habit_completion_rate=rate,
                    habits=completions,
                )
            )

        logger.debug("Series built", result_id=result.id, points=len(points), linked_habits=len(habits))
        return points

    def records_for(self, result: Result | str) -> list[dict[str, Any]]:
        """Like series_for, flattened into chart records."""
        return [point.as_record() for point in self.series_for(result)]
