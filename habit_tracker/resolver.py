"""Per-day state of habits and results."""

from datetime import date

from habit_tracker.store import EntityStore


class DailyStateResolver:
    """Answers what a habit or result looked like on a given day.

    A day without an entry is not an error: a habit resolves to not
    completed and a result to a rating of 0.
    """

    def __init__(self, store: EntityStore) -> None:
        self.store = store

    def habit_completed_on(self, habit_id: str, day: date | str) -> bool:
        entry = self.store.find_habit_entry(habit_id, day)
        return entry.completed if entry is not None else False

    def result_value_on(self, result_id: str, day: date | str) -> int:
        entry = self.store.find_result_entry(result_id, day)
        return entry.value if entry is not None else 0
