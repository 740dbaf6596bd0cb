"""Entity store owning habits, results and their daily entries."""

from collections.abc import Callable
from datetime import date
from typing import Any

import structlog

from habit_tracker.backend import Backend
from habit_tracker.errors import NotFoundError, PersistenceError, ValidationError
from habit_tracker.generators import generate_id, generate_pastel_color
from habit_tracker.models import Habit, HabitEntry, Result, ResultEntry, parse_date, validate_rating

logger = structlog.get_logger()

HABITS = "habits"
RESULTS = "results"
HABIT_ENTRIES = "habitEntries"
RESULT_ENTRIES = "resultEntries"


def _validate_name(name: str) -> None:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Name must not be empty")


class EntityStore:
    """In-memory store for the four tracker collections.

    The collections are read from the backend once, on construction, and the
    touched collections are written back after every successful mutation. A
    failing write is logged and kept in ``last_persistence_error``; the
    in-memory change stands.

    Entries are indexed by owner id, then by date. The index is rebuilt on
    load and maintained on every mutation, so lookups by (id, date) never
    scan the entry lists.
    """

    def __init__(
        self,
        backend: Backend,
        id_factory: Callable[[], str] = generate_id,
        color_factory: Callable[[], str] = generate_pastel_color,
    ) -> None:
        """Initialize the store and load every collection from the backend.

        Args:
            backend: Persistence backend
            id_factory: Produces ids for new habits and results
            color_factory: Produces display colors for new habits and results
        """
        self.backend = backend
        self.id_factory = id_factory
        self.color_factory = color_factory
        self.last_persistence_error: PersistenceError | None = None

        self._habits: list[Habit] = []
        self._results: list[Result] = []
        self._habit_entries: list[HabitEntry] = []
        self._result_entries: list[ResultEntry] = []
        self._habit_index: dict[str, dict[date, HabitEntry]] = {}
        self._result_index: dict[str, dict[date, ResultEntry]] = {}

        self._load()

    # Loading and saving

    def _load_collection(self, key: str, from_dict: Callable[[dict[str, Any]], Any]) -> list[Any]:
        try:
            records = self.backend.load(key)
        except PersistenceError as e:
            logger.warning("Failed to read collection, starting empty", key=key, error=str(e))
            self.last_persistence_error = e
            return []

        if records is None:
            return []

        try:
            items = [from_dict(record) for record in records]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Malformed collection, starting empty", key=key, error=str(e))
            self.last_persistence_error = PersistenceError(f"Malformed {key} collection: {e}")
            return []

        logger.debug("Collection read", key=key, count=len(items))
        return items

    def _load(self) -> None:
        self._habits = self._load_collection(HABITS, Habit.from_dict)
        self._results = self._load_collection(RESULTS, Result.from_dict)
        habit_entries = self._load_collection(HABIT_ENTRIES, HabitEntry.from_dict)
        result_entries = self._load_collection(RESULT_ENTRIES, ResultEntry.from_dict)

        habit_ids = {habit.id for habit in self._habits}
        result_ids = {result.id for result in self._results}

        # Keep only links listed on both sides
        links = {(habit.id, rid) for habit in self._habits for rid in habit.linked_result_ids} & {
            (hid, result.id) for result in self._results for hid in result.linked_habit_ids
        }
        for habit in self._habits:
            habit.linked_result_ids = [rid for rid in habit.linked_result_ids if (habit.id, rid) in links]
        for result in self._results:
            result.linked_habit_ids = [hid for hid in result.linked_habit_ids if (hid, result.id) in links]

        # Later duplicates of an (id, date) pair win
        for entry in habit_entries:
            if entry.habit_id in habit_ids:
                self._habit_index.setdefault(entry.habit_id, {})[entry.date] = entry
        for entry in result_entries:
            if entry.result_id in result_ids:
                self._result_index.setdefault(entry.result_id, {})[entry.date] = entry

        self._habit_entries = [e for e in habit_entries if self._habit_index.get(e.habit_id, {}).get(e.date) is e]
        self._result_entries = [e for e in result_entries if self._result_index.get(e.result_id, {}).get(e.date) is e]

        dropped = len(habit_entries) - len(self._habit_entries) + len(result_entries) - len(self._result_entries)
        if dropped:
            logger.warning("Dropped duplicate or orphaned entries on load", count=dropped)

        logger.info(
            "Store loaded",
            habits=len(self._habits),
            results=len(self._results),
            habit_entries=len(self._habit_entries),
            result_entries=len(self._result_entries),
        )

    def _collection(self, key: str) -> list[Any]:
        return {
            HABITS: self._habits,
            RESULTS: self._results,
            HABIT_ENTRIES: self._habit_entries,
            RESULT_ENTRIES: self._result_entries,
        }[key]

    def commit(self, *keys: str) -> None:
        """Write the named collections to the backend.

        Failures are logged and recorded, never raised.
        """
        for key in keys:
            records = [item.to_dict() for item in self._collection(key)]
            try:
                self.backend.save(key, records)
            except PersistenceError as e:
                logger.warning("Failed to persist collection", key=key, error=str(e))
                self.last_persistence_error = e

    # Queries

    @property
    def habits(self) -> list[Habit]:
        return list(self._habits)

    @property
    def results(self) -> list[Result]:
        return list(self._results)

    @property
    def habit_entries(self) -> list[HabitEntry]:
        return list(self._habit_entries)

    @property
    def result_entries(self) -> list[ResultEntry]:
        return list(self._result_entries)

    def get_habit(self, habit_id: str) -> Habit:
        """Return the habit with the given id or raise NotFoundError."""
        for habit in self._habits:
            if habit.id == habit_id:
                return habit
        raise NotFoundError("Habit", habit_id)

    def get_result(self, result_id: str) -> Result:
        """Return the result with the given id or raise NotFoundError."""
        for result in self._results:
            if result.id == result_id:
                return result
        raise NotFoundError("Result", result_id)

    def find_habit_entry(self, habit_id: str, day: date | str) -> HabitEntry | None:
        return self._habit_index.get(habit_id, {}).get(parse_date(day))

    def find_result_entry(self, result_id: str, day: date | str) -> ResultEntry | None:
        return self._result_index.get(result_id, {}).get(parse_date(day))

    def entries_for_habit(self, habit_id: str) -> list[HabitEntry]:
        """All recorded entries of a habit, oldest first."""
        return sorted(self._habit_index.get(habit_id, {}).values(), key=lambda e: e.date)

    def entries_for_result(self, result_id: str) -> list[ResultEntry]:
        """All recorded entries of a result, oldest first."""
        return sorted(self._result_index.get(result_id, {}).values(), key=lambda e: e.date)

    # Habits

    def create_habit(self, name: str, description: str = "") -> Habit:
        """Create a new habit with a fresh id, color and no links."""
        _validate_name(name)
        habit = Habit(id=self.id_factory(), name=name, color=self.color_factory(), description=description)
        self._habits.append(habit)
        logger.info("Habit created", habit_id=habit.id, name=name)
        self.commit(HABITS)
        return habit

    def update_habit(self, habit_id: str, name: str, description: str = "") -> Habit:
        """Replace a habit's name and description."""
        habit = self.get_habit(habit_id)
        _validate_name(name)
        habit.name = name
        habit.description = description
        logger.info("Habit updated", habit_id=habit_id, name=name)
        self.commit(HABITS)
        return habit

    def delete_habit(self, habit_id: str) -> None:
        """Delete a habit, its links and its entries. Unknown ids are ignored."""
        if not any(habit.id == habit_id for habit in self._habits):
            logger.debug("Habit already absent, nothing to delete", habit_id=habit_id)
            return

        self._habits = [habit for habit in self._habits if habit.id != habit_id]
        for result in self._results:
            if habit_id in result.linked_habit_ids:
                result.linked_habit_ids.remove(habit_id)
        self._habit_entries = [entry for entry in self._habit_entries if entry.habit_id != habit_id]
        removed = self._habit_index.pop(habit_id, {})

        logger.info("Habit deleted", habit_id=habit_id, entries_removed=len(removed))
        self.commit(HABITS, RESULTS, HABIT_ENTRIES)

    # Results

    def create_result(self, name: str, description: str = "") -> Result:
        """Create a new result with a fresh id, color and no links."""
        _validate_name(name)
        result = Result(id=self.id_factory(), name=name, color=self.color_factory(), description=description)
        self._results.append(result)
        logger.info("Result created", result_id=result.id, name=name)
        self.commit(RESULTS)
        return result

    def update_result(self, result_id: str, name: str, description: str = "") -> Result:
        """Replace a result's name and description."""
        result = self.get_result(result_id)
        _validate_name(name)
        result.name = name
        result.description = description
        logger.info("Result updated", result_id=result_id, name=name)
        self.commit(RESULTS)
        return result

    def delete_result(self, result_id: str) -> None:
        """Delete a result, its links and its entries. Unknown ids are ignored."""
        if not any(result.id == result_id for result in self._results):
            logger.debug("Result already absent, nothing to delete", result_id=result_id)
            return

        self._results = [result for result in self._results if result.id != result_id]
        for habit in self._habits:
            if result_id in habit.linked_result_ids:
                habit.linked_result_ids.remove(result_id)
        self._result_entries = [entry for entry in self._result_entries if entry.result_id != result_id]
        removed = self._result_index.pop(result_id, {})

        logger.info("Result deleted", result_id=result_id, entries_removed=len(removed))
        self.commit(RESULTS, HABITS, RESULT_ENTRIES)

    # Entries

    def record_habit_completion(self, habit_id: str, day: date | str, completed: bool) -> HabitEntry:
        """Set a habit's completion for a day, inserting or overwriting its entry."""
        self.get_habit(habit_id)
        day = parse_date(day)

        entry = self.find_habit_entry(habit_id, day)
        if entry is None:
            entry = HabitEntry(habit_id=habit_id, date=day, completed=bool(completed))
            self._habit_entries.append(entry)
            self._habit_index.setdefault(habit_id, {})[day] = entry
        else:
            entry.completed = bool(completed)

        logger.info("Habit completion recorded", habit_id=habit_id, date=day.isoformat(), completed=entry.completed)
        self.commit(HABIT_ENTRIES)
        return entry

    def toggle_habit_completion(self, habit_id: str, day: date | str) -> HabitEntry:
        """Flip a habit's completion for a day. A day without an entry becomes completed."""
        entry = self.find_habit_entry(habit_id, day)
        completed = True if entry is None else not entry.completed
        return self.record_habit_completion(habit_id, day, completed)

    def record_result_value(self, result_id: str, day: date | str, value: int) -> ResultEntry:
        """Set a result's rating for a day, inserting or overwriting its entry."""
        validate_rating(value)
        self.get_result(result_id)
        day = parse_date(day)

        entry = self.find_result_entry(result_id, day)
        if entry is None:
            entry = ResultEntry(result_id=result_id, date=day, value=value)
            self._result_entries.append(entry)
            self._result_index.setdefault(result_id, {})[day] = entry
        else:
            entry.value = value

        logger.info("Result value recorded", result_id=result_id, date=day.isoformat(), value=value)
        self.commit(RESULT_ENTRIES)
        return entry
