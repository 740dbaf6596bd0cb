"""Bidirectional links between habits and results."""

import structlog

from habit_tracker.models import Habit, Result
from habit_tracker.store import HABITS, RESULTS, EntityStore

logger = structlog.get_logger()


class LinkManager:
    """Keeps ``Habit.linked_result_ids`` and ``Result.linked_habit_ids`` mirrored.

    All link changes go through set_link so that both sides are always
    updated together.
    """

    def __init__(self, store: EntityStore) -> None:
        self.store = store

    def set_link(self, habit_id: str, result_id: str, linked: bool) -> None:
        """Link or unlink a habit and a result.

        Both operations are idempotent.

        Raises:
            NotFoundError: If either id is unknown
        """
        habit = self.store.get_habit(habit_id)
        result = self.store.get_result(result_id)

        if linked:
            if result_id not in habit.linked_result_ids:
                habit.linked_result_ids.append(result_id)
            if habit_id not in result.linked_habit_ids:
                result.linked_habit_ids.append(habit_id)
        else:
            if result_id in habit.linked_result_ids:
                habit.linked_result_ids.remove(result_id)
            if habit_id in result.linked_habit_ids:
                result.linked_habit_ids.remove(habit_id)

        logger.info("Link updated", habit_id=habit_id, result_id=result_id, linked=linked)
        self.store.commit(HABITS, RESULTS)

    def is_linked(self, habit_id: str, result_id: str) -> bool:
        return result_id in self.store.get_habit(habit_id).linked_result_ids

    def linked_results(self, habit_id: str) -> list[Result]:
        """Results linked to a habit, in link order."""
        habit = self.store.get_habit(habit_id)
        return [self.store.get_result(result_id) for result_id in habit.linked_result_ids]

    def linked_habits(self, result_id: str) -> list[Habit]:
        """Habits linked to a result, in link order."""
        result = self.store.get_result(result_id)
        return [self.store.get_habit(habit_id) for habit_id in result.linked_habit_ids]
