"""Derived habit metrics: streaks, completion rates and daily summaries."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, timedelta

import structlog

from habit_tracker.models import Habit, Result, parse_date
from habit_tracker.resolver import DailyStateResolver
from habit_tracker.store import EntityStore

logger = structlog.get_logger()

HIGH_RATE_THRESHOLD = 70
MEDIUM_RATE_THRESHOLD = 30


class StreakCalculator:
    """Counts consecutive completed days ending today."""

    def __init__(self, store: EntityStore, today: Callable[[], date] = date.today) -> None:
        """Initialize the calculator.

        Args:
            store: Entity store to read entries from
            today: Clock returning the current day
        """
        self.store = store
        self.resolver = DailyStateResolver(store)
        self.today = today

    def current_streak(self, habit_id: str) -> int:
        """Return the number of consecutive completed days ending today.

        An unmarked today yields 0, however long the run before it. The walk
        can never take more steps than the habit has completed entries.
        """
        limit = sum(1 for entry in self.store.entries_for_habit(habit_id) if entry.completed)
        day = self.today()
        streak = 0
        while streak < limit and self.resolver.habit_completed_on(habit_id, day):
            streak += 1
            day -= timedelta(days=1)

        logger.debug("Streak computed", habit_id=habit_id, streak=streak)
        return streak


class CompletionRateCalculator:
    """Share of recorded days on which a habit was completed.

    Days with no entry count neither as completed nor as missed.
    """

    def __init__(self, store: EntityStore) -> None:
        self.store = store

    def completion_rate(self, habit_id: str) -> float:
        """Return the completion rate as a percentage in [0, 100]."""
        entries = self.store.entries_for_habit(habit_id)
        if not entries:
            return 0.0
        completed = sum(1 for entry in entries if entry.completed)
        return completed / len(entries) * 100


def rate_band(rate: float) -> str:
    """Classify a completion rate as "high", "medium" or "low"."""
    if rate > HIGH_RATE_THRESHOLD:
        return "high"
    if rate > MEDIUM_RATE_THRESHOLD:
        return "medium"
    return "low"


@dataclass
class HabitDayStatus:
    habit: Habit
    completed: bool
    streak: int
    completion_rate: float


@dataclass
class ResultDayStatus:
    result: Result
    value: int
    linked_completed: int = 0
    linked_total: int = 0


@dataclass
class DailySummary:
    """Every habit and result as seen on one day."""

    date: date
    habits: list[HabitDayStatus] = field(default_factory=list)
    results: list[ResultDayStatus] = field(default_factory=list)


def summarize_day(store: EntityStore, day: date | str, today: Callable[[], date] = date.today) -> DailySummary:
    """Build the daily overview for a day.

    Streaks are always anchored to today, not to the day being viewed.
    """
    day = parse_date(day)
    resolver = DailyStateResolver(store)
    streaks = StreakCalculator(store, today=today)
    rates = CompletionRateCalculator(store)

    summary = DailySummary(date=day)
    for habit in store.habits:
        summary.habits.append(
            HabitDayStatus(
                habit=habit,
                completed=resolver.habit_completed_on(habit.id, day),
                streak=streaks.current_streak(habit.id),
                completion_rate=rates.completion_rate(habit.id),
            )
        )
    for result in store.results:
        linked = result.linked_habit_ids
        summary.results.append(
            ResultDayStatus(
                result=result,
                value=resolver.result_value_on(result.id, day),
                linked_completed=sum(1 for habit_id in linked if resolver.habit_completed_on(habit_id, day)),
                linked_total=len(linked),
            )
        )
    return summary
