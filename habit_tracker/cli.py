"""CLI for habit tracker."""

import json
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from typing import Annotated, Literal

import structlog
from cyclopts import App, Parameter

from habit_tracker.backend import Backend
from habit_tracker.backends import JsonFileBackend, MemoryBackend
from habit_tracker.config import get_config
from habit_tracker.config_commands import config_app
from habit_tracker.errors import HabitTrackerError
from habit_tracker.habit_commands import habit_app
from habit_tracker.link_commands import link_app
from habit_tracker.metrics import rate_band, summarize_day
from habit_tracker.models import parse_date
from habit_tracker.result_commands import result_app
from habit_tracker.store import EntityStore
from habit_tracker.visualization import VisualizationAggregator

logger = structlog.get_logger()

app = App(
    help="Habit Tracker - track daily habits and the results they drive",
)

app.command(habit_app)
app.command(result_app)
app.command(link_app)
app.command(config_app)

DateOption = Annotated[str | None, Parameter(name="--date", help="Day as YYYY-MM-DD (defaults to today)")]


def configure_logging(log_level: str) -> None:
    """Configure structlog with the specified log level."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(min_level=log_level.lower()))


def get_backend() -> Backend:
    """Get the configured backend."""
    config = get_config()
    backend_type = config.backend

    if backend_type == "json":
        return JsonFileBackend(data_dir=config.data_dir)
    elif backend_type == "memory":
        return MemoryBackend()
    else:
        raise ValueError(f"Unknown backend: {backend_type}")


@contextmanager
def open_store() -> Iterator[EntityStore]:
    """Open the store for one command and report persistence trouble afterwards."""
    store = EntityStore(get_backend())
    try:
        yield store
    finally:
        if store.last_persistence_error is not None:
            print(f"Warning: {store.last_persistence_error}", file=sys.stderr)


def resolve_day(day: str | None) -> date:
    return parse_date(day) if day else date.today()


@app.command
def mark(habit_id: str, day: DateOption = None, undo: bool = False) -> None:
    """Mark a habit as completed (or not, with --undo) for a day."""
    with open_store() as store:
        entry = store.record_habit_completion(habit_id, resolve_day(day), not undo)
        state = "completed" if entry.completed else "not completed"
        print(f"{store.get_habit(habit_id).name}: {state} on {entry.date.isoformat()}")


@app.command
def toggle(habit_id: str, day: DateOption = None) -> None:
    """Flip a habit's completion for a day."""
    with open_store() as store:
        entry = store.toggle_habit_completion(habit_id, resolve_day(day))
        state = "completed" if entry.completed else "not completed"
        print(f"{store.get_habit(habit_id).name}: {state} on {entry.date.isoformat()}")


@app.command
def rate(result_id: str, value: int, day: DateOption = None) -> None:
    """Rate a result from 0 to 5 for a day."""
    with open_store() as store:
        entry = store.record_result_value(result_id, resolve_day(day), value)
        print(f"{store.get_result(result_id).name}: {entry.value}/5 on {entry.date.isoformat()}")


@app.command(name="day")
def show_day(day: DateOption = None) -> None:
    """Show every habit and result for a day."""
    with open_store() as store:
        summary = summarize_day(store, resolve_day(day))

    print(f"{summary.date:%A, %B} {summary.date.day}, {summary.date.year}\n")

    print("Habits:")
    if not summary.habits:
        print("  (none)")
    for status in summary.habits:
        marker = "✓" if status.completed else "·"
        print(
            f"  {marker} {status.habit.id}: {status.habit.name} "
            f"[{status.streak} day streak, {round(status.completion_rate)}% {rate_band(status.completion_rate)}]"
        )

    print("\nResults:")
    if not summary.results:
        print("  (none)")
    for status in summary.results:
        stars = "★" * status.value + "☆" * (5 - status.value)
        linked_str = ""
        if status.linked_total:
            linked_str = f" [{status.linked_completed}/{status.linked_total} linked habits done]"
        print(f"  {stars} {status.result.id}: {status.result.name}{linked_str}")


@app.command
def series(result_id: str, as_json: Annotated[bool, Parameter(name="--json")] = False) -> None:
    """Show a result's ratings alongside its linked habits, day by day."""
    with open_store() as store:
        aggregator = VisualizationAggregator(store)
        if as_json:
            print(json.dumps(aggregator.records_for(result_id), indent=2))
            return
        points = aggregator.series_for(result_id)

    if not points:
        print(f"No entries for result {result_id}")
        return

    for point in points:
        habits_str = ", ".join(
            f"{completion.name} {'✓' if completion.completed else '·'}" for completion in point.habits.values()
        )
        print(
            f"{point.date.isoformat()}  result {point.result_value}/5  "
            f"habits {point.habit_completion_rate:.1f}/5  {habits_str}".rstrip()
        )


@app.meta.default
def main(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    log_level: Literal["debug", "info", "warning", "error", "critical"] = "critical",
) -> None:
    """Main entry point with global options."""
    configure_logging(log_level)
    try:
        app(tokens)
    except HabitTrackerError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1) from e


def run() -> None:
    app.meta()


if __name__ == "__main__":
    run()
