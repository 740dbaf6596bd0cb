"""Habit management commands for habit tracker CLI."""

from cyclopts import App

habit_app = App(name="habit", help="Manage habits")


@habit_app.command
def create(name: str, description: str = "") -> None:
    """Create a new habit."""
    from habit_tracker.cli import open_store

    with open_store() as store:
        habit = store.create_habit(name, description)
    print(f"Created habit {habit.id}: {habit.name}")


@habit_app.command
def update(habit_id: str, name: str, description: str = "") -> None:
    """Rename a habit and replace its description."""
    from habit_tracker.cli import open_store

    with open_store() as store:
        habit = store.update_habit(habit_id, name, description)
    print(f"Updated habit {habit.id}: {habit.name}")


@habit_app.command
def delete(*habit_ids: str) -> None:
    """Delete one or more habits along with their entries and links."""
    from habit_tracker.cli import open_store

    with open_store() as store:
        for habit_id in habit_ids:
            store.delete_habit(habit_id)
    print(f"Deleted {len(habit_ids)} habit(s)")


@habit_app.command(name="list")
def list_habits() -> None:
    """List all habits."""
    from habit_tracker.cli import open_store

    with open_store() as store:
        habits = store.habits

    print(f"Found {len(habits)} habit(s):\n")
    for habit in habits:
        links_str = f" [{len(habit.linked_result_ids)} linked result(s)]" if habit.linked_result_ids else ""
        print(f"● {habit.id}: {habit.name}{links_str}")
        if habit.description:
            print(f"    {habit.description}")
