"""Result management commands for habit tracker CLI."""

from cyclopts import App

result_app = App(name="result", help="Manage results")


@result_app.command
def create(name: str, description: str = "") -> None:
    """Create a new result."""
    from habit_tracker.cli import open_store

    with open_store() as store:
        result = store.create_result(name, description)
    print(f"Created result {result.id}: {result.name}")


@result_app.command
def update(result_id: str, name: str, description: str = "") -> None:
    """Rename a result and replace its description."""
    from habit_tracker.cli import open_store

    with open_store() as store:
        result = store.update_result(result_id, name, description)
    print(f"Updated result {result.id}: {result.name}")


@result_app.command
def delete(*result_ids: str) -> None:
    """Delete one or more results along with their entries and links."""
    from habit_tracker.cli import open_store

    with open_store() as store:
        for result_id in result_ids:
            store.delete_result(result_id)
    print(f"Deleted {len(result_ids)} result(s)")


@result_app.command(name="list")
def list_results() -> None:
    """List all results."""
    from habit_tracker.cli import open_store

    with open_store() as store:
        results = store.results

    print(f"Found {len(results)} result(s):\n")
    for result in results:
        links_str = f" [{len(result.linked_habit_ids)} linked habit(s)]" if result.linked_habit_ids else ""
        print(f"● {result.id}: {result.name}{links_str}")
        if result.description:
            print(f"    {result.description}")
