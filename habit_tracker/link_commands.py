"""Link management commands for habit tracker CLI."""

from cyclopts import App

from habit_tracker.links import LinkManager

link_app = App(name="link", help="Manage links between habits and results")


@link_app.command
def add(habit_id: str, *result_ids: str) -> None:
    """Link a habit to one or more results."""
    from habit_tracker.cli import open_store

    with open_store() as store:
        links = LinkManager(store)
        for result_id in result_ids:
            links.set_link(habit_id, result_id, True)
    print(f"Added {len(result_ids)} link(s) from {habit_id}")


@link_app.command
def remove(habit_id: str, *result_ids: str) -> None:
    """Unlink a habit from one or more results."""
    from habit_tracker.cli import open_store

    with open_store() as store:
        links = LinkManager(store)
        for result_id in result_ids:
            links.set_link(habit_id, result_id, False)
    print(f"Removed {len(result_ids)} link(s) from {habit_id}")


@link_app.command(name="list")
def list_links(entity_id: str) -> None:
    """List the links of a habit or a result."""
    from habit_tracker.cli import open_store

    with open_store() as store:
        links = LinkManager(store)
        if any(habit.id == entity_id for habit in store.habits):
            source = store.get_habit(entity_id)
            targets = [(result.id, result.name) for result in links.linked_results(entity_id)]
        else:
            source = store.get_result(entity_id)
            targets = [(habit.id, habit.name) for habit in links.linked_habits(entity_id)]

    if not targets:
        print(f"No links found for {source.name}")
        return

    print(f"Links for {source.name}:\n")
    for target_id, target_name in targets:
        print(f"  {entity_id} <--> {target_id} {target_name}")
