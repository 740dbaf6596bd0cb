"""Tests for CLI commands."""

import json
from pathlib import Path

import pytest

from habit_tracker import cli, config_commands, habit_commands, link_commands, result_commands
from habit_tracker.backends import JsonFileBackend, MemoryBackend
from habit_tracker.config import Config
from habit_tracker.errors import NotFoundError, ValidationError
from habit_tracker.links import LinkManager
from habit_tracker.store import EntityStore


@pytest.fixture
def backend(monkeypatch: pytest.MonkeyPatch) -> MemoryBackend:
    """Route every command to one shared in-memory backend."""
    shared = MemoryBackend()
    monkeypatch.setattr("habit_tracker.cli.get_backend", lambda: shared)
    return shared


def test_habit_create_and_list(backend: MemoryBackend, capsys: pytest.CaptureFixture[str]) -> None:
    """Test creating and listing habits."""
    habit_commands.create("Run", description="Every morning")
    habit_commands.list_habits()

    out = capsys.readouterr().out
    habit = EntityStore(backend).habits[0]
    assert f"Created habit {habit.id}: Run" in out
    assert "Found 1 habit(s)" in out
    assert "Every morning" in out


def test_habit_update_and_delete(backend: MemoryBackend, capsys: pytest.CaptureFixture[str]) -> None:
    """Test renaming then deleting a habit."""
    habit = EntityStore(backend).create_habit("Run")

    habit_commands.update(habit.id, "Jog")
    assert EntityStore(backend).get_habit(habit.id).name == "Jog"

    habit_commands.delete(habit.id, "unknown")
    assert EntityStore(backend).habits == []
    assert "Deleted 2 habit(s)" in capsys.readouterr().out


def test_habit_create_rejects_blank_name(backend: MemoryBackend) -> None:
    """Test that validation errors propagate out of commands."""
    with pytest.raises(ValidationError):
        habit_commands.create("  ")


def test_result_commands(backend: MemoryBackend, capsys: pytest.CaptureFixture[str]) -> None:
    """Test result create, update, list and delete."""
    result_commands.create("Energy")
    result = EntityStore(backend).results[0]
    result_commands.update(result.id, "Mood", description="How I feel")
    result_commands.list_results()
    out = capsys.readouterr().out
    assert f"Created result {result.id}: Energy" in out
    assert "Mood" in out
    assert "How I feel" in out

    result_commands.delete(result.id)
    assert EntityStore(backend).results == []


def test_mark_toggle_and_rate(backend: MemoryBackend, capsys: pytest.CaptureFixture[str]) -> None:
    """Test the daily entry commands."""
    store = EntityStore(backend)
    habit = store.create_habit("Run")
    result = store.create_result("Energy")

    cli.mark(habit.id, day="2024-01-01")
    cli.toggle(habit.id, day="2024-01-02")
    cli.mark(habit.id, day="2024-01-02", undo=True)
    cli.rate(result.id, 4, day="2024-01-01")

    out = capsys.readouterr().out
    assert "Run: completed on 2024-01-01" in out
    assert "Run: not completed on 2024-01-02" in out
    assert "Energy: 4/5 on 2024-01-01" in out

    reloaded = EntityStore(backend)
    assert reloaded.find_habit_entry(habit.id, "2024-01-01").completed is True
    assert reloaded.find_habit_entry(habit.id, "2024-01-02").completed is False
    assert reloaded.find_result_entry(result.id, "2024-01-01").value == 4


def test_rate_out_of_range(backend: MemoryBackend) -> None:
    """Test that out-of-range ratings are rejected."""
    result = EntityStore(backend).create_result("Energy")
    with pytest.raises(ValidationError):
        cli.rate(result.id, 9, day="2024-01-01")


def test_mark_unknown_habit(backend: MemoryBackend) -> None:
    """Test marking a habit that does not exist."""
    with pytest.raises(NotFoundError):
        cli.mark("nope", day="2024-01-01")


def test_link_commands(backend: MemoryBackend, capsys: pytest.CaptureFixture[str]) -> None:
    """Test adding, listing and removing links."""
    store = EntityStore(backend)
    habit = store.create_habit("Run")
    result = store.create_result("Energy")

    link_commands.add(habit.id, result.id)
    reloaded = EntityStore(backend)
    assert LinkManager(reloaded).is_linked(habit.id, result.id)

    link_commands.list_links(habit.id)
    link_commands.list_links(result.id)
    out = capsys.readouterr().out
    assert f"{habit.id} <--> {result.id} Energy" in out
    assert f"{result.id} <--> {habit.id} Run" in out

    link_commands.remove(habit.id, result.id)
    link_commands.list_links(habit.id)
    assert "No links found for Run" in capsys.readouterr().out


def test_day_summary(backend: MemoryBackend, capsys: pytest.CaptureFixture[str]) -> None:
    """Test the daily overview output."""
    store = EntityStore(backend)
    habit = store.create_habit("Run")
    result = store.create_result("Energy")
    store.record_habit_completion(habit.id, "2024-01-01", True)
    store.record_result_value(result.id, "2024-01-01", 3)

    cli.show_day(day="2024-01-01")

    out = capsys.readouterr().out
    assert "Monday, January 1, 2024" in out
    assert f"✓ {habit.id}: Run" in out
    assert "100% high" in out
    assert f"★★★☆☆ {result.id}: Energy" in out


def test_series_json(backend: MemoryBackend, capsys: pytest.CaptureFixture[str]) -> None:
    """Test the chart records output."""
    store = EntityStore(backend)
    habit = store.create_habit("Run")
    result = store.create_result("Energy")
    LinkManager(store).set_link(habit.id, result.id, True)
    store.record_habit_completion(habit.id, "2024-02-01", True)

    cli.series(result.id, as_json=True)

    records = json.loads(capsys.readouterr().out)
    assert records == [
        {
            "date": "2024-02-01",
            "displayDate": "Feb 1",
            "resultValue": 0,
            f"habit_{habit.id}": 1,
            f"habit_{habit.id}_name": "Run",
            "habitCompletionRate": 5.0,
        }
    ]


def test_series_table(backend: MemoryBackend, capsys: pytest.CaptureFixture[str]) -> None:
    """Test the plain series output."""
    result = EntityStore(backend).create_result("Energy")
    cli.series(result.id)
    assert f"No entries for result {result.id}" in capsys.readouterr().out

    EntityStore(backend).record_result_value(result.id, "2024-01-05", 2)
    cli.series(result.id)
    assert "2024-01-05  result 2/5  habits 0.0/5" in capsys.readouterr().out


def test_persistence_warning(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test that a failed write is reported as a warning, not an error."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    monkeypatch.setattr("habit_tracker.cli.get_backend", lambda: JsonFileBackend(blocker / "data"))

    habit_commands.create("Run")

    captured = capsys.readouterr()
    assert "Created habit" in captured.out
    assert "Warning:" in captured.err


def test_get_backend_from_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test backend selection from configuration."""
    config = Config(config_dir=tmp_path / "config")
    monkeypatch.setattr("habit_tracker.cli.get_config", lambda: config)

    config.set("json.data_dir", str(tmp_path / "data"))
    backend = cli.get_backend()
    assert isinstance(backend, JsonFileBackend)
    assert backend.data_dir == tmp_path / "data"

    config.set("backend", "memory")
    assert isinstance(cli.get_backend(), MemoryBackend)

    config.set("backend", "sqlite")
    with pytest.raises(ValueError):
        cli.get_backend()


def test_config_commands(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    """Test config set, get, list and unset."""
    config = Config(config_dir=tmp_path / "config")
    monkeypatch.setattr("habit_tracker.config_commands.get_config", lambda use_global=False: config)

    config_commands.get("backend")
    assert "backend = json (default)" in capsys.readouterr().out

    config_commands.set("backend", "memory")
    config_commands.get("backend")
    config_commands.list_config()
    out = capsys.readouterr().out
    assert "Set backend = memory (local)" in out
    assert "backend = memory" in out
    assert "json.data_dir = " in out

    config_commands.unset("backend")
    assert config.get("backend") is None

    with pytest.raises(ValidationError):
        config_commands.set("backend", "sqlite")


def test_warning_reported_when_command_fails(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test that a persistence warning is still printed when the command raises."""
    (tmp_path / "habits.json").write_text("{not json")
    monkeypatch.setattr("habit_tracker.cli.get_backend", lambda: JsonFileBackend(tmp_path))

    with pytest.raises(NotFoundError):
        cli.mark("nope", day="2024-01-01")

    assert "Warning:" in capsys.readouterr().err


def test_day_summary_counts_linked_habits(backend: MemoryBackend, capsys: pytest.CaptureFixture[str]) -> None:
    """Test the result line shows how many linked habits were done that day."""
    store = EntityStore(backend)
    run = store.create_habit("Run")
    read = store.create_habit("Read")
    result = store.create_result("Energy")
    links = LinkManager(store)
    links.set_link(run.id, result.id, True)
    links.set_link(read.id, result.id, True)
    store.record_habit_completion(run.id, "2024-01-01", True)

    cli.show_day(day="2024-01-01")

    assert f"{result.id}: Energy [1/2 linked habits done]" in capsys.readouterr().out
