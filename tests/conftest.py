"""Shared fixtures for habit tracker tests."""

import itertools
from collections.abc import Callable

import pytest

from habit_tracker.backends import MemoryBackend
from habit_tracker.cli import configure_logging
from habit_tracker.store import EntityStore


@pytest.fixture(autouse=True)
def quiet_logging() -> None:
    """Keep structlog output out of captured stdout."""
    configure_logging("critical")


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Deterministic ids: id1, id2, ..."""
    counter = itertools.count(1)
    return lambda: f"id{next(counter)}"


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def store(backend: MemoryBackend, id_factory: Callable[[], str]) -> EntityStore:
    return EntityStore(backend, id_factory=id_factory, color_factory=lambda: "hsl(120, 70%, 80%)")
