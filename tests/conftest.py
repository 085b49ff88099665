# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from quicktask.core.state import AppState
from quicktask.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="quicktask-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        tasks_db_path=tmp_path / "data" / "tasks.sqlite3",
        log_dir=tmp_path / "logs",
        idle_timeout_ms=0,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_db_path)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    """Empty AppState backed by a real SQLite store."""
    return AppState(settings=settings, task_store=store, tasks=store.list_all())


@pytest.fixture()
def seeded_state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    """AppState with three tasks: one, two, three (in id order)."""
    for text in ("one", "two", "three"):
        store.create(text)
    return AppState(settings=settings, task_store=store, tasks=store.list_all())
