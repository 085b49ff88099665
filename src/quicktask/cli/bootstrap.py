# src/quicktask/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local directories exist,
- opens the task store and loads the initial AppState from it.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_store import StorageError, TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    try:
        settings.data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageError(f"cannot create data directory: {e}") from e


def create_initial_state(*, settings=None) -> AppState:
    """
    Open the store and mirror its contents into a fresh AppState.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings(). Raises StorageError if the
    database cannot be opened or read.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TaskStore(settings.tasks_db_path)
    state = AppState(settings=settings, task_store=store, tasks=store.list_all())
    state.clamp_selection()
    logger.info("Loaded %d tasks.", len(state.tasks))
    return state
