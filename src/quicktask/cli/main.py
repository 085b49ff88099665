# src/quicktask/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState from the task store, then hands the
terminal to the curses connector until the user quits.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.curses_connector import run_curses_loop
from ..logging_setup import setup_logging
from ..tasks.task_store import StorageError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_STORAGE = 1


def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        store = getattr(state, "task_store", None)
        if store is not None and hasattr(store, "close"):
            store.close()
    except Exception:
        logger.debug("Task store close failed.", exc_info=True)


def main() -> int:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    file_level = getattr(logging, level_name, logging.INFO)

    try:
        log_file = setup_logging(log_dir=settings.log_dir, file_level=file_level)
    except OSError as e:
        print(f"{settings.app_name}: cannot open log directory: {e}", file=sys.stderr)
        return EXIT_STORAGE

    logger.info("Starting %s (log=%s)...", settings.app_name, log_file)

    try:
        state = create_initial_state(settings=settings)
    except StorageError as e:
        logger.error("Cannot open task store %s: %s", settings.tasks_db_path, e)
        print(f"{settings.app_name}: cannot open task store: {e}", file=sys.stderr)
        return EXIT_STORAGE

    try:
        run_curses_loop(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
