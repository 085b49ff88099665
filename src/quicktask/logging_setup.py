# src/quicktask/logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path


def setup_logging(
    *,
    log_dir: str | Path,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Configure logging with a single file handler.

    There is no console handler: curses owns the terminal and any write to
    stderr would tear the screen. Startup errors that happen before curses
    starts are printed by the CLI itself.

    Call this ONCE, very early (before first logger.info). Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "quicktask.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)

    return log_file
