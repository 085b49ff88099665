# src/quicktask/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import os
import sqlite3
from pathlib import Path

from .task_models import Task

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """The database file could not be opened, read or written."""


class TaskNotFoundError(StorageError):
    """toggle/delete referenced an id that is no longer in the table."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"task id={task_id} not found")
        self.task_id = task_id


class ValidationError(ValueError):
    pass


class EmptyTextError(ValidationError):
    def __init__(self) -> None:
        super().__init__("task text is empty")


class TaskStore:
    """
    SQLite task store.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Durability:
    - every mutating method commits before returning
    - each method opens its own SQLite connection

    sqlite3 errors never leave this class raw: they are re-raised as StorageError.
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"cannot create data directory {self._db_path.parent}: {e}") from e
        if self._db_path.exists() and not os.access(self._db_path, os.R_OK | os.W_OK):
            raise StorageError(f"{self._db_path} is not readable and writable")
        self._ensure_schema()
        logger.info("TaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        except sqlite3.Error as e:
            raise StorageError(f"cannot open {self._db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        # WAL + NORMAL may lose the last commit on power loss; FULL does not.
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA synchronous=FULL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    text TEXT NOT NULL,
                    completed INTEGER NOT NULL DEFAULT 0
                )
                """
            )

            # Migrations (safe): add missing columns.
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            if "text" not in cols:
                raise StorageError(f"{self._db_path}: tasks table has no text column")
            add_col("completed", "INTEGER NOT NULL DEFAULT 0")

            conn.commit()
        except sqlite3.Error as e:
            # Covers "file is not a database" and read-only files.
            raise StorageError(f"cannot initialize {self._db_path}: {e}") from e
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            text=str(row["text"]),
            completed=bool(row["completed"]),
        )

    # ---- public API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)
        except sqlite3.Error as e:
            raise StorageError(f"count failed: {e}") from e
        finally:
            conn.close()

    def list_all(self) -> list[Task]:
        """All tasks, oldest first (id ascending)."""
        conn = self._get_conn()
        try:
            rows = conn.execute("SELECT id, text, completed FROM tasks ORDER BY id ASC").fetchall()
            return [self._row_to_task(r) for r in rows]
        except sqlite3.Error as e:
            raise StorageError(f"list failed: {e}") from e
        finally:
            conn.close()

    def create(self, text: str) -> Task:
        if not text or not text.strip():
            raise EmptyTextError()

        conn = self._get_conn()
        try:
            cur = conn.execute(
                "INSERT INTO tasks(text, completed) VALUES (?, 0)",
                (text,),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise StorageError("SQLite did not return lastrowid for tasks insert")
            task = Task(id=int(rowid), text=text, completed=False)
            logger.debug("Task created id=%s", task.id)
            return task
        except sqlite3.Error as e:
            raise StorageError(f"create failed: {e}") from e
        finally:
            conn.close()

    def toggle(self, task_id: int) -> None:
        conn = self._get_conn()
        try:
            cur = conn.execute(
                "UPDATE tasks SET completed = 1 - completed WHERE id = ?",
                (int(task_id),),
            )
            if cur.rowcount != 1:
                conn.rollback()
                raise TaskNotFoundError(task_id)
            conn.commit()
            logger.debug("Task toggled id=%s", task_id)
        except sqlite3.Error as e:
            raise StorageError(f"toggle failed: {e}") from e
        finally:
            conn.close()

    def delete(self, task_id: int) -> None:
        conn = self._get_conn()
        try:
            cur = conn.execute("DELETE FROM tasks WHERE id = ?", (int(task_id),))
            if cur.rowcount != 1:
                conn.rollback()
                raise TaskNotFoundError(task_id)
            conn.commit()
            logger.debug("Task deleted id=%s", task_id)
        except sqlite3.Error as e:
            raise StorageError(f"delete failed: {e}") from e
        finally:
            conn.close()
