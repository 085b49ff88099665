# tests/test_task_store.py

from __future__ import annotations

from pathlib import Path

import pytest

from quicktask.tasks.task_store import (
    EmptyTextError,
    StorageError,
    TaskNotFoundError,
    TaskStore,
    ValidationError,
)


def test_create_list_round_trip(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.sqlite3")

    first = store.create("write report")
    second = store.create("buy milk")

    assert second.id > first.id
    tasks = store.list_all()
    assert [t.text for t in tasks] == ["write report", "buy milk"]
    assert [t.id for t in tasks] == [first.id, second.id]
    milk = [t for t in tasks if t.text == "buy milk"]
    assert len(milk) == 1
    assert milk[0].completed is False


def test_create_keeps_text_exactly_as_typed(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.sqlite3")
    task = store.create("  indented note ")
    assert task.text == "  indented note "
    assert [t.text for t in store.list_all()] == ["  indented note "]


@pytest.mark.parametrize("text", ["", "   ", "\t\n"])
def test_create_rejects_empty_text(tmp_path: Path, text: str) -> None:
    store = TaskStore(tmp_path / "tasks.sqlite3")
    with pytest.raises(EmptyTextError):
        store.create(text)
    assert store.count_tasks() == 0


def test_empty_text_is_a_validation_error_not_storage() -> None:
    assert issubclass(EmptyTextError, ValidationError)
    assert not issubclass(EmptyTextError, StorageError)
    assert issubclass(TaskNotFoundError, StorageError)


def test_toggle_twice_restores_flag(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.sqlite3")
    task = store.create("stretch")

    store.toggle(task.id)
    assert store.list_all()[0].completed is True

    store.toggle(task.id)
    assert store.list_all()[0].completed is False


def test_toggle_and_delete_missing_id_raise_not_found(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.sqlite3")
    store.create("only")

    with pytest.raises(TaskNotFoundError) as exc:
        store.toggle(999)
    assert exc.value.task_id == 999

    with pytest.raises(TaskNotFoundError):
        store.delete(999)

    assert store.count_tasks() == 1


def test_delete_removes_row(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.sqlite3")
    a = store.create("a")
    b = store.create("b")

    store.delete(a.id)

    assert [t.id for t in store.list_all()] == [b.id]
    with pytest.raises(TaskNotFoundError):
        store.delete(a.id)


def test_ids_are_never_reused(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.sqlite3")
    a = store.create("a")
    b = store.create("b")
    store.delete(b.id)

    c = store.create("c")

    assert c.id > b.id > a.id


def test_state_survives_reopen(tmp_path: Path) -> None:
    db = tmp_path / "nested" / "dir" / "tasks.sqlite3"
    store = TaskStore(db)
    task = store.create("persist me")
    store.toggle(task.id)

    reopened = TaskStore(db)
    tasks = reopened.list_all()
    assert len(tasks) == 1
    assert tasks[0].id == task.id
    assert tasks[0].text == "persist me"
    assert tasks[0].completed is True

    nxt = reopened.create("next")
    assert nxt.id > task.id


def test_init_rejects_non_database_file(tmp_path: Path) -> None:
    db = tmp_path / "tasks.sqlite3"
    db.write_bytes(b"this is definitely not an sqlite database" * 100)

    with pytest.raises(StorageError):
        TaskStore(db)


def test_init_migrates_table_missing_completed_column(tmp_path: Path) -> None:
    import sqlite3

    db = tmp_path / "tasks.sqlite3"
    conn = sqlite3.connect(str(db))
    conn.execute("CREATE TABLE tasks (id INTEGER PRIMARY KEY AUTOINCREMENT, text TEXT NOT NULL)")
    conn.execute("INSERT INTO tasks(text) VALUES ('legacy')")
    conn.commit()
    conn.close()

    store = TaskStore(db)
    tasks = store.list_all()
    assert len(tasks) == 1
    assert tasks[0].text == "legacy"
    assert tasks[0].completed is False


def test_init_rejects_table_without_text_column(tmp_path: Path) -> None:
    import sqlite3

    db = tmp_path / "tasks.sqlite3"
    conn = sqlite3.connect(str(db))
    conn.execute("CREATE TABLE tasks (id INTEGER PRIMARY KEY AUTOINCREMENT, title TEXT)")
    conn.execute("INSERT INTO tasks(title) VALUES ('other app')")
    conn.commit()
    conn.close()

    with pytest.raises(StorageError):
        TaskStore(db)


def test_init_rejects_unwritable_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    db = tmp_path / "tasks.sqlite3"
    TaskStore(db).create("existing")

    # chmod is ignored when tests run as root.
    monkeypatch.setattr("quicktask.tasks.task_store.os.access", lambda path, mode: False)

    with pytest.raises(StorageError):
        TaskStore(db)
