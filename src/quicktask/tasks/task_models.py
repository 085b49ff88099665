# src/quicktask/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Task:
    id: int
    text: str
    completed: bool = False
