# src/quicktask/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_models import Task
from .ports import TaskRepo


@dataclass(frozen=True, slots=True)
class Navigation:
    """Moving the selection and acting on the selected task."""

    name = "navigation"


@dataclass(frozen=True, slots=True)
class Inserting:
    """Composing a new task; `draft` only exists in this mode."""

    draft: str = ""

    name = "inserting"


Mode = Navigation | Inserting


@dataclass(frozen=True, slots=True)
class TaskView:
    text: str
    completed: bool


@dataclass(frozen=True, slots=True)
class RenderModel:
    """Read-only snapshot handed to the renderer after every mutation."""

    tasks: tuple[TaskView, ...]
    selected: int | None
    mode: str
    draft: str | None
    status: str | None
    should_quit: bool


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any
    task_store: TaskRepo

    tasks: list[Task] = field(default_factory=list)
    selected: int = 0
    mode: Mode = field(default_factory=Navigation)
    status: str | None = None
    should_quit: bool = False

    def clamp_selection(self) -> None:
        if not self.tasks:
            self.selected = 0
        else:
            self.selected = max(0, min(self.selected, len(self.tasks) - 1))

    def selected_task(self) -> Task | None:
        if not self.tasks:
            return None
        return self.tasks[self.selected]

    def snapshot(self) -> RenderModel:
        return RenderModel(
            tasks=tuple(TaskView(text=t.text, completed=t.completed) for t in self.tasks),
            selected=self.selected if self.tasks else None,
            mode=self.mode.name,
            draft=self.mode.draft if isinstance(self.mode, Inserting) else None,
            status=self.status,
            should_quit=self.should_quit,
        )
