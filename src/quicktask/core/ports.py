# src/quicktask/core/ports.py

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the terminal layer and storage swappable and makes testing easier.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Task
    from .commands import KeyEvent
    from .state import RenderModel


class TaskRepo(Protocol):
    """Durable task table. Every mutating call is committed when it returns."""

    def list_all(self) -> list[Task]: ...
    def create(self, text: str) -> Task: ...
    def toggle(self, task_id: int) -> None: ...
    def delete(self, task_id: int) -> None: ...


class KeySource(Protocol):
    """
    Terminal input side.

    Returns the next logical key, or None when timeout_ms elapsed without input.
    """

    def next_key(self, timeout_ms: int) -> KeyEvent | None: ...


class Renderer(Protocol):
    def draw(self, model: RenderModel) -> None: ...
