# src/quicktask/core/controller.py

"""
Command processor and event loop.

apply_command() is the only place AppState changes. Each store call is made
through attempt(), and the outcome decides what happens to the in-memory list:
- success: mirror the change locally
- TaskNotFoundError: the row vanished underneath us; reload and clamp
- any other StorageError: leave state untouched and show a status line
"""

from __future__ import annotations

import logging

from ..tasks.task_store import EmptyTextError, TaskNotFoundError
from .commands import Action, Command, command_for_key
from .ports import KeySource, Renderer
from .results import Err, attempt
from .state import AppState, Inserting, Navigation

logger = logging.getLogger(__name__)

_NEEDS_TASKS = {
    Action.MOVE_DOWN,
    Action.MOVE_UP,
    Action.JUMP_FIRST,
    Action.JUMP_LAST,
    Action.TOGGLE_SELECTED,
    Action.DELETE_SELECTED,
}


def _storage_failed(state: AppState, what: str, err: Err) -> None:
    logger.warning("%s failed: %s", what, err.error)
    state.status = f"{what} failed: {err.error}"


def reload_tasks(state: AppState) -> None:
    """Replace the in-memory list with the store's and re-clamp the selection."""
    res = attempt(state.task_store.list_all)
    if isinstance(res, Err):
        _storage_failed(state, "Reload", res)
        return
    state.tasks = list(res.value)
    state.clamp_selection()
    logger.info("Reloaded %d tasks from store.", len(state.tasks))


def _toggle_selected(state: AppState) -> None:
    task = state.selected_task()
    if task is None:
        return
    res = attempt(state.task_store.toggle, task.id)
    if isinstance(res, Err):
        if isinstance(res.error, TaskNotFoundError):
            logger.info("Toggle: task id=%s is gone, reloading.", task.id)
            reload_tasks(state)
        else:
            _storage_failed(state, "Toggle", res)
        return
    task.completed = not task.completed


def _delete_selected(state: AppState) -> None:
    task = state.selected_task()
    if task is None:
        return
    res = attempt(state.task_store.delete, task.id)
    if isinstance(res, Err):
        if isinstance(res.error, TaskNotFoundError):
            logger.info("Delete: task id=%s is gone, reloading.", task.id)
            reload_tasks(state)
        else:
            _storage_failed(state, "Delete", res)
        return
    del state.tasks[state.selected]
    state.clamp_selection()


def _confirm(state: AppState, draft: str) -> None:
    if not draft.strip():
        logger.debug("Empty draft discarded.")
        state.mode = Navigation()
        return
    res = attempt(state.task_store.create, draft)
    if isinstance(res, Err):
        if isinstance(res.error, EmptyTextError):
            state.mode = Navigation()
            return
        # Stay in Inserting with the draft intact so the user can retry or cancel.
        _storage_failed(state, "Save", res)
        return
    state.mode = Navigation()
    state.tasks.append(res.value)
    state.selected = len(state.tasks) - 1


def _apply_navigation(state: AppState, command: Command) -> None:
    action = command.action

    if action is Action.ENTER_INSERT:
        state.mode = Inserting(draft="")
        return
    if action is Action.QUIT:
        state.should_quit = True
        return

    if action in _NEEDS_TASKS and not state.tasks:
        return

    last = len(state.tasks) - 1
    if action is Action.MOVE_DOWN:
        state.selected = min(state.selected + 1, last)
    elif action is Action.MOVE_UP:
        state.selected = max(state.selected - 1, 0)
    elif action is Action.JUMP_FIRST:
        state.selected = 0
    elif action is Action.JUMP_LAST:
        state.selected = last
    elif action is Action.TOGGLE_SELECTED:
        _toggle_selected(state)
    elif action is Action.DELETE_SELECTED:
        _delete_selected(state)
    else:
        logger.debug("Ignoring %s in navigation mode.", action)


def _apply_inserting(state: AppState, mode: Inserting, command: Command) -> None:
    action = command.action

    if action is Action.INSERT_CHAR and command.char:
        state.mode = Inserting(draft=mode.draft + command.char)
    elif action is Action.DELETE_CHAR:
        state.mode = Inserting(draft=mode.draft[:-1])
    elif action is Action.CONFIRM:
        _confirm(state, mode.draft)
    elif action is Action.CANCEL:
        state.mode = Navigation()
    else:
        logger.debug("Ignoring %s in inserting mode.", action)


def apply_command(state: AppState, command: Command) -> None:
    # The status line only describes the most recent command.
    state.status = None

    mode = state.mode
    if isinstance(mode, Inserting):
        _apply_inserting(state, mode, command)
    else:
        _apply_navigation(state, command)

    state.clamp_selection()


def run_event_loop(
    state: AppState,
    keys: KeySource,
    renderer: Renderer,
    *,
    idle_timeout_ms: int = 1000,
) -> None:
    """
    Render, wait for one key, apply at most one command, render again.

    Returns after the command that sets state.should_quit. An idle timeout
    (no key) only triggers a redraw.
    """
    renderer.draw(state.snapshot())

    while not state.should_quit:
        try:
            event = keys.next_key(idle_timeout_ms)
        except KeyboardInterrupt:
            logger.info("KeyboardInterrupt, exiting.")
            state.should_quit = True
            break

        if event is None:
            renderer.draw(state.snapshot())
            continue

        command = command_for_key(state.mode, event)
        if command is None:
            continue

        try:
            apply_command(state, command)
        except Exception:
            logger.exception("Command handler crashed (%s).", command.action)
            state.status = "Internal error while handling a key."

        renderer.draw(state.snapshot())

    logger.info("Event loop finished.")
