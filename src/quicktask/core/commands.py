# src/quicktask/core/commands.py

"""
Key events and commands.

A KeyEvent is what the terminal layer produces; a Command is what the
controller applies. Which command a key means depends on the current mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .state import Inserting, Mode


class Key(StrEnum):
    DOWN = "down"
    UP = "up"
    ENTER = "enter"
    ESC = "esc"
    BACKSPACE = "backspace"
    CHAR = "char"


@dataclass(frozen=True, slots=True)
class KeyEvent:
    key: Key
    char: str | None = None

    @classmethod
    def of_char(cls, ch: str) -> KeyEvent:
        return cls(Key.CHAR, ch)


class Action(StrEnum):
    # Navigation
    MOVE_DOWN = "move_down"
    MOVE_UP = "move_up"
    JUMP_FIRST = "jump_first"
    JUMP_LAST = "jump_last"
    TOGGLE_SELECTED = "toggle_selected"
    DELETE_SELECTED = "delete_selected"
    ENTER_INSERT = "enter_insert"
    QUIT = "quit"

    # Inserting
    INSERT_CHAR = "insert_char"
    DELETE_CHAR = "delete_char"
    CONFIRM = "confirm"
    CANCEL = "cancel"


@dataclass(frozen=True, slots=True)
class Command:
    action: Action
    char: str | None = None


_NAV_KEYS: dict[Key, Action] = {
    Key.DOWN: Action.MOVE_DOWN,
    Key.UP: Action.MOVE_UP,
    Key.ENTER: Action.TOGGLE_SELECTED,
}

_NAV_CHARS: dict[str, Action] = {
    "j": Action.MOVE_DOWN,
    "k": Action.MOVE_UP,
    "g": Action.JUMP_FIRST,
    "G": Action.JUMP_LAST,
    " ": Action.TOGGLE_SELECTED,
    "d": Action.DELETE_SELECTED,
    "a": Action.ENTER_INSERT,
    "q": Action.QUIT,
}

_INSERT_KEYS: dict[Key, Action] = {
    Key.ENTER: Action.CONFIRM,
    Key.ESC: Action.CANCEL,
    Key.BACKSPACE: Action.DELETE_CHAR,
}


def command_for_key(mode: Mode, event: KeyEvent) -> Command | None:
    """Translate a key into a command for `mode`; None means "ignore this key"."""
    if isinstance(mode, Inserting):
        if event.key is Key.CHAR:
            if event.char and event.char.isprintable():
                return Command(Action.INSERT_CHAR, event.char)
            return None
        action = _INSERT_KEYS.get(event.key)
        return Command(action) if action else None

    if event.key is Key.CHAR:
        action = _NAV_CHARS.get(event.char or "")
    else:
        action = _NAV_KEYS.get(event.key)
    return Command(action) if action else None
