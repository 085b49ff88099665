# src/quicktask/connectors/curses_connector.py

"""
Curses terminal layer.

CursesKeySource turns raw curses input into logical KeyEvents.
CursesRenderer draws a RenderModel; it never looks at AppState directly.
"""

from __future__ import annotations

import contextlib
import curses
import logging

from ..core.commands import Key, KeyEvent
from ..core.controller import run_event_loop
from ..core.state import AppState, RenderModel

logger = logging.getLogger(__name__)

HIGHLIGHT_SYMBOL = "▶ "
CURSOR_SYMBOL = "▏"

NAV_HELP = " q: Quit | a: Add | j/k: Navigate | Enter/Space: Toggle | d: Delete | g/G: First/Last "
INSERT_HELP = " Type task description, Enter to save, Esc to cancel "

_SPECIAL_KEYS: dict[int, Key] = {
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_UP: Key.UP,
    curses.KEY_ENTER: Key.ENTER,
    curses.KEY_BACKSPACE: Key.BACKSPACE,
}

_CONTROL_CHARS: dict[str, Key] = {
    "\n": Key.ENTER,
    "\r": Key.ENTER,
    "\x1b": Key.ESC,
    "\x7f": Key.BACKSPACE,
    "\b": Key.BACKSPACE,
}


def translate_key(raw: int | str) -> KeyEvent | None:
    """Map a get_wch() result to a KeyEvent; None for keys the app has no use for."""
    if isinstance(raw, int):
        key = _SPECIAL_KEYS.get(raw)
        return KeyEvent(key) if key else None

    key = _CONTROL_CHARS.get(raw)
    if key is not None:
        return KeyEvent(key)
    if raw.isprintable():
        return KeyEvent.of_char(raw)
    return None


class CursesKeySource:
    def __init__(self, stdscr) -> None:
        self._scr = stdscr
        self._scr.keypad(True)

    def next_key(self, timeout_ms: int) -> KeyEvent | None:
        self._scr.timeout(timeout_ms)
        try:
            raw = self._scr.get_wch()
        except curses.error:
            # No input before the timeout.
            return None
        return translate_key(raw)


class CursesRenderer:
    def __init__(self, stdscr, *, title: str = "Task Manager") -> None:
        self._scr = stdscr
        self._title = f" {title} "
        self._scroll = 0

        if curses.has_colors():
            curses.start_color()
            with contextlib.suppress(curses.error):
                curses.use_default_colors()
            curses.init_pair(1, curses.COLOR_CYAN, -1)
            curses.init_pair(2, curses.COLOR_YELLOW, -1)
            curses.init_pair(3, curses.COLOR_RED, -1)
            self.COL_TITLE = curses.color_pair(1) | curses.A_BOLD
            self.COL_SELECTED = curses.color_pair(2) | curses.A_BOLD
            self.COL_INPUT = curses.color_pair(2)
            self.COL_STATUS = curses.color_pair(3)
        else:
            self.COL_TITLE = curses.A_BOLD
            self.COL_SELECTED = curses.A_REVERSE
            self.COL_INPUT = curses.A_BOLD
            self.COL_STATUS = curses.A_STANDOUT

    def _put(self, y: int, x: int, text: str, attrs: int = curses.A_NORMAL) -> None:
        height, width = self._scr.getmaxyx()
        if y < 0 or y >= height or x >= width - 1:
            return
        # Writing into the last cell of the screen raises; addnstr stops short of it.
        with contextlib.suppress(curses.error):
            self._scr.addnstr(y, x, text, width - 1 - x, attrs)

    def _scroll_to(self, selected: int | None, body_h: int) -> int:
        if selected is None:
            self._scroll = 0
        elif selected < self._scroll:
            self._scroll = selected
        elif selected >= self._scroll + body_h:
            self._scroll = selected - body_h + 1
        return self._scroll

    def draw(self, model: RenderModel) -> None:
        self._scr.erase()
        height, width = self._scr.getmaxyx()

        self._put(0, 0, self._title, self.COL_TITLE)

        # title + list + separator + footer + status
        top = 1
        body_h = max(0, height - top - 3)

        if not model.tasks:
            self._put(top, 2, "No tasks. Press 'a' to add.", curses.A_DIM)
        else:
            scroll = self._scroll_to(model.selected, body_h)
            for row, view in enumerate(model.tasks[scroll : scroll + body_h]):
                idx = scroll + row
                checkbox = "[x]" if view.completed else "[ ]"
                is_sel = idx == model.selected
                prefix = HIGHLIGHT_SYMBOL if is_sel else "  "
                attrs = curses.A_DIM if view.completed else curses.A_NORMAL
                if is_sel:
                    attrs |= self.COL_SELECTED
                self._put(top + row, 0, f"{prefix}{checkbox} {view.text}", attrs)

        footer_y = height - 2
        with contextlib.suppress(curses.error):
            self._scr.hline(footer_y - 1, 0, curses.ACS_HLINE, width)

        if model.draft is not None:
            self._put(footer_y, 0, f" New task: {model.draft}{CURSOR_SYMBOL}", self.COL_INPUT)
        else:
            self._put(footer_y, 0, NAV_HELP, curses.A_DIM)

        if model.status:
            self._put(height - 1, 0, f" {model.status}", self.COL_STATUS)
        elif model.draft is not None:
            self._put(height - 1, 0, INSERT_HELP, curses.A_DIM)

        self._scr.refresh()


def run_curses_loop(state: AppState) -> None:
    """Take over the terminal, run the event loop, restore the terminal on exit."""

    def _main(stdscr) -> None:
        with contextlib.suppress(curses.error):
            curses.curs_set(0)
        # Esc should not wait a second for a possible escape sequence.
        with contextlib.suppress(AttributeError):
            curses.set_escdelay(25)

        title = str(getattr(state.settings, "app_name", "quicktask"))
        run_event_loop(
            state,
            CursesKeySource(stdscr),
            CursesRenderer(stdscr, title=title),
            idle_timeout_ms=int(getattr(state.settings, "idle_timeout_ms", 1000)),
        )

    logger.info("Curses connector started.")
    curses.wrapper(_main)
    logger.info("Curses connector finished.")
