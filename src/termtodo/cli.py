"""Interactive run loop for the todo editor.

curses.wrapper owns the terminal: it enables cbreak/no-echo input and the
alternate screen on entry, and restores the terminal on every exit path,
including exceptions raised from Session.handle_key (failed saves).
"""
from __future__ import annotations
import curses
import logging
from typing import Optional

from termtodo.keys import KeyEvent, translate
from termtodo.session import Session
from termtodo.view import View

ESC_DELAY_MS = 25

logger = logging.getLogger(__name__)


def _set_cursor(visibility: int) -> None:
    try:
        curses.curs_set(visibility)
    except curses.error:
        logger.debug("Terminal cannot change cursor visibility")


class CLI:
    def __init__(self, session: Session, view: View):
        self.session: Session = session
        self.view: View = view

    def run(self) -> None:
        """Run until the session stops; terminal state is restored on return or raise."""
        curses.wrapper(self._loop)

    def _loop(self, stdscr) -> None:
        self._setup(stdscr)
        try:
            while self.session.running:
                self._render(stdscr)
                event = self._read_key(stdscr)
                if event is None:
                    continue
                try:
                    self.session.handle_key(event)
                except OSError:
                    # show the state the failed save left behind, then give up
                    self._render(stdscr)
                    raise
        finally:
            _set_cursor(1)
            curses.mousemask(0)

    # -------------------- terminal helpers --------------------
    def _setup(self, stdscr) -> None:
        stdscr.keypad(True)
        curses.set_escdelay(ESC_DELAY_MS)
        curses.mousemask(curses.ALL_MOUSE_EVENTS)
        self.view.theme.init_colors()
        height, width = stdscr.getmaxyx()
        logger.debug("Terminal initialised (%dx%d)", width, height)

    def _render(self, stdscr) -> None:
        cursor = self.view.draw(stdscr, self.session)
        if cursor is None:
            _set_cursor(0)
        else:
            _set_cursor(1)
            stdscr.move(*cursor)
        curses.doupdate()

    def _read_key(self, stdscr) -> Optional[KeyEvent]:
        raw = stdscr.get_wch()
        if raw == curses.KEY_MOUSE:
            # captured but unused
            try:
                curses.getmouse()
            except curses.error:
                logger.debug("Dropped unreadable mouse event")
            return None
        if raw == curses.KEY_RESIZE:
            curses.update_lines_cols()
            return None
        return translate(raw)
