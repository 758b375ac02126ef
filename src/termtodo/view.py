"""Screen rendering: draws a Session into a curses window.

Layout (2-cell margin): a 3-row "Help" box, the "To-Do List" box filling the
middle, and a 3-row "Input" box at the bottom. Drawing never reads keys or
touches the session; draw() returns where the text cursor belongs (or None
in Normal mode) and the run loop decides what to do with it.
"""
from __future__ import annotations
import curses
import unicodedata
from typing import Dict, List, Optional, Tuple

from termtodo.models import Mode
from termtodo.session import Session
from termtodo.theme import Theme

MARGIN = 2
BOX_HEIGHT = 3
MIN_WIDTH = 20
MIN_HEIGHT = 2 * MARGIN + 3 * BOX_HEIGHT
DONE_MARK = '▣ '
OPEN_MARK = '□ '
TOO_SMALL = 'Terminal too small'

Segment = Tuple[str, bool]  # (text, bold)

HELP_TEXT: Dict[Mode, List[Segment]] = {
    Mode.NORMAL: [
        ('Press ', False), ('q', True), (' to exit, ', False),
        ('e', True), (' to start editing, ', False),
        ('Enter', True), (' to edit selected task, ', False),
        ('Space', True), (' to toggle, ', False),
        ('Del', True), (' to remove.', False),
    ],
    Mode.CREATING: [
        ('Press ', False), ('Esc', True), (' to stop editing, ', False),
        ('Enter', True), (' to add the task', False),
    ],
    Mode.TASK_EDITING: [
        ('Press ', False), ('Esc', True), (' to cancel, ', False),
        ('Enter', True), (' to save changes', False),
    ],
}

INPUT_ROLE = {Mode.CREATING: 'creating', Mode.TASK_EDITING: 'editing'}


# -------------------- text measurement --------------------
def char_width(ch: str) -> int:
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ('W', 'F') else 1


def text_width(text: str) -> int:
    return sum(char_width(ch) for ch in text)


def clip(text: str, width: int) -> str:
    """Longest prefix of `text` that fits in `width` cells."""
    used = 0
    for i, ch in enumerate(text):
        used += char_width(ch)
        if used > width:
            return text[:i]
    return text


def tail(text: str, width: int) -> str:
    """Longest suffix of `text` that fits in `width` cells."""
    used = 0
    for i in range(len(text) - 1, -1, -1):
        used += char_width(text[i])
        if used > width:
            return text[i + 1:]
    return text


def scroll_offset(selection: Optional[int], rows: int) -> int:
    """First visible list row such that the selection stays on screen."""
    if selection is None or rows <= 0:
        return 0
    return max(0, selection - rows + 1)


# -------------------- drawing --------------------
class View:
    def __init__(self, theme: Theme):
        self.theme: Theme = theme

    def draw(self, win, session: Session) -> Optional[Tuple[int, int]]:
        """Redraw the whole screen; return the (y, x) text cursor or None."""
        win.erase()
        height, width = win.getmaxyx()
        if height < MIN_HEIGHT or width < MIN_WIDTH:
            self._put(win, 0, 0, TOO_SMALL, curses.A_BOLD, width - 1)
            win.noutrefresh()
            return None
        inner_h = height - 2 * MARGIN
        inner_w = width - 2 * MARGIN
        self._draw_help(self._box(win, BOX_HEIGHT, inner_w, MARGIN, MARGIN, 'Help'), session)
        self._draw_list(
            self._box(win, inner_h - 2 * BOX_HEIGHT, inner_w, MARGIN + BOX_HEIGHT, MARGIN, 'To-Do List'),
            session,
        )
        input_y = MARGIN + inner_h - BOX_HEIGHT
        input_box = self._box(win, BOX_HEIGHT, inner_w, input_y, MARGIN, 'Input')
        shown = self._draw_input(input_box, session)
        win.noutrefresh()
        if session.mode is Mode.NORMAL:
            return None
        return input_y + 1, MARGIN + 1 + text_width(shown)

    def _box(self, win, h: int, w: int, y: int, x: int, title: str):
        box = win.derwin(h, w, y, x)
        box.box()
        self._put(box, 0, 1, title, curses.A_NORMAL, w - 2)
        return box

    def _draw_help(self, box, session: Session) -> None:
        _, w = box.getmaxyx()
        if session.notice:
            self._put(box, 1, 1, session.notice, curses.A_BOLD, w - 2)
            return
        x = 1
        for text, bold in HELP_TEXT[session.mode]:
            room = w - 1 - x
            if room <= 0:
                break
            self._put(box, 1, x, text, curses.A_BOLD if bold else curses.A_NORMAL, room)
            x += text_width(text)

    def _draw_list(self, box, session: Session) -> None:
        h, w = box.getmaxyx()
        rows = h - 2
        offset = scroll_offset(session.selection, rows)
        for row, index in enumerate(range(offset, min(len(session.tasks), offset + rows)), start=1):
            task = session.tasks[index]
            mark = DONE_MARK if task.completed else OPEN_MARK
            self._put(box, row, 1, mark, self.theme.attr('done') if task.completed else curses.A_NORMAL, w - 2)
            title_attr = self.theme.attr('selected') if index == session.selection else curses.A_NORMAL
            self._put(box, row, 1 + text_width(mark), task.title, title_attr, w - 2 - text_width(mark))

    def _draw_input(self, box, session: Session) -> str:
        _, w = box.getmaxyx()
        role = INPUT_ROLE.get(session.mode)
        attr = self.theme.attr(role) if role else curses.A_NORMAL
        # one cell kept free for the cursor
        shown = tail(session.edit_buffer, w - 3)
        self._put(box, 1, 1, shown, attr, w - 2)
        return shown

    @staticmethod
    def _put(win, y: int, x: int, text: str, attr: int, width: int) -> None:
        text = clip(text, width)
        if text:
            win.addstr(y, x, text, attr)
