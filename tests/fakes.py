# tests/fakes.py

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple, Union

from termtodo.keys import KeyEvent
from termtodo.models import Task
from termtodo.session import Session
from termtodo.storage import Storage


class FailingStorage(Storage):
    """Storage whose saves always fail, as with a full disk or read-only dir."""

    def save(self, tasks: Iterable[Task]) -> None:
        raise OSError(28, "No space left on device")


class FakeWindow:
    """
    Minimal stand-in for a curses window.

    Records every addstr into a shared character grid (one cell per char)
    so tests can read rows back as text without a real terminal.
    """

    def __init__(self, height: int, width: int, grid: Optional[List[List[str]]] = None,
                 origin: Tuple[int, int] = (0, 0)) -> None:
        self.height = height
        self.width = width
        self.origin = origin
        self.grid = grid if grid is not None else [[" "] * width for _ in range(height)]
        self.calls: List[Tuple[int, int, str, int]] = []
        self.children: List["FakeWindow"] = []

    def getmaxyx(self) -> Tuple[int, int]:
        return self.height, self.width

    def erase(self) -> None:
        for row in self.grid:
            row[:] = [" "] * len(row)

    def noutrefresh(self) -> None:
        pass

    def derwin(self, h: int, w: int, y: int, x: int) -> "FakeWindow":
        oy, ox = self.origin
        child = FakeWindow(h, w, self.grid, (oy + y, ox + x))
        self.children.append(child)
        return child

    def box(self) -> None:
        oy, ox = self.origin
        for x in range(self.width):
            self.grid[oy][ox + x] = "-"
            self.grid[oy + self.height - 1][ox + x] = "-"
        for y in range(self.height):
            self.grid[oy + y][ox] = "|"
            self.grid[oy + y][ox + self.width - 1] = "|"

    def addstr(self, y: int, x: int, text: str, attr: int = 0) -> None:
        assert 0 <= y < self.height and 0 <= x and x + len(text) <= self.width
        oy, ox = self.origin
        for i, ch in enumerate(text):
            self.grid[oy + y][ox + x + i] = ch
        self.calls.append((y, x, text, attr))

    def text(self) -> str:
        return "\n".join("".join(row) for row in self.grid)

    def all_calls(self) -> List[Tuple[int, int, str, int]]:
        out = list(self.calls)
        for child in self.children:
            out.extend(child.all_calls())
        return out


def press(session: Session, *keys: KeyEvent) -> None:
    for key in keys:
        session.handle_key(key)


def type_text(session: Session, text: str) -> None:
    press(session, *text)


class ScriptedScreen(FakeWindow):
    """FakeWindow that replays raw curses keys from get_wch()."""

    def __init__(self, keys: Iterable[Union[str, int]], height: int = 20, width: int = 60) -> None:
        super().__init__(height, width)
        self.keys = list(keys)
        self.cursor_moves: List[Tuple[int, int]] = []
        self.frames: List[str] = []

    def keypad(self, flag: bool) -> None:
        pass

    def move(self, y: int, x: int) -> None:
        self.cursor_moves.append((y, x))

    def noutrefresh(self) -> None:
        self.frames.append(self.text())

    def get_wch(self) -> Union[str, int]:
        if not self.keys:
            raise AssertionError("run loop asked for more keys than scripted")
        return self.keys.pop(0)
