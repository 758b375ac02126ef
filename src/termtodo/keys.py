"""Keyboard input normalization.

curses hands back either a str (from get_wch) or an int key code. Both are
folded into a KeyEvent: a Key member for the named keys the editor cares
about, or a single printable character.
"""
from __future__ import annotations
import curses
from enum import Enum
from typing import Dict, Optional, Union


class Key(Enum):
    ENTER = 'enter'
    BACKSPACE = 'backspace'
    DELETE = 'delete'
    ESC = 'esc'
    UP = 'up'
    DOWN = 'down'


KeyEvent = Union[Key, str]

_CONTROL_CHARS: Dict[str, Key] = {
    '\n': Key.ENTER,
    '\r': Key.ENTER,
    '\x1b': Key.ESC,
    '\x7f': Key.BACKSPACE,
    '\b': Key.BACKSPACE,
}

_KEY_CODES: Dict[int, Key] = {
    curses.KEY_ENTER: Key.ENTER,
    curses.KEY_BACKSPACE: Key.BACKSPACE,
    curses.KEY_DC: Key.DELETE,
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
}


def translate(raw: Union[str, int]) -> Optional[KeyEvent]:
    """Map a raw curses key to a KeyEvent, or None when it has no meaning here."""
    if isinstance(raw, int):
        if 0 <= raw < 256:  # plain getch() byte
            return translate(chr(raw))
        return _KEY_CODES.get(raw)
    if raw in _CONTROL_CHARS:
        return _CONTROL_CHARS[raw]
    if len(raw) == 1 and raw.isprintable():
        return raw
    return None
