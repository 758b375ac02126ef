# tests/test_theme.py

from __future__ import annotations

import curses

from termtodo.config import DEFAULT_PALETTE
from termtodo.theme import Theme, curses_color


def test_256_color_terminals_use_color_cube() -> None:
    assert curses_color("#000000", 256) == 16
    assert curses_color("#FFFFFF", 256) == 231
    assert curses_color("#FF0000", 256) == 196
    assert curses_color("00ff00", 256) == 46


def test_8_color_terminals_use_nearest_basic_color() -> None:
    assert curses_color("#FFFF00", 8) == curses.COLOR_YELLOW
    assert curses_color("#00FF00", 8) == curses.COLOR_GREEN
    assert curses_color("#476EAE", 8) == curses.COLOR_BLUE
    assert curses_color("#101010", 8) == curses.COLOR_BLACK
    assert curses_color("#F0F0F0", 8) == curses.COLOR_WHITE


def test_disabled_theme_renders_plain() -> None:
    theme = Theme(DEFAULT_PALETTE, enabled=False)
    theme.init_colors()
    assert theme.attr("selected") == curses.A_NORMAL
    assert theme.attr("unknown-role") == curses.A_NORMAL


def test_missing_default_colors_falls_back_to_plain(monkeypatch) -> None:
    pairs = []

    def no_default_colors():
        raise curses.error("use_default_colors() returned ERR")

    monkeypatch.setattr(curses, "has_colors", lambda: True)
    monkeypatch.setattr(curses, "start_color", lambda: None)
    monkeypatch.setattr(curses, "use_default_colors", no_default_colors)
    monkeypatch.setattr(curses, "init_pair", lambda *args: pairs.append(args))

    theme = Theme(DEFAULT_PALETTE)
    theme.init_colors()

    assert pairs == []
    assert theme.attr("selected") == curses.A_NORMAL
