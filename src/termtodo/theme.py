"""Color & style helpers for the curses screen.

Decisions:
- Palette entries are hex codes (see config.DEFAULT_PALETTE).
- 256-color terminals get the nearest xterm color-cube entry; 8-color
  terminals get the nearest basic color.
- With color disabled every role renders with the default attributes.
"""
from __future__ import annotations
import curses
import logging
from typing import Dict, Mapping, Tuple

logger = logging.getLogger(__name__)

# basic curses colors indexed by (red, green, blue) bits
_BASIC_COLORS: Tuple[int, ...] = (
    curses.COLOR_BLACK, curses.COLOR_RED, curses.COLOR_GREEN, curses.COLOR_YELLOW,
    curses.COLOR_BLUE, curses.COLOR_MAGENTA, curses.COLOR_CYAN, curses.COLOR_WHITE,
)


def _hex_to_rgb(hex_code: str) -> Tuple[int, int, int]:
    """Convert a hex color code to an RGB tuple."""
    h = hex_code.lstrip('#')
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def _rgb_to_256(r: int, g: int, b: int) -> int:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    return 16 + 36 * to_6(r) + 6 * to_6(g) + to_6(b)


def _rgb_to_basic(r: int, g: int, b: int) -> int:
    """Approximate RGB to one of the 8 basic colors."""
    bits = (r > 127) | (g > 127) << 1 | (b > 127) << 2
    return _BASIC_COLORS[bits]


def curses_color(hex_code: str, colors: int) -> int:
    rgb = _hex_to_rgb(hex_code)
    if colors >= 256:
        return _rgb_to_256(*rgb)
    return _rgb_to_basic(*rgb)


class Theme:
    """Maps palette roles to curses attributes.

    init_colors() must run after curses.initscr(); until then, or when color
    is off, attr() returns A_NORMAL.
    """

    def __init__(self, palette: Mapping[str, str], enabled: bool = True):
        self.palette: Dict[str, str] = dict(palette)
        self.enabled: bool = enabled
        self._attrs: Dict[str, int] = {}

    def init_colors(self) -> None:
        if not self.enabled or not curses.has_colors():
            return
        curses.start_color()
        try:
            curses.use_default_colors()
        except curses.error:
            logger.debug("Terminal has no default colors; drawing without color")
            return
        for pair, (role, hex_code) in enumerate(sorted(self.palette.items()), start=1):
            curses.init_pair(pair, curses_color(hex_code, curses.COLORS), -1)
            self._attrs[role] = curses.color_pair(pair)

    def attr(self, role: str) -> int:
        return self._attrs.get(role, curses.A_NORMAL)
