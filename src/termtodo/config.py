"""Settings for a termtodo run.

File and logging options come from the command line (click reads their
TODO_* environment variables); color settings are read from the environment
here.
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

ENV_PREFIX = 'TODO'

# Palette roles and their default colors
DEFAULT_PALETTE: Dict[str, str] = {
    'selected': '#FFFF00',
    'done': '#00FF00',
    'creating': '#FFFF00',
    'editing': '#00FF00',
}


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _truthy_env(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def _valid_hex(value: str) -> bool:
    h = value.strip().lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)


def load_palette(environ: Mapping[str, str]) -> Dict[str, str]:
    """Resolve palette hex codes (priority: TODO_COLOR_<ROLE> env var > default).

    Malformed overrides are ignored.
    """
    palette = dict(DEFAULT_PALETTE)
    for role in palette:
        raw = environ.get(_k(f'COLOR_{role.upper()}'))
        if raw and _valid_hex(raw):
            palette[role] = '#' + raw.strip().lstrip('#').upper()
    return palette


def parse_log_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f'unknown log level: {name}')
    return level


@dataclass(frozen=True)
class Settings:
    todo_file: Path
    log_file: Optional[Path] = None
    log_level: int = logging.INFO
    color: bool = True
    palette: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_PALETTE))

    @classmethod
    def from_options(
        cls,
        todo_file: str,
        log_file: Optional[str] = None,
        log_level: str = 'INFO',
        no_color: bool = False,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Settings":
        env = os.environ if environ is None else environ
        # NO_COLOR disables color whatever its value (https://no-color.org)
        color = not no_color and 'NO_COLOR' not in env and _truthy_env(env.get(_k('COLOR')), True)
        return cls(
            todo_file=Path(todo_file).expanduser(),
            log_file=Path(log_file).expanduser() if log_file else None,
            log_level=parse_log_level(log_level),
            color=color,
            palette=load_palette(env),
        )
