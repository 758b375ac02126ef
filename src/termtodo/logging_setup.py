"""Logging configuration.

The screen belongs to curses while the editor runs, so records only ever go
to a file. Without a log file a NullHandler keeps logging's last-resort
stderr handler from drawing over the interface.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Union


def setup_logging(log_file: Optional[Union[str, Path]] = None, level: int = logging.INFO) -> None:
    """Configure the root logger. Call once, before the first record."""
    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    if log_file is None:
        root.addHandler(logging.NullHandler())
    else:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_file), encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        root.addHandler(fh)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
