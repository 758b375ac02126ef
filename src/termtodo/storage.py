"""Persistence helpers (load/save) for the todo list.

The list lives in a single JSON file holding an ordered array of
{"title": ..., "completed": ...} records. A missing or malformed file loads
as an empty list; the malformed case is logged and kept on `load_error` so
the UI can mention it.
"""
from __future__ import annotations
import contextlib
import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from termtodo.models import Task

DEFAULT_TODO_FILE = Path('todos.json')

logger = logging.getLogger(__name__)


class Storage:
    def __init__(self, path: Union[str, Path] = DEFAULT_TODO_FILE):
        self.path: Path = Path(path)
        self.load_error: Optional[str] = None

    def load(self) -> List[Task]:
        """Load tasks from disk.

        Missing file -> empty list. Unreadable or malformed file -> empty
        list, with the reason stored on `load_error`.
        """
        self.load_error = None
        if not self.path.exists():
            logger.info("No todo file at %s; starting empty", self.path)
            return []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            tasks = self._parse(data)
        except (OSError, ValueError, RecursionError) as exc:
            self.load_error = f'Could not read {self.path.name}: {exc}'
            logger.warning("Ignoring unreadable todo file %s: %s", self.path, exc)
            return []
        logger.info("Loaded %d task(s) from %s", len(tasks), self.path)
        return tasks

    @staticmethod
    def _parse(data: object) -> List[Task]:
        if not isinstance(data, list):
            raise ValueError('expected a JSON array of tasks')
        return [Task.from_dict(raw) for raw in data]

    def save(self, tasks: Iterable[Task]) -> None:
        """Persist tasks to disk (pretty-printed), replacing the file atomically.

        Raises OSError when the file cannot be written; the caller's
        in-memory list is left as is.
        """
        payload = json.dumps([t.to_dict() for t in tasks], indent=2, ensure_ascii=False) + '\n'
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_file = self.path.with_name(self.path.name + '.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                f.write(payload)
            temp_file.replace(self.path)
        finally:
            # only left behind when the write or rename failed
            if temp_file.exists():
                with contextlib.suppress(OSError):
                    temp_file.unlink()
        logger.debug("Saved todo list to %s", self.path)
