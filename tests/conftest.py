# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from termtodo.models import Task
from termtodo.storage import Storage


@pytest.fixture()
def todo_file(tmp_path: Path) -> Path:
    return tmp_path / "todos.json"


@pytest.fixture()
def storage(todo_file: Path) -> Storage:
    return Storage(todo_file)


@pytest.fixture()
def three_tasks(storage: Storage) -> Storage:
    """Storage whose file already holds three tasks, the second completed."""
    storage.save([Task("one"), Task("two", completed=True), Task("three")])
    return storage
