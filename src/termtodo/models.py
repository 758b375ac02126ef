"""Data models for the terminal todo editor.

Exposes the Task dataclass plus the interaction modes. Each mode carries its
own payload (NormalState / CreatingState / EditingState) so that a task edit
without a target index cannot be represented.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Union


@dataclass
class Task:
    """A single todo item.

    Fields:
        title: Single-line title as typed by the user.
        completed: Checkbox state toggled with Space.
    """
    title: str
    completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        # key order is the on-disk field order
        return {'title': self.title, 'completed': self.completed}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Task":
        if not isinstance(raw, Mapping):
            raise ValueError(f'expected an object, got {type(raw).__name__}')
        title = raw.get('title')
        completed = raw.get('completed')
        if not isinstance(title, str):
            raise ValueError('task title must be a string')
        if not title.isprintable():
            # NUL, newlines and lone surrogates cannot be drawn or written back
            raise ValueError('task title contains unprintable characters')
        if not isinstance(completed, bool):
            raise ValueError('task completed flag must be a boolean')
        return cls(title=title, completed=completed)


class Mode(Enum):
    NORMAL = 'normal'
    CREATING = 'creating'
    TASK_EDITING = 'task-editing'


@dataclass(frozen=True)
class NormalState:
    mode = Mode.NORMAL


@dataclass(frozen=True)
class CreatingState:
    buffer: str = ''
    mode = Mode.CREATING


@dataclass(frozen=True)
class EditingState:
    index: int
    buffer: str = ''
    mode = Mode.TASK_EDITING


ModeState = Union[NormalState, CreatingState, EditingState]
