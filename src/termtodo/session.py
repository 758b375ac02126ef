"""Session logic: holds the task list, selection and input mode, and maps key
events onto transitions.

Decisions:
- Every transition that changes the list is saved before handle_key returns;
  a failed save raises OSError out of handle_key and the in-memory list is
  not rolled back.
- Index-bearing actions (toggle / delete / rename) recheck bounds each time
  and do nothing when the index is stale.
- Moving down on an empty list keeps the selection absent, so selection is
  None exactly when the list is empty.
"""
from __future__ import annotations
import dataclasses
import logging
from typing import List, Optional

from termtodo.keys import Key, KeyEvent
from termtodo.models import CreatingState, EditingState, Mode, ModeState, NormalState, Task
from termtodo.storage import Storage

logger = logging.getLogger(__name__)


class Session:
    def __init__(self, storage: Storage, tasks: Optional[List[Task]] = None):
        self.storage: Storage = storage
        self.tasks: List[Task] = storage.load() if tasks is None else tasks
        self.state: ModeState = NormalState()
        self.selection: Optional[int] = 0 if self.tasks else None
        self.running: bool = True
        self.notice: Optional[str] = storage.load_error if tasks is None else None

    # -------------------- derived views --------------------
    @property
    def mode(self) -> Mode:
        return self.state.mode

    @property
    def edit_buffer(self) -> str:
        if isinstance(self.state, (CreatingState, EditingState)):
            return self.state.buffer
        return ''

    @property
    def editing_index(self) -> Optional[int]:
        if isinstance(self.state, EditingState):
            return self.state.index
        return None

    def _valid(self, index: Optional[int]) -> bool:
        return index is not None and 0 <= index < len(self.tasks)

    # -------------------- dispatch --------------------
    def handle_key(self, key: KeyEvent) -> None:
        """Apply the transition bound to `key` in the current mode."""
        self.notice = None
        if isinstance(self.state, NormalState):
            self._handle_normal(key)
        elif isinstance(self.state, CreatingState):
            self._handle_creating(self.state, key)
        else:
            self._handle_editing(self.state, key)

    def _handle_normal(self, key: KeyEvent) -> None:
        if key == 'e':
            self._switch(CreatingState())
        elif key is Key.ENTER:
            if self._valid(self.selection):
                self._switch(EditingState(index=self.selection, buffer=self.tasks[self.selection].title))
        elif key == 'q':
            logger.debug("Quit requested")
            self.running = False
        elif key in ('j', Key.DOWN):
            self.move_down()
        elif key in ('k', Key.UP):
            self.move_up()
        elif key == ' ':
            self.toggle_selected()
        elif key in (Key.DELETE, Key.BACKSPACE):
            self.delete_selected()

    def _handle_creating(self, state: CreatingState, key: KeyEvent) -> None:
        if key is Key.ENTER:
            title = state.buffer
            self._switch(NormalState())
            if title:
                self.add_task(title)
        elif key is Key.ESC:
            self._switch(NormalState())
        else:
            self._edit_buffer(state, key)

    def _handle_editing(self, state: EditingState, key: KeyEvent) -> None:
        if key is Key.ENTER:
            self._switch(NormalState())
            if state.buffer:
                self.rename_task(state.index, state.buffer)
        elif key is Key.ESC:
            self._switch(NormalState())
        else:
            self._edit_buffer(state, key)

    def _edit_buffer(self, state, key: KeyEvent) -> None:
        if key is Key.BACKSPACE:
            self.state = dataclasses.replace(state, buffer=state.buffer[:-1])
        elif isinstance(key, str):
            self.state = dataclasses.replace(state, buffer=state.buffer + key)

    def _switch(self, state: ModeState) -> None:
        if state.mode is not self.state.mode:
            logger.debug("Mode %s -> %s", self.state.mode.value, state.mode.value)
        self.state = state

    # -------------------- navigation --------------------
    def move_down(self) -> None:
        if not self.tasks:
            return
        if self.selection is None:
            self.selection = 0
        else:
            self.selection = min(self.selection + 1, len(self.tasks) - 1)

    def move_up(self) -> None:
        if self.selection is not None and self.selection > 0:
            self.selection -= 1

    # -------------------- task operations --------------------
    def add_task(self, title: str) -> None:
        self.tasks.append(Task(title=title))
        if self.selection is None:
            self.selection = 0
        logger.info("Added task #%d", len(self.tasks) - 1)
        self._commit()

    def toggle_selected(self) -> None:
        index = self.selection
        if not self._valid(index):
            return
        task = self.tasks[index]
        task.completed = not task.completed
        logger.info("Task #%d marked %s", index, 'done' if task.completed else 'open')
        self._commit()

    def delete_selected(self) -> None:
        index = self.selection
        if not self._valid(index):
            return
        del self.tasks[index]
        if not self.tasks:
            self.selection = None
        elif index >= len(self.tasks):
            self.selection = len(self.tasks) - 1
        logger.info("Removed task #%d", index)
        self._commit()

    def rename_task(self, index: int, title: str) -> None:
        if not self._valid(index):
            logger.debug("Rename of stale index %d ignored", index)
            return
        self.tasks[index].title = title
        logger.info("Renamed task #%d", index)
        self._commit()

    def _commit(self) -> None:
        self.storage.save(self.tasks)
