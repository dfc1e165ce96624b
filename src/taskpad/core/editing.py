"""Single-task rename session."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from taskpad.core.models import Task
from taskpad.core.store import TaskStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EditingState:
    task_id: str
    draft: str


class EditingSession:
    """Tracks which task, if any, is being renamed.

    The draft lives here until ``commit`` hands it to the store.
    """

    def __init__(self, store: TaskStore) -> None:
        self._store = store
        self._state: EditingState | None = None

    def begin(self, task: Task) -> None:
        if self._state is not None and self._state.task_id != task.id:
            logger.debug("Abandoning edit of %s for %s", self._state.task_id, task.id)
        self._state = EditingState(task_id=task.id, draft=task.text)

    def update_draft(self, text: str) -> None:
        if self._state is None:
            return
        self._state = EditingState(task_id=self._state.task_id, draft=text)

    def commit(self) -> Task | None:
        state = self._state
        if state is None:
            return None
        self._state = None
        return self._store.edit_commit(state.task_id, state.draft)

    def cancel(self) -> None:
        self._state = None

    @property
    def state(self) -> EditingState | None:
        return self._state

    @property
    def active(self) -> bool:
        return self._state is not None

    @property
    def task_id(self) -> str | None:
        return self._state.task_id if self._state else None

    @property
    def draft(self) -> str | None:
        return self._state.draft if self._state else None


__all__ = ["EditingSession", "EditingState"]
