"""Canonical task collection with single-step undo."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import date

from taskpad.core.ids import new_id
from taskpad.core.models import Task, UndoEntry, normalize_due_date

logger = logging.getLogger(__name__)


def _cleared_message(count: int) -> str:
    noun = "item" if count == 1 else "items"
    return f"Cleared {count} completed {noun}"


class TaskStore:
    """Owns the ordered task collection and the pending undo entry.

    Unknown ids and blank text are absorbed as no-ops. ``on_change`` fires
    after every operation that altered the collection.
    """

    def __init__(
        self,
        tasks: Iterable[Task] | None = None,
        *,
        on_change: Callable[[], None] | None = None,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        self._tasks: list[Task] = []
        seen: set[str] = set()
        for task in tasks or []:
            if task.id in seen:
                logger.debug("Dropping duplicate task id %s", task.id)
                continue
            seen.add(task.id)
            self._tasks.append(task)
        self._undo: UndoEntry | None = None
        self._on_change = on_change
        self._id_factory = id_factory

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add(self, text: str, due_date: str | date | None = None) -> Task | None:
        trimmed = (text or "").strip()
        if not trimmed:
            logger.debug("Ignoring add with blank text")
            return None
        task = Task(
            id=self._unique_id(),
            text=trimmed,
            due_date=normalize_due_date(due_date),
        )
        self._tasks.append(task)
        self._changed()
        return task

    def toggle(self, task_id: str) -> Task | None:
        task = self.get(task_id)
        if task is None:
            logger.debug("toggle: unknown task id %s", task_id)
            return None
        task.done = not task.done
        self._changed()
        return task

    def delete(self, task_id: str) -> Task | None:
        task = self.get(task_id)
        if task is None:
            logger.debug("delete: unknown task id %s", task_id)
            return None
        self._tasks.remove(task)
        self._undo = UndoEntry(tasks=(task,), message=f'Deleted "{task.text}"')
        self._changed()
        return task

    def edit_commit(self, task_id: str, text: str) -> Task | None:
        """Rename a task; blank text deletes it instead."""
        task = self.get(task_id)
        if task is None:
            logger.debug("edit_commit: unknown task id %s", task_id)
            return None
        trimmed = (text or "").strip()
        if not trimmed:
            return self.delete(task_id)
        task.text = trimmed
        self._changed()
        return task

    def clear_completed(self) -> list[Task]:
        removed = [task for task in self._tasks if task.done]
        if not removed:
            return []
        self._tasks = [task for task in self._tasks if not task.done]
        self._undo = UndoEntry(tasks=tuple(removed), message=_cleared_message(len(removed)))
        self._changed()
        return removed

    def undo(self) -> list[Task]:
        entry = self._undo
        if entry is None:
            return []
        present = {task.id for task in self._tasks}
        restored = [task for task in entry.tasks if task.id not in present]
        self._tasks.extend(restored)
        self._undo = None
        if restored:
            self._changed()
        return restored

    def dismiss_undo(self) -> None:
        self._undo = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    def get(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def as_dicts(self) -> list[dict[str, object]]:
        return [task.to_dict() for task in self._tasks]

    @property
    def undo_entry(self) -> UndoEntry | None:
        return self._undo

    @property
    def undo_message(self) -> str | None:
        return self._undo.message if self._undo else None

    def __len__(self) -> int:
        return len(self._tasks)

    def _unique_id(self) -> str:
        present = {task.id for task in self._tasks}
        candidate = self._id_factory()
        while candidate in present:
            candidate = self._id_factory()
        return candidate

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()


__all__ = ["TaskStore"]
