"""Task list session: the single owner of model, preferences and persistence."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from types import TracebackType

from taskpad.core.editing import EditingSession, EditingState
from taskpad.core.ids import new_id
from taskpad.core.models import (
    DEFAULT_FILTER,
    DEFAULT_SORT,
    Filter,
    SortMode,
    Task,
    is_filter,
    is_sort_mode,
)
from taskpad.core.projection import Counters, TaskView, counters, project
from taskpad.core.scheduler import DeferredWriter
from taskpad.core.store import TaskStore
from taskpad.storage.persistence import Restored, TaskPersistence

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ViewSnapshot:
    """Everything the rendering layer may read."""

    tasks: list[TaskView]
    counters: Counters
    filter: Filter
    sort_mode: SortMode
    editing: EditingState | None
    undo_message: str | None
    today: str

    @property
    def remaining(self) -> int:
        return self.counters.remaining

    @property
    def completion_percent(self) -> int:
        return self.counters.completion_percent


@dataclass(slots=True)
class OpenReport:
    """Which persisted keys were restored and which fell back to defaults."""

    restored: list[str] = field(default_factory=list)
    defaults: dict[str, str] = field(default_factory=dict)


class TaskListState:
    """Owns the task store, filter, sort mode and editing session.

    Construct at session start, call ``open`` to load persisted state and
    ``close`` at the end. Task saves are coalesced through ``writer`` and
    land on the next ``idle`` tick; filter and sort saves are immediate.
    """

    def __init__(
        self,
        persistence: TaskPersistence,
        *,
        writer: DeferredWriter | None = None,
        today: Callable[[], date] | None = None,
        flush_on_exit: bool = True,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        self.persistence = persistence
        self.writer = writer or DeferredWriter()
        self._today = today or date.today
        self.flush_on_exit = flush_on_exit
        self._id_factory = id_factory
        self.store = TaskStore(on_change=self._schedule_save, id_factory=id_factory)
        self.editing = EditingSession(self.store)
        self.filter: Filter = DEFAULT_FILTER
        self.sort_mode: SortMode = DEFAULT_SORT
        self.report = OpenReport()
        self._closed = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def open(self) -> OpenReport:
        report = OpenReport()
        tasks_result = self.persistence.load_tasks()
        tasks: list[Task] = []
        if isinstance(tasks_result, Restored):
            tasks = tasks_result.value
            report.restored.append("tasks")
        else:
            report.defaults["tasks"] = tasks_result.reason

        filter_result = self.persistence.load_filter()
        if isinstance(filter_result, Restored):
            self.filter = filter_result.value
            report.restored.append("filter")
        else:
            self.filter = DEFAULT_FILTER
            report.defaults["filter"] = filter_result.reason

        sort_result = self.persistence.load_sort()
        if isinstance(sort_result, Restored):
            self.sort_mode = sort_result.value
            report.restored.append("sort")
        else:
            self.sort_mode = DEFAULT_SORT
            report.defaults["sort"] = sort_result.reason

        self.store = TaskStore(tasks, on_change=self._schedule_save, id_factory=self._id_factory)
        self.editing = EditingSession(self.store)
        self.report = report
        logger.debug(
            "Opened task list with %d tasks (filter=%s, sort=%s)",
            len(self.store),
            self.filter,
            self.sort_mode,
        )
        return report

    def idle(self) -> bool:
        """Idle tick: write the latest task collection if a save is pending."""
        return self.writer.run_pending()

    def close(self, *, flush: bool | None = None) -> None:
        if self._closed:
            return
        self._closed = True
        should_flush = self.flush_on_exit if flush is None else flush
        if should_flush:
            self.writer.flush()
        elif self.writer.cancel():
            logger.warning("Discarded unsaved task changes on close")

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> TaskListState:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Task operations
    # ------------------------------------------------------------------
    def add(self, text: str, due_date: str | date | None = None) -> Task | None:
        return self.store.add(text, due_date)

    def toggle(self, task_id: str) -> Task | None:
        return self.store.toggle(task_id)

    def delete(self, task_id: str) -> Task | None:
        return self.store.delete(task_id)

    def edit_commit(self, task_id: str, text: str) -> Task | None:
        return self.store.edit_commit(task_id, text)

    def clear_completed(self) -> list[Task]:
        return self.store.clear_completed()

    def undo(self) -> list[Task]:
        return self.store.undo()

    def dismiss_undo(self) -> None:
        self.store.dismiss_undo()

    # ------------------------------------------------------------------
    # Editing session
    # ------------------------------------------------------------------
    def begin_edit(self, task_id: str) -> bool:
        task = self.store.get(task_id)
        if task is None:
            return False
        self.editing.begin(task)
        return True

    def update_draft(self, text: str) -> None:
        self.editing.update_draft(text)

    def commit_edit(self) -> Task | None:
        return self.editing.commit()

    def cancel_edit(self) -> None:
        self.editing.cancel()

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------
    def set_filter(self, value: str) -> bool:
        if not is_filter(value):
            return False
        self.filter = value  # type: ignore[assignment]
        self.persistence.save_filter(self.filter)
        return True

    def set_sort(self, value: str) -> bool:
        if not is_sort_mode(value):
            return False
        self.sort_mode = value  # type: ignore[assignment]
        self.persistence.save_sort(self.sort_mode)
        return True

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------
    def today(self) -> str:
        return self._today().isoformat()

    def view(self, *, filter_: Filter | None = None, sort_mode: SortMode | None = None) -> ViewSnapshot:
        """Project the current tasks; explicit filter or sort overrides are not persisted."""
        tasks = self.store.tasks()
        today = self.today()
        active_filter = filter_ or self.filter
        active_sort = sort_mode or self.sort_mode
        return ViewSnapshot(
            tasks=project(tasks, active_filter, active_sort, today),
            counters=counters(tasks),
            filter=active_filter,
            sort_mode=active_sort,
            editing=self.editing.state,
            undo_message=self.store.undo_message,
            today=today,
        )

    def _schedule_save(self) -> None:
        self.writer.schedule(lambda: self.persistence.save_tasks(self.store.tasks()))


__all__ = ["OpenReport", "TaskListState", "ViewSnapshot"]
