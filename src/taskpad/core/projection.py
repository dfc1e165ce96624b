"""Pure derivation of the displayed task sequence and counters."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from taskpad.core.models import Filter, SortMode, Task


@dataclass(frozen=True, slots=True)
class TaskView:
    """A task as displayed, with its overdue flag."""

    task: Task
    overdue: bool

    @property
    def id(self) -> str:
        return self.task.id

    @property
    def text(self) -> str:
        return self.task.text


@dataclass(frozen=True, slots=True)
class Counters:
    total: int
    remaining: int
    completion_percent: int


def text_key(text: str) -> tuple[str, str]:
    # Case-insensitive first, lowercase before uppercase on ties.
    return (text.casefold(), text.swapcase())


def _due_key(task: Task) -> tuple[bool, str, tuple[str, str]]:
    return (task.due_date is None, task.due_date or "", text_key(task.text))


def _status_key(task: Task) -> tuple[bool, tuple[str, str]]:
    return (task.done, text_key(task.text))


def filter_tasks(tasks: Sequence[Task], filter_: Filter) -> list[Task]:
    if filter_ == "active":
        return [task for task in tasks if not task.done]
    if filter_ == "completed":
        return [task for task in tasks if task.done]
    return list(tasks)


def sort_tasks(tasks: Sequence[Task], sort_mode: SortMode) -> list[Task]:
    if sort_mode == "due":
        return sorted(tasks, key=_due_key)
    if sort_mode == "status":
        return sorted(tasks, key=_status_key)
    return list(tasks)


def is_overdue(task: Task, today: date | str) -> bool:
    if task.done or not task.due_date:
        return False
    today_iso = today if isinstance(today, str) else today.isoformat()
    return task.due_date < today_iso


def counters(tasks: Sequence[Task]) -> Counters:
    total = len(tasks)
    remaining = sum(1 for task in tasks if not task.done)
    if total == 0:
        return Counters(total=0, remaining=0, completion_percent=0)
    percent = math.floor(100 * (total - remaining) / total + 0.5)
    return Counters(total=total, remaining=remaining, completion_percent=percent)


def project(
    tasks: Sequence[Task],
    filter_: Filter,
    sort_mode: SortMode,
    today: date | str,
) -> list[TaskView]:
    """Filter, then sort, then flag overdue tasks. ``tasks`` is left untouched."""
    visible = sort_tasks(filter_tasks(tasks, filter_), sort_mode)
    return [TaskView(task=task, overdue=is_overdue(task, today)) for task in visible]


__all__ = [
    "Counters",
    "TaskView",
    "counters",
    "filter_tasks",
    "is_overdue",
    "project",
    "sort_tasks",
    "text_key",
]
