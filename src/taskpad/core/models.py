"""Task list data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Literal

Filter = Literal["all", "active", "completed"]
SortMode = Literal["manual", "due", "status"]

VALID_FILTERS: tuple[str, ...] = ("all", "active", "completed")
VALID_SORT_MODES: tuple[str, ...] = ("manual", "due", "status")

DEFAULT_FILTER: Filter = "all"
DEFAULT_SORT: SortMode = "manual"


@dataclass(slots=True)
class Task:
    """Single entry of the canonical task collection."""

    id: str
    text: str
    done: bool = False
    due_date: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "done": self.done,
            "dueDate": self.due_date,
        }


@dataclass(frozen=True, slots=True)
class UndoEntry:
    """Tasks removed by the latest destructive operation."""

    tasks: tuple[Task, ...]
    message: str


def normalize_due_date(value: str | date | None) -> str | None:
    """Coerce a due date to ``YYYY-MM-DD`` or ``None``.

    Blank or unparseable strings count as "no due date".
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    candidate = str(value).strip()
    if not candidate:
        return None
    try:
        return date.fromisoformat(candidate).isoformat()
    except ValueError:
        return None


def is_filter(value: Any) -> bool:
    return isinstance(value, str) and value in VALID_FILTERS


def is_sort_mode(value: Any) -> bool:
    return isinstance(value, str) and value in VALID_SORT_MODES


__all__ = [
    "DEFAULT_FILTER",
    "DEFAULT_SORT",
    "Filter",
    "SortMode",
    "Task",
    "UndoEntry",
    "VALID_FILTERS",
    "VALID_SORT_MODES",
    "is_filter",
    "is_sort_mode",
    "normalize_due_date",
]
