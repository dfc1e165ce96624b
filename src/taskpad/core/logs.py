"""Shell activity log: what happened to which task, newest last."""

from __future__ import annotations

from collections import Counter, deque
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Literal

ActivityCategory = Literal["task", "storage", "system"]
Severity = Literal["info", "warning", "error"]

CATEGORIES: tuple[str, ...] = ("task", "storage", "system")
SEVERITIES: tuple[str, ...] = ("info", "warning", "error")


@dataclass(frozen=True, slots=True)
class ActivityEntry:
    timestamp: datetime
    category: ActivityCategory
    severity: Severity
    message: str
    task_id: str | None = None

    def matches(
        self,
        *,
        category: str | None = None,
        severity: str | None = None,
        task_id: str | None = None,
    ) -> bool:
        if category is not None and self.category != category:
            return False
        if severity is not None and SEVERITIES.index(self.severity) < SEVERITIES.index(severity):
            return False
        return task_id is None or self.task_id == task_id

    def describe(self) -> str:
        clock = self.timestamp.astimezone().strftime("%H:%M:%S")
        return f"{clock} {self.severity.upper():<7} {self.category:<7} {self.message}"


class ActivityLog:
    """Bounded record of shell activity.

    Entries may point at a task id so the history of a single task can be
    pulled back out. Severity filters are thresholds: ``warning`` also
    returns errors.
    """

    def __init__(self, *, capacity: int = 200) -> None:
        self.capacity = max(capacity, 1)
        self._entries: deque[ActivityEntry] = deque(maxlen=self.capacity)
        self._listeners: list[Callable[[ActivityEntry], None]] = []

    def record(
        self,
        category: ActivityCategory,
        message: str,
        *,
        severity: Severity = "info",
        task_id: str | None = None,
    ) -> ActivityEntry:
        if category not in CATEGORIES:
            raise ValueError(f"Unknown activity category '{category}'")
        if severity not in SEVERITIES:
            raise ValueError(f"Unknown severity '{severity}'")
        entry = ActivityEntry(
            timestamp=datetime.now(UTC),
            category=category,
            severity=severity,
            message=message,
            task_id=task_id,
        )
        self._entries.append(entry)
        for listener in list(self._listeners):
            listener(entry)
        return entry

    def query(
        self,
        *,
        category: str | None = None,
        severity: str | None = None,
        task_id: str | None = None,
        limit: int = 50,
    ) -> list[ActivityEntry]:
        if limit <= 0:
            return []
        matched = [
            entry
            for entry in self._entries
            if entry.matches(category=category, severity=severity, task_id=task_id)
        ]
        return matched[-limit:]

    def latest(self) -> ActivityEntry | None:
        return self._entries[-1] if self._entries else None

    def problem_count(self) -> int:
        counts = Counter(entry.severity for entry in self._entries)
        return counts["warning"] + counts["error"]

    def add_listener(self, listener: Callable[[ActivityEntry], None]) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["ActivityCategory", "ActivityEntry", "ActivityLog", "CATEGORIES", "SEVERITIES", "Severity"]
