"""Durable task list state: tasks, active filter and sort mode."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, TypeAdapter, ValidationError, field_validator

from taskpad.core.models import (
    Filter,
    SortMode,
    Task,
    is_filter,
    is_sort_mode,
    normalize_due_date,
)
from taskpad.storage.backends import KeyValueStore

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"
FILTER_KEY = "filter"
SORT_KEY = "sort"

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Defaults:
    """Nothing usable was stored; the caller keeps its defaults."""

    reason: str


@dataclass(frozen=True, slots=True)
class Restored(Generic[T]):
    value: T


LoadResult = Union[Defaults, Restored[T]]


class TaskRecord(BaseModel):
    """Persisted shape of a single task."""

    model_config = ConfigDict(populate_by_name=True)

    id: StrictStr
    text: StrictStr
    done: StrictBool = False
    due_date: StrictStr | None = Field(default=None, alias="dueDate")

    @field_validator("id")
    @classmethod
    def _id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("text")
    @classmethod
    def _trimmed_text(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("must not be blank")
        return trimmed

    def to_task(self) -> Task:
        return Task(id=self.id, text=self.text, done=self.done, due_date=normalize_due_date(self.due_date))


_RECORDS = TypeAdapter(list[TaskRecord])


def encode_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([task.to_dict() for task in tasks])


def decode_tasks(raw: str) -> LoadResult[list[Task]]:
    """Parse a stored task list. Any defect discards the whole payload."""
    try:
        records = _RECORDS.validate_json(raw)
    except ValidationError as exc:
        return Defaults(reason=f"malformed task list ({exc.error_count()} errors)")
    tasks = [record.to_task() for record in records]
    ids = [task.id for task in tasks]
    if len(ids) != len(set(ids)):
        return Defaults(reason="duplicate task ids")
    return Restored(value=tasks)


class TaskPersistence:
    """Adapter over a key-value store that never raises to its caller."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    # ------------------------------------------------------------------
    # Raw access
    # ------------------------------------------------------------------
    def load(self, key: str) -> str | None:
        try:
            return self.store.load(key)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Unable to read '%s' from storage: %s", key, exc)
            return None

    def save(self, key: str, value: str) -> bool:
        try:
            self.store.save(key, value)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Unable to save '%s': %s", key, exc)
            return False
        logger.debug("Saved '%s' (%d bytes)", key, len(value))
        return True

    # ------------------------------------------------------------------
    # Typed access
    # ------------------------------------------------------------------
    def load_tasks(self) -> LoadResult[list[Task]]:
        raw = self.load(TASKS_KEY)
        if raw is None:
            return Defaults(reason="no stored tasks")
        result = decode_tasks(raw)
        if isinstance(result, Defaults):
            logger.debug("Discarding stored tasks: %s", result.reason)
        return result

    def load_filter(self) -> LoadResult[Filter]:
        raw = self.load(FILTER_KEY)
        if raw is None:
            return Defaults(reason="no stored filter")
        if not is_filter(raw):
            logger.debug("Ignoring unknown stored filter %r", raw)
            return Defaults(reason=f"unknown filter {raw!r}")
        return Restored(value=raw)  # type: ignore[arg-type]

    def load_sort(self) -> LoadResult[SortMode]:
        raw = self.load(SORT_KEY)
        if raw is None:
            return Defaults(reason="no stored sort mode")
        if not is_sort_mode(raw):
            logger.debug("Ignoring unknown stored sort mode %r", raw)
            return Defaults(reason=f"unknown sort mode {raw!r}")
        return Restored(value=raw)  # type: ignore[arg-type]

    def save_tasks(self, tasks: Iterable[Task]) -> bool:
        return self.save(TASKS_KEY, encode_tasks(tasks))

    def save_filter(self, filter_: Filter) -> bool:
        return self.save(FILTER_KEY, filter_)

    def save_sort(self, sort_mode: SortMode) -> bool:
        return self.save(SORT_KEY, sort_mode)


def restored_or(result: LoadResult[T], default: T) -> T:
    return result.value if isinstance(result, Restored) else default


__all__ = [
    "Defaults",
    "FILTER_KEY",
    "LoadResult",
    "Restored",
    "SORT_KEY",
    "TASKS_KEY",
    "TaskPersistence",
    "TaskRecord",
    "decode_tasks",
    "encode_tasks",
    "restored_or",
]
