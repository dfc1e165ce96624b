"""Persistence for Taskpad state."""

from .backends import FileKeyValueStore, KeyValueStore, MemoryKeyValueStore
from .persistence import (
    FILTER_KEY,
    SORT_KEY,
    TASKS_KEY,
    Defaults,
    LoadResult,
    Restored,
    TaskPersistence,
    TaskRecord,
    decode_tasks,
    encode_tasks,
    restored_or,
)

__all__ = [
    "Defaults",
    "FILTER_KEY",
    "FileKeyValueStore",
    "KeyValueStore",
    "LoadResult",
    "MemoryKeyValueStore",
    "Restored",
    "SORT_KEY",
    "TASKS_KEY",
    "TaskPersistence",
    "TaskRecord",
    "decode_tasks",
    "encode_tasks",
    "restored_or",
]
