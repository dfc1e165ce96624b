"""Core services for Taskpad."""

from .config import (
    ConfigContext,
    ConfigManager,
    ConfigurationError,
    TaskpadConfig,
)
from .editing import EditingSession, EditingState
from .ids import new_id
from .logs import ActivityEntry, ActivityLog
from .models import (
    DEFAULT_FILTER,
    DEFAULT_SORT,
    VALID_FILTERS,
    VALID_SORT_MODES,
    Filter,
    SortMode,
    Task,
    UndoEntry,
)
from .projection import Counters, TaskView, counters, is_overdue, project
from .scheduler import DeferredWriter, PendingWrite
from .store import TaskStore

__all__ = [
    "ActivityEntry",
    "ActivityLog",
    "ConfigContext",
    "ConfigManager",
    "ConfigurationError",
    "Counters",
    "DEFAULT_FILTER",
    "DEFAULT_SORT",
    "DeferredWriter",
    "EditingSession",
    "EditingState",
    "Filter",
    "PendingWrite",
    "SortMode",
    "Task",
    "TaskStore",
    "TaskView",
    "TaskpadConfig",
    "UndoEntry",
    "VALID_FILTERS",
    "VALID_SORT_MODES",
    "counters",
    "is_overdue",
    "new_id",
    "project",
]
