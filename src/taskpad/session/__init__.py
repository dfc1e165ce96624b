"""Task list session lifecycle."""

from .state import OpenReport, TaskListState, ViewSnapshot

__all__ = ["OpenReport", "TaskListState", "ViewSnapshot"]
