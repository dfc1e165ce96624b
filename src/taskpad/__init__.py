"""Taskpad: a terminal task list with durable state and single-step undo."""

__all__ = ["__version__"]

__version__ = "0.1.0"
