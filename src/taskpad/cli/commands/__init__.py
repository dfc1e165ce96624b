"""Builtin shell command registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from taskpad.cli.commands import edit, logs, tasks, view
from taskpad.cli.commands import help as help_cmd
from taskpad.cli.commands import quit as quit_cmd
from taskpad.cli.types import CommandRouter

if TYPE_CHECKING:  # pragma: no cover
    from taskpad.cli.app import CLIApp


def register_builtin_commands(app: CLIApp, router: CommandRouter) -> None:
    """Attach all builtin slash commands to the router."""

    help_cmd.register(app, router)
    quit_cmd.register(app, router)
    tasks.register(app, router)
    edit.register(app, router)
    view.register(app, router)
    logs.register(app, router)


__all__ = ["register_builtin_commands"]
