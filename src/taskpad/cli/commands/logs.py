"""/logs: browse shell activity by category, severity or task."""

from __future__ import annotations

from typing import TYPE_CHECKING

from taskpad.cli.types import CommandResponse, CommandRouter, SlashCommand
from taskpad.core.logs import CATEGORIES, SEVERITIES

if TYPE_CHECKING:  # pragma: no cover
    from taskpad.cli.app import CLIApp

DEFAULT_LOG_LIMIT = 20
LOGS_USAGE = "Usage: /logs [task|storage|system] [info|warning|error] [#|id]"


def register(app: CLIApp, router: CommandRouter) -> None:
    """Register the /logs command."""

    router.register(SlashCommand("logs", _handle_logs, "Show activity, optionally by category, severity or task"))


def _handle_logs(app: CLIApp, args: list[str]) -> CommandResponse:
    category: str | None = None
    severity: str | None = None
    task_id: str | None = None
    task_label: str | None = None
    for token in args:
        lowered = token.lower()
        if lowered in CATEGORIES:
            category = lowered
            continue
        if lowered in SEVERITIES:
            severity = lowered
            continue
        task = app.resolve_task(token)
        if task is None:
            return CommandResponse(messages=[("system", f"No task or log filter matches '{token}'.\n{LOGS_USAGE}")])
        task_id, task_label = task.id, task.text

    entries = app.activity.query(category=category, severity=severity, task_id=task_id, limit=DEFAULT_LOG_LIMIT)
    if not entries:
        return CommandResponse(messages=[("system", "No matching activity yet.")])

    heading = f'Activity for "{task_label}"' if task_label else "Recent activity"
    lines = [f"{heading} ({len(entries)} shown)"]
    lines.extend(entry.describe() for entry in entries)
    return CommandResponse(messages=[("system", "\n".join(lines))])


__all__ = ["register"]
