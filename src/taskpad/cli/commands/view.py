"""Filter and sort preference commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from taskpad.cli.types import CommandResponse, CommandRouter, SlashCommand
from taskpad.core.models import VALID_FILTERS, VALID_SORT_MODES

if TYPE_CHECKING:  # pragma: no cover
    from taskpad.cli.app import CLIApp


def register(app: CLIApp, router: CommandRouter) -> None:
    """Register /filter and /sort."""

    def handle_filter(app: CLIApp, args: list[str]) -> CommandResponse:
        if not args:
            return CommandResponse(
                messages=[("system", f"Filter: {app.state.filter} (choose from {', '.join(VALID_FILTERS)})")],
            )
        value = args[0].lower()
        if not app.state.set_filter(value):
            return CommandResponse(
                messages=[("system", f"Unknown filter '{value}'. Choose from: {', '.join(VALID_FILTERS)}.")],
            )
        app.log_event("task", f"Filter set to {value}")
        return CommandResponse(messages=[], show_tasks=True)

    def handle_sort(app: CLIApp, args: list[str]) -> CommandResponse:
        if not args:
            return CommandResponse(
                messages=[("system", f"Sort: {app.state.sort_mode} (choose from {', '.join(VALID_SORT_MODES)})")],
            )
        value = args[0].lower()
        if not app.state.set_sort(value):
            return CommandResponse(
                messages=[("system", f"Unknown sort mode '{value}'. Choose from: {', '.join(VALID_SORT_MODES)}.")],
            )
        app.log_event("task", f"Sort set to {value}")
        return CommandResponse(messages=[], show_tasks=True)

    router.register(SlashCommand("filter", handle_filter, "Show only all|active|completed tasks"))
    router.register(SlashCommand("sort", handle_sort, "Order by manual|due|status"))


__all__ = ["register"]
