"""Rename commands backed by the editing session."""

from __future__ import annotations

from typing import TYPE_CHECKING

from taskpad.cli.types import CommandResponse, CommandRouter, SlashCommand

if TYPE_CHECKING:  # pragma: no cover
    from taskpad.cli.app import CLIApp


def register(app: CLIApp, router: CommandRouter) -> None:
    """Register /edit and /cancel."""

    def handle_edit(app: CLIApp, args: list[str]) -> CommandResponse:
        if not args:
            return CommandResponse(messages=[("system", "Usage: /edit <#|id> [new text]")])
        ref, *rest = args[0].split(maxsplit=1)
        task = app.resolve_task(ref)
        if task is None:
            return CommandResponse(messages=[("system", f"No task matches '{ref}'.")])
        app.state.begin_edit(task.id)
        if rest:
            app.state.update_draft(rest[0])
            return app.commit_edit()
        return CommandResponse(
            messages=[("system", f'Editing "{task.text}". Enter the new text to save; Esc or /cancel discards.')],
        )

    def handle_cancel(app: CLIApp, _args: list[str]) -> CommandResponse:
        if not app.state.editing.active:
            return CommandResponse(messages=[("system", "Not editing anything.")])
        app.state.cancel_edit()
        return CommandResponse(messages=[("system", "Edit discarded.")])

    router.register(SlashCommand("edit", handle_edit, "Rename a task: /edit <#|id> [new text]", raw_args=True))
    router.register(SlashCommand("cancel", handle_cancel, "Discard the edit in progress"))


__all__ = ["register"]
