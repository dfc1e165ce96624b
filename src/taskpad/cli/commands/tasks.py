"""Slash commands that mutate the task list."""

from __future__ import annotations

import re
from datetime import date
from typing import TYPE_CHECKING

from taskpad.cli.types import CommandResponse, CommandRouter, SlashCommand

if TYPE_CHECKING:  # pragma: no cover
    from taskpad.cli.app import CLIApp


ADD_USAGE = "Usage: /add <text> [--due YYYY-MM-DD]"
_DUE_OPTION = re.compile(r"(?:^|\s)--due(?:=(?P<inline>\S*)|\s+(?P<value>\S+)|\s*$)")


def register(app: CLIApp, router: CommandRouter) -> None:
    """Register task mutation commands."""

    router.register(SlashCommand("add", _handle_add, "Add a task: /add <text> [--due YYYY-MM-DD]", raw_args=True))
    router.register(SlashCommand("toggle", _handle_toggle, "Toggle completion: /toggle <#|id> [...]", aliases=("done",)))
    router.register(SlashCommand("delete", _handle_delete, "Delete a task: /delete <#|id>", aliases=("rm",)))
    router.register(SlashCommand("clear", _handle_clear, "Remove all completed tasks"))
    router.register(SlashCommand("undo", _handle_undo, "Restore the last deleted or cleared tasks"))
    router.register(SlashCommand("dismiss", _handle_dismiss, "Forget the pending undo"))
    router.register(SlashCommand("list", _handle_list, "Show the task list", aliases=("ls",)))


def _handle_add(app: CLIApp, args: list[str]) -> CommandResponse:
    try:
        text, due = parse_text_and_due(args[0] if args else "")
    except ValueError as exc:
        return CommandResponse(messages=[("system", f"{exc}\n{ADD_USAGE}")])
    return add_task(app, text, due)


def add_task(app: CLIApp, text: str, due: str | None = None) -> CommandResponse:
    """Add ``text`` as typed; bare shell lines come straight here."""
    task = app.state.add(text, due)
    if task is None:
        return CommandResponse(messages=[("system", "Task text cannot be empty.")])
    app.log_event("task", f'Added "{task.text}"', task_id=task.id)
    suffix = f" (due {task.due_date})" if task.due_date else ""
    return CommandResponse(messages=[("system", f'Added "{task.text}"{suffix}.')], show_tasks=True)


def _handle_toggle(app: CLIApp, args: list[str]) -> CommandResponse:
    if not args:
        return CommandResponse(messages=[("system", "/toggle requires a task number or id.")])
    lines: list[str] = []
    # Positions refer to the list as displayed before this command.
    resolved = [(ref, app.resolve_task(ref)) for ref in args]
    for ref, task in resolved:
        if task is None:
            lines.append(f"No task matches '{ref}'.")
            continue
        app.state.toggle(task.id)
        status = "done" if task.done else "not done"
        lines.append(f'"{task.text}" marked {status}.')
        app.log_event("task", f'Marked "{task.text}" {status}', task_id=task.id)
    return CommandResponse(messages=[("system", "\n".join(lines))], show_tasks=True)


def _handle_delete(app: CLIApp, args: list[str]) -> CommandResponse:
    if len(args) != 1:
        return CommandResponse(messages=[("system", "/delete requires exactly one task number or id.")])
    task = app.resolve_task(args[0])
    if task is None:
        return CommandResponse(messages=[("system", f"No task matches '{args[0]}'.")])
    app.state.delete(task.id)
    app.log_event("task", f'Deleted "{task.text}"', task_id=task.id)
    return CommandResponse(messages=[("system", app.state.store.undo_message or "Deleted.")], show_tasks=True)


def _handle_clear(app: CLIApp, _args: list[str]) -> CommandResponse:
    removed = app.state.clear_completed()
    if not removed:
        return CommandResponse(messages=[("system", "No completed tasks to clear.")])
    for task in removed:
        app.log_event("task", f'Cleared "{task.text}"', task_id=task.id)
    return CommandResponse(messages=[("system", app.state.store.undo_message or "Cleared.")], show_tasks=True)


def _handle_undo(app: CLIApp, _args: list[str]) -> CommandResponse:
    message = app.state.store.undo_message
    if message is None:
        return CommandResponse(messages=[("system", "Nothing to undo.")])
    restored = app.state.undo()
    for task in restored:
        app.log_event("task", f'Restored "{task.text}"', task_id=task.id)
    noun = "task" if len(restored) == 1 else "tasks"
    return CommandResponse(
        messages=[("system", f"Undid: {message}. Restored {len(restored)} {noun}.")],
        show_tasks=True,
    )


def _handle_dismiss(app: CLIApp, _args: list[str]) -> CommandResponse:
    if app.state.store.undo_message is None:
        return CommandResponse(messages=[("system", "Nothing to dismiss.")])
    app.state.dismiss_undo()
    return CommandResponse(messages=[("system", "Undo dismissed.")])


def _handle_list(_app: CLIApp, _args: list[str]) -> CommandResponse:
    return CommandResponse(messages=[], show_tasks=True)


def parse_due(value: str) -> str | None:
    """Validate a user-supplied due date; blank means no due date."""
    value = value.strip()
    if not value:
        return None
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError as exc:
        raise ValueError(f"Invalid due date '{value}'. Use YYYY-MM-DD.") from exc


def parse_text_and_due(raw: str) -> tuple[str, str | None]:
    """Split one ``--due`` option off an /add line, keeping the text's spacing."""
    match = _DUE_OPTION.search(raw)
    if match is None:
        return raw.strip(), None
    value = match.group("inline") if match.group("inline") is not None else match.group("value")
    if value is None or value.startswith("--"):
        raise ValueError("Missing value for --due.")
    text = (raw[: match.start()] + raw[match.end() :]).strip()
    return text, parse_due(value)


__all__ = ["add_task", "parse_due", "parse_text_and_due", "register"]
