"""Help command for the Taskpad shell."""

from __future__ import annotations

from typing import TYPE_CHECKING

from taskpad.cli.types import CommandResponse, CommandRouter, SlashCommand

if TYPE_CHECKING:  # pragma: no cover
    from taskpad.cli.app import CLIApp


def register(app: CLIApp, router: CommandRouter) -> None:
    """Register the /help command."""

    def handle(_app: CLIApp, _args: list[str]) -> CommandResponse:
        commands = sorted(router.available_commands(), key=lambda cmd: cmd.name)
        lines = ["Available commands:"]
        for command in commands:
            name = f"/{command.name}"
            if command.aliases:
                name += " (" + ", ".join(f"/{alias}" for alias in command.aliases) + ")"
            lines.append(f"{name}\t{command.help_text}")
        lines.append("")
        lines.append("Type text without a leading slash to add it as a task.")
        return CommandResponse(messages=[("system", "\n".join(lines))])

    router.register(SlashCommand("help", handle, "Show available commands"))


__all__ = ["register"]
