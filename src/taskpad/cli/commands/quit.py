"""Quit command for the Taskpad shell."""

from __future__ import annotations

from typing import TYPE_CHECKING

from taskpad.cli.types import CommandResponse, CommandRouter, SlashCommand

if TYPE_CHECKING:  # pragma: no cover
    from taskpad.cli.app import CLIApp


def register(_app: CLIApp, router: CommandRouter) -> None:
    """Register the /quit command."""

    def handle(_app: CLIApp, _args: list[str]) -> CommandResponse:
        return CommandResponse(messages=[("system", "Exiting Taskpad. Bye!")], continue_loop=False)

    router.register(SlashCommand("quit", handle, "Exit Taskpad", aliases=("exit",)))


__all__ = ["register"]
