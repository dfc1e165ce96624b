"""Shared CLI types and routing helpers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover
    from taskpad.cli.app import CLIApp
else:  # pragma: no cover - runtime only
    CLIApp = Any  # type: ignore[assignment]


logger = logging.getLogger(__name__)


@dataclass
class CommandResponse:
    """Represents the outcome of handling a shell input."""

    messages: list[tuple[str, str]]
    continue_loop: bool = True
    show_tasks: bool = False


class SlashCommand:
    """Container for slash command metadata."""

    def __init__(
        self,
        name: str,
        handler: Callable[[CLIApp, list[str]], CommandResponse],
        help_text: str,
        *,
        aliases: Iterable[str] = (),
        raw_args: bool = False,
    ) -> None:
        self.name = name
        self.handler = handler
        self.help_text = help_text
        self.aliases = tuple(aliases)
        # Handler gets the untouched remainder of the line as a single argument.
        self.raw_args = raw_args


class CommandRouter:
    """Parses and dispatches slash commands."""

    def __init__(self) -> None:
        self._commands: dict[str, SlashCommand] = {}
        self._aliases: dict[str, str] = {}

    def register(self, command: SlashCommand) -> None:
        logger.debug("Registering command: %s", command.name)
        self._commands[command.name] = command
        for alias in command.aliases:
            self._aliases[alias] = command.name

    def available_commands(self) -> Iterable[SlashCommand]:
        return self._commands.values()

    def dispatch(self, app: CLIApp, raw_line: str) -> CommandResponse:
        parts = raw_line.strip().split(maxsplit=1)
        if not parts:
            return CommandResponse(messages=[])
        command_name = parts[0].lower()
        remainder = parts[1] if len(parts) > 1 else ""
        command = self._commands.get(self._aliases.get(command_name, command_name))
        if not command:
            logger.info("Unknown command: /%s", command_name)
            return CommandResponse(messages=[("system", f"Unknown command '/{command_name}'. Type /help for a list of commands.")])
        if command.raw_args:
            args = [remainder] if remainder else []
        else:
            args = remainder.split()
        logger.debug("Dispatching command '/%s' with args %s", command_name, args)
        return command.handler(app, args)


__all__ = ["CommandResponse", "CommandRouter", "SlashCommand"]
