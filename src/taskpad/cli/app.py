"""Interactive shell for Taskpad."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any

from prompt_toolkit import PromptSession
from prompt_toolkit.filters import Condition
from prompt_toolkit.formatted_text import ANSI
from prompt_toolkit.history import FileHistory, InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.patch_stdout import patch_stdout
from rich.console import Console

from taskpad.cli.branding import (
    TASKPAD_THEME,
    create_message_panel,
    create_task_panel,
    themed_console,
)
from taskpad.cli.commands import register_builtin_commands
from taskpad.cli.commands.tasks import add_task
from taskpad.cli.status_bar import StatusBar
from taskpad.cli.types import CommandResponse, CommandRouter
from taskpad.core.config import ConfigContext
from taskpad.core.logs import ActivityCategory, ActivityEntry, ActivityLog, Severity
from taskpad.core.models import Task
from taskpad.session import TaskListState

logger = logging.getLogger(__name__)

# Returned by the prompt when Esc is pressed during an edit.
CANCEL_EDIT = "\x00cancel-edit"


class CLIApp:
    """Interactive shell wiring slash commands to the task list state."""

    def __init__(
        self,
        state: TaskListState,
        *,
        console: Console | None = None,
        config_context: ConfigContext | None = None,
        history_path: Path | None = None,
        activity: ActivityLog | None = None,
    ) -> None:
        base_console = console or CLIApp._default_console()
        if console is not None and not getattr(base_console, "_taskpad_theme_applied", False):
            base_console.push_theme(TASKPAD_THEME)
            base_console._taskpad_theme_applied = True
        self.console = base_console
        self.state = state
        self.config_context = config_context
        self.history_path = history_path
        capacity = config_context.config.activity_log_size if config_context else 200
        self.activity = activity if activity is not None else ActivityLog(capacity=capacity)
        self.show_progress = config_context.config.show_progress if config_context else True
        self.command_router = CommandRouter()
        self.status_bar = StatusBar(console=self.console, state=self.state, activity=self.activity)
        self.session: PromptSession | None = None
        self._awaiting_ctrl_c_confirm = False
        register_builtin_commands(self, self.command_router)
        for key, reason in self.state.report.defaults.items():
            if not reason.startswith("no stored"):
                self.log_event("storage", f"Stored {key} ignored: {reason}", severity="warning")
        self.log_event("system", f"Loaded {len(self.state.store)} tasks")
        logger.debug("CLIApp initialised with %d tasks", len(self.state.store))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def run(self) -> None:
        """Start the interactive REPL."""
        session = self._ensure_session()
        self.console.print(create_task_panel(self.state.view(), show_progress=self.show_progress))
        self.console.print("[taskpad.text.secondary]Type a task to add it, or /help for commands.[/]")
        try:
            with patch_stdout(raw=True):
                while True:
                    draft = self.state.editing.draft
                    try:
                        user_input = session.prompt(self._prompt_message(), default=draft or "")
                        self._awaiting_ctrl_c_confirm = False
                    except KeyboardInterrupt:
                        if self.state.editing.active:
                            self.state.cancel_edit()
                            self._render_message("system", "Edit discarded.")
                            continue
                        if self._awaiting_ctrl_c_confirm:
                            self.console.print("Exiting Taskpad. Bye!")
                            break
                        self._awaiting_ctrl_c_confirm = True
                        logger.debug("KeyboardInterrupt detected; awaiting confirmation")
                        self.console.print("Press Ctrl-C again to exit Taskpad.")
                        continue
                    except EOFError:
                        if self.state.editing.active:
                            self.commit_edit()
                        self.console.print("Exiting Taskpad. Bye!")
                        break

                    response = self.handle_line(user_input)
                    self.render(response)
                    if not response.continue_loop:
                        break
        finally:
            self.close()

    def handle_line(self, raw_line: str) -> CommandResponse:
        """Handle a single line of user input (used by tests and run loop)."""
        line = "/cancel" if raw_line == CANCEL_EDIT else raw_line.rstrip()
        if self.state.editing.active and not line.startswith("/"):
            self.state.update_draft(line)
            response = self.commit_edit()
        elif not line:
            return CommandResponse(messages=[])
        elif line.startswith("/"):
            logger.debug("Processing slash command: %s", line)
            response = self.command_router.dispatch(self, line[1:])
        else:
            response = add_task(self, line)
        self.state.idle()
        self._refresh_status_bar()
        return response

    def commit_edit(self) -> CommandResponse:
        editing = self.state.editing.state
        if editing is None:
            return CommandResponse(messages=[("system", "Not editing anything.")])
        before = self.state.store.get(editing.task_id)
        old_text = before.text if before is not None else ""
        task = self.state.commit_edit()
        if before is None:
            return CommandResponse(messages=[("system", "That task no longer exists.")], show_tasks=True)
        if self.state.store.get(editing.task_id) is None:
            self.log_event("task", f'Deleted "{old_text}" by clearing its text', task_id=editing.task_id)
            return CommandResponse(messages=[("system", self.state.store.undo_message or "Deleted.")], show_tasks=True)
        text = task.text if task is not None else editing.draft
        self.log_event("task", f'Renamed "{old_text}" to "{text}"', task_id=editing.task_id)
        return CommandResponse(messages=[("system", f'Renamed to "{text}".')], show_tasks=True)

    def resolve_task(self, ref: str) -> Task | None:
        """Find a task by its 1-based position in the current view or an id prefix."""
        ref = ref.strip()
        if not ref:
            return None
        if ref.isdigit():
            views = self.state.view().tasks
            index = int(ref) - 1
            if 0 <= index < len(views):
                return views[index].task
            return None
        matches = [task for task in self.state.store.tasks() if task.id.startswith(ref)]
        if len(matches) == 1:
            return matches[0]
        return None

    def log_event(
        self,
        category: ActivityCategory,
        message: str,
        *,
        severity: Severity = "info",
        task_id: str | None = None,
    ) -> ActivityEntry:
        return self.activity.record(category, message, severity=severity, task_id=task_id)

    def render(self, response: CommandResponse) -> None:
        for role, message in response.messages:
            self._render_message(role, message)
        if response.show_tasks:
            self.console.print(create_task_panel(self.state.view(), show_progress=self.show_progress))
        if not self.status_bar.supports_toolbar and response.continue_loop:
            self.console.print(self.status_bar.render_text())

    def close(self) -> None:
        self.state.close()

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------
    def _render_message(self, role: str, message: str) -> None:
        self.console.print(create_message_panel(role, message))

    def _refresh_status_bar(self) -> None:
        if not self.status_bar.supports_toolbar or self.session is None:
            return
        application = self.session.app
        if getattr(application, "is_running", False):
            application.invalidate()

    def _prompt_message(self) -> ANSI | str:
        marker = "✏️ " if self.state.editing.active else "➤ "
        if not (self.console.is_terminal and not self.console.no_color):
            return marker
        return ANSI(f"\x1b[38;2;168;85;247m{marker}\x1b[0m ")

    def _key_bindings(self) -> KeyBindings:
        bindings = KeyBindings()
        editing = Condition(lambda: self.state.editing.active)

        @bindings.add("escape", eager=True, filter=editing)
        def _cancel_edit(event: Any) -> None:
            event.app.exit(result=CANCEL_EDIT)

        return bindings

    def _ensure_session(self) -> PromptSession:
        if self.session is None:
            if self.history_path is not None:
                self.history_path.parent.mkdir(parents=True, exist_ok=True)
                history: Any = FileHistory(str(self.history_path))
            else:
                history = InMemoryHistory()
            bottom_toolbar = self.status_bar.toolbar if self.status_bar.supports_toolbar else None
            self.session = PromptSession(
                history=history,
                bottom_toolbar=bottom_toolbar,
                key_bindings=self._key_bindings(),
            )
            self.activity.add_listener(lambda _entry: self._refresh_status_bar())
        return self.session

    @staticmethod
    def _default_console() -> Console:
        force_style = os.environ.get("TASKPAD_FORCE_COLOR")
        no_color = (
            os.environ.get("TASKPAD_NO_COLOR") is not None
            or os.environ.get("NO_COLOR") is not None
        )
        if force_style:
            console = themed_console(force_terminal=True)
        elif no_color or not sys.stdout.isatty():
            console = themed_console(no_color=True, force_terminal=False, color_system=None)
        else:
            console = themed_console()
        console._taskpad_theme_applied = True
        return console


__all__ = ["CANCEL_EDIT", "CLIApp"]
