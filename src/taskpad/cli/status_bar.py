"""Rich-powered status bar rendering for the Taskpad shell."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from prompt_toolkit.formatted_text import ANSI
from rich.console import Console
from rich.text import Text

from taskpad.cli.branding import FILTER_LABELS, SORT_LABELS

if TYPE_CHECKING:  # pragma: no cover
    from taskpad.core.logs import ActivityLog
    from taskpad.session import TaskListState


@dataclass(slots=True)
class StatusSnapshot:
    """Materialised status information for display and testing."""

    remaining: str
    progress: str
    filter: str
    sort: str
    editing: str | None = None
    undo: str | None = None
    issues: str | None = None

    def _fields(self) -> list[tuple[str, str, str, str]]:
        fields: list[tuple[str, str, str, str]] = [
            ("Remaining", self.remaining, "bold #14F195", "#E6FFFA"),
            ("Done", self.progress, "bold #38BDF8", "#7dd3fc"),
            ("Filter", self.filter, "bold #8264FF", "#cbd5f5"),
            ("Sort", self.sort, "bold #F472B6", "#fbcfe8"),
        ]
        if self.editing is not None:
            fields.append(("Editing", self.editing, "bold #FBBF24", "#FEF3C7"))
        if self.undo is not None:
            fields.append(("Undo", self.undo, "bold #FBBF24", "#FEF3C7"))
        if self.issues is not None:
            fields.append(("Issues", self.issues, "bold #F472B6", "#fbcfe8"))
        return fields

    def to_text(self) -> Text:
        """Return a Rich Text renderable representing the snapshot."""
        text = Text()
        separator = Text(" │ ", style="dim")
        for idx, (label, value, label_style, value_style) in enumerate(self._fields()):
            if idx:
                text.append_text(separator)
            text.append(f"{label}: ", style=label_style)
            text.append(value, style=value_style)
        return text

    def to_plain(self) -> str:
        """Return a plain-text representation without styling."""
        return " | ".join(f"{label}: {value}" for label, value, _ls, _vs in self._fields())


class StatusBar:
    """Produces the bottom toolbar line from the task list state."""

    def __init__(
        self,
        *,
        console: Console,
        state: TaskListState,
        activity: ActivityLog | None = None,
    ) -> None:
        self._console = console
        self._state = state
        self._activity = activity
        self._supports_toolbar = console.is_terminal

    @property
    def supports_toolbar(self) -> bool:
        return self._supports_toolbar

    def snapshot(self) -> StatusSnapshot:
        view = self._state.view()
        editing = None
        if view.editing is not None:
            task = self._state.store.get(view.editing.task_id)
            editing = task.text if task is not None else view.editing.task_id
        issues = None
        if self._activity is not None and self._activity.problem_count():
            issues = f"{self._activity.problem_count()} (/logs warning)"
        return StatusSnapshot(
            remaining=str(view.remaining),
            progress=f"{view.completion_percent}%",
            filter=FILTER_LABELS[view.filter],
            sort=SORT_LABELS[view.sort_mode],
            editing=editing,
            undo=view.undo_message,
            issues=issues,
        )

    def render_text(self) -> Text:
        return self.snapshot().to_text()

    def render_plain(self) -> str:
        return self.snapshot().to_plain()

    def toolbar(self) -> ANSI | str:
        if not self.supports_toolbar:
            return ""
        with self._console.capture() as capture:
            self._console.print(self.render_text(), end="")
        rendered = capture.get()
        return ANSI(rendered)


__all__ = ["StatusBar", "StatusSnapshot"]
