"""Taskpad CLI styling and panel builders."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich import box
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.progress import BarColumn, Progress, TextColumn
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

if TYPE_CHECKING:  # pragma: no cover
    from taskpad.core.projection import TaskView
    from taskpad.session import ViewSnapshot

TASKPAD_THEME = Theme(
    {
        "taskpad.prompt": "bold #A855F7",

        # Message panels
        "taskpad.info.border": "#38BDF8",
        "taskpad.info.text": "#E6FFFA",
        "taskpad.info.header": "bold #38BDF8",
        "taskpad.warning.border": "#FBBF24",
        "taskpad.warning.text": "#FEF3C7",
        "taskpad.warning.header": "bold #FBBF24",

        # Typography
        "taskpad.text.primary": "#E6FFFA",
        "taskpad.text.secondary": "#94A3B8",
        "taskpad.text.tertiary": "#64748B",

        # Task list
        "taskpad.list.border": "#38BDF8",
        "taskpad.task.pending": "#38BDF8",
        "taskpad.task.done": "#14F195",
        "taskpad.task.overdue": "bold #FB7185",
        "taskpad.task.editing": "bold #FBBF24",
        "taskpad.task.due": "#A855F7",
        "taskpad.undo": "italic #FBBF24",
    }
)

FILTER_LABELS = {"all": "All", "active": "Active", "completed": "Completed"}
SORT_LABELS = {"manual": "Manual", "due": "Due date", "status": "Status"}


def themed_console(**kwargs: object) -> Console:
    """Return a Console configured with the Taskpad theme."""
    return Console(theme=TASKPAD_THEME, **kwargs)


def create_message_panel(role: str, message: str) -> Panel:
    """Wrap a shell message in a panel; ``warning`` gets the warning style."""
    style = "warning" if role == "warning" else "info"
    header = "⚠️ Warning" if role == "warning" else f"🔔 {role.title()}"
    return Panel(
        Text(message, style=f"taskpad.{style}.text"),
        title=f"[taskpad.{style}.header]{header}[/]",
        title_align="left",
        border_style=f"taskpad.{style}.border",
        box=box.ROUNDED,
        padding=(0, 1),
        expand=False,
    )


def _task_row(position: int, view: TaskView, editing_id: str | None) -> tuple[Text, Text, Text, Text]:
    task = view.task
    if task.done:
        icon = Text("✅", style="taskpad.task.done")
        text_style = "dim taskpad.text.tertiary strike"
    else:
        icon = Text("⬜", style="taskpad.task.pending")
        text_style = "taskpad.text.primary"
    label = Text(task.text, style=text_style)
    if task.id == editing_id:
        label.append("  ✏️ editing", style="taskpad.task.editing")
    due = Text("")
    if task.due_date:
        due = Text(task.due_date, style="taskpad.task.overdue" if view.overdue else "taskpad.task.due")
        if view.overdue:
            due.append(" overdue", style="taskpad.task.overdue")
    return Text(str(position), style="taskpad.text.tertiary"), icon, label, due


def create_task_panel(snapshot: ViewSnapshot, *, show_progress: bool = True) -> Panel:
    """Render the current projection with counters and the undo hint."""
    title = (
        f"[bold taskpad.list.border]📋 Tasks[/] "
        f"[taskpad.text.secondary]· {FILTER_LABELS[snapshot.filter]} · sorted by "
        f"{SORT_LABELS[snapshot.sort_mode].lower()}[/]"
    )
    counters = snapshot.counters
    subtitle = (
        f"[taskpad.text.secondary]{counters.remaining} remaining"
        f" • {counters.completion_percent}% done[/]"
    )

    parts: list[RenderableType] = []
    if show_progress and counters.total:
        progress = Progress(
            TextColumn("[taskpad.text.secondary]{task.description}"),
            BarColumn(complete_style="taskpad.task.done", finished_style="taskpad.task.done"),
            TextColumn(f"[taskpad.text.secondary]{counters.completion_percent:>3d}%"),
            expand=False,
        )
        done = counters.total - counters.remaining
        progress.add_task(f"{done}/{counters.total} complete", total=counters.total, completed=done)
        parts.extend([progress, Text("")])

    if snapshot.tasks:
        table = Table(show_header=False, box=None, padding=(0, 1), expand=False)
        table.add_column("#", justify="right", width=3)
        table.add_column("Status", width=3)
        table.add_column("Task")
        table.add_column("Due")
        editing_id = snapshot.editing.task_id if snapshot.editing else None
        for position, view in enumerate(snapshot.tasks, start=1):
            table.add_row(*_task_row(position, view, editing_id))
        parts.append(table)
    elif counters.total:
        parts.append(Text("Nothing matches this filter.", style="dim italic taskpad.text.secondary"))
    else:
        parts.append(Text("✨ No tasks yet.", style="dim italic taskpad.text.secondary"))

    if snapshot.undo_message:
        parts.extend([Text(""), Text(f"{snapshot.undo_message} · /undo to restore", style="taskpad.undo")])

    return Panel(
        Group(*parts),
        title=title,
        subtitle=subtitle,
        subtitle_align="right",
        border_style="taskpad.list.border",
        box=box.ROUNDED,
        padding=(1, 2),
    )


__all__ = [
    "FILTER_LABELS",
    "SORT_LABELS",
    "TASKPAD_THEME",
    "create_message_panel",
    "create_task_panel",
    "themed_console",
]
