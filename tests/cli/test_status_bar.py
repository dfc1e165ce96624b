from __future__ import annotations

from datetime import date

from rich.console import Console

from taskpad.cli.status_bar import StatusBar
from taskpad.core.logs import ActivityLog
from taskpad.session import TaskListState
from taskpad.storage import MemoryKeyValueStore, TaskPersistence


def make_state() -> TaskListState:
    state = TaskListState(TaskPersistence(MemoryKeyValueStore()), today=lambda: date(2024, 5, 10))
    state.open()
    return state


def test_status_bar_reports_counters_and_preferences() -> None:
    state = make_state()
    first = state.add("Alpha")
    state.add("Beta")
    state.add("Gamma")
    assert first is not None
    state.toggle(first.id)
    state.set_sort("status")

    bar = StatusBar(console=Console(file=None, force_terminal=False), state=state)
    plain = bar.render_plain()

    assert "Remaining: 2" in plain
    assert "Done: 33%" in plain
    assert "Filter: All" in plain
    assert "Sort: Status" in plain
    assert "Editing" not in plain
    assert bar.toolbar() == ""


def test_status_bar_shows_editing_undo_and_issue_count() -> None:
    state = make_state()
    task = state.add("Alpha")
    gone = state.add("Beta")
    assert task is not None and gone is not None
    state.delete(gone.id)
    state.begin_edit(task.id)
    activity = ActivityLog()
    activity.record("task", "Added", task_id=task.id)
    activity.record("storage", "Ignored stored filter", severity="warning")

    snapshot = StatusBar(console=Console(file=None, force_terminal=False), state=state, activity=activity).snapshot()

    assert snapshot.editing == "Alpha"
    assert snapshot.undo == 'Deleted "Beta"'
    assert snapshot.issues == "1 (/logs warning)"
