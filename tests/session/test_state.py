from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path

import pytest

from taskpad.session import TaskListState
from taskpad.storage import FileKeyValueStore, MemoryKeyValueStore, TaskPersistence


class CountingStore(MemoryKeyValueStore):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        super().__init__(initial)
        self.saves: list[str] = []

    def save(self, key: str, value: str) -> None:
        self.saves.append(key)
        super().save(key, value)


def make_state(store: MemoryKeyValueStore | None = None, **kwargs: object) -> TaskListState:
    state = TaskListState(
        TaskPersistence(store if store is not None else MemoryKeyValueStore()),
        today=lambda: date(2024, 5, 10),
        **kwargs,  # type: ignore[arg-type]
    )
    state.open()
    return state


def stored_tasks(store: MemoryKeyValueStore) -> list[dict[str, object]]:
    return json.loads(store.data["tasks"])


def test_open_with_empty_storage_uses_defaults() -> None:
    state = make_state()

    assert state.store.tasks() == []
    assert state.filter == "all"
    assert state.sort_mode == "manual"
    assert state.report.restored == []
    assert set(state.report.defaults) == {"tasks", "filter", "sort"}


def test_open_survives_unexpected_backend_errors() -> None:
    class UnreachableStore(MemoryKeyValueStore):
        def load(self, key: str) -> str | None:
            raise RuntimeError("backend down")

    state = make_state(UnreachableStore())

    assert state.store.tasks() == []
    assert state.filter == "all"
    assert state.sort_mode == "manual"
    assert set(state.report.defaults) == {"tasks", "filter", "sort"}


def test_open_restores_stored_state() -> None:
    store = MemoryKeyValueStore(
        {
            "tasks": json.dumps([{"id": "a", "text": "Alpha", "done": True, "dueDate": None}]),
            "filter": "completed",
            "sort": "status",
        }
    )

    state = make_state(store)

    assert [task.text for task in state.store.tasks()] == ["Alpha"]
    assert state.filter == "completed"
    assert state.sort_mode == "status"
    assert state.report.restored == ["tasks", "filter", "sort"]


def test_open_discards_malformed_task_list() -> None:
    store = MemoryKeyValueStore({"tasks": "{broken", "filter": "active"})

    state = make_state(store)

    assert state.store.tasks() == []
    assert state.filter == "active"
    assert state.report.defaults["tasks"].startswith("malformed")


def test_task_saves_are_coalesced_until_idle() -> None:
    store = CountingStore()
    state = make_state(store)

    for text in ("one", "two", "three"):
        state.add(text)

    assert store.saves == []
    assert state.idle() is True
    assert store.saves == ["tasks"]
    assert [task["text"] for task in stored_tasks(store)] == ["one", "two", "three"]
    assert state.idle() is False


def test_noop_operations_do_not_schedule_saves() -> None:
    store = CountingStore()
    state = make_state(store)

    state.add("   ")
    state.toggle("missing")
    state.delete("missing")
    state.clear_completed()
    state.undo()

    assert state.writer.pending is None
    assert state.idle() is False
    assert store.saves == []


def test_filter_and_sort_save_immediately() -> None:
    store = CountingStore()
    state = make_state(store)

    assert state.set_filter("active") is True
    assert state.set_sort("due") is True

    assert store.saves == ["filter", "sort"]
    assert store.data["filter"] == "active"
    assert store.data["sort"] == "due"


def test_invalid_filter_and_sort_are_rejected() -> None:
    store = CountingStore()
    state = make_state(store)

    assert state.set_filter("archived") is False
    assert state.set_sort("priority") is False
    assert state.filter == "all"
    assert state.sort_mode == "manual"
    assert store.saves == []


def test_close_flushes_pending_tasks() -> None:
    store = CountingStore()
    state = make_state(store)
    state.add("Last minute")

    state.close()
    state.close()

    assert store.saves == ["tasks"]
    assert stored_tasks(store)[0]["text"] == "Last minute"
    assert state.closed is True


def test_close_without_flush_discards_pending(caplog: pytest.LogCaptureFixture) -> None:
    store = CountingStore()
    state = make_state(store, flush_on_exit=False)
    state.add("Lost")

    with caplog.at_level(logging.WARNING):
        state.close()

    assert store.saves == []
    assert "Discarded unsaved task changes" in caplog.text


def test_context_manager_closes_state() -> None:
    store = CountingStore()
    with make_state(store) as state:
        state.add("Inside")

    assert state.closed is True
    assert store.saves == ["tasks"]


def test_editing_flow_through_state() -> None:
    state = make_state()
    task = state.add("Draft")
    assert task is not None

    assert state.begin_edit(task.id) is True
    state.update_draft("Final")
    assert state.view().editing is not None
    state.commit_edit()

    assert state.store.get(task.id).text == "Final"  # type: ignore[union-attr]
    assert state.view().editing is None
    assert state.begin_edit("missing") is False


def test_cancel_edit_leaves_task_untouched() -> None:
    state = make_state()
    task = state.add("Keep me")
    assert task is not None
    state.begin_edit(task.id)
    state.update_draft("")

    state.cancel_edit()

    assert state.store.get(task.id).text == "Keep me"  # type: ignore[union-attr]


def test_view_projects_filter_sort_and_counters() -> None:
    state = make_state()
    late = state.add("Late", "2024-05-01")
    state.add("Later", "2024-06-01")
    done = state.add("Done", "2024-04-01")
    assert late is not None and done is not None
    state.toggle(done.id)
    state.set_sort("due")

    view = state.view()

    assert [item.text for item in view.tasks] == ["Done", "Late", "Later"]
    assert [item.overdue for item in view.tasks] == [False, True, False]
    assert view.remaining == 2
    assert view.completion_percent == 33
    assert view.today == "2024-05-10"

    state.set_filter("active")
    assert [item.text for item in state.view().tasks] == ["Late", "Later"]


def test_view_overrides_do_not_change_or_save_preferences() -> None:
    store = CountingStore()
    state = make_state(store)
    first = state.add("Alpha")
    state.add("Beta", "2024-05-01")
    assert first is not None
    state.toggle(first.id)
    state.idle()
    store.saves.clear()

    view = state.view(filter_="completed", sort_mode="due")

    assert [item.text for item in view.tasks] == ["Alpha"]
    assert view.filter == "completed"
    assert view.sort_mode == "due"
    assert state.filter == "all"
    assert state.sort_mode == "manual"
    assert store.saves == []


def test_session_scenario_survives_reopen(tmp_path: Path) -> None:
    data_dir = tmp_path / "data"
    state = TaskListState(TaskPersistence(FileKeyValueStore(root=data_dir)))
    state.open()

    milk = state.add("Buy milk")
    bob = state.add("Call Bob", "2024-05-01")
    assert milk is not None and bob is not None
    state.toggle(milk.id)
    assert state.view().completion_percent == 50

    state.clear_completed()
    assert [task.text for task in state.store.tasks()] == ["Call Bob"]
    assert state.view().undo_message == "Cleared 1 completed item"

    state.undo()
    assert [task.text for task in state.store.tasks()] == ["Call Bob", "Buy milk"]
    state.close()

    reopened = TaskListState(TaskPersistence(FileKeyValueStore(root=data_dir)))
    reopened.open()

    assert [task.to_dict() for task in reopened.store.tasks()] == [
        {"id": bob.id, "text": "Call Bob", "done": False, "dueDate": "2024-05-01"},
        {"id": milk.id, "text": "Buy milk", "done": True, "dueDate": None},
    ]
    assert reopened.store.undo_entry is None
