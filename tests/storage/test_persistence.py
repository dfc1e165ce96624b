from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from taskpad.core.models import Task
from taskpad.storage import (
    Defaults,
    FileKeyValueStore,
    MemoryKeyValueStore,
    Restored,
    TaskPersistence,
    decode_tasks,
    encode_tasks,
    restored_or,
)


class BrokenStore:
    def load(self, key: str) -> str | None:
        raise OSError("disk unavailable")

    def save(self, key: str, value: str) -> None:
        raise OSError("quota exceeded")


class UnreachableStore:
    def load(self, key: str) -> str | None:
        raise RuntimeError("backend down")

    def save(self, key: str, value: str) -> None:
        raise RuntimeError("backend down")


def test_tasks_round_trip_through_memory_store() -> None:
    store = MemoryKeyValueStore()
    persistence = TaskPersistence(store)
    tasks = [
        Task(id="a", text="Buy milk", done=True),
        Task(id="b", text="Call Bob", due_date="2024-05-01"),
    ]

    assert persistence.save_tasks(tasks) is True
    result = persistence.load_tasks()

    assert isinstance(result, Restored)
    assert result.value == tasks


def test_stored_task_shape_uses_due_date_key() -> None:
    payload = json.loads(encode_tasks([Task(id="a", text="Pay rent", due_date="2024-05-01")]))

    assert payload == [{"id": "a", "text": "Pay rent", "done": False, "dueDate": "2024-05-01"}]


def test_missing_keys_fall_back_to_defaults() -> None:
    persistence = TaskPersistence(MemoryKeyValueStore())

    assert persistence.load_tasks() == Defaults(reason="no stored tasks")
    assert isinstance(persistence.load_filter(), Defaults)
    assert isinstance(persistence.load_sort(), Defaults)


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        '{"id": "a"}',
        '[{"id": "a", "text": "ok", "done": "yes"}]',
        '[{"id": "a", "done": false}]',
        '[{"id": "a", "text": "   ", "done": false}]',
        '[{"id": 1, "text": "numeric id", "done": false}]',
        '[{"id": "a", "text": "one"}, {"id": "a", "text": "two"}]',
    ],
)
def test_malformed_task_lists_are_discarded(raw: str) -> None:
    result = decode_tasks(raw)

    assert isinstance(result, Defaults)


def test_stored_tasks_tolerate_missing_optional_fields() -> None:
    result = decode_tasks('[{"id": "a", "text": "Alpha"}, {"id": "b", "text": "Beta", "done": true, "dueDate": "bogus"}]')

    assert isinstance(result, Restored)
    assert result.value == [
        Task(id="a", text="Alpha"),
        Task(id="b", text="Beta", done=True, due_date=None),
    ]


def test_unknown_filter_and_sort_values_are_ignored() -> None:
    persistence = TaskPersistence(MemoryKeyValueStore({"filter": "archived", "sort": "priority"}))

    assert isinstance(persistence.load_filter(), Defaults)
    assert isinstance(persistence.load_sort(), Defaults)
    assert restored_or(persistence.load_filter(), "all") == "all"


def test_filter_and_sort_round_trip() -> None:
    store = MemoryKeyValueStore()
    persistence = TaskPersistence(store)

    persistence.save_filter("completed")
    persistence.save_sort("due")

    assert store.data == {"filter": "completed", "sort": "due"}
    assert persistence.load_filter() == Restored(value="completed")
    assert restored_or(persistence.load_sort(), "manual") == "due"


def test_storage_failures_are_absorbed(caplog: pytest.LogCaptureFixture) -> None:
    persistence = TaskPersistence(BrokenStore())

    with caplog.at_level(logging.WARNING):
        assert persistence.save_tasks([Task(id="a", text="Alpha")]) is False
        assert isinstance(persistence.load_tasks(), Defaults)

    assert "quota exceeded" in caplog.text
    assert "disk unavailable" in caplog.text


def test_unexpected_backend_errors_fall_back_to_defaults(caplog: pytest.LogCaptureFixture) -> None:
    persistence = TaskPersistence(UnreachableStore())

    with caplog.at_level(logging.WARNING):
        assert isinstance(persistence.load_tasks(), Defaults)
        assert isinstance(persistence.load_filter(), Defaults)
        assert persistence.save_sort("due") is False

    assert "backend down" in caplog.text


def test_stored_task_text_is_trimmed() -> None:
    result = decode_tasks(json.dumps([{"id": "a", "text": "  padded  "}]))

    assert isinstance(result, Restored)
    assert result.value[0].text == "padded"
    assert isinstance(decode_tasks(json.dumps([{"id": "a", "text": "   "}])), Defaults)


def test_file_store_writes_one_file_per_key(tmp_path: Path) -> None:
    store = FileKeyValueStore(root=tmp_path / "data")

    assert store.load("tasks") is None
    store.save("tasks", "[]")
    store.save("tasks", '[{"id": "a", "text": "Alpha"}]')

    assert (tmp_path / "data" / "tasks").read_text(encoding="utf-8") == '[{"id": "a", "text": "Alpha"}]'
    assert not (tmp_path / "data" / "tasks.tmp").exists()
    assert store.load("tasks") == '[{"id": "a", "text": "Alpha"}]'


def test_file_store_rejects_path_like_keys(tmp_path: Path) -> None:
    store = FileKeyValueStore(root=tmp_path)

    with pytest.raises(ValueError):
        store.save("../escape", "x")


def test_file_store_defaults_under_taskpad_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASKPAD_HOME", str(tmp_path))

    assert FileKeyValueStore().root == tmp_path / "data"
