from __future__ import annotations

from datetime import date

from taskpad.core.models import Task
from taskpad.core.projection import counters, filter_tasks, is_overdue, project, sort_tasks


def texts(tasks: list[Task]) -> list[str]:
    return [task.text for task in tasks]


def test_filters_select_by_done_flag() -> None:
    tasks = [Task("1", "a"), Task("2", "b", done=True), Task("3", "c")]

    assert texts(filter_tasks(tasks, "all")) == ["a", "b", "c"]
    assert texts(filter_tasks(tasks, "active")) == ["a", "c"]
    assert texts(filter_tasks(tasks, "completed")) == ["b"]


def test_due_sort_puts_dated_tasks_first_then_text() -> None:
    tasks = [
        Task("1", "b", due_date="2024-05-02"),
        Task("2", "a"),
        Task("3", "c", due_date="2024-05-01"),
    ]

    assert texts(sort_tasks(tasks, "due")) == ["c", "b", "a"]


def test_due_sort_breaks_ties_case_insensitively() -> None:
    tasks = [
        Task("1", "beta", due_date="2024-05-01"),
        Task("2", "Alpha", due_date="2024-05-01"),
        Task("3", "zeta"),
        Task("4", "Echo"),
    ]

    assert texts(sort_tasks(tasks, "due")) == ["Alpha", "beta", "Echo", "zeta"]


def test_status_sort_puts_active_first() -> None:
    tasks = [Task("1", "z", done=True), Task("2", "y"), Task("3", "x", done=True)]

    assert texts(sort_tasks(tasks, "status")) == ["y", "x", "z"]


def test_manual_sort_keeps_collection_order() -> None:
    tasks = [Task("1", "z"), Task("2", "a", due_date="2024-01-01"), Task("3", "m", done=True)]

    assert texts(sort_tasks(tasks, "manual")) == ["z", "a", "m"]


def test_project_does_not_mutate_input() -> None:
    tasks = [Task("1", "b"), Task("2", "a")]
    snapshot = list(tasks)

    project(tasks, "all", "status", "2024-05-01")

    assert tasks == snapshot


def test_project_filters_before_sorting() -> None:
    tasks = [
        Task("1", "b", due_date="2024-05-02"),
        Task("2", "a", done=True, due_date="2024-05-01"),
        Task("3", "c"),
    ]

    views = project(tasks, "active", "due", "2024-04-01")

    assert [view.text for view in views] == ["b", "c"]


def test_counters_for_empty_and_partial_lists() -> None:
    assert counters([]).completion_percent == 0
    assert counters([]).remaining == 0

    tasks = [Task("1", "a", done=True), Task("2", "b"), Task("3", "c")]
    result = counters(tasks)

    assert result.total == 3
    assert result.remaining == 2
    assert result.completion_percent == 33


def test_counters_round_half_up() -> None:
    tasks = [Task(str(i), "t", done=i < 1) for i in range(8)]

    # 1/8 = 12.5%
    assert counters(tasks).completion_percent == 13
    assert counters([Task("1", "a", done=True), Task("2", "b", done=True), Task("3", "c")]).completion_percent == 67


def test_counters_ignore_filter() -> None:
    tasks = [Task("1", "a", done=True), Task("2", "b")]

    views = project(tasks, "completed", "manual", "2024-05-01")

    assert len(views) == 1
    assert counters(tasks).remaining == 1


def test_overdue_rules() -> None:
    today = "2024-05-10"

    assert is_overdue(Task("1", "a", due_date="2024-05-09"), today) is True
    assert is_overdue(Task("2", "b", due_date="2024-05-10"), today) is False
    assert is_overdue(Task("3", "c", due_date="2024-05-11"), today) is False
    assert is_overdue(Task("4", "d", done=True, due_date="2024-05-01"), today) is False
    assert is_overdue(Task("5", "e"), today) is False
    assert is_overdue(Task("6", "f", due_date="2024-05-09"), date(2024, 5, 10)) is True


def test_project_flags_overdue_views() -> None:
    tasks = [Task("1", "late", due_date="2024-01-01"), Task("2", "ok", due_date="2030-01-01")]

    views = project(tasks, "all", "manual", "2024-06-01")

    assert [view.overdue for view in views] == [True, False]
