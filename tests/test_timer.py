from datetime import timedelta

import pytest

from conftest import T0, make_task
from taskfocus.services import timer


def test_start_marks_task_in_progress():
    task = make_task("a")
    changed = timer.start([task], "a", T0)

    assert changed == [task]
    assert task.in_progress is True
    assert task.started_at == T0


def test_start_stops_other_active_task_and_accrues_its_time():
    a = make_task("a")
    b = make_task("b")
    timer.start([a, b], "a", T0)

    changed = timer.start([a, b], "b", T0 + timedelta(seconds=90))

    assert [t.id for t in changed] == ["a", "b"]
    assert a.in_progress is False
    assert a.started_at is None
    assert a.time_spent == 90
    assert b.in_progress is True
    assert sum(1 for t in (a, b) if t.in_progress) == 1


def test_start_unknown_task_raises():
    with pytest.raises(timer.TaskNotFound):
        timer.start([make_task("a")], "missing", T0)


def test_restarting_active_task_keeps_original_start():
    task = make_task("a")
    timer.start([task], "a", T0)
    timer.start([task], "a", T0 + timedelta(minutes=5))
    assert task.started_at == T0


def test_stop_floors_to_whole_seconds():
    task = make_task("a", time_spent=10)
    timer.start([task], "a", T0)

    timer.stop(task, T0 + timedelta(seconds=2, milliseconds=900))

    assert task.time_spent == 12
    assert task.in_progress is False
    assert task.started_at is None


def test_stop_when_idle_adds_nothing():
    task = make_task("a", time_spent=30)
    timer.stop(task, T0 + timedelta(hours=1))
    assert task.time_spent == 30


def test_stop_never_adds_negative_time():
    task = make_task("a")
    timer.start([task], "a", T0)
    timer.stop(task, T0 - timedelta(minutes=3))
    assert task.time_spent == 0


def test_complete_accrues_and_archives():
    task = make_task("a")
    timer.start([task], "a", T0)
    done_at = T0 + timedelta(minutes=25)

    successor = timer.complete(task, done_at)

    assert successor is None
    assert task.time_spent == 25 * 60
    assert task.completed is True
    assert task.archived is True
    assert task.completed_at == done_at
    assert task.in_progress is False


def test_complete_recurring_spawns_reset_successor():
    task = make_task(
        "a",
        due_date="2025-10-24",
        due_time="10:00",
        recurring="daily",
        working_days_only=True,
        priority="high",
        details="standup notes",
        links=["https://example.com/board"],
        is_appointment=True,
        reminder_minutes=15,
        time_spent=120,
    )
    timer.start([task], "a", T0)

    successor = timer.complete(task, T0 + timedelta(minutes=1))

    assert successor is not None
    assert successor.id != task.id
    assert successor.due_date == "2025-10-27"
    assert successor.due_time == "10:00"
    assert successor.priority == "high"
    assert successor.details == "standup notes"
    assert successor.links == ["https://example.com/board"]
    assert successor.links is not task.links
    assert successor.reminder_minutes == 15
    assert successor.working_days_only is True
    assert successor.time_spent == 0
    assert successor.completed is False
    assert successor.archived is False
    assert successor.in_progress is False
    assert successor.completed_at is None


def test_complete_recurring_without_due_date_spawns_nothing():
    task = make_task("a", recurring="weekly")
    assert timer.complete(task, T0) is None


def test_restore_clears_archive_flags():
    task = make_task("a", completed=True, archived=True)
    timer.restore(task, T0)
    assert task.completed is False
    assert task.archived is False


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "00:00:00"), (59, "00:00:59"), (3725, "01:02:05"), (360000, "100:00:00")],
)
def test_format_duration(seconds, expected):
    assert timer.format_duration(seconds) == expected
