import threading
from datetime import date, datetime, timedelta, timezone

from taskfocus.services.streak import (
    StreakState,
    StreakTracker,
    display_text,
    record_completion,
    view,
)
from taskfocus.storage.state_store import JsonStateStore

DAY1 = date(2025, 10, 24)


def complete_n(state: StreakState, day: date, n: int) -> list:
    return [record_completion(state, day) for _ in range(n)]


def test_third_completion_starts_streak():
    state = StreakState()
    assert complete_n(state, DAY1, 3) == [False, False, True]
    assert state.current_streak == 1
    assert state.tasks_completed_today == 3


def test_fewer_than_three_does_not_start_streak():
    state = StreakState()
    complete_n(state, DAY1, 2)
    assert state.current_streak == 0


def test_fourth_completion_does_not_double_count():
    state = StreakState()
    complete_n(state, DAY1, 3)
    assert record_completion(state, DAY1) is False
    assert state.current_streak == 1
    assert state.tasks_completed_today == 4


def test_next_day_extends_streak_when_threshold_met():
    state = StreakState()
    complete_n(state, DAY1, 3)

    record_completion(state, DAY1 + timedelta(days=1))

    assert state.current_streak == 2
    assert state.tasks_completed_today == 1
    assert state.last_completed_date == "2025-10-25"


def test_next_day_resets_when_threshold_missed():
    state = StreakState(current_streak=4, tasks_completed_today=2, last_completed_date="2025-10-24")
    record_completion(state, DAY1 + timedelta(days=1))
    assert state.current_streak == 0


def test_skipping_a_day_breaks_the_chain():
    state = StreakState()
    complete_n(state, DAY1, 3)
    record_completion(state, DAY1 + timedelta(days=2))
    assert state.current_streak == 0
    assert state.tasks_completed_today == 1


def test_view_keeps_streak_pending_from_yesterday():
    state = StreakState(current_streak=2, tasks_completed_today=3, last_completed_date="2025-10-24")
    snap = view(state, DAY1 + timedelta(days=1))
    assert snap.current_streak == 2
    assert snap.tasks_completed_today == 0
    # 원본은 그대로
    assert state.tasks_completed_today == 3


def test_view_drops_stale_streak():
    state = StreakState(current_streak=5, tasks_completed_today=3, last_completed_date="2025-10-20")
    assert view(state, DAY1).current_streak == 0


def test_display_text():
    assert display_text(StreakState()) == ""
    assert display_text(StreakState(current_streak=1)) == "🔥 1-DAY"
    assert display_text(StreakState(current_streak=3)) == "🔥 3-DAYS"


def test_tracker_persists_between_instances(tmp_path):
    store = JsonStateStore(tmp_path / "streak.json")
    now = datetime(2025, 10, 24, 18, 0, tzinfo=timezone.utc)

    tracker = StreakTracker(store, timezone.utc)
    results = [tracker.record(now) for _ in range(3)]
    assert results[-1] is True

    reloaded = StreakTracker(store, timezone.utc)
    assert reloaded.state == StreakState(
        current_streak=1, tasks_completed_today=3, last_completed_date="2025-10-24"
    )


def test_tracker_uses_configured_timezone_for_day_boundary(tmp_path):
    tz = timezone(timedelta(hours=9))
    tracker = StreakTracker(JsonStateStore(tmp_path / "streak.json"), tz)

    # 2025-10-24 20:00 UTC 는 +09:00 에서 2025-10-25
    tracker.record(datetime(2025, 10, 24, 20, 0, tzinfo=timezone.utc))
    assert tracker.state.last_completed_date == "2025-10-25"


def test_tracker_counts_every_completion_from_concurrent_threads(tmp_path):
    store = JsonStateStore(tmp_path / "streak.json")
    tracker = StreakTracker(store, timezone.utc)
    now = datetime(2025, 10, 24, 18, 0, tzinfo=timezone.utc)

    def worker():
        for _ in range(25):
            tracker.record(now)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert tracker.state.tasks_completed_today == 200
    assert StreakTracker(store, timezone.utc).state.tasks_completed_today == 200
