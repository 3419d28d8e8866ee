# taskfocus/services/streak.py
"""
연속 달성(스트릭) 카운터.

하루에 STREAK_MIN_TASKS 개 이상 완료한 날이 이어지면 스트릭이 늘어난다.
하루라도 건너뛰면 체인은 끊긴다.
"""
import threading
from dataclasses import asdict, dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional

STREAK_MIN_TASKS = 3


@dataclass
class StreakState:
    current_streak: int = 0
    tasks_completed_today: int = 0
    last_completed_date: Optional[str] = None  # YYYY-MM-DD

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "StreakState":
        return cls(
            current_streak=max(0, int(data.get("current_streak") or 0)),
            tasks_completed_today=max(0, int(data.get("tasks_completed_today") or 0)),
            last_completed_date=data.get("last_completed_date") or None,
        )


def record_completion(state: StreakState, today: date) -> bool:
    """
    완료 1건 기록. 오늘 완료 수가 방금 기준치에 도달했으면 True.
    """
    today_str = today.isoformat()

    if state.last_completed_date == today_str:
        state.tasks_completed_today += 1
        if state.tasks_completed_today == STREAK_MIN_TASKS and state.current_streak == 0:
            state.current_streak = 1
        return state.tasks_completed_today == STREAK_MIN_TASKS

    # 새 날: 바로 전날이 기준을 채웠을 때만 이어진다
    yesterday = (today - timedelta(days=1)).isoformat()
    previous_day_met = (
        state.last_completed_date == yesterday
        and state.tasks_completed_today >= STREAK_MIN_TASKS
    )
    if previous_day_met:
        state.current_streak = state.current_streak + 1 if state.current_streak > 0 else 1
    else:
        state.current_streak = 0

    state.last_completed_date = today_str
    state.tasks_completed_today = 1
    return False


def view(state: StreakState, today: date) -> StreakState:
    """표시용 스냅샷. 저장된 상태는 건드리지 않는다."""
    today_str = today.isoformat()
    if state.last_completed_date == today_str:
        return StreakState(**state.to_dict())

    yesterday = (today - timedelta(days=1)).isoformat()
    if state.last_completed_date == yesterday and state.tasks_completed_today >= STREAK_MIN_TASKS:
        streak = state.current_streak
    else:
        streak = 0
    return StreakState(
        current_streak=streak,
        tasks_completed_today=0,
        last_completed_date=state.last_completed_date,
    )


def display_text(state: StreakState) -> str:
    if state.current_streak == 0:
        return ""
    unit = "DAY" if state.current_streak == 1 else "DAYS"
    return f"🔥 {state.current_streak}-{unit}"


class StreakTracker:
    """streak.json 에 저장되는 스트릭 상태. app.state 에 하나."""

    def __init__(self, store, tz: tzinfo):
        self._store = store
        self._tz = tz
        self.state = StreakState.from_dict(store.load())
        # 핸들러가 스레드풀에서 돌기 때문에 상태 변경은 락 안에서
        self._lock = threading.Lock()

    def _today(self, now: datetime) -> date:
        return now.astimezone(self._tz).date()

    def record(self, now: datetime) -> bool:
        with self._lock:
            reached = record_completion(self.state, self._today(now))
            self._store.save(self.state.to_dict())
        return reached

    def snapshot(self, now: datetime) -> StreakState:
        with self._lock:
            return view(self.state, self._today(now))
