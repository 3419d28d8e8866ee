# taskfocus/services/reminders.py
"""
약속(appointment) 작업 알림 창 계산.

창은 (마감 - reminder_minutes) 에 열리고 (마감 + GRACE) 에 닫힌다.
같은 날에는 작업당 한 번만 알린다. 날짜가 바뀌면 알림 기록을 비운다.
"""
import logging
import threading
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, List, Optional, Set, Tuple

from taskfocus.models.task import DEFAULT_REMINDER_MINUTES, Task
from taskfocus.storage.state_store import JsonStateStore

log = logging.getLogger(__name__)

GRACE_PERIOD = timedelta(minutes=5)


def due_moment(task: Task, tz: tzinfo) -> Optional[datetime]:
    """due_date + due_time 을 설정된 타임존의 벽시계 시각으로 해석."""
    if not task.due_date or not task.due_time:
        return None
    try:
        naive = datetime.strptime(f"{task.due_date} {task.due_time}", "%Y-%m-%d %H:%M")
    except ValueError:
        log.warning("unparsable due date/time | task=%s %s %s", task.id, task.due_date, task.due_time)
        return None
    return naive.replace(tzinfo=tz)


def reminder_window(task: Task, tz: tzinfo) -> Optional[Tuple[datetime, datetime]]:
    if not task.is_appointment:
        return None
    due = due_moment(task, tz)
    if due is None:
        return None
    lead = task.reminder_minutes or DEFAULT_REMINDER_MINUTES
    return due - timedelta(minutes=lead), due + GRACE_PERIOD


class ReminderTracker:
    """오늘 이미 알린 작업 id 집합을 들고 있는 객체. app.state 에 하나."""

    def __init__(self, store: JsonStateStore, tz: tzinfo):
        self._store = store
        self._tz = tz
        data = store.load()
        self.day: Optional[str] = data.get("date")
        self.notified: Set[str] = set(data.get("task_ids") or [])
        self._lock = threading.Lock()

    def _today(self, now: datetime) -> date:
        return now.astimezone(self._tz).date()

    def _roll_day(self, now: datetime) -> None:
        today = self._today(now).isoformat()
        if self.day != today:
            self.day = today
            self.notified = set()

    def _save(self) -> None:
        # _lock 을 잡은 상태에서만 호출
        self._store.save({"date": self.day, "task_ids": sorted(self.notified)})

    def collect_due(self, tasks: Iterable[Task], now: datetime) -> List[Task]:
        """지금 알림 창 안에 있고 오늘 아직 안 알린 작업들. 반환과 동시에 알림 처리."""
        fired: List[Task] = []
        with self._lock:
            self._roll_day(now)
            for task in tasks:
                if task.archived or task.id in self.notified:
                    continue
                window = reminder_window(task, self._tz)
                if window is None:
                    continue
                opens, closes = window
                if opens <= now <= closes:
                    fired.append(task)
                    self.notified.add(task.id)
            self._save()
        if fired:
            log.info("appointment reminders fired | ids=%s", [t.id for t in fired])
        return fired

    def reset(self, task_id: str) -> None:
        with self._lock:
            if task_id in self.notified:
                self.notified.discard(task_id)
                self._save()

    def clear(self) -> None:
        with self._lock:
            self.notified = set()
            self._save()
