# taskfocus/services/timer.py
"""
포커스 타이머 계산.

규칙:
- 스토어 전체에서 in_progress 인 작업은 최대 하나.
- stop/complete 는 경과 시간을 정수 초(내림, 음수 없음)로 time_spent 에 더한다.
- 반복 작업을 완료하면 다음 회차 작업을 새로 만들어 돌려준다.
"""
import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from taskfocus.models.task import Task, new_task_id
from taskfocus.services.recurrence import next_due_date

log = logging.getLogger(__name__)


class TaskNotFound(LookupError):
    pass


def as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def elapsed_seconds(started_at: Optional[datetime], now: datetime) -> int:
    if started_at is None:
        return 0
    delta = (as_utc(now) - as_utc(started_at)).total_seconds()
    # 시계가 뒤로 가도 음수는 더하지 않는다
    return max(0, int(delta))


def _accrue(task: Task, now: datetime) -> int:
    added = 0
    if task.in_progress and task.started_at:
        added = elapsed_seconds(task.started_at, now)
        task.time_spent = (task.time_spent or 0) + added
    task.in_progress = False
    task.started_at = None
    return added


def stop(task: Task, now: datetime) -> Task:
    added = _accrue(task, now)
    task.updated_at = now
    log.info("timer stopped | task=%s added=%ss total=%ss", task.id, added, task.time_spent)
    return task


def start(tasks: Iterable[Task], task_id: str, now: datetime) -> List[Task]:
    """
    task_id 의 타이머를 시작한다. 다른 작업이 돌고 있으면 먼저 stop.
    변경된 작업들(자동 정지된 것 + 시작된 것)을 돌려준다.
    """
    tasks = list(tasks)
    target = next((t for t in tasks if t.id == task_id), None)
    if target is None:
        raise TaskNotFound(task_id)

    changed: List[Task] = []
    for other in tasks:
        if other.in_progress and other.id != task_id:
            stop(other, now)
            changed.append(other)

    if not target.in_progress:
        target.in_progress = True
        target.started_at = now
    target.updated_at = now
    changed.append(target)
    log.info("timer started | task=%s auto_stopped=%d", task_id, len(changed) - 1)
    return changed


def spawn_successor(task: Task, now: datetime) -> Optional[Task]:
    """반복 작업의 다음 회차. 반복이 아니거나 마감일이 없으면 None."""
    if not task.recurring or not task.due_date:
        return None

    return Task(
        id=new_task_id(),
        description=task.description,
        due_date=next_due_date(task.due_date, task.recurring, task.working_days_only),
        due_time=task.due_time,
        priority=task.priority,
        recurring=task.recurring,
        working_days_only=bool(task.working_days_only),
        is_appointment=bool(task.is_appointment),
        reminder_minutes=task.reminder_minutes,
        details=task.details,
        links=list(task.links or []),
        completed=False,
        archived=False,
        archived_to_file=False,
        in_progress=False,
        started_at=None,
        time_spent=0,
        completed_at=None,
        created_at=now,
        updated_at=now,
    )


def complete(task: Task, now: datetime) -> Optional[Task]:
    """
    작업 완료 + 아카이브. 반복 작업이면 다음 회차 작업을 반환.
    """
    _accrue(task, now)
    task.completed = True
    task.archived = True
    task.completed_at = now
    task.updated_at = now

    successor = spawn_successor(task, now)
    if successor is not None:
        log.info("recurring task spawned | from=%s next=%s due=%s", task.id, successor.id, successor.due_date)
    return successor


def restore(task: Task, now: datetime) -> Task:
    task.archived = False
    task.completed = False
    task.updated_at = now
    return task


def format_duration(seconds: int) -> str:
    seconds = max(0, int(seconds or 0))
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
