# taskfocus/services/task_service.py
from datetime import datetime
from typing import List, Optional
from urllib.parse import urlparse

from taskfocus.models.task import DEFAULT_REMINDER_MINUTES, Priority, Recurrence, Task
from taskfocus.schemas.task import TaskWrite
from taskfocus.services.recurrence import DATE_FORMAT

PRIORITIES = {p.value for p in Priority}
RECURRENCES = {r.value for r in Recurrence}
TIME_FORMAT = "%H:%M"


class TaskValidationError(ValueError):
    pass


def _is_url(value) -> bool:
    if not isinstance(value, str):
        return False
    parsed = urlparse(value)
    return bool(parsed.scheme) and bool(parsed.netloc or parsed.path) and " " not in value


def _is_date(value) -> bool:
    # YYYY-MM-DD 이고 실제 존재하는 날짜
    if not isinstance(value, str) or len(value) != 10:
        return False
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        return False
    return True


def _is_time(value) -> bool:
    # HH:MM, 24시간제
    if not isinstance(value, str) or len(value) != 5:
        return False
    try:
        datetime.strptime(value, TIME_FORMAT)
    except ValueError:
        return False
    return True


def validate_task(task: Task) -> None:
    if not task.description or not task.description.strip():
        raise TaskValidationError("Description is required")

    if task.priority not in PRIORITIES:
        raise TaskValidationError("Invalid priority value")

    if task.recurring is not None and task.recurring not in RECURRENCES:
        raise TaskValidationError('Recurring must be "daily" or "weekly"')

    if task.details is not None and not isinstance(task.details, str):
        raise TaskValidationError("Details must be a string")

    if task.due_date is not None and not _is_date(task.due_date):
        raise TaskValidationError(f"Invalid due date: {task.due_date}")

    if task.due_time is not None and not _is_time(task.due_time):
        raise TaskValidationError(f"Invalid due time: {task.due_time}")

    for link in task.links or []:
        if not _is_url(link):
            raise TaskValidationError(f"Invalid URL: {link}")


def build_task(
    payload: TaskWrite,
    *,
    existing: Optional[Task],
    now: datetime,
    new_id: str,
) -> Task:
    """
    POST /api/tasks 본문을 Task 로. existing 이 있으면 타이머/상태 필드는 보존.
    검증 실패 시 TaskValidationError.
    """
    description = payload.description.strip() if isinstance(payload.description, str) else ""
    if not description:
        raise TaskValidationError("Description is required")

    recurring = payload.recurring or None
    if recurring is not None and recurring not in RECURRENCES:
        raise TaskValidationError('Recurring must be "daily" or "weekly"')

    fields = dict(
        description=description,
        due_date=payload.due_date or None,
        due_time=payload.due_time or None,
        priority=payload.priority or Priority.MEDIUM.value,
        recurring=recurring,
        details=payload.details if payload.details not in ("", None) else None,
        links=list(payload.links or []),
        is_appointment=bool(payload.is_appointment),
        reminder_minutes=(payload.reminder_minutes or DEFAULT_REMINDER_MINUTES) if payload.is_appointment else None,
        # 평일만 옵션은 daily 일 때만 의미가 있다
        working_days_only=bool(payload.working_days_only) if recurring == Recurrence.DAILY.value else False,
        updated_at=now,
    )

    if existing is not None:
        task = existing
        for name, value in fields.items():
            setattr(task, name, value)
    else:
        task = Task(id=new_id, created_at=now, **fields)

    validate_task(task)
    return task


def sort_by_due(tasks: List[Task]) -> List[Task]:
    """마감일 빠른 순, 같은 날이면 시간 있는 것 먼저 시간순, 마감일 없는 것은 맨 뒤."""
    def key(t: Task):
        return (
            t.due_date is None,
            t.due_date or "",
            t.due_time is None,
            t.due_time or "",
        )

    return sorted(tasks, key=key)
