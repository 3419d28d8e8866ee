# taskfocus/routers/reminders.py
from datetime import datetime

from fastapi import APIRouter, Depends

from taskfocus.dependencies.store import get_now, get_reminders, get_repository
from taskfocus.schemas.task import TaskRead, to_read
from taskfocus.services.reminders import ReminderTracker
from taskfocus.storage.base import TaskRepository

router = APIRouter(prefix="/api/reminders", tags=["Reminders"])


@router.get("/due", response_model=list[TaskRead])
def get_due_reminders(
    repo: TaskRepository = Depends(get_repository),
    reminders: ReminderTracker = Depends(get_reminders),
    now: datetime = Depends(get_now),
):
    """지금 알려야 할 약속들. 한 번 반환된 작업은 그날 다시 나오지 않는다."""
    return [to_read(t) for t in reminders.collect_due(repo.list(), now)]


@router.delete("")
def clear_reminders(reminders: ReminderTracker = Depends(get_reminders)):
    reminders.clear()
    return {"ok": True}
