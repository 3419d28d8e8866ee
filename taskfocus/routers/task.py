# taskfocus/routers/task.py
import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException

from taskfocus.dependencies.store import (
    get_archive_store,
    get_now,
    get_reminders,
    get_repository,
    get_streak,
)
from taskfocus.models.task import new_task_id
from taskfocus.schemas.task import DeleteResult, TaskRead, TaskWrite, to_read
from taskfocus.services import timer
from taskfocus.services.archive import list_archived
from taskfocus.services.reminders import ReminderTracker
from taskfocus.services.streak import StreakTracker
from taskfocus.services.task_service import TaskValidationError, build_task, sort_by_due
from taskfocus.storage.archive_store import ArchiveStore
from taskfocus.storage.base import StorageError, TaskRepository

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


@router.get("", response_model=list[TaskRead])
def get_active_tasks(repo: TaskRepository = Depends(get_repository)):
    tasks = [t for t in repo.list() if not t.archived]
    return [to_read(t) for t in sort_by_due(tasks)]


@router.get("/archived", response_model=list[TaskRead])
def get_archived_tasks(
    repo: TaskRepository = Depends(get_repository),
    archive_store: ArchiveStore = Depends(get_archive_store),
):
    return [to_read(t) for t in list_archived(repo, archive_store)]


@router.get("/{task_id}", response_model=TaskRead)
def get_task(task_id: str, repo: TaskRepository = Depends(get_repository)):
    task = repo.get(task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return to_read(task)


@router.post("", response_model=TaskRead)
def save_task(
    payload: TaskWrite,
    repo: TaskRepository = Depends(get_repository),
    reminders: ReminderTracker = Depends(get_reminders),
    now: datetime = Depends(get_now),
):
    """id 없으면 생성, 있으면 수정 (모르는 id 면 그 id 로 생성)."""
    existing = repo.get(payload.id) if payload.id else None
    try:
        task = build_task(
            payload,
            existing=existing,
            now=now,
            new_id=payload.id or new_task_id(),
        )
    except TaskValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    repo.save(task)
    if existing is not None:
        # 시간이 바뀌었을 수 있으니 오늘 알림 기록을 지운다
        reminders.reset(task.id)
    log.info("task %s | id=%s", "updated" if existing else "created", task.id)
    return to_read(task)


@router.post("/{task_id}/start", response_model=TaskRead)
def start_task(
    task_id: str,
    repo: TaskRepository = Depends(get_repository),
    now: datetime = Depends(get_now),
):
    tasks = repo.list()
    try:
        changed = timer.start(tasks, task_id, now)
    except timer.TaskNotFound:
        raise HTTPException(status_code=404, detail="Task not found")

    repo.replace_all(tasks)
    return to_read(changed[-1])


@router.post("/{task_id}/stop", response_model=TaskRead)
def stop_task(
    task_id: str,
    repo: TaskRepository = Depends(get_repository),
    now: datetime = Depends(get_now),
):
    task = repo.get(task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")

    timer.stop(task, now)
    repo.save(task)
    return to_read(task)


@router.post("/{task_id}/complete", response_model=TaskRead)
def complete_task(
    task_id: str,
    repo: TaskRepository = Depends(get_repository),
    streak: StreakTracker = Depends(get_streak),
    now: datetime = Depends(get_now),
):
    tasks = repo.list()
    task = next((t for t in tasks if t.id == task_id), None)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    if task.completed:
        raise HTTPException(status_code=409, detail="Task already completed")

    successor = timer.complete(task, now)
    if successor is not None:
        tasks.append(successor)

    # 완료 + 다음 회차를 한 번에 쓴다
    repo.replace_all(tasks)

    # 완료는 이미 저장됨. 스트릭 기록 실패로 응답을 깨지 않는다
    try:
        if streak.record(now):
            log.info("daily streak minimum reached | streak=%s", streak.state.current_streak)
    except StorageError:
        log.exception("streak write failed after completion | task=%s", task.id)
    return to_read(task)


@router.post("/{task_id}/restore", response_model=TaskRead)
def restore_task(
    task_id: str,
    repo: TaskRepository = Depends(get_repository),
    now: datetime = Depends(get_now),
):
    task = repo.get(task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")

    timer.restore(task, now)
    repo.save(task)
    return to_read(task)


@router.delete("/{task_id}", response_model=DeleteResult)
def delete_task(
    task_id: str,
    repo: TaskRepository = Depends(get_repository),
    reminders: ReminderTracker = Depends(get_reminders),
):
    if not repo.delete(task_id):
        raise HTTPException(status_code=404, detail="Task not found")
    reminders.reset(task_id)
    return DeleteResult()
