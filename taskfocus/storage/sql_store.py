# taskfocus/storage/sql_store.py
import logging
from datetime import timezone
from typing import List, Optional

from sqlalchemy import delete, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.engine import Engine
from sqlmodel import select

from taskfocus.db.session import create_all_tables, session_scope
from taskfocus.models.task import Task
from taskfocus.storage.base import StorageError

log = logging.getLogger(__name__)

_DATETIME_FIELDS = ("started_at", "completed_at", "created_at", "updated_at")


def _restore_utc(task: Task) -> Task:
    # sqlite 는 tzinfo 를 버리므로 UTC 로 다시 붙인다
    for name in _DATETIME_FIELDS:
        value = getattr(task, name)
        if value is not None and value.tzinfo is None:
            setattr(task, name, value.replace(tzinfo=timezone.utc))
    task.links = list(task.links or [])
    return task


class SqlTaskRepository:
    """SQLModel 세션 위의 TaskRepository 구현 (STORAGE_BACKEND=sql)."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def initialize(self) -> None:
        create_all_tables(self.engine)

    def list(self) -> List[Task]:
        try:
            with session_scope(self.engine) as db:
                rows = db.exec(select(Task).order_by(Task.created_at)).all()
                return [_restore_utc(t) for t in rows]
        except SQLAlchemyError as e:
            log.error("Error reading tasks table | %s", e)
            return []

    def get(self, task_id: str) -> Optional[Task]:
        try:
            with session_scope(self.engine) as db:
                task = db.get(Task, task_id)
                return _restore_utc(task) if task is not None else None
        except SQLAlchemyError as e:
            log.error("Error reading task | id=%s %s", task_id, e)
            return None

    def save(self, task: Task) -> Task:
        try:
            with session_scope(self.engine) as db:
                db.merge(task)
                db.commit()
        except SQLAlchemyError as e:
            log.error("Error writing task | id=%s %s", task.id, e)
            raise StorageError("failed to save task") from e
        return task

    def delete(self, task_id: str) -> bool:
        try:
            with session_scope(self.engine) as db:
                task = db.get(Task, task_id)
                if task is None:
                    return False
                db.delete(task)
                db.commit()
                return True
        except SQLAlchemyError as e:
            log.error("Error deleting task | id=%s %s", task_id, e)
            raise StorageError("failed to delete task") from e

    def replace_all(self, tasks: List[Task]) -> None:
        try:
            with session_scope(self.engine) as db:
                db.exec(delete(Task))
                for task in tasks:
                    db.merge(task)
                db.commit()
        except SQLAlchemyError as e:
            log.error("Error replacing tasks | %s", e)
            raise StorageError("failed to write tasks") from e

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
