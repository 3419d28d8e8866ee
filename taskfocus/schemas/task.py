# taskfocus/schemas/task.py
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from taskfocus.models.task import Task
from taskfocus.services.timer import format_duration

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# ── 생성/수정 요청 ─────────────────────────────────────────────
# 타입은 느슨하게 받고 검증은 services.task_service 에서 (400 으로 응답)
class TaskWrite(BaseModel):
    model_config = _CAMEL

    id: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[str] = None
    due_time: Optional[str] = None
    priority: Optional[str] = None
    recurring: Optional[str] = None
    details: Optional[Any] = None
    links: Optional[List[Any]] = None
    is_appointment: bool = False
    reminder_minutes: Optional[int] = None
    working_days_only: bool = False


# ── 저장 포맷 (tasks.json / archive_*.json 한 항목) ────────────
class TaskRecord(BaseModel):
    model_config = _CAMEL

    id: str
    description: str
    due_date: Optional[str] = None
    due_time: Optional[str] = None
    priority: str = "medium"
    recurring: Optional[str] = None
    working_days_only: bool = False
    is_appointment: bool = False
    reminder_minutes: Optional[int] = None
    completed: bool = False
    archived: bool = False
    archived_to_file: bool = False
    in_progress: bool = False
    started_at: Optional[datetime] = None
    time_spent: int = 0
    completed_at: Optional[datetime] = None
    links: List[str] = Field(default_factory=list)
    details: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# ── 조회 응답 ─────────────────────────────────────────────────
class TaskRead(TaskRecord):
    @computed_field(alias="timeSpentDisplay")
    @property
    def time_spent_display(self) -> str:
        return format_duration(self.time_spent)


class CleanupRequest(BaseModel):
    model_config = _CAMEL

    cutoff_date: Optional[str] = None


class CleanupResult(BaseModel):
    success: bool = True
    moved: int
    message: str


class DeleteResult(BaseModel):
    success: bool = True
    message: str = "Task deleted"


class StreakRead(BaseModel):
    model_config = _CAMEL

    current_streak: int
    tasks_completed_today: int
    last_completed_date: Optional[str] = None
    display_text: str


def to_record(task: Task) -> dict:
    return TaskRecord.model_validate(task).model_dump(by_alias=True, mode="json")


def from_record(data: dict) -> Task:
    record = TaskRecord.model_validate(data)
    return Task(**record.model_dump())


def to_read(task: Task) -> TaskRead:
    return TaskRead.model_validate(task)
