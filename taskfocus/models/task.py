# taskfocus/models/task.py
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Recurrence(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"


DEFAULT_REMINDER_MINUTES = 30


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_task_id() -> str:
    return uuid4().hex


class Task(SQLModel, table=True):
    __tablename__ = "task"

    id: str = Field(default_factory=new_task_id, primary_key=True)
    description: str
    due_date: Optional[str] = None   # YYYY-MM-DD
    due_time: Optional[str] = None   # HH:MM
    priority: str = Priority.MEDIUM.value
    recurring: Optional[str] = None  # "daily" | "weekly"
    working_days_only: bool = False
    is_appointment: bool = False
    reminder_minutes: Optional[int] = None

    completed: bool = False
    archived: bool = False
    archived_to_file: bool = False
    in_progress: bool = False
    started_at: Optional[datetime] = None
    time_spent: int = 0  # 초
    completed_at: Optional[datetime] = None

    links: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    details: Optional[str] = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
