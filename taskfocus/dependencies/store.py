# taskfocus/dependencies/store.py
"""
라우터가 쓰는 의존성. 상태 객체는 전부 app.state 에 있고 여기서 꺼낸다.
테스트는 app.dependency_overrides[get_now] 로 시계를 고정한다.
"""
from datetime import datetime, timezone

from fastapi import Request

from taskfocus.core.config import Settings
from taskfocus.services.reminders import ReminderTracker
from taskfocus.services.streak import StreakTracker
from taskfocus.storage.archive_store import ArchiveStore
from taskfocus.storage.base import TaskRepository
from taskfocus.storage.state_store import JsonStateStore


def get_now() -> datetime:
    return datetime.now(timezone.utc)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_repository(request: Request) -> TaskRepository:
    return request.app.state.repository


def get_archive_store(request: Request) -> ArchiveStore:
    return request.app.state.archive_store


def get_streak(request: Request) -> StreakTracker:
    return request.app.state.streak


def get_reminders(request: Request) -> ReminderTracker:
    return request.app.state.reminders


def get_config_store(request: Request) -> JsonStateStore:
    return request.app.state.config_store
