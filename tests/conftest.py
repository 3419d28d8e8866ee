# tests/conftest.py
import os
import sys
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# taskfocus.main 은 import 시점에 기본 앱을 만든다 → 임시 디렉터리로
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp())
os.environ["ENV"] = "test"

from taskfocus.core.config import Settings  # noqa: E402
from taskfocus.dependencies.store import get_now  # noqa: E402
from taskfocus.main import create_app  # noqa: E402
from taskfocus.models.task import Task  # noqa: E402

# 2025-10-24 은 금요일
T0 = datetime(2025, 10, 24, 9, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now

    def __call__(self) -> datetime:
        return self.now


def make_task(task_id: str = "t1", **fields) -> Task:
    fields.setdefault("description", f"task {task_id}")
    fields.setdefault("created_at", T0)
    fields.setdefault("updated_at", T0)
    return Task(id=task_id, **fields)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(T0)


@pytest.fixture()
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture()
def settings(data_dir: Path) -> Settings:
    return Settings(data_dir=data_dir, timezone_name="UTC", log_level="WARNING")


@pytest.fixture()
def app(settings: Settings, clock: FakeClock):
    application = create_app(settings)
    application.dependency_overrides[get_now] = clock
    return application


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c
