# taskfocus/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskfocus.core.config import Settings, get_settings
from taskfocus.core.logging_setup import setup_logging
from taskfocus.routers import app_config, archive, health, reminders, streak, task
from taskfocus.services.reminders import ReminderTracker
from taskfocus.services.streak import StreakTracker
from taskfocus.storage.archive_store import ArchiveStore
from taskfocus.storage.base import StorageError, TaskRepository
from taskfocus.storage.json_store import JsonTaskRepository
from taskfocus.storage.state_store import JsonStateStore

log = logging.getLogger(__name__)


def build_repository(settings: Settings) -> TaskRepository:
    if settings.storage_backend == "sql":
        from taskfocus.db.session import build_engine
        from taskfocus.storage.sql_store import SqlTaskRepository

        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return SqlTaskRepository(build_engine(settings.sql_url))
    return JsonTaskRepository(settings.data_dir)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    app.state.repository.initialize()
    removed = app.state.archive_store.prune(settings.archive_retention_days)
    log.info(
        "taskfocus ready | backend=%s data_dir=%s pruned_archives=%d",
        settings.storage_backend, settings.data_dir, len(removed),
    )
    yield


async def storage_error_handler(request: Request, exc: StorageError):
    log.error("Unhandled storage error | %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="taskfocus", version="0.1.0", lifespan=lifespan)

    # 상태 객체는 전부 app.state 에서 소유
    app.state.settings = settings
    app.state.repository = build_repository(settings)
    app.state.archive_store = ArchiveStore(settings.data_dir)
    app.state.config_store = JsonStateStore(settings.data_dir / "config.json")
    app.state.streak = StreakTracker(JsonStateStore(settings.data_dir / "streak.json"), settings.tz)
    app.state.reminders = ReminderTracker(JsonStateStore(settings.data_dir / "reminders.json"), settings.tz)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(StorageError, storage_error_handler)

    app.include_router(task.router)
    app.include_router(archive.router)
    app.include_router(app_config.router)
    app.include_router(streak.router)
    app.include_router(reminders.router)
    app.include_router(health.router)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("taskfocus.main:app", host=settings.host, port=settings.port)
