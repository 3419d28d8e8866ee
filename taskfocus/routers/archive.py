# taskfocus/routers/archive.py
from fastapi import APIRouter, Depends, HTTPException

from taskfocus.dependencies.store import get_archive_store, get_repository
from taskfocus.schemas.task import CleanupRequest, CleanupResult
from taskfocus.services.archive import cleanup, parse_cutoff
from taskfocus.storage.archive_store import ArchiveStore
from taskfocus.storage.base import TaskRepository

router = APIRouter(prefix="/api/archive", tags=["Archive"])


@router.post("/cleanup", response_model=CleanupResult)
def cleanup_archive(
    payload: CleanupRequest,
    repo: TaskRepository = Depends(get_repository),
    archive_store: ArchiveStore = Depends(get_archive_store),
):
    if not payload.cutoff_date:
        raise HTTPException(status_code=400, detail="Cutoff date is required")
    try:
        cutoff = parse_cutoff(payload.cutoff_date)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid cutoff date: {payload.cutoff_date}")

    moved = cleanup(repo, archive_store, cutoff)
    if moved == 0:
        return CleanupResult(moved=0, message="No archived tasks found before that date")
    return CleanupResult(moved=moved, message=f"Moved {moved} archived tasks to archive files")
