# taskfocus/routers/health.py
import logging

from fastapi import APIRouter, Depends, HTTPException

from taskfocus.dependencies.store import get_repository
from taskfocus.storage.base import TaskRepository

log = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/store")
def health_store(repo: TaskRepository = Depends(get_repository)):
    try:
        repo.ping()
        return {"ok": True}
    except Exception:
        # 내부 상세는 로그에 남기고, 외부엔 일반화된 메시지
        log.exception("storage health check failed")
        raise HTTPException(status_code=503, detail="Storage unavailable")
