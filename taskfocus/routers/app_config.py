# taskfocus/routers/app_config.py
from fastapi import APIRouter, Depends

from taskfocus.dependencies.store import get_config_store
from taskfocus.services.app_config import load_app_config
from taskfocus.storage.state_store import JsonStateStore

router = APIRouter(prefix="/api", tags=["Config"])


@router.get("/config")
def get_app_config(store: JsonStateStore = Depends(get_config_store)):
    return load_app_config(store)
