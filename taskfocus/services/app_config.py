# taskfocus/services/app_config.py
import copy
import logging

from taskfocus.storage.base import StorageError
from taskfocus.storage.state_store import JsonStateStore

log = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "mantra": {
        "enabled": True,
        "text": "Name it. Trace it. Fix it. Share it.",
        "descriptions": {
            "nameIt": "What's the issue?",
            "traceIt": "Why is it happening?",
            "fixIt": "What's the solution + execute it",
            "shareIt": "Keep people in the loop",
        },
    },
}


def default_config() -> dict:
    return copy.deepcopy(DEFAULT_CONFIG)


def load_app_config(store: JsonStateStore) -> dict:
    """config.json 을 읽는다. 없으면 기본값으로 만들고, 못 읽으면 기본값."""
    data = store.load()
    if data:
        return data
    config = default_config()
    try:
        store.save(config)
    except StorageError:
        log.warning("config file could not be created, serving defaults | %s", store.path)
    return config
