# taskfocus/storage/state_store.py
import logging
from pathlib import Path
from typing import Any, Dict

from taskfocus.storage.jsonfile import read_json, write_json

log = logging.getLogger(__name__)


class JsonStateStore:
    """작은 상태 문서(streak.json, reminders.json) 하나를 읽고 쓴다."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = read_json(self.path)
        except (OSError, ValueError) as e:
            log.warning("state file unreadable, starting fresh | path=%s err=%s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def save(self, data: Dict[str, Any]) -> None:
        write_json(self.path, data)
