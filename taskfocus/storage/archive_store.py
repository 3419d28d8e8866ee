# taskfocus/storage/archive_store.py
import logging
import time
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from taskfocus.models.task import Task
from taskfocus.schemas.task import from_record, to_record
from taskfocus.storage.base import StorageError
from taskfocus.storage.jsonfile import read_json, write_json

log = logging.getLogger(__name__)

ARCHIVE_PREFIX = "archive_"
ARCHIVE_SUFFIX = ".json"
SECONDS_PER_DAY = 24 * 60 * 60


class ArchiveStore:
    """날짜별 아카이브 파일 (data_dir/archive_YYYYMMDD.json)."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def path_for(self, date_str: str) -> Path:
        return self.data_dir / f"{ARCHIVE_PREFIX}{date_str.replace('-', '')}{ARCHIVE_SUFFIX}"

    def _archive_files(self) -> List[Path]:
        if not self.data_dir.exists():
            return []
        return sorted(
            p for p in self.data_dir.iterdir()
            if p.is_file() and p.name.startswith(ARCHIVE_PREFIX) and p.name.endswith(ARCHIVE_SUFFIX)
        )

    def append(self, date_str: str, tasks: List[Task]) -> None:
        path = self.path_for(date_str)
        data = {"tasks": []}
        if path.exists():
            try:
                loaded = read_json(path)
            except (OSError, ValueError) as e:
                log.error("Error reading archive file | path=%s err=%s", path, e)
                raise StorageError(f"failed to read {path.name}") from e
            if isinstance(loaded, dict) and isinstance(loaded.get("tasks"), list):
                data = loaded
        data["tasks"].extend(to_record(t) for t in tasks)
        write_json(path, data)
        log.info("archived %d task(s) to %s", len(tasks), path.name)

    def list(self) -> List[Task]:
        tasks: List[Task] = []
        for path in self._archive_files():
            try:
                data = read_json(path)
            except (OSError, ValueError) as e:
                log.error("Error reading archived tasks | path=%s err=%s", path, e)
                continue
            raw = data.get("tasks") if isinstance(data, dict) else None
            if not isinstance(raw, list):
                continue
            for item in raw:
                try:
                    tasks.append(from_record(item))
                except (ValidationError, TypeError) as e:
                    log.warning("skipping malformed archived record | %s", e)
        return tasks

    def prune(self, days_old: int, now_ts: Optional[float] = None) -> List[str]:
        """수정 시각이 days_old 일보다 오래된 아카이브 파일 삭제. 삭제한 파일명 반환."""
        now_ts = time.time() if now_ts is None else now_ts
        cutoff = now_ts - days_old * SECONDS_PER_DAY
        removed: List[str] = []
        for path in self._archive_files():
            try:
                if path.stat().st_mtime < cutoff:
                    path.unlink()
                    removed.append(path.name)
                    log.info("Deleted old archive file: %s", path.name)
            except OSError as e:
                log.error("Error cleaning up old archive | path=%s err=%s", path, e)
        return removed
