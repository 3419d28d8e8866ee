# taskfocus/services/archive.py
import logging
from collections import defaultdict
from datetime import date, datetime, time, timezone
from typing import Dict, List

from taskfocus.models.task import Task
from taskfocus.services.timer import as_utc
from taskfocus.storage.archive_store import ArchiveStore
from taskfocus.storage.base import TaskRepository

log = logging.getLogger(__name__)


def parse_cutoff(value: str) -> datetime:
    """
    'YYYY-MM-DD' 는 UTC 자정, ISO 시각은 그대로 (타임존 없으면 UTC).
    형식이 틀리면 ValueError.
    """
    value = (value or "").strip()
    if not value:
        raise ValueError("Cutoff date is required")
    if len(value) == 10:
        return datetime.combine(date.fromisoformat(value), time.min, tzinfo=timezone.utc)
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return as_utc(datetime.fromisoformat(value))


def list_archived(repository: TaskRepository, archive_store: ArchiveStore) -> List[Task]:
    """tasks 저장소의 아카이브 작업 + 아카이브 파일의 작업."""
    in_store = [t for t in repository.list() if t.archived]
    return in_store + archive_store.list()


def cleanup(repository: TaskRepository, archive_store: ArchiveStore, cutoff: datetime) -> int:
    """
    cutoff 이전에 완료된 아카이브 작업을 완료일(UTC)별 파일로 옮긴다.
    옮긴 개수를 반환.
    """
    tasks = repository.list()
    to_move = [
        t for t in tasks
        if t.archived and t.completed_at is not None and as_utc(t.completed_at) < cutoff
    ]
    if not to_move:
        return 0

    by_date: Dict[str, List[Task]] = defaultdict(list)
    for task in to_move:
        task.archived_to_file = True
        completed_day = as_utc(task.completed_at).date().isoformat()
        by_date[completed_day].append(task)

    for date_str, group in sorted(by_date.items()):
        archive_store.append(date_str, group)

    moved_ids = {t.id for t in to_move}
    repository.replace_all([t for t in tasks if t.id not in moved_ids])
    log.info("archive cleanup | cutoff=%s moved=%d files=%d", cutoff.isoformat(), len(to_move), len(by_date))
    return len(to_move)
