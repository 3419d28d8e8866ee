# taskfocus/storage/json_store.py
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from taskfocus.models.task import Task
from taskfocus.schemas.task import from_record, to_record
from taskfocus.storage.base import StorageError
from taskfocus.storage.jsonfile import read_json, write_json

log = logging.getLogger(__name__)

TASKS_FILENAME = "tasks.json"


class JsonTaskRepository:
    """
    data_dir/tasks.json 에 {"tasks": [...]} 형태로 저장.
    요청마다 파일 전체를 읽고 쓴다 (락 없음, 마지막 쓰기가 이긴다).
    """

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self.path = self.data_dir / TASKS_FILENAME

    def initialize(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            write_json(self.path, {"tasks": []})
            log.info("tasks file created | %s", self.path)

    def list(self) -> List[Task]:
        # 읽기 실패는 빈 목록으로 취급
        try:
            self.initialize()
            data = read_json(self.path)
        except (OSError, ValueError, StorageError) as e:
            log.error("Error reading tasks file | %s", e)
            return []

        raw = data.get("tasks") if isinstance(data, dict) else None
        if not isinstance(raw, list):
            return []

        tasks: List[Task] = []
        for item in raw:
            try:
                tasks.append(from_record(item))
            except (ValidationError, TypeError) as e:
                log.warning("skipping malformed task record | %s", e)
        return tasks

    def get(self, task_id: str) -> Optional[Task]:
        return next((t for t in self.list() if t.id == task_id), None)

    def save(self, task: Task) -> Task:
        tasks = self.list()
        for i, existing in enumerate(tasks):
            if existing.id == task.id:
                tasks[i] = task
                break
        else:
            tasks.append(task)
        self.replace_all(tasks)
        return task

    def delete(self, task_id: str) -> bool:
        tasks = self.list()
        remaining = [t for t in tasks if t.id != task_id]
        if len(remaining) == len(tasks):
            return False
        self.replace_all(remaining)
        return True

    def replace_all(self, tasks: List[Task]) -> None:
        write_json(self.path, {"tasks": [to_record(t) for t in tasks]})

    def ping(self) -> bool:
        self.initialize()
        return self.path.exists()
