# taskfocus/storage/base.py
"""
저장소 포트.

비즈니스 로직은 TaskRepository 프로토콜에만 의존한다.
JSON 파일 / SQL 구현은 설정으로 바꿔 끼운다.
"""
from typing import List, Optional, Protocol

from taskfocus.models.task import Task


class StorageError(RuntimeError):
    """쓰기 실패 등 저장소 I/O 오류. 앱 레벨 핸들러가 500 으로 바꾼다."""


class TaskRepository(Protocol):
    def initialize(self) -> None: ...

    def list(self) -> List[Task]: ...

    def get(self, task_id: str) -> Optional[Task]: ...

    def save(self, task: Task) -> Task: ...

    def delete(self, task_id: str) -> bool: ...

    def replace_all(self, tasks: List[Task]) -> None: ...

    def ping(self) -> bool: ...
