# taskfocus/storage/jsonfile.py
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from taskfocus.storage.base import StorageError

log = logging.getLogger(__name__)


def read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as fp:
        return json.load(fp)


def write_json(path: Path, data: Any) -> None:
    """임시 파일에 쓰고 rename. 읽는 쪽이 반쯤 쓰인 파일을 보지 않게."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fp:
                json.dump(data, fp, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
    except OSError as e:
        log.error("write failed | path=%s err=%s", path, e)
        raise StorageError(f"failed to write {path.name}") from e
