# taskfocus/core/config.py
import os
from dataclasses import dataclass, field
from datetime import timezone, tzinfo
from functools import lru_cache
from pathlib import Path
from typing import List, Optional
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

load_dotenv()

# ─────────────────────────────
# 기본값
DEFAULT_DATA_DIR = "./local_data"
DEFAULT_RETENTION_DAYS = 45


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


def _env_list(name: str) -> List[str]:
    raw = os.getenv(name, "")
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    data_dir: Path = Path(DEFAULT_DATA_DIR)
    storage_backend: str = "json"  # "json" | "sql"
    database_url: Optional[str] = None
    archive_retention_days: int = DEFAULT_RETENTION_DAYS
    timezone_name: str = "UTC"
    cors_origins: List[str] = field(default_factory=list)
    log_level: str = "INFO"
    env: str = "dev"
    host: str = "127.0.0.1"
    port: int = 3000

    @property
    def tz(self) -> tzinfo:
        if not self.timezone_name or self.timezone_name.upper() == "UTC":
            return timezone.utc
        return ZoneInfo(self.timezone_name)

    @property
    def sql_url(self) -> str:
        """SQL 백엔드용 URL. 비어 있으면 data_dir 안의 sqlite 파일."""
        if self.database_url:
            return self.database_url
        return f"sqlite:///{(self.data_dir / 'tasks.db').as_posix()}"

    @classmethod
    def from_env(cls) -> "Settings":
        backend = os.getenv("STORAGE_BACKEND", "json").strip().lower() or "json"
        if backend not in ("json", "sql"):
            raise RuntimeError(f"STORAGE_BACKEND must be 'json' or 'sql', got {backend!r}")

        return cls(
            data_dir=Path(os.getenv("DATA_DIR", DEFAULT_DATA_DIR).strip() or DEFAULT_DATA_DIR),
            storage_backend=backend,
            database_url=os.getenv("DATABASE_URL", "").strip() or None,
            archive_retention_days=_env_int("ARCHIVE_RETENTION_DAYS", DEFAULT_RETENTION_DAYS),
            timezone_name=os.getenv("APP_TIMEZONE", "UTC").strip() or "UTC",
            cors_origins=_env_list("CORS_ORIGINS"),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
            env=os.getenv("ENV", "dev"),
            host=os.getenv("HOST", "127.0.0.1").strip() or "127.0.0.1",
            port=_env_int("PORT", 3000),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
