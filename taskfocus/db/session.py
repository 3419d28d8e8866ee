# taskfocus/db/session.py
import logging
from contextlib import contextmanager

from sqlalchemy.engine import Engine
from sqlalchemy.engine import url as sa_url  # make_url 사용
from sqlmodel import Session, SQLModel, create_engine

log = logging.getLogger(__name__)


def _mask(url: str) -> str:
    """로그 출력용 마스킹 (비밀번호 숨김)"""
    if "://" not in url:
        return url
    scheme, rest = url.split("://", 1)
    if "@" in rest and ":" in rest.split("@", 1)[0]:
        creds, tail = rest.split("@", 1)
        user = creds.split(":", 1)[0]
        return f"{scheme}://{user}:***@{tail}"
    return url


def _normalize_url(url: str) -> str:
    url = url.strip()
    if url and url[0] == url[-1] and url[0] in ("'", '"', "`"):
        url = url[1:-1].strip()
    # postgres:// → postgresql:// 로 교정
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url


def build_engine(url: str) -> Engine:
    url = _normalize_url(url)
    try:
        parsed = sa_url.make_url(url)
    except Exception as e:
        raise RuntimeError(f"잘못된 DATABASE_URL 형식: {url!r} ({e})")

    kwargs = {"pool_pre_ping": True}
    if parsed.get_backend_name() == "sqlite":
        # FastAPI 스레드풀에서 같은 커넥션을 쓸 수 있게
        kwargs["connect_args"] = {"check_same_thread": False}

    log.info("DB URL 적용: %s", _mask(url))
    return create_engine(url, **kwargs)


def create_all_tables(engine: Engine) -> None:
    # 테이블 등록을 위해 모델 import
    from taskfocus.models import task  # noqa: F401

    SQLModel.metadata.create_all(engine)


@contextmanager
def session_scope(engine: Engine):
    s = Session(engine)
    try:
        yield s
    finally:
        s.close()
