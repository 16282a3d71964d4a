"""
数据库连接：relay 状态表与通知表共用一个 URL（默认本地 SQLite）。
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from whisper_relay.infrastructure.stores.models import Base

DEFAULT_DB_URL = "sqlite:///data/whisper.db"
DB_URL_ENV = "WHISPER_DB_URL"


def get_db_url() -> str:
    return os.getenv(DB_URL_ENV) or DEFAULT_DB_URL


def _sqlite_file(db_url: str) -> Optional[Path]:
    """SQLite 文件路径；非 SQLite 或内存库返回 None。"""
    url = make_url(db_url)
    if url.get_backend_name() != "sqlite":
        return None
    if not url.database or url.database == ":memory:":
        return None
    return Path(url.database).expanduser().resolve()


def create_db_engine(db_url: Optional[str] = None) -> Engine:
    url = db_url or get_db_url()
    sqlite_file = _sqlite_file(url)
    if sqlite_file is not None:
        sqlite_file.parent.mkdir(parents=True, exist_ok=True)
        # 同一进程内 API 工作线程共享连接池
        return create_engine(url, future=True, connect_args={"check_same_thread": False})
    return create_engine(url, future=True, pool_pre_ping=True)


class SessionProvider:
    """Engine plus session factory for one relay database."""

    def __init__(self, db_url: Optional[str] = None, *, auto_create_schema: bool = True):
        self.db_url = db_url or get_db_url()
        self.engine = create_db_engine(self.db_url)
        self._factory = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False, future=True)
        if auto_create_schema:
            # In production, prefer explicit migrations.
            Base.metadata.create_all(self.engine)

    def session(self) -> Session:
        return self._factory()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """One unit of work: commit on clean exit, roll back on error."""
        with self._factory() as session:
            with session.begin():
                yield session

    def dispose(self) -> None:
        self.engine.dispose()
