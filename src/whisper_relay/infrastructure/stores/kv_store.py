"""
Key/value backends for the relay state.

Both backends stage writes per transaction: reads inside the transaction see
the staged values, and nothing becomes visible to other readers until the
transaction block exits without an exception.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Dict, Iterator, Optional

from whisper_relay.infrastructure.stores.models import KeyValueEntryModel
from whisper_relay.infrastructure.stores.sqlalchemy_db import SessionProvider

logger = logging.getLogger(__name__)


class InMemoryKeyValueStore:
    """Dict-backed store (tests, single-process runs)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})
        self._staged: Optional[Dict[str, str]] = None

    def get(self, key: str) -> Optional[str]:
        if self._staged is not None and key in self._staged:
            return self._staged[key]
        return self._data.get(key)

    def put(self, key: str, value: str) -> None:
        if self._staged is None:
            raise RuntimeError("put() requires an open transaction")
        self._staged[key] = value

    def contains(self, key: str) -> bool:
        return self.get(key) is not None

    @contextmanager
    def transaction(self) -> Iterator[None]:
        if self._staged is not None:
            raise RuntimeError("Transactions do not nest")
        self._staged = {}
        try:
            yield
            self._data.update(self._staged)
        finally:
            self._staged = None

    def snapshot(self) -> Dict[str, str]:
        """Committed contents (copy)."""
        return dict(self._data)

    def close(self) -> None:
        return None


class SqlAlchemyKeyValueStore:
    """
    Persist relay state into a single SQL table via SQLAlchemy.

    Writes are staged in memory and written in one session when the
    transaction commits, so no database lock is held while an invocation runs.
    """

    def __init__(self, db_url: Optional[str] = None, *, auto_create_schema: bool = True):
        self._provider = SessionProvider(db_url, auto_create_schema=auto_create_schema)
        self.db_url = self._provider.db_url
        self._staged: Optional[Dict[str, str]] = None

    def get(self, key: str) -> Optional[str]:
        if self._staged is not None and key in self._staged:
            return self._staged[key]
        with self._provider.session() as session:
            row = session.get(KeyValueEntryModel, key)
            return row.value if row is not None else None

    def put(self, key: str, value: str) -> None:
        if self._staged is None:
            raise RuntimeError("put() requires an open transaction")
        self._staged[key] = value

    def contains(self, key: str) -> bool:
        return self.get(key) is not None

    @contextmanager
    def transaction(self) -> Iterator[None]:
        if self._staged is not None:
            raise RuntimeError("Transactions do not nest")
        self._staged = {}
        try:
            yield
            if self._staged:
                self._commit(self._staged)
        finally:
            self._staged = None

    def _commit(self, staged: Dict[str, str]) -> None:
        now = datetime.now(timezone.utc)
        with self._provider.session_scope() as session:
            for key, value in staged.items():
                row = session.get(KeyValueEntryModel, key)
                if row is None:
                    session.add(KeyValueEntryModel(key=key, value=value, updated_at=now))
                else:
                    row.value = value
                    row.updated_at = now

    def close(self) -> None:
        try:
            self._provider.dispose()
        except Exception as e:
            logger.debug(f"SqlAlchemyKeyValueStore dispose failed: {e}")
