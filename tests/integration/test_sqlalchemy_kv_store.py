from __future__ import annotations

from pathlib import Path

import pytest

from whisper_relay.application.ports.key_value_port import KeyValueStorePort
from whisper_relay.infrastructure.stores.kv_store import SqlAlchemyKeyValueStore
from whisper_relay.infrastructure.stores.sqlalchemy_db import create_db_engine


def test_store_satisfies_port(tmp_path):
    store = SqlAlchemyKeyValueStore(db_url=f"sqlite:///{tmp_path / 'kv.db'}")
    assert isinstance(store, KeyValueStorePort)
    store.close()


def test_commit_persists_across_instances(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'kv.db'}"
    store = SqlAlchemyKeyValueStore(db_url=db_url)
    with store.transaction():
        store.put("STATE", "{}")
        store.put("profiles:alice.near", '{"key_version": 1}')
        assert store.get("STATE") == "{}"
    with store.transaction():
        store.put("STATE", '{"message_count": 1}')
    store.close()

    reopened = SqlAlchemyKeyValueStore(db_url=db_url)
    assert reopened.get("STATE") == '{"message_count": 1}'
    assert reopened.contains("profiles:alice.near")
    assert not reopened.contains("profiles:bob.near")
    reopened.close()


def test_rollback_writes_nothing(tmp_path):
    store = SqlAlchemyKeyValueStore(db_url=f"sqlite:///{tmp_path / 'kv.db'}")
    with pytest.raises(ValueError):
        with store.transaction():
            store.put("a", "1")
            raise ValueError("abort")
    assert store.get("a") is None
    with pytest.raises(RuntimeError):
        store.put("a", "1")
    store.close()


def test_create_db_engine_creates_parent_dir_for_relative_sqlite(monkeypatch, tmp_path: Path):
    monkeypatch.chdir(tmp_path)
    assert not (tmp_path / "data").exists()

    engine = create_db_engine("sqlite:///data/test.db")
    try:
        assert (tmp_path / "data").is_dir()
        with engine.connect() as conn:
            conn.exec_driver_sql("select 1")
    finally:
        engine.dispose()


def test_session_scope_rolls_back_on_error(tmp_path):
    from whisper_relay.infrastructure.stores.models import KeyValueEntryModel
    from whisper_relay.infrastructure.stores.sqlalchemy_db import SessionProvider

    provider = SessionProvider(f"sqlite:///{tmp_path / 'scope.db'}")
    with pytest.raises(ValueError):
        with provider.session_scope() as session:
            session.add(KeyValueEntryModel(key="a", value="1"))
            session.flush()
            raise ValueError("abort")
    with provider.session_scope() as session:
        assert session.get(KeyValueEntryModel, "a") is None
        session.add(KeyValueEntryModel(key="b", value="2"))
    with provider.session() as session:
        assert session.get(KeyValueEntryModel, "b").value == "2"
    provider.dispose()


def test_in_memory_sqlite_needs_no_directory(monkeypatch, tmp_path: Path):
    monkeypatch.chdir(tmp_path)
    engine = create_db_engine("sqlite://")
    try:
        with engine.connect() as conn:
            conn.exec_driver_sql("select 1")
    finally:
        engine.dispose()
    assert list(tmp_path.iterdir()) == []
