from .kv_store import InMemoryKeyValueStore, SqlAlchemyKeyValueStore

__all__ = ["InMemoryKeyValueStore", "SqlAlchemyKeyValueStore"]
