"""
依赖注入容器的注册入口：按配置装配存储、通知输出、宿主与合约。
"""

from __future__ import annotations

import logging
from typing import Optional

from whisper_relay.application.ports.event_log_port import EventLogPort
from whisper_relay.application.ports.host_port import HostContextPort
from whisper_relay.application.ports.key_value_port import KeyValueStorePort
from whisper_relay.config.settings import EventLogConfig, LoggingConfig, Settings, StorageConfig, create_settings
from whisper_relay.core.contract import WhisperContract
from whisper_relay.core.di.container import Container
from whisper_relay.core.state import WhisperState
from whisper_relay.infrastructure.event_log.composite_event_log import CompositeEventLog
from whisper_relay.infrastructure.event_log.logging_event_log import LoggingEventLog
from whisper_relay.infrastructure.event_log.memory_event_log import InMemoryEventLog
from whisper_relay.infrastructure.event_log.sqlalchemy_event_log import SqlAlchemyEventLog
from whisper_relay.infrastructure.host.in_process_host import InProcessHost
from whisper_relay.infrastructure.stores.kv_store import InMemoryKeyValueStore, SqlAlchemyKeyValueStore

logger = logging.getLogger(__name__)


def configure_logging(config: LoggingConfig) -> None:
    logging.basicConfig(level=config.level.upper(), format=config.format)


def build_storage(config: StorageConfig) -> KeyValueStorePort:
    if config.backend == "sqlalchemy":
        return SqlAlchemyKeyValueStore(db_url=config.db_url or None)
    if config.backend == "memory":
        return InMemoryKeyValueStore()
    raise ValueError(f"Unknown storage backend: {config.backend}")


def build_event_log(config: EventLogConfig, db_url: Optional[str] = None) -> EventLogPort:
    level = logging.getLevelName(config.level.upper())
    backends = []
    for name in config.backends:
        if name == "logging":
            backends.append(LoggingEventLog(level=level if isinstance(level, int) else logging.INFO))
        elif name == "memory":
            backends.append(InMemoryEventLog())
        elif name == "sqlalchemy":
            backends.append(SqlAlchemyEventLog(db_url=db_url))
        else:
            raise ValueError(f"Unknown event log backend: {name}")
    if not backends:
        return LoggingEventLog()
    if len(backends) == 1:
        return backends[0]
    return CompositeEventLog(backends)


def bootstrap_relay(
    settings: Optional[Settings] = None,
    *,
    owner: Optional[str] = None,
    container: Optional[Container] = None,
    auto_init: bool = True,
) -> Container:
    """
    注册 KeyValueStorePort / EventLogPort / HostContextPort / WhisperContract。

    存储为空且 auto_init 时以 owner（默认中继账户）身份执行一次 new()，
    否则直接 load()（未初始化时抛出 NotInitializedError）。
    """
    settings = settings or create_settings()
    container = container or Container.instance()

    storage = build_storage(settings.storage)
    event_log = build_event_log(settings.event_log, db_url=settings.storage.db_url or None)
    host = InProcessHost(storage, account_id=settings.api.relay_account)

    if WhisperState.exists(storage) or not auto_init:
        contract = WhisperContract.load(host, event_log, settings.relay)
    else:
        with host.call(owner or settings.api.relay_account):
            contract = WhisperContract.new(host, event_log, settings.relay)

    container.register_instance(Settings, settings)
    container.register_instance(KeyValueStorePort, storage)
    container.register_instance(EventLogPort, event_log)
    container.register_instance(HostContextPort, host)
    container.register_instance(WhisperContract, contract)
    logger.debug("Relay bootstrapped (storage=%s, events=%s)", settings.storage.backend, settings.event_log.backends)
    return container
