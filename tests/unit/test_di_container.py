"""
依赖注入容器单元测试
"""

import pytest

from whisper_relay.application.ports.event_log_port import EventLogPort
from whisper_relay.application.ports.host_port import HostContextPort
from whisper_relay.config.settings import EventLogConfig, Settings, StorageConfig
from whisper_relay.core.contract import WhisperContract
from whisper_relay.core.di import Container, bootstrap_relay, build_event_log, build_storage
from whisper_relay.core.errors import NotInitializedError
from whisper_relay.infrastructure.event_log.composite_event_log import CompositeEventLog
from whisper_relay.infrastructure.event_log.logging_event_log import LoggingEventLog
from whisper_relay.infrastructure.event_log.memory_event_log import InMemoryEventLog
from whisper_relay.infrastructure.stores.kv_store import InMemoryKeyValueStore


class TestContainer:
    """Container 测试"""

    def setup_method(self):
        """每个测试前重置容器"""
        Container.reset()

    def test_singleton_instance(self):
        assert Container.instance() is Container.instance()

    def test_register_and_resolve(self):
        container = Container.instance()

        class MyService:
            pass

        container.register(MyService, lambda: MyService())
        first = container.resolve(MyService)
        assert isinstance(first, MyService)
        assert container.resolve(MyService) is not first

    def test_singleton_returns_same_instance(self):
        container = Container.instance()

        class MySingleton:
            pass

        container.register(MySingleton, lambda: MySingleton(), singleton=True)
        assert container.resolve(MySingleton) is container.resolve(MySingleton)

    def test_register_instance(self):
        container = Container()
        marker = object()
        container.register_instance(object, marker)
        assert container.is_registered(object)
        assert container.resolve(object) is marker

    def test_resolve_unregistered_raises(self):
        with pytest.raises(ValueError):
            Container().resolve(int)


class TestBootstrap:
    def _settings(self, backends=("memory",)):
        settings = Settings()
        settings.event_log = EventLogConfig(backends=list(backends))
        return settings

    def test_bootstrap_initializes_empty_store(self):
        container = bootstrap_relay(self._settings(), container=Container())
        contract = container.resolve(WhisperContract)
        assert contract.get_stats()["owner"] == "whisper-relay"
        assert isinstance(container.resolve(HostContextPort).storage, InMemoryKeyValueStore)
        assert isinstance(container.resolve(EventLogPort), InMemoryEventLog)

    def test_bootstrap_owner_override(self):
        container = bootstrap_relay(self._settings(), owner="admin.near", container=Container())
        assert container.resolve(WhisperContract).get_stats()["owner"] == "admin.near"

    def test_bootstrap_without_auto_init(self):
        with pytest.raises(NotInitializedError):
            bootstrap_relay(self._settings(), container=Container(), auto_init=False)

    def test_build_event_log_variants(self):
        assert isinstance(build_event_log(EventLogConfig(backends=["logging"])), LoggingEventLog)
        assert isinstance(build_event_log(EventLogConfig(backends=[])), LoggingEventLog)
        composite = build_event_log(EventLogConfig(backends=["memory", "logging"]))
        assert isinstance(composite, CompositeEventLog)
        assert isinstance(composite.backends[0], InMemoryEventLog)

    def test_unknown_backends_raise(self):
        with pytest.raises(ValueError):
            build_event_log(EventLogConfig(backends=["kafka"]))
        with pytest.raises(ValueError):
            build_storage(StorageConfig(backend="redis"))
