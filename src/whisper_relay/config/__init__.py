# whisper_relay/config/__init__.py

from .settings import (
    Settings,
    RelayConfig,
    StorageConfig,
    EventLogConfig,
    LoggingConfig,
    APIConfig,
    DEFAULT_MIN_STORAGE_DEPOSIT,
    create_settings,
)
from .validated_settings import SettingsModel, load_validated_settings

__all__ = [
    "Settings",
    "RelayConfig",
    "StorageConfig",
    "EventLogConfig",
    "LoggingConfig",
    "APIConfig",
    "DEFAULT_MIN_STORAGE_DEPOSIT",
    "create_settings",
    "SettingsModel",
    "load_validated_settings",
]
