"""
基于 pydantic 的配置校验与对象化加载。

提供 SettingsModel（忽略多余字段），并转换为 dataclass Settings。
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, Field
import yaml

from .settings import (
    DEFAULT_MIN_STORAGE_DEPOSIT,
    RelayConfig,
    StorageConfig,
    EventLogConfig,
    LoggingConfig,
    APIConfig,
    Settings,
)


class RelayConfigModel(BaseModel):
    min_storage_deposit: int = Field(DEFAULT_MIN_STORAGE_DEPOSIT, ge=0)
    token_symbol: str = Field("NEAR", min_length=1)

    class Config:
        extra = "ignore"


class StorageConfigModel(BaseModel):
    backend: Literal["memory", "sqlalchemy"] = "memory"
    db_url: str = ""

    class Config:
        extra = "ignore"


class EventLogConfigModel(BaseModel):
    backends: List[Literal["logging", "memory", "sqlalchemy"]] = Field(default_factory=lambda: ["logging"])
    level: str = "INFO"

    class Config:
        extra = "ignore"


class LoggingConfigModel(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    class Config:
        extra = "ignore"


class APIConfigModel(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(8000, ge=1, le=65535)
    relay_account: str = "whisper-relay"

    class Config:
        extra = "ignore"


class SettingsModel(BaseModel):
    relay: RelayConfigModel = RelayConfigModel()
    storage: StorageConfigModel = StorageConfigModel()
    event_log: EventLogConfigModel = EventLogConfigModel()
    logging: LoggingConfigModel = LoggingConfigModel()
    api: APIConfigModel = APIConfigModel()

    class Config:
        extra = "ignore"

    def to_dataclass(self) -> Settings:
        s = Settings()
        s.relay = RelayConfig(**self.relay.model_dump())
        s.storage = StorageConfig(**self.storage.model_dump())
        s.event_log = EventLogConfig(**self.event_log.model_dump())
        s.logging = LoggingConfig(**self.logging.model_dump())
        s.api = APIConfig(**self.api.model_dump())
        return s


def load_validated_settings(config_path: Optional[str] = None) -> Settings:
    """使用 pydantic 校验后返回 Settings dataclass。"""
    config_path = config_path or os.getenv("WHISPER_CONFIG")
    data = {}
    if config_path:
        cfg_file = Path(config_path)
        if cfg_file.exists():
            data = yaml.safe_load(cfg_file.read_text(encoding="utf-8")) or {}
    model = SettingsModel(**data)
    return model.to_dataclass()
