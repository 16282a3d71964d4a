# whisper_relay/config/settings.py

import os
import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field

# 0.01 个原生代币（1 代币 = 10^24 最小单位）
DEFAULT_MIN_STORAGE_DEPOSIT = 10 ** 22


@dataclass
class RelayConfig:
    """中继业务参数"""
    min_storage_deposit: int = DEFAULT_MIN_STORAGE_DEPOSIT
    token_symbol: str = "NEAR"


@dataclass
class StorageConfig:
    """存储配置：memory 或 sqlalchemy"""
    backend: str = "memory"
    db_url: str = ""


@dataclass
class EventLogConfig:
    """通知输出配置"""
    backends: List[str] = field(default_factory=lambda: ["logging"])
    level: str = "INFO"


@dataclass
class LoggingConfig:
    """日志配置"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class APIConfig:
    """HTTP 接口配置"""
    host: str = "127.0.0.1"
    port: int = 8000
    relay_account: str = "whisper-relay"


@dataclass
class Settings:
    """主配置类"""
    relay: RelayConfig = field(default_factory=RelayConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    event_log: EventLogConfig = field(default_factory=EventLogConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    api: APIConfig = field(default_factory=APIConfig)

    @classmethod
    def load_from_file(cls, config_path: Optional[str] = None) -> 'Settings':
        """从文件加载配置"""
        if config_path is None:
            config_path = os.getenv('WHISPER_CONFIG')
        if not config_path:
            return cls()

        config_path = Path(config_path)
        if not config_path.exists():
            # 返回默认配置
            return cls()

        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        return cls.from_dict(config_data)

    @classmethod
    def from_dict(cls, config_data: Dict[str, Any]) -> 'Settings':
        """从字典创建配置"""
        settings = cls()

        if 'relay' in config_data:
            settings.relay = RelayConfig(**config_data['relay'])

        if 'storage' in config_data:
            settings.storage = StorageConfig(**config_data['storage'])

        if 'event_log' in config_data:
            settings.event_log = EventLogConfig(**config_data['event_log'])

        if 'logging' in config_data:
            settings.logging = LoggingConfig(**config_data['logging'])

        if 'api' in config_data:
            settings.api = APIConfig(**config_data['api'])

        return settings

    def load_environment_variables(self):
        """加载环境变量"""
        db_url = os.getenv('WHISPER_DB_URL')
        if db_url:
            self.storage.db_url = db_url
        backend = os.getenv('WHISPER_STORAGE_BACKEND')
        if backend:
            self.storage.backend = backend
        min_deposit = os.getenv('WHISPER_MIN_STORAGE_DEPOSIT')
        if min_deposit:
            try:
                self.relay.min_storage_deposit = int(min_deposit)
            except ValueError:
                pass
        token = os.getenv('WHISPER_TOKEN_SYMBOL')
        if token:
            self.relay.token_symbol = token
        log_level = os.getenv('WHISPER_LOG_LEVEL')
        if log_level:
            self.logging.level = log_level
        event_log = os.getenv('WHISPER_EVENT_LOG')  # 格式: logging,sqlalchemy
        if event_log:
            self.event_log.backends = [b.strip() for b in event_log.split(",") if b.strip()]

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            'relay': self.relay.__dict__,
            'storage': self.storage.__dict__,
            'event_log': self.event_log.__dict__,
            'logging': self.logging.__dict__,
            'api': self.api.__dict__,
        }


def create_settings(config_path: Optional[str] = None, validate: bool = True) -> Settings:
    """创建设置实例：文件 -> (pydantic 校验) -> 环境变量覆盖"""
    if validate:
        from .validated_settings import load_validated_settings
        settings = load_validated_settings(config_path)
    else:
        settings = Settings.load_from_file(config_path)
    settings.load_environment_variables()
    return settings
