"""
配置加载单元测试
"""

from __future__ import annotations

import pytest
import yaml
from pydantic import ValidationError

from whisper_relay.config.settings import Settings, create_settings
from whisper_relay.config.validated_settings import SettingsModel, load_validated_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "WHISPER_CONFIG",
        "WHISPER_DB_URL",
        "WHISPER_STORAGE_BACKEND",
        "WHISPER_MIN_STORAGE_DEPOSIT",
        "WHISPER_TOKEN_SYMBOL",
        "WHISPER_LOG_LEVEL",
        "WHISPER_EVENT_LOG",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = create_settings()
    assert settings.relay.min_storage_deposit == 10 ** 22
    assert settings.relay.token_symbol == "NEAR"
    assert settings.storage.backend == "memory"
    assert settings.event_log.backends == ["logging"]
    assert settings.api.relay_account == "whisper-relay"


def test_missing_file_falls_back_to_defaults(tmp_path):
    settings = create_settings(str(tmp_path / "absent.yaml"))
    assert settings.to_dict() == Settings().to_dict()


def test_yaml_file_is_loaded_and_unknown_keys_ignored(tmp_path):
    path = tmp_path / "whisper.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "relay": {"min_storage_deposit": 5, "token_symbol": "wNEAR", "legacy": True},
                "storage": {"backend": "sqlalchemy", "db_url": "sqlite:///x.db"},
                "event_log": {"backends": ["memory", "sqlalchemy"]},
                "unrelated": {"a": 1},
            }
        ),
        encoding="utf-8",
    )
    settings = create_settings(str(path))
    assert settings.relay.min_storage_deposit == 5
    assert settings.relay.token_symbol == "wNEAR"
    assert settings.storage.backend == "sqlalchemy"
    assert settings.event_log.backends == ["memory", "sqlalchemy"]


def test_config_path_from_environment(monkeypatch, tmp_path):
    path = tmp_path / "whisper.yaml"
    path.write_text("api:\n  port: 9100\n", encoding="utf-8")
    monkeypatch.setenv("WHISPER_CONFIG", str(path))
    assert create_settings().api.port == 9100


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("WHISPER_DB_URL", "sqlite:///env.db")
    monkeypatch.setenv("WHISPER_STORAGE_BACKEND", "sqlalchemy")
    monkeypatch.setenv("WHISPER_MIN_STORAGE_DEPOSIT", "123")
    monkeypatch.setenv("WHISPER_TOKEN_SYMBOL", "TEST")
    monkeypatch.setenv("WHISPER_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("WHISPER_EVENT_LOG", "logging, sqlalchemy")

    settings = create_settings()
    assert settings.storage.db_url == "sqlite:///env.db"
    assert settings.storage.backend == "sqlalchemy"
    assert settings.relay.min_storage_deposit == 123
    assert settings.relay.token_symbol == "TEST"
    assert settings.logging.level == "DEBUG"
    assert settings.event_log.backends == ["logging", "sqlalchemy"]


def test_invalid_deposit_in_environment_is_ignored(monkeypatch):
    monkeypatch.setenv("WHISPER_MIN_STORAGE_DEPOSIT", "lots")
    assert create_settings().relay.min_storage_deposit == 10 ** 22


def test_validation_rejects_unknown_backend():
    with pytest.raises(ValidationError):
        SettingsModel(storage={"backend": "redis"})
    with pytest.raises(ValidationError):
        SettingsModel(relay={"min_storage_deposit": -1})


def test_validated_loader_returns_dataclass(tmp_path):
    path = tmp_path / "whisper.yaml"
    path.write_text("logging:\n  level: WARNING\n", encoding="utf-8")
    settings = load_validated_settings(str(path))
    assert isinstance(settings, Settings)
    assert settings.logging.level == "WARNING"


def test_unvalidated_loader(tmp_path):
    path = tmp_path / "whisper.yaml"
    path.write_text("storage:\n  backend: memory\n", encoding="utf-8")
    assert create_settings(str(path), validate=False).storage.backend == "memory"
