"""
Test Configuration Management

Verifies environment defaults, dict/file loading, environment overrides and
logging setup.
"""

import json
import logging
import logging.handlers

import pytest

from blockcount.config import (
    AppConfig, Environment, LoggingConfig, configure_logging, get_config, set_config,
)
from blockcount.core.exceptions import ConfigError


def test_environment_defaults():
    dev = AppConfig.for_environment(Environment.DEVELOPMENT)
    assert dev.debug is True
    assert dev.logging.level == "DEBUG"
    assert dev.storage.backend == "file"

    testing = AppConfig.for_environment(Environment.TESTING)
    assert testing.storage.backend == "memory"
    assert testing.logging.level == "WARNING"

    prod = AppConfig.for_environment(Environment.PRODUCTION)
    assert prod.debug is False
    assert prod.web.reload is False

    print("✓ Environment defaults work")


def test_from_dict_overrides_sections():
    config = AppConfig.from_dict({
        "environment": "production",
        "storage": {"backend": "memory", "key": "Other"},
        "web": {"port": 8080, "title": "Scores"},
        "logging": {"level": "ERROR"},
    })
    assert config.environment is Environment.PRODUCTION
    assert config.storage.backend == "memory"
    assert config.storage.key == "Other"
    assert config.web.port == 8080
    assert config.web.title == "Scores"
    assert config.logging.level == "ERROR"


def test_from_dict_rejects_unknown_settings():
    with pytest.raises(ConfigError):
        AppConfig.from_dict({"web": {"colour": "blue"}})
    with pytest.raises(ConfigError):
        AppConfig.from_dict({"environment": "staging"})
    with pytest.raises(ConfigError):
        AppConfig.from_dict({"storage": "memory"})


def test_from_file_json_and_yaml(tmp_path):
    json_path = tmp_path / "blockcount.json"
    json_path.write_text(json.dumps({"environment": "testing", "web": {"port": 9000}}))
    config = AppConfig.from_file(json_path)
    assert config.environment is Environment.TESTING
    assert config.web.port == 9000

    yaml_path = tmp_path / "blockcount.yaml"
    yaml_path.write_text("storage:\n  backend: file\n  directory: /tmp/blocks\nweb:\n  host: 0.0.0.0\n")
    config = AppConfig.from_file(yaml_path)
    assert config.storage.directory == "/tmp/blocks"
    assert config.web.host == "0.0.0.0"

    print("✓ File loading works")


def test_from_file_errors(tmp_path):
    with pytest.raises(ConfigError):
        AppConfig.from_file(tmp_path / "missing.json")

    bad_json = tmp_path / "bad.json"
    bad_json.write_text("{")
    with pytest.raises(ConfigError):
        AppConfig.from_file(bad_json)

    ini = tmp_path / "config.ini"
    ini.write_text("[web]")
    with pytest.raises(ConfigError):
        AppConfig.from_file(ini)

    listing = tmp_path / "list.yaml"
    listing.write_text("- a\n- b\n")
    with pytest.raises(ConfigError):
        AppConfig.from_file(listing)


def test_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("BLOCKCOUNT_ENV", "production")
    monkeypatch.setenv("BLOCKCOUNT_STORAGE_DIR", str(tmp_path))
    monkeypatch.setenv("BLOCKCOUNT_STORAGE_KEY", "Court1")
    monkeypatch.setenv("BLOCKCOUNT_PORT", "8123")
    monkeypatch.setenv("BLOCKCOUNT_LOG_LEVEL", "warning")

    config = AppConfig.from_environment()
    assert config.environment is Environment.PRODUCTION
    assert config.storage.directory == str(tmp_path)
    assert config.storage.key == "Court1"
    assert config.web.port == 8123
    assert config.logging.level == "WARNING"

    monkeypatch.setenv("BLOCKCOUNT_PORT", "eighty")
    with pytest.raises(ConfigError):
        AppConfig.from_environment()


def test_to_dict_round_trips_through_from_dict():
    config = AppConfig.for_environment(Environment.TESTING)
    config.web.port = 7000
    data = config.to_dict()
    assert data["environment"] == "testing"
    assert data["storage"]["backend"] == "memory"

    again = AppConfig.from_dict(data)
    assert again.to_dict() == data


def test_global_config_accessors():
    config = AppConfig.for_environment(Environment.TESTING)
    set_config(config)
    try:
        assert get_config() is config
    finally:
        set_config(None)


def test_configure_logging_with_file(tmp_path):
    log_file = tmp_path / "logs" / "blockcount.log"
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        root.handlers = []
        configure_logging(LoggingConfig(level="info", file_path=str(log_file)))
        assert root.level == logging.INFO
        assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)

        logging.getLogger("blockcount.test").info("hello from the board")
        for handler in root.handlers:
            handler.flush()
        assert "hello from the board" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers = saved_handlers
        root.setLevel(saved_level)
