"""
Configuration Management for BlockCount

Dataclass-based application configuration with per-environment defaults,
JSON/YAML file loading and ``BLOCKCOUNT_*`` environment overrides.
"""

import json
import logging
import logging.handlers
import os
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .core.exceptions import ConfigError
from .core.store import DEFAULT_STORAGE_KEY


class Environment(Enum):
    """Application environments"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


@dataclass
class StorageConfig:
    """Local storage slot configuration"""
    backend: str = "file"
    directory: str = str(Path.home() / ".blockcount")
    key: str = DEFAULT_STORAGE_KEY


@dataclass
class WebConfig:
    """Web server configuration"""
    host: str = "localhost"
    port: int = 5001
    title: str = "羽球小學堂"
    reload: bool = False
    secret_key: Optional[str] = None


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class AppConfig:
    """Complete application configuration"""
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False

    storage: StorageConfig = field(default_factory=StorageConfig)
    web: WebConfig = field(default_factory=WebConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def for_environment(cls, environment: Environment) -> 'AppConfig':
        """Create configuration for specific environment"""
        config = cls(environment=environment)

        if environment == Environment.DEVELOPMENT:
            config.debug = True
            config.web.reload = True
            config.logging.level = "DEBUG"

        elif environment == Environment.TESTING:
            config.storage.backend = "memory"
            config.logging.level = "WARNING"

        elif environment == Environment.PRODUCTION:
            config.debug = False
            config.web.reload = False
            config.logging.level = "INFO"

        return config

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'AppConfig':
        """Create configuration from dictionary"""
        try:
            environment = Environment(config_dict.get("environment", Environment.DEVELOPMENT.value))
        except ValueError as e:
            raise ConfigError(str(e)) from e

        config = cls.for_environment(environment)

        if "debug" in config_dict:
            config.debug = bool(config_dict["debug"])

        for section in ("storage", "web", "logging"):
            values = config_dict.get(section) or {}
            if not isinstance(values, dict):
                raise ConfigError(f"Section {section!r} must be a mapping")
            target = getattr(config, section)
            for key, value in values.items():
                if not hasattr(target, key):
                    raise ConfigError(f"Unknown setting {section}.{key}")
                setattr(target, key, value)

        return config

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> 'AppConfig':
        """Load configuration from a JSON or YAML file"""
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, encoding="utf-8") as f:
                if config_path.suffix == '.json':
                    config_dict = json.load(f)
                elif config_path.suffix in ('.yml', '.yaml'):
                    config_dict = yaml.safe_load(f) or {}
                else:
                    raise ConfigError(f"Unsupported configuration file format: {config_path.suffix}")
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigError(f"Could not read configuration file {config_path}: {e}") from e

        if not isinstance(config_dict, dict):
            raise ConfigError(f"Configuration file {config_path} must contain a mapping")
        return cls.from_dict(config_dict)

    @classmethod
    def from_environment(cls) -> 'AppConfig':
        """Create configuration from environment variables"""
        env_name = os.getenv('BLOCKCOUNT_ENV', 'development')
        try:
            environment = Environment(env_name)
        except ValueError as e:
            raise ConfigError(str(e)) from e

        config = cls.for_environment(environment)

        if os.getenv('BLOCKCOUNT_DEBUG'):
            config.debug = os.getenv('BLOCKCOUNT_DEBUG').lower() == 'true'

        if os.getenv('BLOCKCOUNT_STORAGE_BACKEND'):
            config.storage.backend = os.getenv('BLOCKCOUNT_STORAGE_BACKEND')

        if os.getenv('BLOCKCOUNT_STORAGE_DIR'):
            config.storage.directory = os.getenv('BLOCKCOUNT_STORAGE_DIR')

        if os.getenv('BLOCKCOUNT_STORAGE_KEY'):
            config.storage.key = os.getenv('BLOCKCOUNT_STORAGE_KEY')

        if os.getenv('BLOCKCOUNT_HOST'):
            config.web.host = os.getenv('BLOCKCOUNT_HOST')

        if os.getenv('BLOCKCOUNT_PORT'):
            try:
                config.web.port = int(os.getenv('BLOCKCOUNT_PORT'))
            except ValueError as e:
                raise ConfigError(f"BLOCKCOUNT_PORT must be an integer: {e}") from e

        if os.getenv('BLOCKCOUNT_SECRET_KEY'):
            config.web.secret_key = os.getenv('BLOCKCOUNT_SECRET_KEY')

        if os.getenv('BLOCKCOUNT_LOG_LEVEL'):
            config.logging.level = os.getenv('BLOCKCOUNT_LOG_LEVEL').upper()

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return {
            "environment": self.environment.value,
            "debug": self.debug,
            "storage": asdict(self.storage),
            "web": asdict(self.web),
            "logging": asdict(self.logging),
        }


def configure_logging(config: LoggingConfig) -> None:
    """Install root handlers for the configured level and destination."""
    formatter = logging.Formatter(config.format)
    handlers = [logging.StreamHandler()]
    if config.file_path:
        Path(config.file_path).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
            encoding="utf-8",
        ))
    for handler in handlers:
        handler.setFormatter(formatter)
    logging.basicConfig(level=config.level.upper(), handlers=handlers, force=True)


# Global configuration management
_current_config: Optional[AppConfig] = None


def set_config(config: AppConfig):
    """Set the global configuration"""
    global _current_config
    _current_config = config


def get_config() -> AppConfig:
    """Get the current global configuration"""
    global _current_config

    if _current_config is None:
        _current_config = AppConfig.from_environment()

    return _current_config


__all__ = [
    "AppConfig", "Environment", "StorageConfig", "WebConfig", "LoggingConfig",
    "configure_logging", "set_config", "get_config",
]
