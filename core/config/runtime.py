"""
Runtime Configuration

Central configuration for chunking, the ledger and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from core.merkle.chunking import DEFAULT_CHUNK_SIZE

load_dotenv()


ENV_PREFIX = "WITNESS_"


def _parse_chunk_size(value: Any) -> int:
    try:
        chunk_size = int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"chunk_size must be an integer, got {value!r}") from e
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    return chunk_size


@dataclass
class LedgerConfig:
    """Configuration for chunking and commitment construction."""
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self):
        self.chunk_size = _parse_chunk_size(self.chunk_size)


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - WITNESS_CHUNK_SIZE: Chunk size in bytes
        - WITNESS_LOG_LEVEL: Log level name
        - WITNESS_LOG_FILE: Optional log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}CHUNK_SIZE"):
            overrides.setdefault("ledger", {})["chunk_size"] = os.getenv(f"{ENV_PREFIX}CHUNK_SIZE")

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        ledger_data = data.get("ledger", {})
        logging_data = data.get("logging", {})

        ledger = LedgerConfig(**ledger_data) if ledger_data else LedgerConfig()
        log = LoggingConfig(**logging_data) if logging_data else LoggingConfig()

        return cls(
            ledger=ledger,
            logging=log,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "ledger" in overrides:
            new_config.ledger = LedgerConfig(**{**self.ledger.__dict__, **overrides["ledger"]})

        if "logging" in overrides:
            for key, value in overrides["logging"].items():
                setattr(new_config.logging, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "ledger": {
                "chunk_size": self.ledger.chunk_size,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
            "extra": self.extra,
        }


def get_default_config_template() -> str:
    """Get a template YAML configuration file."""
    return """ledger:
  chunk_size: 32
logging:
  level: INFO
  file: null
"""


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
