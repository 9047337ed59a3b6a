"""
CLI Configuration

Resolves the RuntimeConfig used by CLI commands from a YAML file and/or
environment variables.
"""

from __future__ import annotations

from pathlib import Path

from core.config.runtime import RuntimeConfig


def default_config_paths() -> list[Path]:
    """Locations searched when no --config is given, in order."""
    return [
        Path.cwd() / "witness.yaml",
        Path.cwd() / ".witness.yaml",
        Path.home() / ".config" / "witness" / "config.yaml",
    ]


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to a YAML config file

    Returns:
        Merged configuration

    Raises:
        FileNotFoundError: If config_path is given but does not exist
    """
    if config_path is not None:
        return RuntimeConfig.from_yaml(config_path).with_env_overrides()

    for default_path in default_config_paths():
        if default_path.exists():
            return RuntimeConfig.from_yaml(default_path).with_env_overrides()

    return RuntimeConfig.from_env()
