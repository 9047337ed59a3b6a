"""
Runtime Configuration Module

Provides configuration loading and management for the commitment ledger.
"""

from .runtime import (
    LedgerConfig,
    LoggingConfig,
    RuntimeConfig,
    get_default_config,
    get_default_config_template,
    set_default_config,
)

__all__ = [
    "LedgerConfig",
    "LoggingConfig",
    "RuntimeConfig",
    "get_default_config",
    "get_default_config_template",
    "set_default_config",
]
