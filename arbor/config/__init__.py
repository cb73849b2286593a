"""
Runtime Configuration Module

Provides configuration loading and management for Arbor.
"""

from .runtime import (
    ENV_PREFIX,
    RuntimeConfig,
    TreeConfig,
    LoggingConfig,
    ApiConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "ENV_PREFIX",
    "RuntimeConfig",
    "TreeConfig",
    "LoggingConfig",
    "ApiConfig",
    "get_default_config",
    "set_default_config",
]
