"""
API Dependencies

Dependency injection for the API.
"""

from __future__ import annotations

import logging
from pathlib import Path

from arbor.config.runtime import RuntimeConfig, get_default_config, set_default_config


logger = logging.getLogger(__name__)


def _load_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from a config file, then overlay environment variables.

    Search order for config file:
      1. ./arbor.yaml
      2. ~/.config/arbor/config.yaml

    Environment variables ALWAYS override config file values.
    The .env file is loaded automatically by arbor.config.runtime on import.
    """
    search_paths = [
        Path.cwd() / "arbor.yaml",
        Path.home() / ".config" / "arbor" / "config.yaml",
    ]

    for path in search_paths:
        if path.exists():
            logger.info("Loaded config from %s", path)
            return RuntimeConfig.from_yaml(path).with_env_overrides()

    return get_default_config()


def get_config() -> RuntimeConfig:
    """FastAPI dependency returning the process-wide runtime configuration."""
    return get_default_config()


def init_config() -> RuntimeConfig:
    """Resolve configuration once at startup and install it as the default."""
    config = _load_runtime_config()
    set_default_config(config)
    return config
