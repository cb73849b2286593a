"""
CLI Configuration

Locates and loads the runtime configuration for the CLI.
Supports YAML and JSON config files; environment variables always win.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from arbor.config.runtime import RuntimeConfig
from arbor.schemas.errors import ConfigurationException


logger = logging.getLogger(__name__)


def default_config_paths() -> list[Path]:
    """Config files searched, in order, when --config is not given."""
    return [
        Path.cwd() / "arbor.yaml",
        Path.cwd() / "arbor.json",
        Path.home() / ".config" / "arbor" / "config.yaml",
    ]


def load_config_from_file(path: Path) -> RuntimeConfig:
    """Load configuration from a YAML or JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    if path.suffix.lower() == ".json":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ConfigurationException(f"Config file must contain an object: {path}")
        return RuntimeConfig.from_dict(data)

    return RuntimeConfig.from_yaml(path)


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file. An explicit path
                     that does not exist is an error.

    Returns:
        Merged configuration
    """
    config = RuntimeConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = load_config_from_file(default_path)
                logger.debug("Loaded config from %s", default_path)
                break

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """# Arbor configuration
tree:
  # keccak256, sha256 or sha3_256
  hash_algorithm: keccak256
  # text encoding applied to string leaves
  leaf_encoding: utf-8

logging:
  level: INFO
  file: null

api:
  host: 0.0.0.0
  port: 8000
  max_leaves: 65536
"""
