"""
Runtime Configuration

Central configuration for hashing, logging and the HTTP service.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from arbor.crypto.hashing import DEFAULT_HASH_ALGORITHM, HashFunction, get_hash_function
from arbor.schemas.errors import ConfigurationException

load_dotenv()


ENV_PREFIX = "ARBOR_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class TreeConfig:
    """Configuration for tree construction."""
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    leaf_encoding: str = "utf-8"


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class ApiConfig:
    """Configuration for the HTTP service."""
    host: str = "0.0.0.0"
    port: int = 8000
    max_leaves: int = 65536


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    tree: TreeConfig = field(default_factory=TreeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        Check values that would otherwise fail late.

        Raises:
            ConfigurationException: On an unknown hash algorithm, text
                encoding or log level, or a non-positive leaf limit
        """
        try:
            get_hash_function(self.tree.hash_algorithm)
        except ValueError as e:
            raise ConfigurationException(str(e), key="tree.hash_algorithm") from e

        try:
            "".encode(self.tree.leaf_encoding)
        except LookupError as e:
            raise ConfigurationException(
                f"Unknown leaf encoding: {self.tree.leaf_encoding!r}",
                key="tree.leaf_encoding",
            ) from e

        if self.logging.level.upper() not in _LOG_LEVELS:
            raise ConfigurationException(
                f"Unknown log level: {self.logging.level!r}",
                key="logging.level",
            )

        if self.api.max_leaves < 1:
            raise ConfigurationException(
                f"api.max_leaves must be positive, got {self.api.max_leaves}",
                key="api.max_leaves",
            )

    @property
    def hash_function(self) -> HashFunction:
        return get_hash_function(self.tree.hash_algorithm)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the single place environment variables are read.

        Supported variables:
        - ARBOR_HASH_ALGORITHM: Hash algorithm (keccak256, sha256, sha3_256)
        - ARBOR_LEAF_ENCODING: Text encoding for string leaves
        - ARBOR_LOG_LEVEL: Log level
        - ARBOR_LOG_FILE: Optional log file path
        - ARBOR_API_HOST / ARBOR_API_PORT: HTTP bind address
        - ARBOR_API_MAX_LEAVES: Largest leaf count accepted per request
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
            overrides.setdefault("tree", {})["hash_algorithm"] = os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM")
        if os.getenv(f"{ENV_PREFIX}LEAF_ENCODING"):
            overrides.setdefault("tree", {})["leaf_encoding"] = os.getenv(f"{ENV_PREFIX}LEAF_ENCODING")

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper()
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        if os.getenv(f"{ENV_PREFIX}API_HOST"):
            overrides.setdefault("api", {})["host"] = os.getenv(f"{ENV_PREFIX}API_HOST")
        for key in ("port", "max_leaves"):
            raw = os.getenv(f"{ENV_PREFIX}API_{key.upper()}")
            if raw:
                try:
                    overrides.setdefault("api", {})[key] = int(raw)
                except ValueError as e:
                    raise ConfigurationException(
                        f"{ENV_PREFIX}API_{key.upper()} must be an integer, got {raw!r}",
                        key=f"api.{key}",
                    ) from e

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
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationException(f"Config file must contain a mapping: {path}")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        tree_data = data.get("tree") or {}
        logging_data = data.get("logging") or {}
        api_data = data.get("api") or {}

        try:
            tree = TreeConfig(**tree_data)
            logging_config = LoggingConfig(**logging_data)
            api = ApiConfig(**api_data)
        except TypeError as e:
            raise ConfigurationException(f"Invalid configuration: {e}") from e

        return cls(
            tree=tree,
            logging=logging_config,
            api=api,
            extra=data.get("extra") or {},
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
        for section, values in overrides.items():
            target = getattr(new_config, section)
            for key, value in values.items():
                setattr(target, key, value)

        new_config.validate()
        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "tree": {
                "hash_algorithm": self.tree.hash_algorithm,
                "leaf_encoding": self.tree.leaf_encoding,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
            "api": {
                "host": self.api.host,
                "port": self.api.port,
                "max_leaves": self.api.max_leaves,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig | None) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
