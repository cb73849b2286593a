"""
Helpers shared by CLI commands.
"""

from __future__ import annotations

from argparse import Namespace

from arbor.config.runtime import RuntimeConfig
from arbor.crypto.hashing import HashFunction, get_hash_function


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def resolve_hash(args: Namespace) -> tuple[str, HashFunction]:
    """
    Pick the hash algorithm: --hash flag first, then configuration.

    Returns:
        (algorithm name, hash function)

    Raises:
        UnsupportedHashAlgorithmException: If the name is unknown
    """
    config: RuntimeConfig = args.cli_config
    name = getattr(args, "hash", None) or config.tree.hash_algorithm
    return name, get_hash_function(name)


def leaf_encoding(args: Namespace) -> str:
    config: RuntimeConfig = args.cli_config
    return config.tree.leaf_encoding
