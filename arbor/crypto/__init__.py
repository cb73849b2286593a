"""
Core cryptographic utilities.

Hash primitives, the hash registry and hex encoding.
"""
from .hashing import (
    HashFunction,
    DEFAULT_HASH_ALGORITHM,
    HASH_FUNCTIONS,
    keccak256,
    sha256,
    sha3_256,
    get_hash_function,
    hash_concat,
    hash_canonical,
    to_hex,
    from_hex,
)

__all__ = [
    "HashFunction",
    "DEFAULT_HASH_ALGORITHM",
    "HASH_FUNCTIONS",
    "keccak256",
    "sha256",
    "sha3_256",
    "get_hash_function",
    "hash_concat",
    "hash_canonical",
    "to_hex",
    "from_hex",
]
