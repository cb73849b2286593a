"""
Crypto - Hashing Utilities
Hash primitives, the hash registry and hex encoding for Merkle commitments.

This module provides:
- Keccak-256 (default), SHA-256 and SHA3-256 over raw bytes
- A name -> hash function registry used by configuration, CLI and API
- Canonical hashing for structured objects (via dumps_canonical)
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- Every registered function is deterministic with a fixed 32-byte output
"""
from __future__ import annotations

import hashlib
from typing import Any, Callable

from eth_utils import keccak

from arbor.schemas.canonical import encode_canonical
from arbor.schemas.errors import UnsupportedHashAlgorithmException


HashFunction = Callable[[bytes], bytes]

DEFAULT_HASH_ALGORITHM = "keccak256"


def keccak256(data: bytes) -> bytes:
    """
    Compute the Keccak-256 digest of raw bytes.

    This is the original Keccak padding used by Ethereum, not the
    NIST SHA3-256 variant.

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(primitive=data)


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def sha3_256(data: bytes) -> bytes:
    """Compute NIST SHA3-256 hash of raw bytes."""
    return hashlib.sha3_256(data).digest()


HASH_FUNCTIONS: dict[str, HashFunction] = {
    "keccak256": keccak256,
    "sha256": sha256,
    "sha3_256": sha3_256,
}


def get_hash_function(name: str) -> HashFunction:
    """
    Look up a hash function by registry name.

    Lookup is case-insensitive and accepts "-" in place of "_"
    (so "SHA3-256" resolves to sha3_256).

    Raises:
        UnsupportedHashAlgorithmException: If the name is not registered
    """
    key = name.strip().lower().replace("-", "_")
    try:
        return HASH_FUNCTIONS[key]
    except KeyError:
        raise UnsupportedHashAlgorithmException(
            algorithm=name,
            supported=sorted(HASH_FUNCTIONS),
        ) from None


def hash_concat(left: bytes, right: bytes, hash_fn: HashFunction = keccak256) -> bytes:
    """
    Hash the concatenation of two byte sequences: H(left + right).

    Order-sensitive; hash_concat(a, b) != hash_concat(b, a) in general.
    """
    return hash_fn(left + right)


def hash_canonical(obj: Any, hash_fn: HashFunction = keccak256) -> bytes:
    """
    Hash an object using canonical JSON serialization.

    Rule: digest = H(dumps_canonical(obj).encode("utf-8"))

    Raises:
        CanonicalizationException: If object cannot be canonically serialized
    """
    return hash_fn(encode_canonical(obj))


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


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
