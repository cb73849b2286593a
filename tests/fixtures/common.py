"""
Common test fixtures shared by all modules.

Provides factory functions for leaf sequences and the hand-written
H / merge helpers used to spell out expected roots.
"""

import random
import string

from arbor.crypto.hashing import keccak256


def H(value: str | bytes) -> bytes:
    """Keccak-256 of a leaf, accepting text for readability."""
    if isinstance(value, str):
        value = value.encode("utf-8")
    return keccak256(value)


def merge(left: bytes, right: bytes) -> bytes:
    """Parent digest written out by hand: keccak256(left + right)."""
    return keccak256(left + right)


def make_letter_leaves(n: int) -> list[bytes]:
    """Leaves b"A", b"B", ... for the first n letters."""
    return [c.encode("utf-8") for c in string.ascii_uppercase[:n]]


def make_leaves(n: int, prefix: str = "leaf") -> list[bytes]:
    """Leaves b"leaf0", b"leaf1", ..."""
    return [f"{prefix}{i}".encode("utf-8") for i in range(n)]


def make_random_leaves(n: int, seed: int = 0, max_len: int = 48) -> list[bytes]:
    """Deterministic pseudo-random leaves of varying length (empty allowed)."""
    rng = random.Random(seed)
    return [bytes(rng.getrandbits(8) for _ in range(rng.randint(0, max_len))) for _ in range(n)]
