"""
Hashing Unit Tests
Tests for arbor/crypto/hashing.py

Tests:
- keccak256 / sha256 / sha3_256 known values
- Hash registry lookup
- hash_concat ordering and hash_canonical key-order stability
- to_hex/from_hex round trip and validation
"""
import hashlib

import pytest

from arbor.crypto.hashing import (
    DEFAULT_HASH_ALGORITHM,
    HASH_FUNCTIONS,
    from_hex,
    get_hash_function,
    hash_canonical,
    hash_concat,
    keccak256,
    sha256,
    sha3_256,
    to_hex,
)
from arbor.schemas.errors import ErrorCodes, UnsupportedHashAlgorithmException


KECCAK_EMPTY = "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"


class TestKeccak256:
    """Tests for keccak256()."""

    def test_empty_input_known_value(self):
        assert keccak256(b"").hex() == KECCAK_EMPTY

    def test_differs_from_nist_sha3(self):
        """Keccak padding is not the SHA3-256 padding."""
        assert keccak256(b"") != hashlib.sha3_256(b"").digest()

    def test_output_length(self):
        assert len(keccak256(b"hello")) == 32

    def test_deterministic(self):
        assert keccak256(b"abc") == keccak256(b"abc")


class TestOtherHashes:
    """Tests for sha256() and sha3_256()."""

    def test_sha256_known_value(self):
        assert sha256(b"hello") == hashlib.sha256(b"hello").digest()

    def test_sha3_256_known_value(self):
        assert sha3_256(b"hello") == hashlib.sha3_256(b"hello").digest()


class TestRegistry:
    """Tests for the hash function registry."""

    def test_default_is_registered(self):
        assert DEFAULT_HASH_ALGORITHM == "keccak256"
        assert HASH_FUNCTIONS[DEFAULT_HASH_ALGORITHM] is keccak256

    @pytest.mark.parametrize("name,expected", [
        ("keccak256", keccak256),
        ("KECCAK256", keccak256),
        ("sha256", sha256),
        ("sha3_256", sha3_256),
        ("SHA3-256", sha3_256),
        (" sha256 ", sha256),
    ])
    def test_lookup(self, name, expected):
        assert get_hash_function(name) is expected

    def test_unknown_algorithm(self):
        with pytest.raises(UnsupportedHashAlgorithmException) as exc_info:
            get_hash_function("md5")
        assert exc_info.value.code == ErrorCodes.UNSUPPORTED_HASH_ALGORITHM
        assert exc_info.value.details["supported"] == sorted(HASH_FUNCTIONS)

    def test_unknown_algorithm_is_value_error(self):
        with pytest.raises(ValueError):
            get_hash_function("blake3")


class TestHashConcat:
    """Tests for hash_concat()."""

    def test_matches_manual_concatenation(self):
        assert hash_concat(b"ab", b"cd") == keccak256(b"abcd")

    def test_order_sensitive(self):
        assert hash_concat(b"a", b"b") != hash_concat(b"b", b"a")

    def test_custom_hash(self):
        assert hash_concat(b"a", b"b", sha256) == sha256(b"ab")


class TestHashCanonical:
    """Tests for hash_canonical()."""

    def test_key_order_independent(self):
        assert hash_canonical({"a": 1, "b": 2}) == hash_canonical({"b": 2, "a": 1})

    def test_matches_compact_json(self):
        assert hash_canonical({"b": 2, "a": 1}) == keccak256(b'{"a":1,"b":2}')


class TestHex:
    """Tests for to_hex() / from_hex()."""

    def test_round_trip(self):
        data = bytes(range(32))
        assert from_hex(to_hex(data)) == data

    def test_to_hex_prefix(self):
        assert to_hex(b"\xde\xad") == "0xdead"

    def test_empty(self):
        assert to_hex(b"") == "0x"
        assert from_hex("0x") == b""

    def test_uppercase_accepted(self):
        assert from_hex("0xDEAD") == b"\xde\xad"

    def test_missing_prefix(self):
        with pytest.raises(ValueError, match="0x"):
            from_hex("dead")

    def test_odd_length(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_invalid_characters(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xzz")
