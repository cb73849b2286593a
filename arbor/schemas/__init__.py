"""
Schemas - Public API

Exports the error taxonomy and canonical serialization helpers.
Proof documents live in arbor.schemas.proof and are imported from there
directly, since they depend on arbor.crypto.
"""

from .errors import (
    ErrorCodes,
    ArborError,
    ArborException,
    EmptyTreeException,
    IndexOutOfRangeException,
    UnsupportedHashAlgorithmException,
    CanonicalizationException,
    MerkleVerificationException,
    ConfigurationException,
)

from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    encode_canonical,
    canonical_equals,
)


__all__ = [
    # Errors
    "ErrorCodes",
    "ArborError",
    "ArborException",
    "EmptyTreeException",
    "IndexOutOfRangeException",
    "UnsupportedHashAlgorithmException",
    "CanonicalizationException",
    "MerkleVerificationException",
    "ConfigurationException",
    # Canonical serialization
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "encode_canonical",
    "canonical_equals",
]
