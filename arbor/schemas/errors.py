"""
Schemas - Error Taxonomy
File: errors.py

Purpose: Standard error taxonomy for tree construction, proof building and
proof verification. Defines both Pydantic models for structured error
communication and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Schema & Validation Errors
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"
    INVALID_DIGEST_ENCODING = "INVALID_DIGEST_ENCODING"

    # Tree Construction Errors
    EMPTY_TREE = "EMPTY_TREE"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"
    UNSUPPORTED_HASH_ALGORITHM = "UNSUPPORTED_HASH_ALGORITHM"

    # Merkle & Commitment Errors
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"
    ROOT_MISMATCH = "ROOT_MISMATCH"

    # Configuration Errors
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class ArborError(BaseModel):
    """
    Base error model for structured error communication.

    Used wherever an error has to cross a serialization boundary
    (HTTP responses, JSON reports) instead of being raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INDEX_OUT_OF_RANGE],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )

    def to_exception(self) -> "ArborException":
        """Convert this error model to a raised exception."""
        return ArborException(
            code=self.code,
            message=self.message,
            details=self.details,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class ArborException(Exception):
    """
    Base exception for all Arbor errors.

    Carries structured error information and can be converted
    to/from ArborError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "ARBOR_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> ArborError:
        """Convert this exception to an ArborError model."""
        return ArborError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyTreeException(ArborException, ValueError):
    """Raised when a tree, root or proof is requested over zero leaves."""

    def __init__(
        self,
        message: str = "Cannot build a Merkle tree from an empty leaf sequence",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_TREE,
            details=details,
        )


class IndexOutOfRangeException(ArborException, IndexError):
    """Raised when a proof is requested for an index outside [0, leaf_count)."""

    def __init__(
        self,
        index: int,
        leaf_count: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["index"] = index
        full_details["leaf_count"] = leaf_count
        super().__init__(
            message=f"Leaf index {index} out of range for {leaf_count} leaves",
            code=ErrorCodes.INDEX_OUT_OF_RANGE,
            details=full_details,
        )
        self.index = index
        self.leaf_count = leaf_count


class UnsupportedHashAlgorithmException(ArborException, ValueError):
    """Raised when a hash algorithm name is not in the registry."""

    def __init__(
        self,
        algorithm: str,
        supported: list[str] | None = None,
    ) -> None:
        details: dict[str, Any] = {"algorithm": algorithm}
        if supported:
            details["supported"] = supported
        super().__init__(
            message=f"Unsupported hash algorithm: {algorithm!r}",
            code=ErrorCodes.UNSUPPORTED_HASH_ALGORITHM,
            details=details,
        )


class CanonicalizationException(ArborException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
        )


class MerkleVerificationException(ArborException):
    """Exception raised when a Merkle inclusion proof does not verify."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.MERKLE_PROOF_INVALID,
            details=full_details,
        )


class ConfigurationException(ArborException):
    """Exception raised when runtime configuration is invalid."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if key:
            full_details["key"] = key
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=full_details,
        )


__all__ = [
    "ErrorCodes",
    "ArborError",
    "ArborException",
    "EmptyTreeException",
    "IndexOutOfRangeException",
    "UnsupportedHashAlgorithmException",
    "CanonicalizationException",
    "MerkleVerificationException",
    "ConfigurationException",
]
