"""
Schemas - Inclusion Proofs
File: proof.py

Purpose: The in-memory proof step type shared by the proof builder and
verifier, and the InclusionProof document used to move a proof across
process boundaries (CLI files, HTTP bodies).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from arbor.crypto.hashing import from_hex, to_hex


PROOF_SCHEMA_VERSION = "v1"


class Side(str, Enum):
    """Position of a sibling digest relative to the path node."""
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class ProofStep:
    """
    One level of an inclusion proof.

    Attributes:
        sibling: Digest of the path node's sibling at this level
        side: Where the sibling goes when folding. LEFT means
              merge(sibling, acc), RIGHT means merge(acc, sibling).
    """
    sibling: bytes
    side: Side

    def __post_init__(self) -> None:
        if not isinstance(self.side, Side):
            object.__setattr__(self, "side", Side(self.side))


def _check_hex(value: str) -> str:
    from_hex(value)
    return value


class ProofStepModel(BaseModel):
    """Serialized form of a ProofStep."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    sibling: str = Field(..., description="0x-prefixed sibling digest")
    side: Side = Field(..., description="Sibling position: left or right")

    @field_validator("sibling")
    @classmethod
    def _validate_sibling(cls, v: str) -> str:
        return _check_hex(v)


class InclusionProof(BaseModel):
    """
    Transport document for a single-leaf inclusion proof.

    Carries everything a verifier needs besides the leaf itself:
    the ordered steps, the root the proof was built against and the
    hash algorithm used to build it.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: str = Field(default=PROOF_SCHEMA_VERSION)
    hash_algorithm: str = Field(..., min_length=1)
    leaf_index: int = Field(..., ge=0)
    leaf_count: int = Field(..., ge=1)
    leaf_hash: str = Field(..., description="0x-prefixed digest of the leaf")
    root: str = Field(..., description="0x-prefixed Merkle root")
    steps: list[ProofStepModel] = Field(default_factory=list)

    @field_validator("leaf_hash", "root")
    @classmethod
    def _validate_digest(cls, v: str) -> str:
        return _check_hex(v)

    @model_validator(mode="after")
    def _validate_index(self) -> "InclusionProof":
        if self.leaf_index >= self.leaf_count:
            raise ValueError(
                f"leaf_index {self.leaf_index} must be less than leaf_count {self.leaf_count}"
            )
        return self

    @classmethod
    def from_steps(
        cls,
        *,
        hash_algorithm: str,
        leaf_index: int,
        leaf_count: int,
        leaf_hash: bytes,
        root: bytes,
        steps: Sequence[ProofStep],
    ) -> "InclusionProof":
        """Build a document from raw digests and proof steps."""
        return cls(
            hash_algorithm=hash_algorithm,
            leaf_index=leaf_index,
            leaf_count=leaf_count,
            leaf_hash=to_hex(leaf_hash),
            root=to_hex(root),
            steps=[ProofStepModel(sibling=to_hex(s.sibling), side=s.side) for s in steps],
        )

    def to_steps(self) -> list[ProofStep]:
        """Decode the document back into ProofSteps."""
        return [ProofStep(sibling=from_hex(s.sibling), side=s.side) for s in self.steps]

    @property
    def root_bytes(self) -> bytes:
        return from_hex(self.root)

    @property
    def leaf_hash_bytes(self) -> bytes:
        return from_hex(self.leaf_hash)


__all__ = [
    "PROOF_SCHEMA_VERSION",
    "Side",
    "ProofStep",
    "ProofStepModel",
    "InclusionProof",
]
