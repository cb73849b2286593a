"""
API Request Models

Pydantic models for API request validation.
"""

from typing import Literal

from pydantic import BaseModel, Field

from arbor.schemas.proof import InclusionProof


LeafEncoding = Literal["text", "hex"]


class LeavesRequest(BaseModel):
    """Request body for POST /merkle/root."""

    leaves: list[str] = Field(
        ...,
        description="Ordered leaf values",
    )
    encoding: LeafEncoding = Field(
        default="text",
        description="'text' leaves are encoded with the configured leaf encoding, "
                    "'hex' leaves are 0x-prefixed raw bytes",
    )
    hash_algorithm: str | None = Field(
        default=None,
        description="Hash algorithm (default: configured algorithm)",
    )


class ProofRequest(LeavesRequest):
    """Request body for POST /merkle/proof."""

    index: int = Field(
        ...,
        description="0-based index of the leaf to prove",
    )


class VerifyRequest(BaseModel):
    """Request body for POST /merkle/verify."""

    leaf: str = Field(..., description="The leaf value")
    encoding: LeafEncoding = Field(default="text")
    proof: InclusionProof = Field(..., description="Proof document from /merkle/proof")
    root: str | None = Field(
        default=None,
        description="Trusted 0x-prefixed root (default: the proof's own root)",
    )
