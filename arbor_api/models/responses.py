"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field

from arbor.schemas.proof import InclusionProof


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "arbor-merkle-api"
    version: str = "v1"


class RootResponse(BaseModel):
    """Response for POST /merkle/root."""

    ok: bool = True
    hash_algorithm: str = Field(..., description="Hash algorithm used")
    leaf_count: int = Field(..., description="Number of leaves")
    depth: int = Field(..., description="Number of tree levels")
    root: str = Field(..., description="0x-prefixed Merkle root")


class ProofResponse(BaseModel):
    """Response for POST /merkle/proof."""

    ok: bool = True
    proof: InclusionProof


class VerifyResponse(BaseModel):
    """Response for POST /merkle/verify."""

    ok: bool = True
    valid: bool = Field(..., description="Whether the leaf is included under the root")
    expected_root: str
    computed_root: str
    root_source: str = Field(..., description="'request' or 'proof'")


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail
