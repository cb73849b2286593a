"""
API request and response models.
"""

from arbor_api.models.requests import LeavesRequest, ProofRequest, VerifyRequest
from arbor_api.models.responses import (
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    ProofResponse,
    RootResponse,
    VerifyResponse,
)

__all__ = [
    "LeavesRequest",
    "ProofRequest",
    "VerifyRequest",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "ProofResponse",
    "RootResponse",
    "VerifyResponse",
]
