"""
API Error Handling

Standardized error handling for the API.
"""

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from arbor.schemas.errors import ArborException, ErrorCodes
from arbor_api.models.responses import ErrorDetail, ErrorResponse


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )


class InvalidRequestError(APIError):
    """Invalid request parameters."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="INVALID_REQUEST",
            message=message,
            status_code=400,
            details=details,
        )


class TooManyLeavesError(APIError):
    """Request exceeds the configured leaf limit."""

    def __init__(self, leaf_count: int, max_leaves: int):
        super().__init__(
            code="TOO_MANY_LEAVES",
            message=f"Request has {leaf_count} leaves, limit is {max_leaves}",
            status_code=413,
            details={"leaf_count": leaf_count, "max_leaves": max_leaves},
        )


# Errors caused by the caller's input rather than the service
_CLIENT_ERROR_CODES = {
    ErrorCodes.EMPTY_TREE,
    ErrorCodes.INDEX_OUT_OF_RANGE,
    ErrorCodes.UNSUPPORTED_HASH_ALGORITHM,
    ErrorCodes.CANONICALIZATION_ERROR,
    ErrorCodes.INVALID_DIGEST_ENCODING,
    ErrorCodes.MERKLE_PROOF_INVALID,
}


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def arbor_error_handler(request: Request, exc: ArborException) -> JSONResponse:
    """Handle domain exceptions raised by the tree."""
    status_code = 400 if exc.code in _CLIENT_ERROR_CODES else 500
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(**exc.to_error_model().model_dump()),
        ).model_dump(),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )
