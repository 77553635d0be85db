"""
API Error Handling

Standardized error handling for the API. Anchoring core exceptions are
mapped to HTTP statuses by error code.
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse, ErrorDetail
from core.schemas.errors import AnchorException, ErrorCodes


logger = logging.getLogger(__name__)


# Core error code -> HTTP status
_STATUS_BY_CODE: dict[str, int] = {
    ErrorCodes.EMPTY_BATCH: 400,
    ErrorCodes.INVALID_LEAF_SIZE: 400,
    ErrorCodes.INDEX_OUT_OF_RANGE: 400,
    ErrorCodes.UNSUPPORTED_HASH_ALGORITHM: 400,
    ErrorCodes.LEDGER_SUBMIT_FAILURE: 502,
    ErrorCodes.LEDGER_QUERY_FAILURE: 502,
}


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


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def anchor_error_handler(request: Request, exc: AnchorException) -> JSONResponse:
    """Handle exceptions raised by the anchoring core and ledger backends."""
    status_code = _STATUS_BY_CODE.get(exc.code, 500)
    if status_code >= 500:
        logger.warning(f"{request.url.path} failed: {exc.code}: {exc.message}")
    error = exc.to_error_model()
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(**error.model_dump()),
        ).model_dump(),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled error on {request.url.path}")
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
