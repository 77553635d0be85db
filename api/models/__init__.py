"""API request and response models."""

from api.models.requests import (
    BatchAnchorRequest,
    CheckRequest,
    ProofStepModel,
    RootRequest,
    VerifyRequest,
)
from api.models.responses import (
    BatchAnchorResponse,
    CheckResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    RootResponse,
    VerifyResponse,
)

__all__ = [
    "BatchAnchorRequest",
    "CheckRequest",
    "ProofStepModel",
    "RootRequest",
    "VerifyRequest",
    "BatchAnchorResponse",
    "CheckResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "RootResponse",
    "VerifyResponse",
]
