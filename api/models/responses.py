"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field

from api.models.requests import ProofStepModel
from core.schemas.anchor import AnchorRecord, BlockRef


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "merkle-anchor-api"
    version: str = "v1"
    hash_algorithm: str = "blake2s"
    ledger_backend: str = "memory"


class BatchAnchorResponse(BaseModel):
    """Response for POST /anchor/batch."""

    ok: bool = True
    root: str = Field(..., description="Anchored Merkle root")
    leaf_count: int = Field(..., description="Number of leaves in the batch")
    block: BlockRef = Field(..., description="Ledger position of the anchor")
    proofs: list[list[ProofStepModel]] = Field(
        ...,
        description="One proof per leaf, in request order",
    )


class CheckResponse(BaseModel):
    """Response for POST /anchor/check."""

    ok: bool = True
    anchored: bool = Field(..., description="Whether the recomputed root is anchored")
    root: str = Field(..., description="Root recomputed from leaf and proof")
    record: AnchorRecord | None = Field(default=None)


class RootResponse(BaseModel):
    """Response for POST /merkle/root."""

    ok: bool = True
    root: str
    leaf_count: int
    proof_length: int


class VerifyResponse(BaseModel):
    """Response for POST /merkle/verify."""

    ok: bool = True
    valid: bool = Field(..., description="Whether the computed root equals the expected root")
    computed_root: str
    expected_root: str


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)
    retryable: bool = Field(default=False, description="Whether retrying the request may succeed")


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
