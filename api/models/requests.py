"""
API Request Models

Pydantic models for API request validation. Hashes travel as hex
strings (0x prefix optional); width is checked by the anchoring core so
that errors carry the core's error codes.
"""

from pydantic import BaseModel, Field


class ProofStepModel(BaseModel):
    """One step of an inclusion proof in wire form."""

    sibling: str = Field(..., description="Sibling hash as hex")
    is_left: bool = Field(
        ...,
        description="True when the proven node is the left operand at this level",
    )


class BatchAnchorRequest(BaseModel):
    """Request body for POST /anchor/batch."""

    leaves: list[str] = Field(
        ...,
        description="Ordered 32-byte leaf hashes as hex",
    )


class CheckRequest(BaseModel):
    """Request body for POST /anchor/check."""

    leaf: str = Field(..., description="Leaf hash as hex")
    proof: list[ProofStepModel] = Field(
        default_factory=list,
        description="Inclusion proof; empty for a single-leaf batch or a direct anchor",
    )


class RootRequest(BaseModel):
    """Request body for POST /merkle/root."""

    leaves: list[str] = Field(..., description="Ordered 32-byte leaf hashes as hex")


class VerifyRequest(BaseModel):
    """Request body for POST /merkle/verify."""

    leaf: str = Field(..., description="Leaf hash as hex")
    proof: list[ProofStepModel] = Field(default_factory=list)
    root: str = Field(..., description="Expected root as hex")
