"""
Ledger Record Schemas

Purpose: Values returned by ledger backends. A BlockRef is what a
submission yields; an AnchorRecord is what a lookup yields. Both are
owned by the ledger and treated as read-only here.
"""

import re
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


_ROOT_HEX_PATTERN = re.compile(r"^0x[0-9a-f]{64}$")


def _normalize_root_hex(value: str) -> str:
    value = value.lower()
    if not value.startswith("0x"):
        value = "0x" + value
    if not _ROOT_HEX_PATTERN.match(value):
        raise ValueError("root must be a 32-byte hex string")
    return value


class BlockRef(BaseModel):
    """Position on the ledger at which a root was committed."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    block_number: int = Field(
        ...,
        ge=0,
        description="Ledger block (or sequence) number",
    )
    block_hash: str | None = Field(
        default=None,
        description="Hash of the block, if the ledger exposes one",
    )


class AnchorRecord(BaseModel):
    """
    Ledger-side association between a root and the block it was committed in.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    root: str = Field(
        ...,
        description="Anchored root as 0x-prefixed lowercase hex",
    )
    block_number: int = Field(
        ...,
        ge=0,
        description="Ledger block (or sequence) number",
    )
    block_hash: str | None = Field(default=None)
    anchored_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Time the ledger recorded the anchor",
    )

    @field_validator("root")
    @classmethod
    def validate_root(cls, v: str) -> str:
        return _normalize_root_hex(v)

    @property
    def block(self) -> BlockRef:
        """The block reference part of this record."""
        return BlockRef(block_number=self.block_number, block_hash=self.block_hash)


__all__ = [
    "AnchorRecord",
    "BlockRef",
]
