"""
Schemas for the anchoring core: error taxonomy and ledger records.
"""

from .anchor import AnchorRecord, BlockRef
from .errors import (
    AnchorError,
    AnchorException,
    EmptyBatchException,
    ErrorCodes,
    IndexOutOfRangeException,
    InvalidLeafSizeException,
    LedgerQueryException,
    LedgerSubmitException,
    UnsupportedHashAlgorithmException,
)

__all__ = [
    "AnchorRecord",
    "BlockRef",
    "AnchorError",
    "AnchorException",
    "EmptyBatchException",
    "ErrorCodes",
    "IndexOutOfRangeException",
    "InvalidLeafSizeException",
    "LedgerQueryException",
    "LedgerSubmitException",
    "UnsupportedHashAlgorithmException",
]
