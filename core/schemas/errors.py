"""
Anchoring Error Taxonomy

Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Validation errors (empty batch, bad leaf width, bad index) are raised
locally before any ledger contact. Ledger errors are raised by the
ledger backends and surfaced to callers unmodified.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the anchoring core."""

    # Leaf & Batch Validation Errors
    EMPTY_BATCH = "EMPTY_BATCH"
    INVALID_LEAF_SIZE = "INVALID_LEAF_SIZE"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"
    UNSUPPORTED_HASH_ALGORITHM = "UNSUPPORTED_HASH_ALGORITHM"

    # Ledger Errors
    LEDGER_SUBMIT_FAILURE = "LEDGER_SUBMIT_FAILURE"
    LEDGER_QUERY_FAILURE = "LEDGER_QUERY_FAILURE"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class AnchorError(BaseModel):
    """
    Base error model for structured error communication.

    Used when errors cross a process boundary (API responses, CLI JSON
    output) instead of being raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.EMPTY_BATCH],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class AnchorException(Exception):
    """
    Base exception for all anchoring errors.

    Carries structured error information and can be converted
    to an AnchorError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "ANCHOR_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> AnchorError:
        """Convert this exception to an AnchorError model."""
        return AnchorError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyBatchException(AnchorException):
    """Raised when a batch of zero leaves is packed or anchored."""

    def __init__(
        self,
        message: str = "Cannot anchor an empty batch",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_BATCH,
            details=details,
            retryable=False,
        )


class InvalidLeafSizeException(AnchorException):
    """Raised when a leaf (or packed buffer) is not exactly 32 bytes wide."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        actual_size: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        if actual_size is not None:
            full_details["actual_size"] = actual_size
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_LEAF_SIZE,
            details=full_details,
            retryable=False,
        )


class IndexOutOfRangeException(AnchorException, IndexError):
    """Raised when a proof is requested for an index outside the batch."""

    def __init__(
        self,
        index: int,
        leaf_count: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["index"] = index
        full_details["leaf_count"] = leaf_count
        super().__init__(
            message=f"Leaf index {index} out of range for {leaf_count} leaves",
            code=ErrorCodes.INDEX_OUT_OF_RANGE,
            details=full_details,
            retryable=False,
        )


class UnsupportedHashAlgorithmException(AnchorException):
    """Raised when a hash algorithm name is not recognised."""

    def __init__(
        self,
        algorithm: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["algorithm"] = algorithm
        super().__init__(
            message=f"Unsupported hash algorithm: {algorithm!r}",
            code=ErrorCodes.UNSUPPORTED_HASH_ALGORITHM,
            details=full_details,
            retryable=False,
        )


class LedgerSubmitException(AnchorException):
    """Raised by a ledger backend when a root could not be committed."""

    def __init__(
        self,
        message: str,
        root: str | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = True,
    ) -> None:
        full_details = details or {}
        if root:
            full_details["root"] = root
        super().__init__(
            message=message,
            code=ErrorCodes.LEDGER_SUBMIT_FAILURE,
            details=full_details,
            retryable=retryable,
        )


class LedgerQueryException(AnchorException):
    """Raised by a ledger backend when a lookup could not be performed."""

    def __init__(
        self,
        message: str,
        root: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if root:
            full_details["root"] = root
        super().__init__(
            message=message,
            code=ErrorCodes.LEDGER_QUERY_FAILURE,
            details=full_details,
            retryable=True,
        )
