"""
Schemas
File: errors.py

Purpose: Standard error taxonomy for the commitment ledger.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the ledger."""

    # Ledger Errors
    UNKNOWN_ACCOUNT = "UNKNOWN_ACCOUNT"
    PROOF_INDEX_OUT_OF_RANGE = "PROOF_INDEX_OUT_OF_RANGE"

    # Merkle & Commitment Errors
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"
    ROOT_MISMATCH = "ROOT_MISMATCH"

    # Schema Errors
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class WitnessError(BaseModel):
    """
    Base error model for structured error communication.

    Lets callers report a rejected witness without carrying the exception
    object around (e.g. in CLI JSON output).
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.UNKNOWN_ACCOUNT],
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

    def to_exception(self) -> "WitnessException":
        """Convert this error model to a raised exception."""
        return WitnessException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class WitnessException(Exception):
    """
    Base exception for every rejected witness transition.

    This exception carries structured error information and can be
    converted to/from WitnessError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "WITNESS_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> WitnessError:
        """Convert this exception to a WitnessError model."""
        return WitnessError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class UnknownAccountException(WitnessException):
    """Raised when a witness names an account with no commitment record."""

    def __init__(
        self,
        account_id: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["account_id"] = account_id
        super().__init__(
            message=f"no commitment record for account {account_id!r}",
            code=ErrorCodes.UNKNOWN_ACCOUNT,
            details=full_details,
            retryable=False,
        )
        self.account_id = account_id


class ProofIndexOutOfRangeException(WitnessException):
    """Raised when the proof index is not a chunk index of the submitted blob."""

    def __init__(
        self,
        leaf_index: int,
        chunk_count: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["leaf_index"] = leaf_index
        full_details["chunk_count"] = chunk_count
        super().__init__(
            message=f"proof index {leaf_index} out of range ({chunk_count} chunks)",
            code=ErrorCodes.PROOF_INDEX_OUT_OF_RANGE,
            details=full_details,
            retryable=False,
        )
        self.leaf_index = leaf_index
        self.chunk_count = chunk_count


class ProofVerificationException(WitnessException):
    """Raised when the folded proof digest does not match the stored root."""

    def __init__(
        self,
        message: str = "proof verification failed",
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.MERKLE_PROOF_INVALID,
            details=full_details,
            retryable=False,
        )


class StaleCommitmentException(WitnessException):
    """
    Raised when the stored root changed between verification and commit.

    The witness was valid against a root that is no longer current; it may
    be rebuilt against the new root and resubmitted.
    """

    def __init__(
        self,
        account_id: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["account_id"] = account_id
        super().__init__(
            message=f"commitment for account {account_id!r} changed during transition",
            code=ErrorCodes.ROOT_MISMATCH,
            details=full_details,
            retryable=True,
        )
        self.account_id = account_id
