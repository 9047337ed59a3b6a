"""
Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import schema definitions.
"""

# Error models and exceptions
from .errors import (
    ErrorCodes,
    ProofIndexOutOfRangeException,
    ProofVerificationException,
    StaleCommitmentException,
    UnknownAccountException,
    WitnessError,
    WitnessException,
)

# Ledger records
from .commitment import (
    CommitmentRecord,
    TransitionReceipt,
    coerce_digest,
)

# Proof wire format
from .proof import (
    HEX_HASH_PATTERN,
    InclusionProof,
    ProofStepModel,
    validate_hex_hash,
)

__all__ = [
    # Errors
    "ErrorCodes",
    "ProofIndexOutOfRangeException",
    "ProofVerificationException",
    "StaleCommitmentException",
    "UnknownAccountException",
    "WitnessError",
    "WitnessException",
    # Ledger records
    "CommitmentRecord",
    "TransitionReceipt",
    "coerce_digest",
    # Proof wire format
    "HEX_HASH_PATTERN",
    "InclusionProof",
    "ProofStepModel",
    "validate_hex_hash",
]
