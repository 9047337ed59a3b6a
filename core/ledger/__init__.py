"""
Ledger

Commitment registry and witness-gated state transitions.
"""
from .state import LedgerState
from .transitions import BlobTransition, advance_blob, identity

__all__ = [
    "LedgerState",
    "BlobTransition",
    "advance_blob",
    "identity",
]
