"""
Test fixtures package for witness ledger tests.

This package provides factory functions for creating test objects.
- common.py: Blob, tree and ledger factories

Usage:
    from fixtures import make_blob, make_committed_ledger

    def test_something():
        blob = make_blob(num_chunks=5)
        ledger, tree = make_committed_ledger("A", blob)
"""

from .common import (
    make_blob,
    make_committed_ledger,
    make_record,
)

__all__ = [
    "make_blob",
    "make_committed_ledger",
    "make_record",
]
