"""
Common test factories shared by all test modules.

Factories are deterministic: the same arguments always build the same
blob, tree and root.
"""

from __future__ import annotations

from core.crypto.hashing import sha256
from core.ledger import LedgerState
from core.ledger.transitions import BlobTransition, advance_blob
from core.merkle import MerkleTree
from core.schemas.commitment import CommitmentRecord


def make_blob(num_chunks: int = 5, chunk_size: int = 32, tail: int = 0) -> bytes:
    """
    Build a blob of num_chunks full chunks plus `tail` extra bytes.

    Every chunk has distinct content so no two leaves hash the same.
    """
    out = bytearray()
    for i in range(num_chunks):
        out.extend(bytes((i * 7 + j) % 256 for j in range(chunk_size)))
    out.extend(bytes(range(1, tail + 1)))
    return bytes(out)


def make_record(
    owner: str = "owner_pubkey_1",
    counter: int = 1_000,
    merkle_root: bytes | None = None,
) -> CommitmentRecord:
    """Build a CommitmentRecord with sensible defaults."""
    return CommitmentRecord(
        owner=owner,
        counter=counter,
        merkle_root=merkle_root if merkle_root is not None else sha256(b"root"),
    )


def make_committed_ledger(
    account_id: str = "A",
    blob: bytes | None = None,
    chunk_size: int = 32,
    transition: BlobTransition = advance_blob,
) -> tuple[LedgerState, MerkleTree]:
    """Build a ledger holding the commitment for `blob` under account_id."""
    if blob is None:
        blob = make_blob(chunk_size=chunk_size)
    tree = MerkleTree.from_blob(blob, chunk_size)
    ledger = LedgerState(transition=transition)
    ledger.put_commitment(account_id, make_record(merkle_root=tree.root()))
    return ledger, tree
