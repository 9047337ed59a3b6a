"""
Ledger State

Maps account identifiers to commitment records and applies witness-gated
transitions: the caller proves possession of data consistent with the stored
root, and the ledger advances the root without ever storing the blob.

Concurrency:
- Each account has its own lock; read-verify-write for one account is a
  single critical section.
- The final write is a compare-and-swap on the stored root, so a writer
  sharing the underlying store cannot be silently overwritten.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterator, MutableMapping, Optional, Sequence

from core.merkle.chunking import chunk_blob
from core.merkle.merkle_tree import MerkleTree
from core.schemas.commitment import CommitmentRecord, TransitionReceipt
from core.schemas.errors import (
    ProofIndexOutOfRangeException,
    ProofVerificationException,
    StaleCommitmentException,
    UnknownAccountException,
)
from core.ledger.transitions import BlobTransition, advance_blob


logger = logging.getLogger(__name__)


def _short(digest: bytes) -> str:
    return digest.hex()[:16]


class LedgerState:
    """
    In-memory registry of account commitments.

    Args:
        store: Backing key-value mapping (defaults to a new dict). Any
            MutableMapping works; the ledger never iterates it for ordering.
        transition: Function deriving the new blob from the old one
            after a witness is accepted.

    Usage:
        ledger = LedgerState()
        ledger.create_commitment("A", owner="owner-1", counter=1000, merkle_root=root)
        receipt = ledger.process_tx_witness("A", blob, 32, 0, proof)
    """

    def __init__(
        self,
        store: Optional[MutableMapping[str, CommitmentRecord]] = None,
        transition: BlobTransition = advance_blob,
    ) -> None:
        self._store: MutableMapping[str, CommitmentRecord] = store if store is not None else {}
        self._transition = transition
        self._registry_lock = threading.RLock()
        self._account_locks: dict[str, threading.RLock] = {}

    # -------------------------------------------------------------------------
    # Registry access
    # -------------------------------------------------------------------------

    def _lock_for(self, account_id: str, create: bool = True) -> Optional[threading.RLock]:
        """
        Per-account lock. With create=False, no lock is registered for an
        account that has no record, and None is returned instead.
        """
        with self._registry_lock:
            lock = self._account_locks.get(account_id)
            if lock is None:
                if not create and account_id not in self._store:
                    return None
                lock = threading.RLock()
                self._account_locks[account_id] = lock
            return lock

    def put_commitment(self, account_id: str, record: CommitmentRecord) -> None:
        """Insert or replace the commitment record for an account."""
        if not account_id:
            raise ValueError("account_id must be a non-empty string")
        with self._lock_for(account_id):
            self._store[account_id] = record
        logger.debug(f"Stored commitment for {account_id} (root {_short(record.merkle_root)})")

    def create_commitment(
        self,
        account_id: str,
        owner: str,
        counter: int,
        merkle_root: bytes,
    ) -> CommitmentRecord:
        """Build a commitment record from its parts and store it."""
        record = CommitmentRecord(owner=owner, counter=counter, merkle_root=merkle_root)
        self.put_commitment(account_id, record)
        return record

    def get_commitment(self, account_id: str) -> Optional[CommitmentRecord]:
        """Current record for an account, or None."""
        return self._store.get(account_id)

    def accounts(self) -> list[str]:
        return list(self._store.keys())

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._store

    def __len__(self) -> int:
        return len(self._store)

    def __iter__(self) -> Iterator[str]:
        return iter(self.accounts())

    def compare_and_swap(
        self,
        account_id: str,
        expected_root: bytes,
        new_record: CommitmentRecord,
    ) -> bool:
        """
        Replace the record only if its stored root still equals expected_root.

        Returns:
            True if the record was replaced, False if the account is missing
            or its root has moved on
        """
        lock = self._lock_for(account_id, create=False)
        if lock is None:
            return False
        with lock:
            return self._swap_locked(account_id, expected_root, new_record)

    def _swap_locked(
        self,
        account_id: str,
        expected_root: bytes,
        new_record: CommitmentRecord,
    ) -> bool:
        current = self._store.get(account_id)
        if current is None or current.merkle_root != expected_root:
            return False
        self._store[account_id] = new_record
        return True

    # -------------------------------------------------------------------------
    # Witness transition
    # -------------------------------------------------------------------------

    def process_tx_witness(
        self,
        account_id: str,
        blob: bytes,
        chunk_size: int,
        proof_index: int,
        proof: Sequence[tuple[bytes, bool]],
    ) -> TransitionReceipt:
        """
        Verify a witness against the stored commitment and advance it.

        Steps:
        1. Look up the account's commitment record
        2. Chunk the blob and select the chunk at proof_index
        3. Verify the proof for that chunk against the stored root
        4. Derive the new blob with the ledger's transition function
        5. Rebuild the tree and store a record carrying the new root

        Nothing is mutated unless every step succeeds.

        Args:
            account_id: Account to act on
            blob: Full account blob held by the caller
            chunk_size: Chunk size the committed tree was built with
            proof_index: Index of the chunk the proof covers
            proof: Proof steps, leaf-to-root

        Returns:
            TransitionReceipt describing the applied transition

        Raises:
            UnknownAccountException: No record for account_id
            ProofIndexOutOfRangeException: proof_index is not a chunk index
            ProofVerificationException: Proof does not match the stored root
            StaleCommitmentException: Stored root changed before the write
            ValueError: chunk_size is not positive
        """
        lock = self._lock_for(account_id, create=False)
        if lock is None:
            logger.warning(f"Rejected witness: no commitment for {account_id}")
            raise UnknownAccountException(account_id)

        with lock:
            record = self._store.get(account_id)
            if record is None:
                logger.warning(f"Rejected witness: no commitment for {account_id}")
                raise UnknownAccountException(account_id)

            chunks = chunk_blob(blob, chunk_size)
            if proof_index < 0 or proof_index >= len(chunks):
                logger.warning(
                    f"Rejected witness for {account_id}: index {proof_index} "
                    f"out of range ({len(chunks)} chunks)"
                )
                raise ProofIndexOutOfRangeException(proof_index, len(chunks))

            stored_root = record.merkle_root
            if not MerkleTree.verify_proof(chunks[proof_index], proof, stored_root):
                logger.warning(
                    f"Rejected witness for {account_id}: proof for leaf {proof_index} "
                    f"does not match root {_short(stored_root)}"
                )
                raise ProofVerificationException(
                    leaf_index=proof_index,
                    details={"account_id": account_id},
                )
            logger.info(
                f"Proof verified for {account_id} leaf {proof_index} "
                f"(stub root {_short(stored_root)})"
            )

            new_blob = self._transition(bytes(blob))
            new_root = MerkleTree.from_blob(new_blob, chunk_size).root()

            if not self._swap_locked(account_id, stored_root, record.with_root(new_root)):
                logger.warning(f"Commitment for {account_id} moved during transition")
                raise StaleCommitmentException(account_id)

        logger.info(f"Applied tx for {account_id}: merkle root -> {_short(new_root)}")
        return TransitionReceipt(
            account_id=account_id,
            leaf_index=proof_index,
            chunk_count=len(chunks),
            previous_root=stored_root,
            new_root=new_root,
        )


__all__ = [
    "LedgerState",
]
