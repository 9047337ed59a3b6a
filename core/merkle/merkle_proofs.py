"""
Merkle Proofs Convenience Wrappers
Thin wrappers around MerkleTree for working directly with blobs.

This module provides class-based interfaces:
- MerkleProver: Compute roots and generate proofs from a blob
- MerkleVerifier: Verify proofs for a chunk or for a chunk of a blob

These are convenience wrappers around the functions in merkle_tree.py.
"""
from __future__ import annotations

from typing import Sequence

from core.merkle.chunking import chunk_blob
from core.merkle.merkle_tree import MerkleTree, Proof, verify_proof


class MerkleProver:
    """
    Convenience class for generating Merkle proofs from blobs.

    Example:
        >>> root = MerkleProver.compute_root(b"hello world", chunk_size=4)
        >>> proof = MerkleProver.prove(b"hello world", chunk_size=4, index=2)
        >>> MerkleVerifier.verify(b"rld\\x00", proof, root)
        True
    """

    @staticmethod
    def compute_root(blob: bytes, chunk_size: int) -> bytes:
        """Compute the 32-byte commitment for a blob."""
        return MerkleTree.from_blob(blob, chunk_size).root()

    @staticmethod
    def prove(blob: bytes, chunk_size: int, index: int) -> Proof:
        """
        Generate a proof for the chunk at the given index.

        Raises:
            IndexError: If index is outside the padded leaf layer
            ValueError: If chunk_size is not positive
        """
        return MerkleTree.from_blob(blob, chunk_size).gen_proof(index)


class MerkleVerifier:
    """Convenience class for verifying Merkle proofs."""

    @staticmethod
    def verify(chunk: bytes, proof: Sequence[tuple[bytes, bool]], root: bytes) -> bool:
        """Verify a proof for an already chunked (padded) leaf."""
        return verify_proof(chunk, proof, root)

    @staticmethod
    def verify_blob_chunk(
        blob: bytes,
        chunk_size: int,
        index: int,
        proof: Sequence[tuple[bytes, bool]],
        root: bytes,
    ) -> bool:
        """
        Chunk a blob and verify the proof for one of its chunks.

        Returns False when index does not name a real chunk of the blob.
        """
        chunks = chunk_blob(blob, chunk_size)
        if index < 0 or index >= len(chunks):
            return False
        return verify_proof(chunks[index], proof, root)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
