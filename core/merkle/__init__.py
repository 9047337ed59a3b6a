"""
Merkle Tree and Commitments
Deterministic blob chunking, Merkle tree construction, proof generation and
verification.

This module provides:
- chunk_blob: Split a blob into zero-padded fixed-size chunks
- MerkleTree: Build a tree over chunks, read its root, generate proofs
- ProofStep: One (sibling, sibling_is_left) proof entry
- verify_proof: Verify a proof for a raw chunk against a root

Canonical Commitment Rules:
1. Leaf hashing: sha256(chunk)
2. Parent hashing: sha256(left + right)
3. Padding: Leaf layer padded to a power of two with copies of the last leaf
4. Empty blob: one all-zero chunk

Usage:
    from core.merkle import MerkleTree, chunk_blob, verify_proof

    chunks = chunk_blob(blob, 32)
    tree = MerkleTree.from_chunks(chunks)
    proof = tree.gen_proof(0)
    assert verify_proof(chunks[0], proof, tree.root())
"""
from .chunking import (
    DEFAULT_CHUNK_SIZE,
    chunk_blob,
    chunk_count,
    unchunk,
)

from .merkle_tree import (
    MerkleTree,
    Proof,
    ProofStep,
    merkle_parent,
    next_power_of_two,
    compute_tree_depth,
    verify_proof,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Chunking
    "DEFAULT_CHUNK_SIZE",
    "chunk_blob",
    "chunk_count",
    "unchunk",
    # Core types
    "MerkleTree",
    "Proof",
    "ProofStep",
    # Core functions
    "merkle_parent",
    "next_power_of_two",
    "compute_tree_depth",
    "verify_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
