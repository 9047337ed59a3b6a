"""
Merkle Tree Implementation
Layered binary hash tree over chunked blobs, proof generation, and verification.

This module provides:
- MerkleTree: keeps every layer so proofs can be read straight off the tree
- ProofStep: one (sibling digest, sibling-is-left flag) entry of a proof
- verify_proof: stateless proof check against an expected root
- Power-of-two leaf padding

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = sha256(chunk), chunk already zero-padded
2. Parent hashing: parent = sha256(left + right)
3. Padding rule: the leaf layer is padded to the next power of two by
   appending copies of the last real leaf digest. Upper layers never need
   padding.
4. Layer count: ceil(log2(leaf_count)) + 1
5. Single leaf: root = sha256(chunk), proof is empty

Known Weaknesses:
- Duplicated padding leaves mean the root does not commit to the real chunk
  count.
- Leaves and parents share one hash with no domain-separation prefix, so a
  64-byte chunk can collide with a parent pre-image.
"""
from __future__ import annotations

from typing import NamedTuple, Sequence

from core.crypto.hashing import DIGEST_SIZE, hash_concat, sha256
from core.merkle.chunking import DEFAULT_CHUNK_SIZE, chunk_blob


class ProofStep(NamedTuple):
    """
    One entry of an inclusion proof.

    Attributes:
        sibling: Digest of the sibling node at this layer
        sibling_is_left: True if the sibling sits to the left of the path node
    """
    sibling: bytes
    sibling_is_left: bool


Proof = list[ProofStep]


def merkle_parent(left: bytes, right: bytes) -> bytes:
    """Compute the parent hash of two child nodes: sha256(left + right)."""
    return hash_concat(left, right)


def next_power_of_two(n: int) -> int:
    """
    Smallest power of two >= n.

    Example:
        >>> [next_power_of_two(n) for n in (1, 2, 3, 5, 8)]
        [1, 2, 4, 8, 8]
    """
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def compute_tree_depth(num_leaves: int) -> int:
    """
    Number of layers of a tree built over num_leaves real leaves.

    A single leaf has depth 1, two leaves have depth 2, three or four
    leaves have depth 3, etc.

    Returns:
        Layer count (0 for no leaves)
    """
    if num_leaves <= 0:
        return 0
    return next_power_of_two(num_leaves).bit_length()


class MerkleTree:
    """
    Binary Merkle tree over hashed chunks.

    layers[0] is the padded leaf layer, layers[-1] holds only the root.

    Example:
        >>> tree = MerkleTree.from_blob(b"account data", chunk_size=4)
        >>> proof = tree.gen_proof(1)
        >>> MerkleTree.verify_proof(b"unt ", proof, tree.root())
        True
    """

    def __init__(self, layers: list[list[bytes]], chunk_count: int) -> None:
        if not layers or len(layers[-1]) != 1:
            raise ValueError("Tree must end in a single-entry root layer")
        self.layers = layers
        self.chunk_count = chunk_count

    @classmethod
    def from_chunks(cls, chunks: Sequence[bytes]) -> "MerkleTree":
        """
        Build a tree from raw chunks.

        Algorithm:
        1. Hash each chunk to form the leaf layer
        2. Pad the leaf layer to the next power of two with copies of the
           last leaf digest
        3. Hash adjacent pairs until a single digest remains

        Raises:
            ValueError: If chunks is empty
        """
        if len(chunks) == 0:
            raise ValueError("Cannot build a Merkle tree from an empty chunk list")

        leaves = [sha256(chunk) for chunk in chunks]
        target = next_power_of_two(len(leaves))
        leaves.extend([leaves[-1]] * (target - len(leaves)))

        layers = [leaves]
        while len(layers[-1]) > 1:
            prev = layers[-1]
            layers.append([
                merkle_parent(prev[i], prev[i + 1])
                for i in range(0, len(prev), 2)
            ])

        return cls(layers, chunk_count=len(chunks))

    @classmethod
    def from_blob(cls, blob: bytes, chunk_size: int = DEFAULT_CHUNK_SIZE) -> "MerkleTree":
        """Chunk a blob and build its tree."""
        return cls.from_chunks(chunk_blob(blob, chunk_size))

    @property
    def leaf_count(self) -> int:
        """Number of leaves after padding (always a power of two)."""
        return len(self.layers[0])

    @property
    def depth(self) -> int:
        """Number of layers, root layer included."""
        return len(self.layers)

    def root(self) -> bytes:
        """The single digest of the final layer."""
        return self.layers[-1][0]

    def gen_proof(self, leaf_index: int) -> Proof:
        """
        Generate the inclusion proof for a leaf.

        Walks the layers bottom-up: at each layer the sibling index is
        index ^ 1, its digest is recorded together with whether it sits
        left of the path node, and the walk moves to index // 2.

        Args:
            leaf_index: 0-based index into the padded leaf layer

        Returns:
            Proof steps ordered leaf-to-root (empty for a single-leaf tree)

        Raises:
            IndexError: If leaf_index is outside the padded leaf layer
        """
        if leaf_index < 0 or leaf_index >= self.leaf_count:
            raise IndexError(
                f"Leaf index {leaf_index} out of range for {self.leaf_count} leaves"
            )

        proof: Proof = []
        index = leaf_index
        for layer in self.layers:
            if len(layer) == 1:
                break
            sibling_index = index ^ 1
            proof.append(ProofStep(layer[sibling_index], sibling_index < index))
            index //= 2
        return proof

    @staticmethod
    def verify_proof(
        leaf_bytes: bytes,
        proof: Sequence[tuple[bytes, bool]],
        expected_root: bytes,
    ) -> bool:
        """
        Verify a proof for a raw chunk against an expected root.

        Algorithm:
        1. Start with sha256(leaf_bytes); leaf_bytes is the padded chunk,
           not a leaf digest
        2. For each step (leaf-to-root):
           - sibling on the left:  current = parent(sibling, current)
           - sibling on the right: current = parent(current, sibling)
        3. Compare the result with expected_root byte-wise

        Each step may be any (sibling, flag) pair: a ProofStep, a tuple, or a
        list decoded from JSON. Malformed input makes the proof invalid; this
        never raises.

        Returns:
            True if the folded digest equals expected_root
        """
        if not isinstance(expected_root, (bytes, bytearray)) or len(expected_root) != DIGEST_SIZE:
            return False
        if not isinstance(leaf_bytes, (bytes, bytearray, memoryview)):
            return False
        try:
            steps = list(proof)
        except TypeError:
            return False

        current = sha256(bytes(leaf_bytes))
        for step in steps:
            if isinstance(step, (str, bytes, bytearray)):
                return False
            try:
                sibling, sibling_is_left = step
            except (TypeError, ValueError):
                return False
            if not isinstance(sibling, (bytes, bytearray)) or len(sibling) != DIGEST_SIZE:
                return False
            if sibling_is_left:
                current = merkle_parent(bytes(sibling), current)
            else:
                current = merkle_parent(current, bytes(sibling))

        return current == bytes(expected_root)

    def __repr__(self) -> str:
        return (
            f"MerkleTree(chunks={self.chunk_count}, leaves={self.leaf_count}, "
            f"root={self.root().hex()[:16]})"
        )


def verify_proof(
    leaf_bytes: bytes,
    proof: Sequence[tuple[bytes, bool]],
    expected_root: bytes,
) -> bool:
    """Module-level alias for MerkleTree.verify_proof()."""
    return MerkleTree.verify_proof(leaf_bytes, proof, expected_root)


__all__ = [
    "ProofStep",
    "Proof",
    "MerkleTree",
    "merkle_parent",
    "next_power_of_two",
    "compute_tree_depth",
    "verify_proof",
]
