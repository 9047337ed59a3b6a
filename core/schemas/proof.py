"""
Schemas
File: proof.py

Purpose: Serializable form of an inclusion proof, used to move proofs
across process boundaries (files, CLI output).
"""

from __future__ import annotations

import re
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.crypto.hashing import from_hex, to_hex
from core.merkle.merkle_tree import Proof, ProofStep


# Regex pattern for validating hex strings (0x followed by 64 hex chars = 32 bytes)
HEX_HASH_PATTERN = re.compile(r"^0x[0-9a-fA-F]{64}$")


def validate_hex_hash(value: str, field_name: str) -> str:
    """Validate that a value is a valid 32-byte hex hash with 0x prefix."""
    if not HEX_HASH_PATTERN.match(value):
        shown = f"{value[:20]}..." if len(value) > 20 else value
        raise ValueError(
            f"{field_name} must be a valid 32-byte hex string with 0x prefix "
            f"(64 hex chars), got: {shown}"
        )
    return value.lower()


class ProofStepModel(BaseModel):
    """One proof entry: sibling digest and which side it sits on."""

    model_config = ConfigDict(extra="forbid")

    sibling: str = Field(..., description="Sibling digest (0x-prefixed hex)")
    sibling_is_left: bool = Field(..., description="Sibling is left of the path node")

    @field_validator("sibling")
    @classmethod
    def validate_sibling(cls, v: str) -> str:
        return validate_hex_hash(v, "sibling")


class InclusionProof(BaseModel):
    """
    An inclusion proof for one chunk of a blob, with the context needed
    to check it: the chunk size the blob was split with, the chunk index
    and the root the proof was generated against.
    """

    model_config = ConfigDict(extra="forbid")

    chunk_size: int = Field(..., gt=0)
    leaf_index: int = Field(..., ge=0)
    root: str = Field(..., description="Merkle root (0x-prefixed hex)")
    steps: list[ProofStepModel] = Field(default_factory=list)

    @field_validator("root")
    @classmethod
    def validate_root(cls, v: str) -> str:
        return validate_hex_hash(v, "root")

    @classmethod
    def from_steps(
        cls,
        steps: Sequence[tuple[bytes, bool]],
        *,
        chunk_size: int,
        leaf_index: int,
        root: bytes,
    ) -> "InclusionProof":
        """Build the serializable form from in-memory proof steps."""
        return cls(
            chunk_size=chunk_size,
            leaf_index=leaf_index,
            root=to_hex(root),
            steps=[
                ProofStepModel(sibling=to_hex(sibling), sibling_is_left=bool(is_left))
                for sibling, is_left in steps
            ],
        )

    def to_steps(self) -> Proof:
        """Decode back into ProofStep tuples."""
        return [
            ProofStep(from_hex(step.sibling), step.sibling_is_left)
            for step in self.steps
        ]

    def root_bytes(self) -> bytes:
        return from_hex(self.root)


__all__ = [
    "HEX_HASH_PATTERN",
    "validate_hex_hash",
    "ProofStepModel",
    "InclusionProof",
]
