"""
Schemas
File: commitment.py

Purpose: Ledger-visible account records. An account is represented by a
single Merkle root instead of its full data blob.
"""

from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_serializer,
    field_validator,
)

from core.crypto.hashing import DIGEST_SIZE, from_hex, to_hex


def coerce_digest(value: Any, field_name: str) -> bytes:
    """Accept raw 32-byte digests or their 0x-prefixed hex form."""
    if isinstance(value, str):
        value = from_hex(value)
    if isinstance(value, (bytearray, memoryview)):
        value = bytes(value)
    if not isinstance(value, bytes) or len(value) != DIGEST_SIZE:
        raise ValueError(f"{field_name} must be a {DIGEST_SIZE}-byte digest")
    return value


class CommitmentRecord(BaseModel):
    """
    Commitment ("stub") for one account.

    Records are immutable. A successful transition replaces the whole
    record in the ledger; it never edits one in place.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    owner: str = Field(
        ...,
        description="Opaque owner identifier",
    )
    counter: int = Field(
        default=0,
        ge=0,
        description="Placeholder balance; stored, never interpreted",
    )
    merkle_root: bytes = Field(
        ...,
        description="Current Merkle root of the account blob",
    )

    @field_validator("merkle_root", mode="before")
    @classmethod
    def validate_merkle_root(cls, v: Any) -> bytes:
        return coerce_digest(v, "merkle_root")

    @field_serializer("merkle_root")
    def serialize_merkle_root(self, v: bytes) -> str:
        return to_hex(v)

    def with_root(self, merkle_root: bytes) -> "CommitmentRecord":
        """New record with the same owner and counter and a different root."""
        return CommitmentRecord(
            owner=self.owner,
            counter=self.counter,
            merkle_root=merkle_root,
        )


class TransitionReceipt(BaseModel):
    """Outcome of an applied witness transition."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    account_id: str = Field(..., min_length=1)
    leaf_index: int = Field(..., ge=0)
    chunk_count: int = Field(..., ge=1)
    previous_root: bytes
    new_root: bytes

    @field_validator("previous_root", "new_root", mode="before")
    @classmethod
    def validate_roots(cls, v: Any, info: ValidationInfo) -> bytes:
        return coerce_digest(v, info.field_name)

    @field_serializer("previous_root", "new_root")
    def serialize_roots(self, v: bytes) -> str:
        return to_hex(v)

    @property
    def changed(self) -> bool:
        """Whether the transition moved the commitment."""
        return self.previous_root != self.new_root


__all__ = [
    "CommitmentRecord",
    "TransitionReceipt",
    "coerce_digest",
]
