"""
Core cryptographic utilities.

Provides the hash function shared by leaf and node hashing, plus hex helpers.
"""
from .hashing import (
    DIGEST_SIZE,
    sha256,
    hash_bytes,
    hash_concat,
    to_hex,
    from_hex,
)

__all__ = [
    "DIGEST_SIZE",
    "sha256",
    "hash_bytes",
    "hash_concat",
    "to_hex",
    "from_hex",
]
