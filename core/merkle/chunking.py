"""
Blob Chunking
Splits an arbitrary byte blob into fixed-size, zero-padded leaves.

Chunking Rules:
1. Non-overlapping windows of chunk_size bytes, in blob order
2. The final window is right-padded with 0x00 to chunk_size
3. An empty blob yields exactly one all-zero chunk (never an empty list)
"""
from __future__ import annotations

from typing import Sequence


DEFAULT_CHUNK_SIZE = 32


def _check_chunk_size(chunk_size: int) -> None:
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int):
        raise ValueError(f"chunk_size must be an int, got {type(chunk_size).__name__}")
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")


def chunk_blob(blob: bytes, chunk_size: int = DEFAULT_CHUNK_SIZE) -> list[bytes]:
    """
    Chunk a blob into fixed-size leaves.

    Args:
        blob: Raw bytes to split
        chunk_size: Size of every chunk in bytes (must be > 0)

    Returns:
        List of chunks, each exactly chunk_size bytes long

    Raises:
        ValueError: If chunk_size is not a positive integer

    Example:
        >>> chunk_blob(b"abcde", 2)
        [b'ab', b'cd', b'e\\x00']
    """
    _check_chunk_size(chunk_size)
    data = bytes(blob)

    chunks = [
        data[i:i + chunk_size].ljust(chunk_size, b"\x00")
        for i in range(0, len(data), chunk_size)
    ]
    if not chunks:
        chunks.append(b"\x00" * chunk_size)
    return chunks


def chunk_count(blob_length: int, chunk_size: int = DEFAULT_CHUNK_SIZE) -> int:
    """Number of chunks chunk_blob() produces for a blob of the given length."""
    _check_chunk_size(chunk_size)
    if blob_length <= 0:
        return 1
    return -(-blob_length // chunk_size)


def unchunk(chunks: Sequence[bytes], length: int) -> bytes:
    """
    Reassemble chunks and drop the zero padding.

    Args:
        chunks: Chunks as produced by chunk_blob()
        length: Length of the original blob

    Returns:
        The first `length` bytes of the concatenated chunks
    """
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")
    return b"".join(chunks)[:length]


__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "chunk_blob",
    "chunk_count",
    "unchunk",
]
