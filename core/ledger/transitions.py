"""
Blob Transitions

A transition maps the old account blob to the new one after a witness has
been accepted. Every party that needs to agree on the next root must apply
the same function.
"""
from __future__ import annotations

from typing import Callable


BlobTransition = Callable[[bytes], bytes]


def advance_blob(blob: bytes) -> bytes:
    """
    Default transition: increment the first byte (wrapping at 256), or
    produce b"\\x01" for an empty blob.

    Example:
        >>> advance_blob(b"\\xffab")
        b'\\x00ab'
        >>> advance_blob(b"")
        b'\\x01'
    """
    if not blob:
        return b"\x01"
    return bytes([(blob[0] + 1) % 256]) + bytes(blob[1:])


def identity(blob: bytes) -> bytes:
    """Transition that leaves the blob unchanged."""
    return bytes(blob)


__all__ = [
    "BlobTransition",
    "advance_blob",
    "identity",
]
