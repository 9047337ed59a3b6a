"""
CLI Output Helpers

Human-readable rendering of digests and proofs for diagnostics.
"""

from __future__ import annotations

import json
from typing import Any, Sequence


SHORT_HEX_LEN = 16


def short_hex(digest: bytes) -> str:
    """First 16 hex characters of a digest."""
    return digest.hex()[:SHORT_HEX_LEN]


def format_proof(proof: Sequence[tuple[bytes, bool]]) -> list[str]:
    """One line per proof step, leaf-to-root."""
    return [
        f"  proof[{i}] sibling {short_hex(sibling)} is_left {str(bool(is_left)).lower()}"
        for i, (sibling, is_left) in enumerate(proof)
    ]


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))
