"""
CLI Demo Command

Replays the full witness flow in one process:
- Build a tree over an example account blob and store its root
- Generate a proof for one leaf and submit blob + proof as a witness
- Show the advanced root, then show that the old proof is now rejected

Usage:
    witness demo [--blob TEXT] [--chunk-size N] [--index I] [--json]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any

from core.crypto.hashing import from_hex, to_hex
from core.ledger import LedgerState
from core.merkle import MerkleTree
from core.schemas.errors import ErrorCodes, ProofVerificationException, WitnessException
from witness_cli.output import format_proof, print_json, short_hex


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2

DEMO_BLOB = (
    b"Example account blob: this could be an NFT metadata JSON or game state. "
    b"It's larger than a chunk so we create multiple leaves."
)
DEMO_ACCOUNT = "Acct1"
DEMO_OWNER = "owner_pubkey_1"
DEMO_COUNTER = 1_000


@dataclass
class DemoSummary:
    """Summary of a demo run for CLI output."""
    account_id: str = DEMO_ACCOUNT
    chunk_size: int = 0
    chunk_count: int = 0
    leaf_count: int = 0
    leaf_index: int = 0
    initial_root: str = ""
    final_root: str = ""
    proof: list[dict[str, Any]] = field(default_factory=list)
    applied: bool = False
    stale_proof_rejected: bool = False
    error_code: str = ""
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["errors"]:
            del d["errors"]
        if not d["error_code"]:
            del d["error_code"]
        return d


def run_demo(blob: bytes, chunk_size: int, leaf_index: int) -> DemoSummary:
    """
    Run the witness flow and collect a summary.

    Raises:
        IndexError: If leaf_index is outside the padded leaf layer
        ValueError: If chunk_size is not positive
    """
    summary = DemoSummary(chunk_size=chunk_size, leaf_index=leaf_index)

    tree = MerkleTree.from_blob(blob, chunk_size)
    root = tree.root()
    summary.chunk_count = tree.chunk_count
    summary.leaf_count = tree.leaf_count
    summary.initial_root = to_hex(root)

    ledger = LedgerState()
    ledger.create_commitment(DEMO_ACCOUNT, owner=DEMO_OWNER, counter=DEMO_COUNTER, merkle_root=root)

    proof = tree.gen_proof(leaf_index)
    summary.proof = [
        {"sibling": to_hex(sibling), "sibling_is_left": is_left}
        for sibling, is_left in proof
    ]

    try:
        receipt = ledger.process_tx_witness(DEMO_ACCOUNT, blob, chunk_size, leaf_index, proof)
        summary.applied = True
        summary.final_root = to_hex(receipt.new_root)
    except WitnessException as e:
        summary.error_code = e.code
        summary.errors.append(f"{e.code}: {e.message}")
        summary.final_root = summary.initial_root
        return summary

    try:
        ledger.process_tx_witness(DEMO_ACCOUNT, blob, chunk_size, leaf_index, proof)
    except ProofVerificationException:
        summary.stale_proof_rejected = True

    return summary


def print_summary_human(summary: DemoSummary, proof_lines: list[str]) -> None:
    """Print summary in human-readable format."""
    print("=== Account Witness Demo ===")
    print(f"Initial merkle root: {short_hex(from_hex(summary.initial_root))}")
    print(f"Chunks: {summary.chunk_count}, leaf count (after padding to power of two): {summary.leaf_count}")
    print(f"Stored stub for {summary.account_id}.")
    print(f"Proof length for leaf {summary.leaf_index}: {len(summary.proof)}")
    for line in proof_lines:
        print(line)
    if summary.applied:
        print(f"Applied tx: merkle root -> {short_hex(from_hex(summary.final_root))}")
        print(f"Old proof rejected after transition: {str(summary.stale_proof_rejected).lower()}")
    for err in summary.errors:
        print(f"  ✗ {err}")


def demo_cmd(args: Namespace) -> int:
    """
    Execute the demo command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config = args.cli_config
    chunk_size = args.chunk_size if args.chunk_size is not None else config.ledger.chunk_size
    blob = args.blob.encode("utf-8") if args.blob is not None else DEMO_BLOB

    try:
        summary = run_demo(blob, chunk_size, args.index)
    except (IndexError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        print_json(summary.to_dict())
    else:
        proof_lines = format_proof([
            (from_hex(step["sibling"]), step["sibling_is_left"])
            for step in summary.proof
        ])
        print_summary_human(summary, proof_lines)

    logger.debug(f"Demo finished (applied={summary.applied})")
    if not summary.applied:
        if summary.error_code == ErrorCodes.MERKLE_PROOF_INVALID:
            return EXIT_VERIFICATION_FAILED
        return EXIT_RUNTIME_ERROR
    return EXIT_SUCCESS
