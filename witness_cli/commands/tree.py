"""
CLI Tree Commands

Work with a blob stored in a file:
- root:   compute the commitment for a file
- prove:  write an inclusion proof for one chunk
- verify: check an inclusion proof offline

Usage:
    witness root account.bin [--chunk-size N] [--json]
    witness prove account.bin --index I [--chunk-size N] [--out proof.json]
    witness verify account.bin --proof proof.json [--root 0x...] [--json]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from pathlib import Path

from pydantic import ValidationError

from core.crypto.hashing import from_hex, to_hex
from core.merkle import MerkleTree, MerkleVerifier
from core.schemas.proof import InclusionProof, validate_hex_hash
from witness_cli.output import format_proof, print_json, short_hex


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def _read_blob(path: str) -> bytes | None:
    blob_path = Path(path)
    if not blob_path.exists():
        print(f"Error: File not found: {blob_path}", file=sys.stderr)
        return None
    return blob_path.read_bytes()


def _chunk_size(args: Namespace) -> int:
    if args.chunk_size is not None:
        return args.chunk_size
    return args.cli_config.ledger.chunk_size


def root_cmd(args: Namespace) -> int:
    """Print the Merkle root of a file."""
    blob = _read_blob(args.file)
    if blob is None:
        return EXIT_RUNTIME_ERROR

    try:
        tree = MerkleTree.from_blob(blob, _chunk_size(args))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    logger.info(f"Built tree over {len(blob)} bytes: {tree!r}")
    if args.json:
        print_json({
            "file": args.file,
            "size": len(blob),
            "chunk_size": _chunk_size(args),
            "chunk_count": tree.chunk_count,
            "leaf_count": tree.leaf_count,
            "depth": tree.depth,
            "root": to_hex(tree.root()),
        })
    else:
        print(f"root: {to_hex(tree.root())}")
        print(f"chunks: {tree.chunk_count} (leaves after padding: {tree.leaf_count})")
        print(f"depth: {tree.depth}")
    return EXIT_SUCCESS


def prove_cmd(args: Namespace) -> int:
    """Generate an inclusion proof for one chunk of a file."""
    blob = _read_blob(args.file)
    if blob is None:
        return EXIT_RUNTIME_ERROR

    chunk_size = _chunk_size(args)
    try:
        tree = MerkleTree.from_blob(blob, chunk_size)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.index < 0 or args.index >= tree.chunk_count:
        print(
            f"Error: index {args.index} out of range ({tree.chunk_count} chunks)",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    steps = tree.gen_proof(args.index)
    proof = InclusionProof.from_steps(
        steps,
        chunk_size=chunk_size,
        leaf_index=args.index,
        root=tree.root(),
    )
    payload = proof.model_dump_json(indent=2)

    if args.out:
        Path(args.out).write_text(payload + "\n")
        print(f"Wrote proof for chunk {args.index} ({len(steps)} steps) to {args.out}")
    else:
        print(payload)

    if args.verbose:
        for line in format_proof(steps):
            print(line, file=sys.stderr)
    return EXIT_SUCCESS


def verify_cmd(args: Namespace) -> int:
    """Verify an inclusion proof for a chunk of a file."""
    blob = _read_blob(args.file)
    if blob is None:
        return EXIT_RUNTIME_ERROR

    proof_path = Path(args.proof)
    if not proof_path.exists():
        print(f"Error: Proof not found: {proof_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        proof = InclusionProof.model_validate_json(proof_path.read_text())
        root = from_hex(validate_hex_hash(args.root, "root")) if args.root else proof.root_bytes()
    except (ValidationError, ValueError) as e:
        print(f"Error loading proof: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    ok = MerkleVerifier.verify_blob_chunk(
        blob,
        proof.chunk_size,
        proof.leaf_index,
        proof.to_steps(),
        root,
    )
    logger.info(f"Proof for chunk {proof.leaf_index} against {short_hex(root)}: ok={ok}")

    if args.json:
        print_json({
            "file": args.file,
            "leaf_index": proof.leaf_index,
            "chunk_size": proof.chunk_size,
            "root": to_hex(root),
            "ok": ok,
        })
    else:
        print(f"leaf_index: {proof.leaf_index}")
        print(f"root: {short_hex(root)}")
        print(f"ok: {str(ok).lower()}")

    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED
