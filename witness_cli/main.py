"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m witness_cli demo [--blob TEXT] [--chunk-size N] [--index I] [--json]
    python -m witness_cli root <file> [--chunk-size N] [--json]
    python -m witness_cli prove <file> --index I [--chunk-size N] [--out PATH]
    python -m witness_cli verify <file> --proof PATH [--root HEX] [--json]
    python -m witness_cli config --init

Environment Variables:
    WITNESS_CHUNK_SIZE          Chunk size in bytes (default: 32)
    WITNESS_LOG_LEVEL           Log level (default: INFO)
    WITNESS_LOG_FILE            Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.config.runtime import get_default_config_template
from witness_cli.commands import demo, tree
from witness_cli.config import load_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="witness",
        description="Account witness CLI - Commit to blobs, prove chunks, and apply witness transitions.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: ./witness.yaml or ~/.config/witness/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- demo command ---
    demo_parser = subparsers.add_parser(
        "demo",
        help="Run the witness flow end to end on an example blob",
        description="Build a commitment, submit a witness, and show the advanced root.",
    )
    demo_parser.add_argument("--blob", type=str, default=None, help="Blob text (default: built-in example)")
    demo_parser.add_argument("--chunk-size", type=int, default=None, help="Chunk size in bytes (default: from config)")
    demo_parser.add_argument("--index", type=int, default=0, help="Leaf index to prove (default: 0)")
    demo_parser.add_argument("--json", action="store_true", default=False, help="Output machine-readable JSON summary")
    demo_parser.add_argument("--debug", action="store_true", default=False, help="Show tracebacks on error")
    demo_parser.set_defaults(func=demo.demo_cmd)

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the Merkle root of a file",
    )
    root_parser.add_argument("file", type=str, help="Path to the blob file")
    root_parser.add_argument("--chunk-size", type=int, default=None, help="Chunk size in bytes (default: from config)")
    root_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    root_parser.set_defaults(func=tree.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate an inclusion proof for one chunk of a file",
    )
    prove_parser.add_argument("file", type=str, help="Path to the blob file")
    prove_parser.add_argument("--index", "-i", type=int, required=True, help="Chunk index to prove")
    prove_parser.add_argument("--chunk-size", type=int, default=None, help="Chunk size in bytes (default: from config)")
    prove_parser.add_argument("--out", "-o", type=str, default=None, help="Write the proof JSON here instead of stdout")
    prove_parser.add_argument("--verbose", "-v", action="store_true", default=False, help="Print the proof skeleton to stderr")
    prove_parser.set_defaults(func=tree.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an inclusion proof for a chunk of a file",
    )
    verify_parser.add_argument("file", type=str, help="Path to the blob file")
    verify_parser.add_argument("--proof", "-p", type=str, required=True, help="Path to the proof JSON")
    verify_parser.add_argument("--root", type=str, default=None, help="Expected root (0x hex); defaults to the root in the proof")
    verify_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    verify_parser.set_defaults(func=tree.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="witness.yaml",
        help="Path for config file (default: witness.yaml)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (WITNESS_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: witness config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
