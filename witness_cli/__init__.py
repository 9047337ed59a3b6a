"""
Witness CLI

Command-line interface for building commitments, generating and checking
inclusion proofs, and replaying a witness transition end to end.

Usage:
    python -m witness_cli demo
    python -m witness_cli root account.bin --chunk-size 32
    python -m witness_cli prove account.bin --index 0 --out proof.json
    python -m witness_cli verify account.bin --proof proof.json
"""

__version__ = "0.1.0"
