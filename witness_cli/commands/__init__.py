"""
CLI command modules.
"""

from witness_cli.commands import demo, tree

__all__ = ["demo", "tree"]
