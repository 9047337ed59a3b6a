"""
Module execution entry point.

Allows running with: python -m witness_cli
"""

import sys
from witness_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
