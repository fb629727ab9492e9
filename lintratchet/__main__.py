"""
Entry point for running the lint ratchet as a module.

Usage:
    python -m lintratchet check src/lib.rs
    python -m lintratchet --help
"""

import sys
from lintratchet.cli import main

if __name__ == "__main__":
    sys.exit(main())
