"""
Meta-harness CLI entry point.

Usage:
    python -m metaharness.cli run
    python -m metaharness.cli plan
"""

import sys
from .main import main

if __name__ == "__main__":
    sys.exit(main())
