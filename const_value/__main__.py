"""
Entry point for ``python -m const_value``.
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
