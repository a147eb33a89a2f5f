"""
Entry point for running pagefill as a module.

Usage:
    python -m pagefill generate directory.xlsx cover.pdf --output directory.pdf
    pagefill paginate directory.xlsx --json
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main() or 0)
