"""
Entry point for running pagequill as a module.

Usage:
    python -m pagequill paginate input.html --format html --output pages.html
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
