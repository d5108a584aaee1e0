#!/usr/bin/env python3
"""Entry point for running mdconv as a module.

This allows the package to be executed as:
    python -m mdconv [arguments]
"""

import sys

from mdconv.cli import main

if __name__ == "__main__":
    sys.exit(main())
