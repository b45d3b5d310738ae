#!/usr/bin/env python
"""Compare two JSON files from the command line."""

import sys

from fielddiff.cli import main


if __name__ == "__main__":
    sys.exit(main())
