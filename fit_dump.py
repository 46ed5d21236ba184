#!/usr/bin/env .venv/bin/python3
"""
Command-line script to print the contents of a FIT file.

Usage:
    ./fit_dump.py data/samples/activity.fit

Or with explicit python:
    .venv/bin/python3 fit_dump.py data/samples/activity.fit
"""

import sys
from pathlib import Path

# Add src to path for imports
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))

from fitdump.dump import main

if __name__ == "__main__":
    sys.exit(main())
