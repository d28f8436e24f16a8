"""
Entry point for running the converter as a module.

Usage:
    python -m seg2annot --seg lh.seg.mgz --s bert --h lh --ctab aparc.ctab --o lh.annot
"""

import sys

from seg2annot.cli.seg2annot import main

if __name__ == "__main__":
    sys.exit(main())
