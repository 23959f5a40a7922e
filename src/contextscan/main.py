from __future__ import annotations

"""
Main Entry Point.

Allows running the package from a source checkout ('python src/contextscan/main.py')
as well as through the installed 'contextscan' console script.
"""

import os
import sys

# Anti-shadowing and path visibility logic for source checkouts
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
if not getattr(sys, "frozen", False):
    SRC_DIR = os.path.dirname(BASE_DIR)
    if SRC_DIR not in sys.path:
        sys.path.insert(0, SRC_DIR)

from contextscan.interface.cli.app import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
