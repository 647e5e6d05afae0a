#!/usr/bin/env python3
"""
Retakes Spawns - Admin Console Entry Point

Launches the interactive spawn editor for a single map.
"""

import sys
from pathlib import Path

# Allow running from a checkout without installing the package.
src_dir = Path(__file__).resolve().parent / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from retakes_spawns.console import main

if __name__ == "__main__":
    sys.exit(main())
