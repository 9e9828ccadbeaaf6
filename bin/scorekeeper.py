"""Record hands and show standings for a mahjong session.

Usage: uv run python bin/scorekeeper.py <command> [args]

Run with --help for the list of commands. The database location and
defaults come from SCORE_* environment variables (see rooms/settings.py).
"""

import sys
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend"))

from rooms.cli import main

if __name__ == "__main__":
    sys.exit(main())
