#!/usr/bin/env python3
"""
CLI entry script.

    python cli.py --help
    python cli.py notes list

Installed as the `pocketnotes` command as well; see pocketnotes/cli/main.py.
"""

import sys
from pathlib import Path

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from pocketnotes.cli.main import app  # noqa: E402

if __name__ == "__main__":
    app()
