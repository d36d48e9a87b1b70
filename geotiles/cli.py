#!/usr/bin/env python3
# geotiles/cli.py
"""
Entry point for geotiles.

With arguments, runs one command and prints its output:
    geotiles tile "(48.8566, 2.3522)" 12
Without arguments, starts the interactive shell.
"""

import sys
from typing import List, Optional

from geotiles.actions import run_action
from geotiles.config import Config
from geotiles.errors import GeoError
from geotiles.logging_conf import setup_logging
from geotiles.shell.state import ShellState


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    cfg = Config.load(create_if_missing=False)
    setup_logging(cfg)

    if not args:
        from geotiles.shell.app import TileShell
        TileShell(cfg).run()
        return 0

    state = ShellState(cfg)
    try:
        lines = run_action(state, args[0], args[1:])
    except GeoError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    for line in lines:
        print(line)
    return 0

if __name__ == "__main__":
    sys.exit(main())
