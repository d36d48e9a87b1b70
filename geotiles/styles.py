#!/usr/bin/env python3
# geotiles/styles.py
"""
Style definitions for the geotiles shell.
Provides light, dark, and auto themes for prompt_toolkit.
"""

import os

from prompt_toolkit.styles import Style

from geotiles.config import Config

_BASE_DARK = {
    "prompt": "fg:#00afff bold",
    "tile": "fg:#00ff00",
    "error": "fg:#ff5f5f bold",
    "help": "fg:#dddddd",
    "bottom-toolbar": "bg:#303030 #cccccc",
}
_BASE_LIGHT = {
    "prompt": "fg:#005f87 bold",
    "tile": "fg:#006600",
    "error": "fg:#af0000 bold",
    "help": "fg:#000000",
    "bottom-toolbar": "bg:#cccccc #000000",
}


def make_style(cfg: Config) -> Style:
    theme = cfg["shell"].get("theme", "auto")

    if theme == "light":
        return Style.from_dict(_BASE_LIGHT)
    if theme == "dark":
        return Style.from_dict(_BASE_DARK)

    # Auto-detect via environment
    if os.getenv("TERM_THEME", "").lower() == "light":
        return Style.from_dict(_BASE_LIGHT)
    return Style.from_dict(_BASE_DARK)
