#!/usr/bin/env python3
# geotiles/version.py
"""
Version metadata for geotiles.
"""

__version__ = "1.0.0"
__license__ = "MIT"

def version_info() -> str:
    """Return human-readable version string."""
    return f"geotiles v{__version__}"
