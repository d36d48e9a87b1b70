#!/usr/bin/env python3
# geotiles/errors.py
"""
Error kinds raised by geotiles.

GeoFormatError: text input does not match the expected pattern.
GeoDomainError: the operation has no defined result for the given input.
"""

__all__ = ["GeoError", "GeoFormatError", "GeoDomainError"]


class GeoError(ValueError):
    """Base class for all geotiles errors."""


class GeoFormatError(GeoError):
    """Raised when a string cannot be parsed into a geotiles value."""


class GeoDomainError(GeoError):
    """Raised when an operation is mathematically undefined for its input."""
