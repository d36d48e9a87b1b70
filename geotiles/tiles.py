#!/usr/bin/env python3
# geotiles/tiles.py
"""
Tile identifiers and quadtree pyramid algebra.

At zoom z the pyramid holds 2^z x 2^z tiles. One zoom level deeper doubles
each axis, so children and parents are computed with bit shifts on the
coordinates. A TileId is not validated on construction; call is_inbounds()
where that matters.

Canonical string form is "{zoom}_{x}_{y}".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from geotiles.errors import GeoDomainError, GeoFormatError
from geotiles.vectors import TileCoordinate

__all__ = ["TileId", "SEPARATOR"]

SEPARATOR = "_"
_QUADKEY_DIGITS = "0123"


@dataclass(frozen=True)
class TileId:
    coordinates: TileCoordinate
    zoom: int

    @classmethod
    def from_xyz(cls, x: int, y: int, zoom: int) -> "TileId":
        return cls(TileCoordinate(x, y), zoom)

    @property
    def x(self) -> int:
        return self.coordinates.x

    @property
    def y(self) -> int:
        return self.coordinates.y

    # --- navigation

    def neighbour(self, direction: TileCoordinate) -> "TileId":
        """Tile offset by direction at the same zoom. Not bounds-checked."""
        return TileId(self.coordinates + direction, self.zoom)

    def sub_tile(self, zoom_difference: int = 1) -> "TileId":
        """Top-left (north-west) descendant zoom_difference levels deeper."""
        if zoom_difference < 0:
            raise GeoDomainError(f"Zoom difference for a sub-tile must not be negative, got {zoom_difference}")
        return TileId(self.coordinates << zoom_difference, self.zoom + zoom_difference)

    def sub_tiles(self, zoom_difference: int = 1) -> Iterator["TileId"]:
        """
        All 2^d x 2^d descendants zoom_difference levels deeper, row-major.
        A negative difference raises here, not on first iteration.
        """
        base = self.sub_tile(zoom_difference)
        side = 1 << zoom_difference

        def _descendants() -> Iterator["TileId"]:
            for dy in range(side):
                for dx in range(side):
                    yield base.neighbour(TileCoordinate(dx, dy))

        return _descendants()

    def parent_tile(self, zoom_difference: int = 1) -> "TileId":
        """
        Ancestor zoom_difference levels up. A negative difference is taken as
        its absolute value; zoom underflow below 0 is not checked.
        """
        if zoom_difference == 0:
            return self
        zoom_difference = abs(zoom_difference)
        return TileId(self.coordinates >> zoom_difference, self.zoom - zoom_difference)

    # --- relations

    def neighbour_direction(self, other: "TileId") -> Optional[TileCoordinate]:
        """
        Return the direction towards other if the two tiles share an edge,
        None otherwise.

        Tiles at different zooms are compared at the shallower zoom: the
        deeper tile's ancestor must be edge-adjacent to the shallower tile,
        and the deeper tile itself must lie on the side of that ancestor
        facing it. Adding the result to this tile's coordinates (lifted to the
        shallower zoom) gives the other tile's coordinates. Diagonal contact
        and wrap-around across the antimeridian are not adjacency.
        """
        zoom_difference = self.zoom - other.zoom
        if zoom_difference < 0:
            direction = other.neighbour_direction(self)
            return None if direction is None else -direction

        ancestor = self.parent_tile(zoom_difference)
        direction = other.coordinates - ancestor.coordinates
        if direction.manhattan_length != 1:
            return None
        # stepping out of this tile must also step out of its ancestor
        if self.neighbour(direction).parent_tile(zoom_difference) == ancestor:
            return None
        return direction

    def is_neighbour_of(self, other: "TileId") -> bool:
        return self.neighbour_direction(other) is not None

    def is_covered_by(self, other: "TileId") -> bool:
        """True if other is this tile or one of its ancestors."""
        if other.zoom > self.zoom:
            return False
        return other.coordinates == self.coordinates >> (self.zoom - other.zoom)

    def is_inbounds(self) -> bool:
        if self.zoom < 0:
            return False
        limit = 1 << self.zoom
        return 0 <= self.x < limit and 0 <= self.y < limit

    # --- quadkeys

    def to_quadkey(self) -> str:
        """
        Base-4 path from the root, one digit per zoom level. Only tiles inside
        the pyramid have a quadkey.
        """
        if self.zoom == 0:
            raise GeoDomainError("Cannot convert tile with zoom 0 to quadkey")
        if not self.is_inbounds():
            raise GeoDomainError(f"Tile {self} lies outside the tile pyramid and has no quadkey")
        digits = []
        previous = TileId(TileCoordinate.ZERO, 0)
        for level in range(1, self.zoom + 1):
            current = self.parent_tile(self.zoom - level)
            offset = current.coordinates - previous.sub_tile().coordinates
            digits.append(str(offset.x + 2 * offset.y))
            previous = current
        return "".join(digits)

    @classmethod
    def from_quadkey(cls, quadkey: str) -> "TileId":
        if not quadkey or any(ch not in _QUADKEY_DIGITS for ch in quadkey):
            raise GeoFormatError(f"Invalid quadkey {quadkey!r}")
        tile = cls(TileCoordinate.ZERO, 0)
        for ch in quadkey:
            digit = int(ch)
            tile = tile.sub_tile().neighbour(TileCoordinate(digit & 1, digit >> 1))
        return tile

    # --- string form

    def __str__(self) -> str:
        return f"{self.zoom}{SEPARATOR}{self.x}{SEPARATOR}{self.y}"

    @classmethod
    def from_string(cls, key: str) -> "TileId":
        """Parse the "{zoom}_{x}_{y}" form produced by str()."""
        values = key.split(SEPARATOR)
        if len(values) != 3:
            raise GeoFormatError(
                f"TileId key has to contain 3 values, but consists of {len(values)} values"
            )
        try:
            zoom, x, y = (int(v) for v in values)
        except ValueError as exc:
            raise GeoFormatError(f"TileId key {key!r} contains non-integer values") from exc
        return cls.from_xyz(x, y, zoom)
