#!/usr/bin/env python3
# geotiles/vectors.py
"""
Small vector value types.

TileCoordinate: integer (x, y) grid index in the tile pyramid. Zoom scaling
is done with << and >> so halving always floors toward negative infinity.
WorldPosition: planar (x, y, z) point, y is height, x/z span the map plane.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

__all__ = ["TileCoordinate", "WorldPosition"]


@dataclass(frozen=True)
class TileCoordinate:
    x: int
    y: int

    def __add__(self, other: "TileCoordinate") -> "TileCoordinate":
        return TileCoordinate(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "TileCoordinate") -> "TileCoordinate":
        return TileCoordinate(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "TileCoordinate":
        return TileCoordinate(-self.x, -self.y)

    def __mul__(self, factor: int) -> "TileCoordinate":
        return TileCoordinate(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __floordiv__(self, divisor: int) -> "TileCoordinate":
        return TileCoordinate(self.x // divisor, self.y // divisor)

    def __lshift__(self, bits: int) -> "TileCoordinate":
        return TileCoordinate(self.x << bits, self.y << bits)

    def __rshift__(self, bits: int) -> "TileCoordinate":
        return TileCoordinate(self.x >> bits, self.y >> bits)

    def __iter__(self):
        yield self.x
        yield self.y

    @property
    def manhattan_length(self) -> int:
        return abs(self.x) + abs(self.y)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.int64)


# Y grows southward, matching slippy-map tile rows.
TileCoordinate.ZERO = TileCoordinate(0, 0)
TileCoordinate.ONE = TileCoordinate(1, 1)
TileCoordinate.UP = TileCoordinate(0, -1)
TileCoordinate.DOWN = TileCoordinate(0, 1)
TileCoordinate.LEFT = TileCoordinate(-1, 0)
TileCoordinate.RIGHT = TileCoordinate(1, 0)


@dataclass(frozen=True)
class WorldPosition:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: "WorldPosition") -> "WorldPosition":
        return WorldPosition(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "WorldPosition") -> "WorldPosition":
        return WorldPosition(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "WorldPosition":
        return WorldPosition(-self.x, -self.y, -self.z)

    def __mul__(self, factor: float) -> "WorldPosition":
        return WorldPosition(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> "WorldPosition":
        return WorldPosition(self.x / divisor, self.y / divisor, self.z / divisor)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)


WorldPosition.ZERO = WorldPosition(0.0, 0.0, 0.0)
