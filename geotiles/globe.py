#!/usr/bin/env python3
# geotiles/globe.py
"""
Geographic value types.

GlobePoint: latitude/longitude in degrees plus altitude in metres.
GlobeArea: axis-aligned lat/lon rectangle built from any two opposite corners.

Construction clamps latitude into [-90, 90] and longitude into [-180, 180].
Out-of-range input is corrected silently, it is never rejected.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, Tuple, Union

from geotiles.bounds import Bounds
from geotiles.errors import GeoDomainError

__all__ = ["GlobePoint", "GlobeArea", "LATITUDE_BOUNDS", "LONGITUDE_BOUNDS"]

LATITUDE_BOUNDS: Bounds[float] = Bounds(-90.0, 90.0)
LONGITUDE_BOUNDS: Bounds[float] = Bounds(-180.0, 180.0)


def _degree_to_dms(value: float) -> str:
    value = abs(value)
    degrees = int(math.floor(value))
    minutes = int(math.floor((value - degrees) * 60.0))
    seconds = int(round(((value - degrees) * 60.0 - minutes) * 60.0))
    return f"{degrees}° {minutes:2d}' {seconds:2d}''"


@dataclass(frozen=True)
class GlobePoint:
    latitude: float = 0.0
    longitude: float = 0.0
    altitude: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "latitude", LATITUDE_BOUNDS.clamp(float(self.latitude)))
        object.__setattr__(self, "longitude", LONGITUDE_BOUNDS.clamp(float(self.longitude)))
        object.__setattr__(self, "altitude", float(self.altitude))

    @classmethod
    def _unclamped(cls, latitude: float, longitude: float, altitude: float) -> "GlobePoint":
        # Arithmetic results keep their raw components; only the public
        # constructor normalises.
        point = object.__new__(cls)
        object.__setattr__(point, "latitude", latitude)
        object.__setattr__(point, "longitude", longitude)
        object.__setattr__(point, "altitude", altitude)
        return point

    # --- derived

    @property
    def dms_latitude(self) -> str:
        return _degree_to_dms(self.latitude) + (" S" if self.latitude < 0.0 else " N")

    @property
    def dms_longitude(self) -> str:
        return _degree_to_dms(self.longitude) + (" W" if self.longitude < 0.0 else " E")

    def with_altitude(self, altitude: float) -> "GlobePoint":
        return GlobePoint(self.latitude, self.longitude, altitude)

    # --- arithmetic (no re-clamping)

    def __add__(self, other: "GlobePoint") -> "GlobePoint":
        return GlobePoint._unclamped(
            self.latitude + other.latitude,
            self.longitude + other.longitude,
            self.altitude + other.altitude,
        )

    def __sub__(self, other: "GlobePoint") -> "GlobePoint":
        return GlobePoint._unclamped(
            self.latitude - other.latitude,
            self.longitude - other.longitude,
            self.altitude - other.altitude,
        )

    def __truediv__(self, divisor: float) -> "GlobePoint":
        return GlobePoint._unclamped(
            self.latitude / divisor,
            self.longitude / divisor,
            self.altitude / divisor,
        )

    def __iter__(self):
        yield self.latitude
        yield self.longitude
        yield self.altitude

    def __str__(self) -> str:
        return f"({self.latitude}, {self.longitude}, {self.altitude})"


@dataclass(frozen=True, init=False)
class GlobeArea:
    """
    Rectangle on the globe.

    bounds_lat runs south (min) to north (max), bounds_lon west (min) to
    east (max). Equality compares the bounds only; altitudes of the corner
    points are dropped.
    """

    bounds_lat: Bounds[float]
    bounds_lon: Bounds[float]
    mid_point: GlobePoint = field(compare=False, repr=False)

    def __init__(self, corner1: GlobePoint, corner2: GlobePoint):
        bounds_lat = Bounds(corner1.latitude, corner2.latitude)
        bounds_lon = Bounds(corner1.longitude, corner2.longitude)
        object.__setattr__(self, "bounds_lat", bounds_lat)
        object.__setattr__(self, "bounds_lon", bounds_lon)
        object.__setattr__(self, "mid_point", GlobePoint(
            bounds_lat.min + bounds_lat.size / 2,
            bounds_lon.min + bounds_lon.size / 2,
        ))

    @classmethod
    def from_bounds(cls, bounds_lat: Bounds[float], bounds_lon: Bounds[float]) -> "GlobeArea":
        return cls(GlobePoint(bounds_lat.min, bounds_lon.min), GlobePoint(bounds_lat.max, bounds_lon.max))

    # --- corners

    @property
    def north_east(self) -> GlobePoint:
        return GlobePoint(self.bounds_lat.max, self.bounds_lon.max)

    @property
    def north_west(self) -> GlobePoint:
        return GlobePoint(self.bounds_lat.max, self.bounds_lon.min)

    @property
    def south_east(self) -> GlobePoint:
        return GlobePoint(self.bounds_lat.min, self.bounds_lon.max)

    @property
    def south_west(self) -> GlobePoint:
        return GlobePoint(self.bounds_lat.min, self.bounds_lon.min)

    @property
    def corners(self) -> Tuple[GlobePoint, GlobePoint, GlobePoint, GlobePoint]:
        """Corners in NE, NW, SE, SW order."""
        return self.north_east, self.north_west, self.south_east, self.south_west

    # --- sampling

    def point_grid(self, resolution: int) -> Iterator[GlobePoint]:
        """
        Return a lazy resolution x resolution grid of points covering the area,
        both edges included. Rows run south to north, columns west to east.
        resolution must be at least 2.
        """
        if resolution < 2:
            raise GeoDomainError(f"Point grid resolution must be >= 2, got {resolution}")
        step_lat = self.bounds_lat.size / (resolution - 1)
        step_lon = self.bounds_lon.size / (resolution - 1)
        lat0, lon0 = self.bounds_lat.min, self.bounds_lon.min

        def _grid() -> Iterator[GlobePoint]:
            for i in range(resolution):
                for j in range(resolution):
                    yield GlobePoint(lat0 + i * step_lat, lon0 + j * step_lon)

        return _grid()

    # --- predicates

    def contains(self, item: Union[GlobePoint, "GlobeArea"]) -> bool:
        if isinstance(item, GlobeArea):
            return self.bounds_lat.contains(item.bounds_lat) and self.bounds_lon.contains(item.bounds_lon)
        return self.bounds_lat.contains(item.latitude) and self.bounds_lon.contains(item.longitude)

    __contains__ = contains

    def intersects(self, other: "GlobeArea") -> bool:
        return self.bounds_lat.overlaps(other.bounds_lat) and self.bounds_lon.overlaps(other.bounds_lon)

    def closest_point(self, point: GlobePoint) -> GlobePoint:
        """Nearest point inside the area on the flat lat/lon plane."""
        return GlobePoint(self.bounds_lat.clamp(point.latitude), self.bounds_lon.clamp(point.longitude))

    def __str__(self) -> str:
        return f"({self.south_west}, {self.north_east})"
