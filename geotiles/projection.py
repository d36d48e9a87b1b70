#!/usr/bin/env python3
# geotiles/projection.py
"""
Spherical Web Mercator (EPSG:900913 / 3857) projection.

Converts GlobePoints to planar WorldPositions and back, and maps points and
areas onto slippy-map tiles (X grows east, Y grows south, (0, 0) is the
north-west tile).

World positions put the Mercator plane on X (east) and Z (north); Y carries
the altitude scaled by the Mercator scale factor, so extruded heights keep
their proportions at every latitude.
"""

import logging
import math
from typing import Iterable, Iterator, Optional, Tuple

import numpy as np

from geotiles.bounds import Bounds
from geotiles.errors import GeoDomainError
from geotiles.globe import GlobeArea, GlobePoint
from geotiles.tiles import TileId
from geotiles.vectors import TileCoordinate, WorldPosition

__all__ = [
    "WebMercatorProjection",
    "EARTH_RADIUS",
    "ORIGIN_SHIFT",
    "MAX_LAT",
    "MAX_LON",
    "clamp_lat",
    "clamp_lon",
    "latlon_to_tile_xy",
]

log = logging.getLogger(__name__)

# WGS84 equatorial radius in metres
EARTH_RADIUS = 6378137

# Half the Earth's circumference
ORIGIN_SHIFT = math.pi * EARTH_RADIUS

# Web Mercator valid latitude limit, atan(sinh(pi))
MAX_LAT = 85.05112877980659

# Keeps 180° from landing one tile past the date line
MAX_LON = 179.9998


def clamp_lat(lat: float) -> float:
    """Clamp latitude to Web Mercator valid range."""
    return max(min(lat, MAX_LAT), -MAX_LAT)


def clamp_lon(lon: float) -> float:
    """Clamp longitude to the range usable by tile math."""
    return max(min(lon, MAX_LON), -MAX_LON)


def _tiles_per_axis(zoom: int) -> int:
    if zoom < 0:
        raise GeoDomainError(f"Zoom must not be negative, got {zoom}")
    return 1 << zoom


def latlon_to_tile_xy(lat: float, lon: float, zoom: int) -> Tuple[float, float]:
    """
    Convert lat/lon to fractional tile coordinates at a given zoom.
    No clamping is applied. Returns (x, y) tile coordinate floats.
    """
    n = _tiles_per_axis(zoom)
    x = n * ((lon + 180.0) / 360.0)
    lat_rad = math.radians(lat)
    try:
        merc = math.log(math.tan(lat_rad) + 1.0 / math.cos(lat_rad))
    except (ValueError, ZeroDivisionError) as exc:
        raise GeoDomainError(f"Latitude {lat} has no Mercator tile row") from exc
    y = n * (1.0 - merc / math.pi) / 2.0
    return x, y


class WebMercatorProjection:
    """
    Stateless projection service. Instances carry no data and may be shared
    freely.
    """

    earth_radius = EARTH_RADIUS
    origin_shift = ORIGIN_SHIFT
    max_latitude = MAX_LAT
    max_longitude = MAX_LON

    # -------------------------
    # Point projection
    # -------------------------

    def globe_point_to_world_position(self, point: GlobePoint) -> WorldPosition:
        try:
            merc = math.log(math.tan((90.0 + point.latitude) * math.pi / 360.0))
        except ValueError as exc:
            raise GeoDomainError(f"Latitude {point.latitude} projects to infinity") from exc
        return WorldPosition(
            x=point.longitude * ORIGIN_SHIFT / 180.0,
            y=point.altitude * self.scale_factor(point),
            z=merc / (math.pi / 180.0) * ORIGIN_SHIFT / 180.0,
        )

    def world_position_to_globe_point(self, position: WorldPosition) -> GlobePoint:
        lat = 180.0 / math.pi * (
            2.0 * math.atan(math.exp(position.z / ORIGIN_SHIFT * 180.0 * math.pi / 180.0)) - math.pi / 2.0
        )
        point = GlobePoint(lat, position.x / ORIGIN_SHIFT * 180.0)
        # altitude was scaled at the point it ends up at
        return point.with_altitude(position.y / self.scale_factor(point))

    def scale_factor(self, point: Optional[GlobePoint] = None) -> float:
        """Mercator scale at the point's latitude; 1 when no point is given."""
        if point is None:
            return 1.0
        return 1.0 / math.cos(point.latitude * (math.pi / 180.0))

    def globe_points_to_world_array(self, points: Iterable[GlobePoint]) -> np.ndarray:
        """Vectorised globe_point_to_world_position. Returns an (N, 3) array of x, y, z."""
        lla = np.array([(p.latitude, p.longitude, p.altitude) for p in points], dtype=float).reshape(-1, 3)
        lat, lon, alt = lla[:, 0], lla[:, 1], lla[:, 2]
        out = np.empty_like(lla)
        out[:, 0] = lon * ORIGIN_SHIFT / 180.0
        out[:, 1] = alt / np.cos(np.radians(lat))
        out[:, 2] = np.log(np.tan((90.0 + lat) * np.pi / 360.0)) / (np.pi / 180.0) * ORIGIN_SHIFT / 180.0
        return out

    def globe_point_to_pixel(self, area: GlobeArea, point: GlobePoint, width: int, height: int) -> Tuple[int, int]:
        """
        Pixel (x, y) holding point when area is rendered as a width x height
        raster in Mercator space. x counts from the west edge, y from the north.
        """
        if not area.contains(point):
            raise GeoDomainError("Area must contain point")
        max_pos = self.globe_point_to_world_position(area.north_east)
        min_pos = self.globe_point_to_world_position(area.south_west)
        extent = max_pos - min_pos
        pos = self.globe_point_to_world_position(point)

        x = int((pos.x - min_pos.x) / extent.x * (width - 1)) if extent.x else 0
        y = int((height - 1) - (pos.z - min_pos.z) / extent.z * (height - 1)) if extent.z else height - 1
        return x, y

    # -------------------------
    # Tile projection
    # -------------------------

    def globe_point_to_tile_coordinates(self, point: GlobePoint, zoom: int, clamp: bool = True) -> TileCoordinate:
        """
        Tile holding point at zoom. With clamp, latitude/longitude are first
        limited to MAX_LAT/MAX_LON and the result is kept inside the pyramid.
        """
        lat, lon = point.latitude, point.longitude
        if clamp:
            lat, lon = clamp_lat(lat), clamp_lon(lon)
        fx, fy = latlon_to_tile_xy(lat, lon, zoom)
        x, y = math.floor(fx), math.floor(fy)
        if clamp:
            # MAX_LAT sits on the pyramid edge and may round just past it
            last = _tiles_per_axis(zoom) - 1
            x = min(max(x, 0), last)
            y = min(max(y, 0), last)
        return TileCoordinate(x, y)

    def tile_to_globe_point(self, tile: TileId) -> GlobePoint:
        """North-west corner of the tile."""
        n = _tiles_per_axis(tile.zoom)
        lat_rad = math.atan(math.sinh(math.pi * (1.0 - 2.0 * tile.y / n)))
        return GlobePoint(math.degrees(lat_rad), tile.x / n * 360.0 - 180.0)

    def tile_to_globe_area(self, tile: TileId) -> GlobeArea:
        return GlobeArea(
            self.tile_to_globe_point(tile),
            self.tile_to_globe_point(tile.neighbour(TileCoordinate.ONE)),
        )

    def _corner_tiles(self, area: GlobeArea, zoom: int, clamp: bool = True) -> Tuple[Bounds[int], Bounds[int]]:
        ne = self.globe_point_to_tile_coordinates(area.north_east, zoom, clamp)
        sw = self.globe_point_to_tile_coordinates(area.south_west, zoom, clamp)
        return Bounds(ne.x, sw.x), Bounds(ne.y, sw.y)

    def tile_count(self, area: GlobeArea, zoom: int, clamp: bool = True) -> int:
        """Size of the tile rectangle covering area at zoom."""
        bx, by = self._corner_tiles(area, zoom, clamp)
        return (bx.size + 1) * (by.size + 1)

    def globe_area_to_tiles(
        self,
        area: GlobeArea,
        zoom: int,
        clamp: bool = True,
        inbounds_only: bool = True,
    ) -> Iterator[TileId]:
        """
        Lazily enumerate the rectangle of tiles covering area at zoom,
        row-major from the north-west tile.

        inbounds_only drops tiles outside the pyramid. With clamp on, the
        corners never leave the pyramid, so it only matters for clamp=False.
        """
        bx, by = self._corner_tiles(area, zoom, clamp)
        return self._enumerate(bx, by, zoom, inbounds_only)

    @staticmethod
    def _enumerate(bx: Bounds[int], by: Bounds[int], zoom: int, inbounds_only: bool) -> Iterator[TileId]:
        for y in range(by.min, by.max + 1):
            for x in range(bx.min, bx.max + 1):
                tile = TileId.from_xyz(x, y, zoom)
                if inbounds_only and not tile.is_inbounds():
                    continue
                yield tile

    def select_zoom(
        self,
        area: GlobeArea,
        zoom_bounds: Bounds[int],
        target_tile_count: int,
        clamp: bool = True,
    ) -> int:
        """
        Deepest zoom within zoom_bounds whose tile count does not exceed
        target_tile_count, scanning upwards from zoom_bounds.min.

        An exact match wins immediately. The first zoom over the target falls
        back one level, but never below zoom_bounds.min. Reaching
        zoom_bounds.max without either yields zoom_bounds.max.
        """
        zoom = zoom_bounds.min
        while zoom <= zoom_bounds.max:
            count = self.tile_count(area, zoom, clamp)
            if count == target_tile_count:
                log.debug("zoom %d matches target of %d tiles", zoom, target_tile_count)
                return zoom
            if count > target_tile_count:
                chosen = zoom_bounds.clamp(zoom - 1)
                log.debug("zoom %d exceeds target (%d > %d), using %d", zoom, count, target_tile_count, chosen)
                return chosen
            zoom += 1
        log.debug("target of %d tiles not reached, using max zoom %d", target_tile_count, zoom_bounds.max)
        return zoom_bounds.max

    def globe_area_to_tiles_by_count(
        self,
        area: GlobeArea,
        zoom_bounds: Bounds[int],
        target_tile_count: int,
        clamp: bool = True,
        inbounds_only: bool = True,
    ) -> Iterator[TileId]:
        """Tiles covering area at the zoom chosen by select_zoom."""
        zoom = self.select_zoom(area, zoom_bounds, target_tile_count, clamp)
        return self.globe_area_to_tiles(area, zoom, clamp=clamp, inbounds_only=inbounds_only)
