"""Geodetic coordinates, Web Mercator projection and slippy-map tile math."""

from geotiles.bounds import Bounds
from geotiles.errors import GeoDomainError, GeoError, GeoFormatError
from geotiles.globe import GlobeArea, GlobePoint
from geotiles.parsing import (
    parse_bounds,
    parse_globe_area,
    parse_globe_point,
    parse_tile_id,
    parse_world_position,
)
from geotiles.projection import WebMercatorProjection
from geotiles.tiles import TileId
from geotiles.vectors import TileCoordinate, WorldPosition
from geotiles.version import __version__

__all__ = [
    "Bounds",
    "GeoError",
    "GeoFormatError",
    "GeoDomainError",
    "GlobePoint",
    "GlobeArea",
    "TileId",
    "TileCoordinate",
    "WorldPosition",
    "WebMercatorProjection",
    "parse_bounds",
    "parse_globe_point",
    "parse_globe_area",
    "parse_tile_id",
    "parse_world_position",
    "__version__",
]
