#!/usr/bin/env python3
# geotiles/parsing.py
"""
Text front end: turns human-readable strings into geotiles values.

Formats:
    bounds          "(min, max)"
    globe point     "(lat, lon)" or "(lat, lon, alt)", altitude defaults to 0
    globe area      "((lat, lon), (lat, lon))", corners in any order
    tile id         "(x, y, zoom)", or the canonical "{zoom}_{x}_{y}" key
    world position  "(x, y, z)"
    direction       up | down | left | right, or "(dx, dy)"

Every parser raises GeoFormatError on malformed input.
"""

from __future__ import annotations

import re
from typing import Callable, List, Tuple

from geotiles.bounds import Bounds, T
from geotiles.errors import GeoFormatError
from geotiles.globe import GlobeArea, GlobePoint
from geotiles.tiles import TileId
from geotiles.vectors import TileCoordinate, WorldPosition

__all__ = [
    "parse_bounds",
    "parse_globe_point",
    "parse_globe_area",
    "parse_tile_id",
    "parse_world_position",
    "parse_direction",
    "split_args",
]

_FIELD = r"\s*([^,()\s]+)\s*"
_PAIR_RE = re.compile(r"^\s*\(" + _FIELD + "," + _FIELD + r"\)\s*$")
_TRIPLE_RE = re.compile(r"^\s*\(" + _FIELD + "," + _FIELD + "," + _FIELD + r"\)\s*$")
_POINT_RE = re.compile(r"^\s*\(" + _FIELD + "," + _FIELD + "(?:," + _FIELD + r")?\)\s*$")
_AREA_RE = re.compile(r"^\s*\(\s*(\([^()]*\))\s*,\s*(\([^()]*\))\s*\)\s*$")

_DIRECTIONS = {
    "up": TileCoordinate.UP,
    "north": TileCoordinate.UP,
    "down": TileCoordinate.DOWN,
    "south": TileCoordinate.DOWN,
    "left": TileCoordinate.LEFT,
    "west": TileCoordinate.LEFT,
    "right": TileCoordinate.RIGHT,
    "east": TileCoordinate.RIGHT,
}


def _cast_all(text: str, values: Tuple[str, ...], cast: Callable[[str], T]) -> List[T]:
    try:
        return [cast(v) for v in values]
    except ValueError as exc:
        raise GeoFormatError(f"Non-numeric value in {text!r}") from exc


def _match(pattern: "re.Pattern[str]", text: str, what: str) -> "re.Match[str]":
    m = pattern.match(text)
    if m is None:
        raise GeoFormatError(f"{text!r} is not a valid {what}")
    return m


def parse_bounds(text: str, cast: Callable[[str], T] = int) -> Bounds[T]:
    """Parse "(min, max)"; cast converts each field (int or float)."""
    m = _match(_PAIR_RE, text, "bounds")
    lo, hi = _cast_all(text, m.groups(), cast)
    return Bounds(lo, hi)


def parse_globe_point(text: str) -> GlobePoint:
    m = _match(_POINT_RE, text, "globe point")
    fields = [g for g in m.groups() if g is not None]
    return GlobePoint(*_cast_all(text, tuple(fields), float))


def parse_globe_area(text: str) -> GlobeArea:
    m = _match(_AREA_RE, text, "globe area")
    return GlobeArea(parse_globe_point(m.group(1)), parse_globe_point(m.group(2)))


def parse_tile_id(text: str) -> TileId:
    """
    Parse "(x, y, zoom)". Text without the parenthesised form is handed to
    TileId.from_string as a "{zoom}_{x}_{y}" key.
    """
    m = _TRIPLE_RE.match(text)
    if m is None:
        if "(" in text or ")" in text or "," in text:
            raise GeoFormatError(f"{text!r} is not a valid tile id")
        return TileId.from_string(text.strip())
    x, y, zoom = _cast_all(text, m.groups(), int)
    return TileId.from_xyz(x, y, zoom)


def parse_world_position(text: str) -> WorldPosition:
    m = _match(_TRIPLE_RE, text, "world position")
    return WorldPosition(*_cast_all(text, m.groups(), float))


def parse_direction(text: str) -> TileCoordinate:
    named = _DIRECTIONS.get(text.strip().lower())
    if named is not None:
        return named
    m = _match(_PAIR_RE, text, "direction")
    dx, dy = _cast_all(text, m.groups(), int)
    return TileCoordinate(dx, dy)


def split_args(line: str) -> List[str]:
    """Split on whitespace outside parentheses: "a (1, 2) b" -> ["a", "(1, 2)", "b"]."""
    args: List[str] = []
    buf: List[str] = []
    depth = 0
    for ch in line:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                raise GeoFormatError(f"Unbalanced ')' in {line!r}")
        if ch.isspace() and depth == 0:
            if buf:
                args.append("".join(buf))
                buf = []
            continue
        buf.append(ch)
    if depth != 0:
        raise GeoFormatError(f"Unbalanced '(' in {line!r}")
    if buf:
        args.append("".join(buf))
    return args
