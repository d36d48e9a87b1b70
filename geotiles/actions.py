#!/usr/bin/env python3
# geotiles/actions.py
"""
Shared command functions used by both the interactive shell and the one-shot CLI.

Each action takes the ShellState and its argument strings and returns the
output lines. Argument syntax follows geotiles.parsing; "." stands for the
last tile a command produced.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from geotiles.config import DEFAULT_CONFIG
from geotiles.errors import GeoFormatError
from geotiles.globe import GlobeArea, GlobePoint
from geotiles.parsing import (
    parse_direction,
    parse_globe_area,
    parse_globe_point,
    parse_tile_id,
    parse_world_position,
    split_args,
)
from geotiles.shell.state import LAST_TILE_TOKEN, ShellState
from geotiles.tiles import TileId

__all__ = ["Action", "ACTIONS", "run_line", "run_action"]

log = logging.getLogger(__name__)

ActionFn = Callable[[ShellState, List[str]], List[str]]


@dataclass(frozen=True)
class Action:
    name: str
    usage: str
    summary: str
    fn: ActionFn
    min_args: int
    max_args: int


ACTIONS: Dict[str, Action] = {}
_ALIASES = {"neighbor": "neighbour", "?": "help"}


def action(name: str, usage: str, min_args: int, max_args: Optional[int] = None):
    def deco(fn: ActionFn) -> ActionFn:
        summary = (fn.__doc__ or "").strip().splitlines()[0] if fn.__doc__ else ""
        ACTIONS[name] = Action(name, usage, summary, fn, min_args,
                               min_args if max_args is None else max_args)
        return fn
    return deco

# -------------------------
# Argument helpers
# -------------------------

def _tile(state: ShellState, text: str) -> TileId:
    if text == LAST_TILE_TOKEN:
        return state.resolve_last_tile()
    return parse_tile_id(text)


def _int(text: str, what: str) -> int:
    try:
        return int(text)
    except ValueError as exc:
        raise GeoFormatError(f"{what} must be an integer, got {text!r}") from exc


def _fmt_point(state: ShellState, p: GlobePoint) -> str:
    return f"({state.fmt(p.latitude)}, {state.fmt(p.longitude)}, {state.fmt(p.altitude)})"


def _fmt_tile(tile: TileId) -> str:
    return f"{tile}  (x={tile.x}, y={tile.y}, zoom={tile.zoom})"


def _fmt_area(state: ShellState, area: GlobeArea) -> List[str]:
    return [
        f"north {state.fmt(area.bounds_lat.max)}  south {state.fmt(area.bounds_lat.min)}",
        f"west  {state.fmt(area.bounds_lon.min)}  east  {state.fmt(area.bounds_lon.max)}",
        f"mid   {_fmt_point(state, area.mid_point)}",
    ]


def _tile_lines(state: ShellState, tiles: List[TileId]) -> List[str]:
    if tiles:
        state.set_last_tile(tiles[-1])
    return [str(t) for t in tiles]

# -------------------------
# Actions
# -------------------------

@action("tile", "tile <point> <zoom>", 2)
def tile_action(state: ShellState, args: List[str]) -> List[str]:
    """Tile holding a globe point at a zoom level."""
    point = parse_globe_point(args[0])
    zoom = _int(args[1], "zoom")
    coords = state.projection.globe_point_to_tile_coordinates(point, zoom, state.settings.clamp)
    tile = TileId(coords, zoom)
    state.set_last_tile(tile)
    lines = [_fmt_tile(tile)]
    if zoom > 0:
        lines.append(f"quadkey {tile.to_quadkey()}")
    return lines


@action("point", "point <tile>", 1)
def point_action(state: ShellState, args: List[str]) -> List[str]:
    """North-west corner of a tile."""
    p = state.projection.tile_to_globe_point(_tile(state, args[0]))
    return [_fmt_point(state, p), f"{p.dms_latitude}  {p.dms_longitude}"]


@action("area", "area <tile>", 1)
def area_action(state: ShellState, args: List[str]) -> List[str]:
    """Globe area spanned by a tile."""
    return _fmt_area(state, state.projection.tile_to_globe_area(_tile(state, args[0])))


@action("cover", "cover <area> <zoom>", 2)
def cover_action(state: ShellState, args: List[str]) -> List[str]:
    """Tiles covering an area at a zoom level."""
    area = parse_globe_area(args[0])
    zoom = _int(args[1], "zoom")
    tiles = list(state.projection.globe_area_to_tiles(
        area, zoom, clamp=state.settings.clamp, inbounds_only=state.settings.inbounds_only))
    return _tile_lines(state, tiles)


@action("fit", "fit <area> [target]", 1, 2)
def fit_action(state: ShellState, args: List[str]) -> List[str]:
    """Tiles covering an area at the zoom closest to a target tile count."""
    area = parse_globe_area(args[0])
    target = _int(args[1], "target") if len(args) > 1 else state.settings.target_tile_count
    zoom = state.projection.select_zoom(area, state.settings.zoom_bounds, target, state.settings.clamp)
    tiles = list(state.projection.globe_area_to_tiles(
        area, zoom, clamp=state.settings.clamp, inbounds_only=state.settings.inbounds_only))
    return [f"zoom {zoom}: {len(tiles)} tiles (target {target})"] + _tile_lines(state, tiles)


@action("parent", "parent <tile> [levels]", 1, 2)
def parent_action(state: ShellState, args: List[str]) -> List[str]:
    """Ancestor of a tile."""
    levels = _int(args[1], "levels") if len(args) > 1 else 1
    return _tile_lines(state, [_tile(state, args[0]).parent_tile(levels)])


@action("children", "children <tile> [levels]", 1, 2)
def children_action(state: ShellState, args: List[str]) -> List[str]:
    """Descendants of a tile, row-major."""
    levels = _int(args[1], "levels") if len(args) > 1 else 1
    return _tile_lines(state, list(_tile(state, args[0]).sub_tiles(levels)))


@action("neighbour", "neighbour <tile> <up|down|left|right|(dx, dy)>", 2)
def neighbour_action(state: ShellState, args: List[str]) -> List[str]:
    """Tile next to a tile in a direction."""
    tile = _tile(state, args[0]).neighbour(parse_direction(args[1]))
    lines = _tile_lines(state, [tile])
    if not tile.is_inbounds():
        lines.append("(outside the tile pyramid)")
    return lines


@action("adjacent", "adjacent <tile> <tile>", 2)
def adjacent_action(state: ShellState, args: List[str]) -> List[str]:
    """Whether two tiles share an edge, and in which direction."""
    direction = _tile(state, args[0]).neighbour_direction(_tile(state, args[1]))
    if direction is None:
        return ["no"]
    return [f"yes, direction ({direction.x}, {direction.y})"]


@action("covered", "covered <tile> <ancestor>", 2)
def covered_action(state: ShellState, args: List[str]) -> List[str]:
    """Whether the second tile covers the first."""
    return ["yes" if _tile(state, args[0]).is_covered_by(_tile(state, args[1])) else "no"]


@action("quadkey", "quadkey <tile>", 1)
def quadkey_action(state: ShellState, args: List[str]) -> List[str]:
    """Quadkey of a tile."""
    return [_tile(state, args[0]).to_quadkey()]


@action("fromquadkey", "fromquadkey <quadkey>", 1)
def fromquadkey_action(state: ShellState, args: List[str]) -> List[str]:
    """Tile addressed by a quadkey."""
    tile = TileId.from_quadkey(args[0])
    state.set_last_tile(tile)
    return [_fmt_tile(tile)]


@action("world", "world <point>", 1)
def world_action(state: ShellState, args: List[str]) -> List[str]:
    """Project a globe point to a world position."""
    pos = state.projection.globe_point_to_world_position(parse_globe_point(args[0]))
    return [f"({state.fmt(pos.x)}, {state.fmt(pos.y)}, {state.fmt(pos.z)})",
            f"scale {state.fmt(state.projection.scale_factor(parse_globe_point(args[0])))}"]


@action("globe", "globe <(x, y, z)>", 1)
def globe_action(state: ShellState, args: List[str]) -> List[str]:
    """Unproject a world position to a globe point."""
    return [_fmt_point(state, state.projection.world_position_to_globe_point(parse_world_position(args[0])))]


@action("dms", "dms <point>", 1)
def dms_action(state: ShellState, args: List[str]) -> List[str]:
    """Degrees/minutes/seconds form of a globe point."""
    p = parse_globe_point(args[0])
    return [f"{p.dms_latitude}  {p.dms_longitude}"]


@action("set", "set <section.key> <value>", 2)
def set_action(state: ShellState, args: List[str]) -> List[str]:
    """Change a setting for this session (see save)."""
    section, _, key = args[0].partition(".")
    if key not in DEFAULT_CONFIG.get(section, {}):
        known = ", ".join(f"{s}.{k}" for s in DEFAULT_CONFIG for k in DEFAULT_CONFIG[s])
        raise GeoFormatError(f"Unknown setting {args[0]!r}, one of: {known}")
    try:
        value = json.loads(args[1])
    except ValueError:
        value = args[1]
    state.cfg.update({section: {key: value}})
    state.reload_settings()
    return [f"{section}.{key} = {json.dumps(state.cfg[section][key])}"]


@action("save", "save", 0)
def save_action(state: ShellState, args: List[str]) -> List[str]:
    """Write the current settings to the config file."""
    state.cfg.save()
    return [f"saved {state.cfg.path}"]


@action("help", "help [command]", 0, 1)
def help_action(state: ShellState, args: List[str]) -> List[str]:
    """List commands, or show usage of one."""
    if args:
        act = _lookup(args[0])
        return [f"usage: {act.usage}", act.summary]
    width = max(len(a.usage) for a in ACTIONS.values())
    lines = [f"  {a.usage:<{width}}  {a.summary}" for a in ACTIONS.values()]
    lines.append(f"  '{LAST_TILE_TOKEN}' as a tile argument means the last tile produced")
    return lines

# -------------------------
# Dispatch
# -------------------------

def _lookup(name: str) -> Action:
    name = name.lower()
    act = ACTIONS.get(_ALIASES.get(name, name))
    if act is None:
        raise GeoFormatError(f"Unknown command {name!r}, try 'help'")
    return act


def run_action(state: ShellState, name: str, args: List[str]) -> List[str]:
    act = _lookup(name)
    if not act.min_args <= len(args) <= act.max_args:
        raise GeoFormatError(f"usage: {act.usage}")
    log.debug("running %s %s", act.name, args)
    return act.fn(state, args)


def run_line(state: ShellState, line: str) -> List[str]:
    """Split a command line and run it. Blank lines produce no output."""
    args = split_args(line)
    if not args:
        return []
    return run_action(state, args[0], args[1:])
