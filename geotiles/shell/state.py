#!/usr/bin/env python3
# geotiles/shell/state.py
"""Runtime state for the geotiles shell."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from geotiles.config import Config, TileSettings
from geotiles.errors import GeoFormatError
from geotiles.projection import WebMercatorProjection
from geotiles.tiles import TileId

# Argument token that stands for the last tile a command produced
LAST_TILE_TOKEN = "."


@dataclass
class ShellState:
    cfg: Config

    projection: WebMercatorProjection = field(default_factory=WebMercatorProjection)
    settings: TileSettings = field(init=False)
    precision: int = field(init=False)

    last_tile: Optional[TileId] = None
    info_msg: str = ""

    def __post_init__(self):
        self.reload_settings()

    def reload_settings(self) -> None:
        """Pick up tile settings and precision after the config changed."""
        self.settings = self.cfg.tile_settings
        self.precision = int(self.cfg["shell"].get("precision", 6))

    # ------------- setters -------------

    def set_last_tile(self, tile: TileId) -> None:
        self.last_tile = tile

    def set_info(self, msg: str) -> None:
        self.info_msg = msg

    def resolve_last_tile(self) -> TileId:
        if self.last_tile is None:
            raise GeoFormatError(f"{LAST_TILE_TOKEN!r} used before any tile was produced")
        return self.last_tile

    # ------------- formatting -------------

    def fmt(self, value: float) -> str:
        return f"{value:.{self.precision}f}"
