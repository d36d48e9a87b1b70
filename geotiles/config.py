#!/usr/bin/env python3
# geotiles/config.py
"""
Config loader/saver and defaults for geotiles.

Goals:
- Single JSON file per user.
- Safe atomic writes.
- Deep-merge of user config over defaults.
- Basic validation with sane fallbacks.
- No external deps.

Usage:
    from geotiles.config import Config, TileSettings
    cfg = Config.load()                 # ~/.config/geotiles/geotiles.json or OS-specific
    settings = cfg.tile_settings        # zoom bounds + tile policies
    cfg["tiles"]["max_zoom"] = 17
    cfg.save()
"""

from __future__ import annotations

import copy
import json
import logging
import os
import platform
import re
import shutil
import tempfile
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from geotiles.bounds import Bounds
from geotiles.errors import GeoFormatError

log = logging.getLogger(__name__)

# ----------------------------
# Defaults
# ----------------------------

MAX_ZOOM_LIMIT = 30

DEFAULT_CONFIG: Dict[str, Any] = {
    "tiles": {
        "min_zoom": 0,                    # zoom search floor
        "max_zoom": 19,                   # 0..19 typical web mercator range
        "target_tile_count": 16,          # tiles wanted by fit
        "clamp": True,                    # clamp lat/lon before tile math
        "inbounds_only": True,            # drop tiles outside the pyramid
    },
    "shell": {
        "history_file": None,             # path or None for in-memory history
        "precision": 6,                   # decimals printed for coordinates
        "theme": "auto",                  # auto | light | dark
    },
    "logging": {
        "level": "WARNING",
        "file": None,                     # path or None
        "rotate_bytes": 5 * 1024 * 1024,
        "rotate_keep": 3,
    },
}

# ----------------------------
# Helpers
# ----------------------------

def _os_config_home() -> str:
    """Return per-OS config base directory."""
    if platform.system() == "Windows":
        base = os.environ.get("APPDATA") or os.path.expanduser("~\\AppData\\Roaming")
        return os.path.join(base, "GeoTiles")
    # macOS: ~/Library/Application Support/GeoTiles
    if platform.system() == "Darwin":
        return os.path.join(os.path.expanduser("~/Library/Application Support"), "GeoTiles")
    # Linux and others: ~/.config/geotiles
    return os.path.join(os.path.expanduser("~/.config"), "geotiles")

def _default_config_path() -> str:
    """Resolve default config path, honoring GEOTILES_CONFIG env override."""
    env = os.environ.get("GEOTILES_CONFIG")
    if env:
        return os.path.expanduser(env)
    return os.path.join(_os_config_home(), "geotiles.json")

def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """Return deep-merged copy of dicts: values in b override a."""
    out = dict(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out

def _atomic_write_json(path: str, data: Dict[str, Any]) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=".tmp_cfg_", dir=os.path.dirname(path) or ".")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=True)
            f.write("\n")
        os.replace(tmp, path)
    except BaseException:
        # Clean temp on error
        if os.path.exists(tmp):
            os.remove(tmp)
        raise

def _coerce_int(v: Any, default: int, minmax: Optional[Tuple[int, int]] = None) -> int:
    try:
        x = int(v)
    except (TypeError, ValueError):
        return int(default)
    if minmax:
        lo, hi = minmax
        if x < lo: x = lo
        if x > hi: x = hi
    return x

def _coerce_bool(v: Any, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        s = v.strip().lower()
        if s in ("1", "true", "yes", "on"): return True
        if s in ("0", "false", "no", "off"): return False
    return default

# ----------------------------
# Validation
# ----------------------------

def _validate(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Return validated copy with fallbacks applied."""
    c = _deep_merge(copy.deepcopy(DEFAULT_CONFIG), cfg or {})

    # tiles
    t = c["tiles"]
    lo = _coerce_int(t.get("min_zoom"), DEFAULT_CONFIG["tiles"]["min_zoom"], (0, MAX_ZOOM_LIMIT))
    hi = _coerce_int(t.get("max_zoom"), DEFAULT_CONFIG["tiles"]["max_zoom"], (0, MAX_ZOOM_LIMIT))
    zb = Bounds(lo, hi)
    t["min_zoom"], t["max_zoom"] = zb.min, zb.max
    t["target_tile_count"] = _coerce_int(t.get("target_tile_count"), DEFAULT_CONFIG["tiles"]["target_tile_count"], (1, 1 << 20))
    for key in ("clamp", "inbounds_only"):
        t[key] = _coerce_bool(t.get(key), DEFAULT_CONFIG["tiles"][key])

    # shell
    sh = c["shell"]
    hf = sh.get("history_file")
    sh["history_file"] = os.path.expanduser(str(hf)) if hf else None
    sh["precision"] = _coerce_int(sh.get("precision"), DEFAULT_CONFIG["shell"]["precision"], (0, 12))
    if sh.get("theme") not in ("auto", "light", "dark"):
        sh["theme"] = DEFAULT_CONFIG["shell"]["theme"]

    # logging
    lg = c["logging"]
    if str(lg.get("level")).upper() not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"):
        lg["level"] = DEFAULT_CONFIG["logging"]["level"]
    lg["level"] = str(lg["level"]).upper()
    lf = lg.get("file")
    lg["file"] = str(lf) if lf else None
    lg["rotate_bytes"] = _coerce_int(lg.get("rotate_bytes"), DEFAULT_CONFIG["logging"]["rotate_bytes"], (256 * 1024, 50 * 1024 * 1024))
    lg["rotate_keep"]  = _coerce_int(lg.get("rotate_keep"), DEFAULT_CONFIG["logging"]["rotate_keep"], (0, 50))

    return c

# ----------------------------
# Tile settings record
# ----------------------------

def _normalize_key(k: Any) -> str:
    return re.sub(r"[_\-\s]", "", str(k)).lower()


@dataclass(frozen=True)
class TileSettings:
    """The settings the tile math consumes: zoom range plus tile policies."""
    zoom_bounds: Bounds[int] = field(default_factory=lambda: Bounds(0, 19))
    target_tile_count: int = 16
    clamp: bool = True
    inbounds_only: bool = True

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "TileSettings":
        """
        Build from a structured record such as {"zoom_bounds": {"min": 0, "max": 19}}
        or {"ZoomBounds": {"Min": 0, "Max": 19}}. Missing fields keep their defaults.
        """
        if not isinstance(record, Mapping):
            raise GeoFormatError(f"Tile settings must be a mapping, got {type(record).__name__}")
        keys = {_normalize_key(k): v for k, v in record.items()}
        defaults = cls()
        zoom_bounds = defaults.zoom_bounds
        if "zoombounds" in keys:
            zoom_bounds = Bounds.from_dict(keys["zoombounds"], int)
        elif "minzoom" in keys or "maxzoom" in keys:
            zoom_bounds = Bounds.from_dict({
                "min": keys.get("minzoom", zoom_bounds.min),
                "max": keys.get("maxzoom", zoom_bounds.max),
            }, int)
        return cls(
            zoom_bounds=zoom_bounds,
            target_tile_count=_coerce_int(keys.get("targettilecount"), defaults.target_tile_count, (1, 1 << 20)),
            clamp=_coerce_bool(keys.get("clamp"), defaults.clamp),
            inbounds_only=_coerce_bool(keys.get("inboundsonly"), defaults.inbounds_only),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "zoom_bounds": self.zoom_bounds.to_dict(),
            "target_tile_count": self.target_tile_count,
            "clamp": self.clamp,
            "inbounds_only": self.inbounds_only,
        }

# ----------------------------
# Public API
# ----------------------------

@dataclass
class Config:
    """Thin wrapper around a nested dict with load/save/merge."""
    data: Dict[str, Any] = field(default_factory=lambda: _validate(DEFAULT_CONFIG))
    path: str = field(default_factory=_default_config_path)

    # --- Mapping-style access
    def __getitem__(self, k: str) -> Any:
        return self.data[k]

    # --- Ops
    @classmethod
    def load(cls, path: Optional[str] = None, create_if_missing: bool = True) -> "Config":
        cfg_path = os.path.expanduser(path) if path else _default_config_path()
        if not os.path.exists(cfg_path):
            cfg = _validate(DEFAULT_CONFIG)
            if create_if_missing:
                _atomic_write_json(cfg_path, cfg)
                log.debug("wrote default config to %s", cfg_path)
            return cls(cfg, cfg_path)

        try:
            with open(cfg_path, "r", encoding="utf-8") as f:
                user_cfg = json.load(f)
            if not isinstance(user_cfg, dict):
                raise ValueError("top-level JSON value is not an object")
        except ValueError as exc:
            # Corrupt file. Backup and regenerate.
            backup = cfg_path + ".corrupt.bak"
            shutil.copyfile(cfg_path, backup)
            log.warning("config %s is corrupt (%s); backed up to %s", cfg_path, exc, backup)
            user_cfg = {}

        validated = _validate(_deep_merge(DEFAULT_CONFIG, user_cfg))
        log.debug("loaded config from %s", cfg_path)
        return cls(validated, cfg_path)

    def save(self) -> None:
        """Persist to JSON atomically."""
        # Write validated data (defaults + diff) so file is complete and readable
        diff = _diff(DEFAULT_CONFIG, self.data)
        full = _validate(_deep_merge(DEFAULT_CONFIG, diff))
        _atomic_write_json(self.path, full)
        self.data = full  # sync in-memory with normalized values
        log.debug("saved config to %s", self.path)

    def update(self, partial: Dict[str, Any]) -> None:
        """Deep-merge a partial config then validate."""
        merged = _deep_merge(self.data, partial)
        self.data = _validate(merged)

    # Convenience getters
    @property
    def zoom_bounds(self) -> Bounds[int]:
        return Bounds(self.data["tiles"]["min_zoom"], self.data["tiles"]["max_zoom"])

    @property
    def tile_settings(self) -> TileSettings:
        t = self.data["tiles"]
        return TileSettings(
            zoom_bounds=self.zoom_bounds,
            target_tile_count=t["target_tile_count"],
            clamp=t["clamp"],
            inbounds_only=t["inbounds_only"],
        )


def _diff(base: Dict[str, Any], cur: Dict[str, Any]) -> Dict[str, Any]:
    """Return nested dictionary of keys where cur differs from base."""
    out: Dict[str, Any] = {}
    for k in cur.keys() | base.keys():
        if k not in base:
            out[k] = cur[k]
            continue
        if k not in cur:
            continue
        vb = base[k]
        vc = cur[k]
        if isinstance(vb, dict) and isinstance(vc, dict):
            d = _diff(vb, vc)
            if d:
                out[k] = d
        elif vb != vc:
            out[k] = vc
    return out

__all__ = [
    "Config",
    "TileSettings",
    "DEFAULT_CONFIG",
    "_default_config_path",
]
