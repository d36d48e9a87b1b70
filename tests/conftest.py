"""Pytest configuration and fixtures for geotiles tests."""

import pytest

from geotiles.config import Config
from geotiles.globe import GlobeArea, GlobePoint
from geotiles.projection import WebMercatorProjection
from geotiles.shell.state import ShellState


@pytest.fixture
def projection():
    return WebMercatorProjection()


@pytest.fixture
def world_area():
    """The whole globe, given by its NW and SE corners."""
    return GlobeArea(GlobePoint(90, -180), GlobePoint(-90, 180))


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    """Point GEOTILES_CONFIG at a file inside tmp_path."""
    path = tmp_path / "cfg" / "geotiles.json"
    monkeypatch.setenv("GEOTILES_CONFIG", str(path))
    return path


@pytest.fixture
def cfg(config_path):
    return Config.load(str(config_path), create_if_missing=False)


@pytest.fixture
def state(cfg):
    return ShellState(cfg)
