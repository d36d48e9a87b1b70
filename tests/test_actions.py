"""Tests for the shell commands, driven through run_line like the shell does."""

import json

import pytest

from geotiles.actions import ACTIONS, run_action, run_line
from geotiles.bounds import Bounds
from geotiles.errors import GeoDomainError, GeoFormatError
from geotiles.tiles import TileId


class TestTileCommands:
    def test_tile_then_parent_of_last(self, state):
        assert run_line(state, "tile (0, 0) 1") == ["1_1_1  (x=1, y=1, zoom=1)", "quadkey 3"]
        assert state.last_tile == TileId.from_xyz(1, 1, 1)
        assert run_line(state, "parent .") == ["0_0_0"]
        assert state.last_tile == TileId.from_xyz(0, 0, 0)

    def test_tile_at_zoom_zero_has_no_quadkey(self, state):
        assert run_line(state, "tile (48.8566, 2.3522) 0") == ["0_0_0  (x=0, y=0, zoom=0)"]

    def test_children_row_major(self, state):
        assert run_line(state, "children 0_0_0") == ["1_0_0", "1_1_0", "1_0_1", "1_1_1"]
        assert state.last_tile == TileId.from_xyz(1, 1, 1)

    def test_parent_levels(self, state):
        assert run_line(state, "parent (3, 5, 3) 2") == ["1_0_1"]

    def test_quadkey(self, state):
        assert run_line(state, "quadkey (3, 5, 3)") == ["213"]

    def test_fromquadkey(self, state):
        assert run_line(state, "fromquadkey 213") == ["3_3_5  (x=3, y=5, zoom=3)"]

    def test_quadkey_of_root_tile(self, state):
        with pytest.raises(GeoDomainError):
            run_line(state, "quadkey 0_0_0")

    def test_neighbour(self, state):
        assert run_line(state, "neighbour 2_1_1 right") == ["2_2_1"]
        assert run_line(state, "neighbor . (0, 1)") == ["2_2_2"]

    def test_neighbour_outside_pyramid(self, state):
        assert run_line(state, "neighbour 0_0_0 left") == ["0_-1_0", "(outside the tile pyramid)"]

    def test_adjacent(self, state):
        assert run_line(state, "adjacent 1_0_0 1_1_0") == ["yes, direction (1, 0)"]
        assert run_line(state, "adjacent 1_0_0 1_1_1") == ["no"]

    def test_covered(self, state):
        assert run_line(state, "covered 3_3_5 1_0_1") == ["yes"]
        assert run_line(state, "covered 3_3_5 1_1_1") == ["no"]


class TestGeoCommands:
    def test_point(self, state):
        lines = run_line(state, "point 1_1_1")
        assert lines[0] == "(0.000000, 0.000000, 0.000000)"
        assert lines[1] == "0°  0'  0'' N  0°  0'  0'' E"

    def test_area(self, state):
        lines = run_line(state, "area 0_0_0")
        assert lines[0] == "north 85.051129  south -85.051129"
        assert lines[1] == "west  -180.000000  east  180.000000"

    def test_dms(self, state):
        assert run_line(state, "dms (48.8566, 2.3522)") == ["48° 51' 24'' N  2° 21'  8'' E"]

    def test_world_reports_scale(self, state):
        lines = run_line(state, "world (60, 10, 100)")
        assert len(lines) == 2
        assert lines[1] == "scale 2.000000"

    def test_globe(self, state):
        lines = run_line(state, "globe (0, 0, 0)")
        assert len(lines) == 1
        assert lines[0].startswith("(")

    def test_cover(self, state):
        assert run_line(state, "cover ((90, -180), (-90, 180)) 1") == ["1_0_0", "1_1_0", "1_0_1", "1_1_1"]

    def test_fit_world(self, state):
        lines = run_line(state, "fit ((90, -180), (-90, 180)) 16")
        assert lines[0] == "zoom 2: 16 tiles (target 16)"
        assert len(lines) == 17
        assert lines[1] == "2_0_0"

    def test_fit_uses_configured_target(self, state):
        assert run_line(state, "fit ((90, -180), (-90, 180))")[0] == "zoom 2: 16 tiles (target 16)"


class TestSettings:
    def test_set_changes_tile_settings(self, state):
        assert run_line(state, "set tiles.max_zoom 12") == ["tiles.max_zoom = 12"]
        assert state.settings.zoom_bounds == Bounds(0, 12)

    def test_set_is_validated(self, state):
        assert run_line(state, "set tiles.target_tile_count lots") == ["tiles.target_tile_count = 16"]
        assert run_line(state, "set shell.theme dark") == ['shell.theme = "dark"']

    def test_set_precision(self, state):
        run_line(state, "set shell.precision 2")
        assert run_line(state, "point 1_1_1")[0] == "(0.00, 0.00, 0.00)"

    @pytest.mark.parametrize("name", ["tiles.colour", "nowhere.clamp", "clamp"])
    def test_set_unknown_setting(self, state, name):
        with pytest.raises(GeoFormatError):
            run_line(state, f"set {name} 1")

    def test_fit_follows_clamp_setting(self, state):
        line = "fit ((89, -10), (80, 10)) 4"
        assert run_line(state, line)[0] == "zoom 4: 4 tiles (target 4)"
        run_line(state, "set tiles.clamp false")
        assert run_line(state, line) == ["zoom 1: 2 tiles (target 4)", "1_0_0", "1_1_0"]

    def test_save_writes_config(self, state, config_path):
        run_line(state, "set tiles.max_zoom 12")
        assert run_line(state, "save") == [f"saved {config_path}"]
        assert json.loads(config_path.read_text(encoding="utf-8"))["tiles"]["max_zoom"] == 12


class TestDispatch:
    def test_blank_line(self, state):
        assert run_line(state, "   ") == []

    def test_unknown_command(self, state):
        with pytest.raises(GeoFormatError):
            run_line(state, "teleport 1_0_0")

    def test_wrong_arg_count(self, state):
        with pytest.raises(GeoFormatError, match="usage: tile"):
            run_line(state, "tile (0, 0)")

    def test_last_tile_before_any(self, state):
        with pytest.raises(GeoFormatError):
            run_line(state, "parent .")

    @pytest.mark.parametrize("line", ["tile (0, 0) -1", "children 1_0_0 -1", "cover ((1, 2), (3, 4)) -2", "point -1_0_0"])
    def test_negative_zoom(self, state, line):
        with pytest.raises(GeoDomainError):
            run_line(state, line)

    def test_bad_zoom(self, state):
        with pytest.raises(GeoFormatError):
            run_action(state, "tile", ["(0, 0)", "high"])

    def test_help_lists_every_command(self, state):
        text = "\n".join(run_line(state, "help"))
        for act in ACTIONS.values():
            assert act.usage in text

    def test_help_for_one_command(self, state):
        assert run_line(state, "? quadkey") == ["usage: quadkey <tile>", "Quadkey of a tile."]
