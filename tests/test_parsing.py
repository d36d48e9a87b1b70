"""Tests for the text front end."""

import pytest

from geotiles.bounds import Bounds
from geotiles.errors import GeoFormatError
from geotiles.globe import GlobeArea, GlobePoint
from geotiles.parsing import (
    parse_bounds,
    parse_direction,
    parse_globe_area,
    parse_globe_point,
    parse_tile_id,
    parse_world_position,
    split_args,
)
from geotiles.tiles import TileId
from geotiles.vectors import TileCoordinate, WorldPosition

MALFORMED = "0,  1, #2)"


class TestBounds:
    def test_int(self):
        assert parse_bounds("(1, 2)") == Bounds(1, 2)

    def test_float(self):
        assert parse_bounds("(1.2, 2.5)", float) == Bounds(1.2, 2.5)

    def test_reversed(self):
        assert parse_bounds("( 5 ,1 )") == Bounds(1, 5)

    @pytest.mark.parametrize("text", [MALFORMED, "(1, 2, 3)", "(1.5, 2)", "()", "1, 2"])
    def test_malformed(self, text):
        with pytest.raises(GeoFormatError):
            parse_bounds(text)


class TestGlobePoint:
    def test_two_fields(self):
        assert parse_globe_point("(1, 2)") == GlobePoint(1, 2, 0)

    def test_three_fields(self):
        assert parse_globe_point("(1.2, 2.5, 350)") == GlobePoint(1.2, 2.5, 350)

    def test_clamps(self):
        assert parse_globe_point("(95, -190)") == GlobePoint(90, -180)

    def test_str_round_trip(self):
        p = GlobePoint(-12.25, 130.5, 42)
        assert parse_globe_point(str(p)) == p

    @pytest.mark.parametrize("text", [MALFORMED, "(1)", "(1, 2, 3, 4)", "(a, b)"])
    def test_malformed(self, text):
        with pytest.raises(GeoFormatError):
            parse_globe_point(text)


class TestGlobeArea:
    def test_simple(self):
        assert parse_globe_area("((1,2),(3,4))") == GlobeArea(GlobePoint(1, 2), GlobePoint(3, 4))

    def test_corner_order(self):
        assert parse_globe_area("((3, 4), (1, 2))") == GlobeArea(GlobePoint(1, 2), GlobePoint(3, 4))

    def test_with_altitudes(self):
        parsed = parse_globe_area("((1.2, 2.5, 350), (0.5, 1.5, 350))")
        assert parsed == GlobeArea(GlobePoint(0.5, 1.5, 350), GlobePoint(1.2, 2.5))

    def test_str_round_trip(self):
        area = GlobeArea(GlobePoint(-5, 10), GlobePoint(5, 20))
        assert parse_globe_area(str(area)) == area

    @pytest.mark.parametrize("text", ["((), ())", "((1, 2))", MALFORMED, "((1, 2), (3, 4), (5, 6))"])
    def test_malformed(self, text):
        with pytest.raises(GeoFormatError):
            parse_globe_area(text)


class TestTileId:
    def test_tuple_form(self):
        assert parse_tile_id("( 0,  1, 2)") == TileId.from_xyz(0, 1, 2)

    def test_key_form(self):
        assert parse_tile_id("2_0_1") == TileId.from_xyz(0, 1, 2)

    @pytest.mark.parametrize("text", [MALFORMED, "0,1,#2)", "(0, 1)", "(0.5, 1, 2)", "2_0"])
    def test_malformed(self, text):
        with pytest.raises(GeoFormatError):
            parse_tile_id(text)


class TestOtherForms:
    def test_world_position(self):
        assert parse_world_position("(1.5, -2, 3e2)") == WorldPosition(1.5, -2.0, 300.0)

    def test_world_position_malformed(self):
        with pytest.raises(GeoFormatError):
            parse_world_position("(1, 2)")

    @pytest.mark.parametrize("text,expected", [
        ("up", TileCoordinate.UP),
        ("DOWN", TileCoordinate.DOWN),
        ("west", TileCoordinate.LEFT),
        ("right", TileCoordinate.RIGHT),
        ("(1, -1)", TileCoordinate(1, -1)),
    ])
    def test_direction(self, text, expected):
        assert parse_direction(text) == expected

    def test_direction_malformed(self):
        with pytest.raises(GeoFormatError):
            parse_direction("sideways")


class TestSplitArgs:
    def test_keeps_groups_together(self):
        assert split_args("tile (1, 2) 5") == ["tile", "(1, 2)", "5"]

    def test_nested_groups(self):
        assert split_args("cover  ((1, 2), (3, 4))   7") == ["cover", "((1, 2), (3, 4))", "7"]

    def test_blank(self):
        assert split_args("   ") == []

    @pytest.mark.parametrize("line", ["tile (1, 2", "tile 1, 2)"])
    def test_unbalanced(self, line):
        with pytest.raises(GeoFormatError):
            split_args(line)
