"""Tests for TileCoordinate and WorldPosition."""

import numpy as np
import pytest

from geotiles.vectors import TileCoordinate, WorldPosition


class TestTileCoordinate:
    """Integer grid vector algebra."""

    def test_arithmetic(self):
        a = TileCoordinate(3, 4)
        b = TileCoordinate(1, -2)
        assert a + b == TileCoordinate(4, 2)
        assert a - b == TileCoordinate(2, 6)
        assert -a == TileCoordinate(-3, -4)
        assert a * 2 == TileCoordinate(6, 8)
        assert 2 * a == TileCoordinate(6, 8)
        assert a // 2 == TileCoordinate(1, 2)

    def test_shifts_scale_by_powers_of_two(self):
        a = TileCoordinate(5, 3)
        assert a << 2 == TileCoordinate(20, 12)
        assert a >> 1 == TileCoordinate(2, 1)
        assert (a << 3) >> 3 == a

    def test_right_shift_floors_negative_values(self):
        assert TileCoordinate(-3, -1) >> 1 == TileCoordinate(-2, -1)
        assert TileCoordinate(-3, -1) // 2 == TileCoordinate(-2, -1)

    def test_named_directions(self):
        assert TileCoordinate.ONE == TileCoordinate(1, 1)
        assert TileCoordinate.UP == TileCoordinate(0, -1)
        assert TileCoordinate.DOWN == TileCoordinate(0, 1)
        assert TileCoordinate.LEFT == TileCoordinate(-1, 0)
        assert TileCoordinate.RIGHT == TileCoordinate(1, 0)
        assert TileCoordinate.UP + TileCoordinate.DOWN == TileCoordinate.ZERO

    def test_manhattan_length(self):
        assert TileCoordinate(-2, 3).manhattan_length == 5

    def test_as_array(self):
        assert np.array_equal(TileCoordinate(7, 9).as_array(), np.array([7, 9]))


class TestWorldPosition:
    """Planar 3D vector algebra."""

    def test_arithmetic(self):
        a = WorldPosition(1.0, 2.0, 3.0)
        b = WorldPosition(0.5, -1.0, 2.0)
        assert a + b == WorldPosition(1.5, 1.0, 5.0)
        assert a - b == WorldPosition(0.5, 3.0, 1.0)
        assert a * 2 == WorldPosition(2.0, 4.0, 6.0)
        assert 2 * a == WorldPosition(2.0, 4.0, 6.0)
        assert a / 2 == WorldPosition(0.5, 1.0, 1.5)
        assert a - a == WorldPosition.ZERO

    def test_as_array(self):
        assert np.allclose(WorldPosition(1.0, 2.0, 3.0).as_array(), [1.0, 2.0, 3.0])

    def test_division_by_zero_propagates(self):
        with pytest.raises(ZeroDivisionError):
            WorldPosition(1.0, 1.0, 1.0) / 0
