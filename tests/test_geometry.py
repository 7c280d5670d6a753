"""Tests for polygon/polyline point decoding."""

import pytest

from tmx_maps.errors import MalformedPointsError
from tmx_maps.geometry import Point, PolyLine, Polygon, decode_points


class TestDecodePoints:
    def test_decodes_pairs_in_order(self) -> None:
        assert decode_points("0,0 10,0 10,10") == [(0, 0), (10, 0), (10, 10)]

    def test_returns_point_tuples(self) -> None:
        point = decode_points("3,-4")[0]
        assert isinstance(point, Point)
        assert point.x == 3
        assert point.y == -4

    def test_tolerates_extra_whitespace(self) -> None:
        assert decode_points("  1,2\n 3,4 ") == [(1, 2), (3, 4)]

    @pytest.mark.parametrize("points", [
        "0,0 10",
        "0,0 1,2,3",
        "0,0 a,1",
        "0,0 1.5,2",
        "0,0 ,2",
        "",
        "   ",
    ])
    def test_malformed(self, points: str) -> None:
        with pytest.raises(MalformedPointsError):
            decode_points(points)


class TestShapes:
    def test_polygon_decodes_on_demand(self) -> None:
        polygon = Polygon("0,0 32,0 32,16")
        first = polygon.decode()
        second = polygon.decode()
        assert first == [(0, 0), (32, 0), (32, 16)]
        assert first == second
        assert first is not second

    def test_polyline_error_propagates(self) -> None:
        with pytest.raises(MalformedPointsError):
            PolyLine("0,0 x").decode()
