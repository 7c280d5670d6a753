"""
Polygon and polyline point decoding.

Tiled stores object shapes as a single attribute:

    <object id="3" x="64" y="32">
        <polygon points="0,0 32,0 32,16"/>
    </object>

Points are relative to the owning object's x/y. The string is kept as-is
on the model and only decoded when someone asks for it.
"""

import re
from dataclasses import dataclass
from typing import List, NamedTuple

from .errors import MalformedPointsError

_INTEGER = re.compile(r"[+-]?[0-9]+")


class Point(NamedTuple):
    x: int
    y: int


def decode_points(points: str) -> List[Point]:
    """
    Parse a "x1,y1 x2,y2 ..." string into a list of Point.

    Parameters:
    -----------
    points : str
        Whitespace separated list of comma separated integer pairs

    Returns:
    --------
    List[Point] : Points in document order (a new list on every call)

    Raises:
    -------
    MalformedPointsError : If the string is blank, a pair does not have
        exactly two coordinates, or a coordinate is not an integer
    """
    pairs = points.split()
    if not pairs:
        raise MalformedPointsError(points, "no points")

    result = []
    for pair in pairs:
        coords = pair.split(',')
        if len(coords) != 2:
            raise MalformedPointsError(points, f"bad pair {pair!r}")
        for coord in coords:
            if not _INTEGER.fullmatch(coord):
                raise MalformedPointsError(points, f"bad coordinate {coord!r}")
        result.append(Point(int(coords[0]), int(coords[1])))
    return result


@dataclass(frozen=True)
class Polygon:
    """Closed shape; the last point connects back to the first."""
    points: str

    def decode(self) -> List[Point]:
        return decode_points(self.points)


@dataclass(frozen=True)
class PolyLine:
    """Open shape."""
    points: str

    def decode(self) -> List[Point]:
        return decode_points(self.points)
