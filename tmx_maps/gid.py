"""
Global tile ID (GID) bit layout.

=============================================================================
GID LAYOUT
=============================================================================

Every cell of a tile layer stores one unsigned 32-bit GID:

    bit 31      horizontal flip
    bit 30      vertical flip
    bit 29      diagonal flip (anti-diagonal, used for 90 degree rotation)
    bits 0-27   tile index, selected with GID_MASK

    GID 0 = empty cell (no tile)

The flip bits are orientation metadata. They must be masked off before a
GID is compared against a tileset's firstgid, otherwise a flipped tile
would appear to belong to whichever tileset has the largest firstgid.

=============================================================================
"""

from enum import IntFlag
from typing import Tuple

GID_HORIZONTAL_FLIP = 0x80000000
GID_VERTICAL_FLIP = 0x40000000
GID_DIAGONAL_FLIP = 0x20000000
GID_FLIP = GID_HORIZONTAL_FLIP | GID_VERTICAL_FLIP | GID_DIAGONAL_FLIP
GID_MASK = 0x0FFFFFFF

EMPTY_GID = 0


class Flip(IntFlag):
    """
    Orientation flags carried in the top bits of a GID.

    Values are the raw bit positions, so ``Flip(gid & GID_FLIP)`` works
    directly and flags can be OR'ed back into a tile index.
    """
    NONE = 0
    HORIZONTAL = GID_HORIZONTAL_FLIP
    VERTICAL = GID_VERTICAL_FLIP
    DIAGONAL = GID_DIAGONAL_FLIP


def tile_id(gid: int) -> int:
    """Strip the flip bits from a GID."""
    return int(gid) & GID_MASK


def flip_flags(gid: int) -> Flip:
    """Return the orientation flags set on a GID."""
    return Flip(int(gid) & GID_FLIP)


def split_gid(gid: int) -> Tuple[int, Flip]:
    """
    Split a raw GID into (tile index, flip flags).

    Example:
        >>> split_gid(150 | GID_HORIZONTAL_FLIP)
        (150, <Flip.HORIZONTAL: 2147483648>)
    """
    gid = int(gid)
    return gid & GID_MASK, Flip(gid & GID_FLIP)
