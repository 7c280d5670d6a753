"""Tests for GID flip-bit helpers."""

import numpy as np

from tmx_maps.gid import (
    GID_DIAGONAL_FLIP, GID_HORIZONTAL_FLIP, GID_MASK, GID_VERTICAL_FLIP,
    Flip, flip_flags, split_gid, tile_id,
)


def test_bit_layout() -> None:
    assert GID_HORIZONTAL_FLIP == 1 << 31
    assert GID_VERTICAL_FLIP == 1 << 30
    assert GID_DIAGONAL_FLIP == 1 << 29
    assert GID_MASK == 0x0FFFFFFF


def test_split_plain_gid() -> None:
    assert split_gid(42) == (42, Flip.NONE)


def test_split_flipped_gid() -> None:
    gid = 7 | GID_HORIZONTAL_FLIP | GID_DIAGONAL_FLIP
    index, flags = split_gid(gid)
    assert index == 7
    assert Flip.HORIZONTAL in flags
    assert Flip.DIAGONAL in flags
    assert Flip.VERTICAL not in flags


def test_accepts_numpy_scalars() -> None:
    gid = np.uint32(5 | GID_VERTICAL_FLIP)
    assert tile_id(gid) == 5
    assert flip_flags(gid) == Flip.VERTICAL
