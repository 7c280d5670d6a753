"""
tmx_maps - loading and querying Tiled (TMX) maps

    from tmx_maps import MapRegistry, load_map

    tiled_map = load_map("maps/town.tmx")
    ground = tiled_map.get_layer("Ground")
    for index, gid in enumerate(ground.tiles):
        ref = tiled_map.resolve_gid(gid)
        if ref is None:
            continue  # empty cell
        x, y = ground.tile_position(index, tiled_map)

Requirements:
    pip install numpy
"""

from .errors import (
    TmxError, DocumentParseError, DecodeError,
    UnknownEncodingError, UnknownCompressionError, EncodingError,
    CompressionError, LengthMismatchError, MalformedNumberError,
    MalformedPointsError, LayerNotFoundError, MapNotFoundError,
    RegistryNotLoadedError, DuplicateClassNameError, ResourceIOError,
)
from .geometry import Point, Polygon, PolyLine, decode_points
from .gid import (
    GID_HORIZONTAL_FLIP, GID_VERTICAL_FLIP, GID_DIAGONAL_FLIP, GID_FLIP,
    GID_MASK, Flip, flip_flags, split_gid,
)
from .loader import load_map, load_map_from_stream
from .model import (
    TiledMap, Tileset, TileLayer, TileRef, ObjectGroup, MapObject, Property,
)
from .payload import LayerData, decode_layer_data
from .registry import MapRegistry, LoadedMaps, load_maps, find_map_files
from .render import TileDrawer, draw_map_layer

__version__ = "1.0.0"
__all__ = [
    "TmxError", "DocumentParseError", "DecodeError",
    "UnknownEncodingError", "UnknownCompressionError", "EncodingError",
    "CompressionError", "LengthMismatchError", "MalformedNumberError",
    "MalformedPointsError", "LayerNotFoundError", "MapNotFoundError",
    "RegistryNotLoadedError", "DuplicateClassNameError", "ResourceIOError",
    "Point", "Polygon", "PolyLine", "decode_points",
    "GID_HORIZONTAL_FLIP", "GID_VERTICAL_FLIP", "GID_DIAGONAL_FLIP",
    "GID_FLIP", "GID_MASK", "Flip", "flip_flags", "split_gid",
    "load_map", "load_map_from_stream",
    "TiledMap", "Tileset", "TileLayer", "TileRef", "ObjectGroup",
    "MapObject", "Property",
    "LayerData", "decode_layer_data",
    "MapRegistry", "LoadedMaps", "load_maps", "find_map_files",
    "TileDrawer", "draw_map_layer",
]
