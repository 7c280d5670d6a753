"""
TMX document loading.

Turns a TMX file (or any binary stream holding one) into a fully decoded,
read-only TiledMap:

    1. parse the XML
    2. read map attributes, properties and tilesets
    3. sort tilesets by firstgid, descending (required by resolve_gid)
    4. decode every tile layer's <data> payload
    5. join external tileset sources onto the map's directory
    6. read object groups

Any failure aborts the whole load; a partially decoded map is never
returned.
"""

import logging
import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from .errors import DocumentParseError, ResourceIOError
from .model import (
    ObjectGroup, TileLayer, TiledMap, Tileset,
    float_attr, flag_attr, int_attr, parse_properties,
)
from .payload import LayerData, decode_layer_data

logger = logging.getLogger(__name__)

_REQUIRED_MAP_ATTRIBUTES = ('orientation', 'width', 'height', 'tilewidth', 'tileheight', 'class')


def read_layer_data(data_elem: ET.Element) -> LayerData:
    """Collect the raw contents of a <data> element."""
    encoding = data_elem.get('encoding', '')
    records = ()
    if encoding == '':
        records = tuple(tile.get('gid', '') for tile in data_elem.findall('tile'))
    return LayerData(
        encoding=encoding,
        compression=data_elem.get('compression', ''),
        text=data_elem.text or '',
        records=records,
    )


def read_tile_layer(elem: ET.Element, map_width: int, map_height: int) -> TileLayer:
    """Read a <layer> element and decode its tile data."""
    name = elem.get('name', '')
    width = int_attr(elem, 'width', map_width)
    height = int_attr(elem, 'height', map_height)
    if width <= 0 or height <= 0:
        raise DocumentParseError(f"layer {name!r} has invalid size {width}x{height}")

    data_elem = elem.find('data')
    if data_elem is None:
        raise DocumentParseError(f"layer {name!r} has no <data> element")

    # Checked against the layer size (defaulting to the map size), so every
    # layer holds exactly width * height tiles.
    # The LayerData goes out of scope here; only the decoded array is kept
    tiles = decode_layer_data(read_layer_data(data_elem), width, height)

    return TileLayer(
        name=name,
        width=width,
        height=height,
        tiles=tiles,
        id=int_attr(elem, 'id', 0),
        offsetx=float_attr(elem, 'offsetx'),
        offsety=float_attr(elem, 'offsety'),
        opacity=float_attr(elem, 'opacity', 1.0),
        visible=flag_attr(elem, 'visible'),
        properties=parse_properties(elem),
    )


def resolve_tileset_source(tileset: Tileset, base_dir: str) -> Tileset:
    """Join an external tileset's source onto the map directory."""
    if not tileset.source:
        return tileset
    source = os.path.normpath(os.path.join(base_dir, tileset.source))
    return Tileset(
        firstgid=tileset.firstgid,
        source=source,
        name=tileset.name,
        tilewidth=tileset.tilewidth,
        tileheight=tileset.tileheight,
        tilecount=tileset.tilecount,
        columns=tileset.columns,
    )


def _parse_document(stream: BinaryIO) -> ET.Element:
    try:
        root = ET.parse(stream).getroot()
    except (ET.ParseError, LookupError, ValueError) as exc:
        # LookupError: unknown encoding named in the XML declaration
        raise DocumentParseError(f"malformed map document: {exc}") from exc
    if root.tag != 'map':
        raise DocumentParseError(f"expected <map> root element, got <{root.tag}>")
    missing = [name for name in _REQUIRED_MAP_ATTRIBUTES if root.get(name) is None]
    if missing:
        raise DocumentParseError(f"<map> is missing required attributes: {', '.join(missing)}")
    return root


def load_map_from_stream(source: str, stream: BinaryIO,
                         base_dir: Optional[str] = None) -> TiledMap:
    """
    Load a map from an open binary stream.

    Parameters:
    -----------
    source : str
        Identifier of the document, usually its path
    stream : BinaryIO
        Stream positioned at the start of the TMX document
    base_dir : str, optional
        Directory external tileset paths are relative to.
        Defaults to the directory part of ``source``.

    Raises:
    -------
    DocumentParseError : If the document is malformed or misses fields
    DecodeError : If any layer payload fails to decode
    """
    if base_dir is None:
        base_dir = os.path.dirname(source)

    root = _parse_document(stream)

    width = int_attr(root, 'width')
    height = int_attr(root, 'height')
    tilewidth = int_attr(root, 'tilewidth')
    tileheight = int_attr(root, 'tileheight')
    if min(width, height, tilewidth, tileheight) <= 0:
        raise DocumentParseError(
            f"map dimensions must be positive: {width}x{height} tiles "
            f"of {tilewidth}x{tileheight} pixels")

    # -----------------------------------------------------------------
    # TILESETS
    # -----------------------------------------------------------------
    tileset_elems = root.findall('tileset')
    if not tileset_elems:
        raise DocumentParseError(f"{source}: map declares no tilesets")
    # sorted() is stable with reverse=True, equal firstgids keep document order
    tilesets = sorted((Tileset.from_xml(e) for e in tileset_elems),
                      key=lambda ts: ts.firstgid, reverse=True)

    # -----------------------------------------------------------------
    # LAYERS
    # -----------------------------------------------------------------
    layers: List[TileLayer] = []
    for layer_elem in root.findall('layer'):
        layers.append(read_tile_layer(layer_elem, width, height))
        logger.debug("%s: decoded layer %r", source, layers[-1].name)

    tilesets = [resolve_tileset_source(ts, base_dir) for ts in tilesets]

    tiled_map = TiledMap(
        source=source,
        base_dir=base_dir,
        class_name=root.get('class'),
        orientation=root.get('orientation'),
        width=width,
        height=height,
        tilewidth=tilewidth,
        tileheight=tileheight,
        version=root.get('version', ''),
        properties=parse_properties(root),
        tilesets=tuple(tilesets),
        layers=tuple(layers),
        objectgroups=tuple(ObjectGroup.from_xml(e) for e in root.findall('objectgroup')),
    )
    logger.debug("%s: %d tilesets, %d tile layers, %d object groups",
                 source, len(tiled_map.tilesets), len(tiled_map.layers),
                 len(tiled_map.objectgroups))
    return tiled_map


def load_map(path: Union[str, Path]) -> TiledMap:
    """
    Load a TMX file from disk.

    The file is closed on every exit path, including decode failures.

    Raises:
    -------
    ResourceIOError : If the file cannot be opened or read
    DocumentParseError, DecodeError : See load_map_from_stream()
    """
    path = str(path)
    logger.info("Loading map: %s", path)
    try:
        with open(path, 'rb') as stream:
            return load_map_from_stream(path, stream)
    except OSError as exc:
        raise ResourceIOError(f"cannot read map {path}: {exc}") from exc
