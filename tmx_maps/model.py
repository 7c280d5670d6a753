"""
In-memory model of a loaded TMX map.

=============================================================================
STRUCTURE
=============================================================================

    TiledMap
    ├── properties    (Property, ...)
    ├── tilesets      (Tileset, ...)      sorted by firstgid, DESCENDING
    ├── layers        (TileLayer, ...)    tiles already decoded
    └── objectgroups  (ObjectGroup, ...)
                      └── objects (MapObject, ...)
                                  └── polygon / polyline (undecoded points)

Everything here is frozen once the loader returns it. Collections are
tuples and tile arrays are read-only numpy views, so a map can be shared
between any number of readers.

=============================================================================
GID RESOLUTION
=============================================================================

Tileset ranges are implicit: a tileset owns every GID from its firstgid up
to (not including) the next larger firstgid.

    Tileset A (firstgid=1):   GIDs 1-49
    Tileset B (firstgid=50):  GIDs 50-99
    Tileset C (firstgid=100): GIDs 100 and up

Tilesets are kept in descending firstgid order, so the first tileset with
firstgid <= gid is the owner:

    GID 75  -> 75 >= 100? no. 75 >= 50? yes -> B, local id 25
    GID 0   -> empty cell, never resolved

=============================================================================
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Any, NamedTuple, Optional, Tuple

import numpy as np

from .errors import DocumentParseError, LayerNotFoundError
from .geometry import PolyLine, Polygon
from .gid import EMPTY_GID, GID_MASK


# =============================================================================
# ATTRIBUTE HELPERS
# =============================================================================

def int_attr(elem: ET.Element, name: str, default: Optional[int] = None) -> int:
    """
    Read an integer attribute.

    A missing attribute falls back to ``default``; without a default it is
    a DocumentParseError, as is any value that is not an integer.
    """
    value = elem.get(name)
    if value is None:
        if default is None:
            raise DocumentParseError(f"<{elem.tag}> is missing required attribute {name!r}")
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise DocumentParseError(
            f"<{elem.tag}> attribute {name!r} is not an integer: {value!r}") from exc


def float_attr(elem: ET.Element, name: str, default: float = 0.0) -> float:
    value = elem.get(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise DocumentParseError(
            f"<{elem.tag}> attribute {name!r} is not a number: {value!r}") from exc


def flag_attr(elem: ET.Element, name: str, default: bool = True) -> bool:
    # Tiled writes 0/1 and omits the attribute when it has its default value
    value = elem.get(name)
    if value is None:
        return default
    return value == '1'


# =============================================================================
# PROPERTIES
# =============================================================================

@dataclass(frozen=True)
class Property:
    """
    Custom name/value pair attached to a map, layer, group or object.

    The value is kept as the string found in the document. ``type`` is the
    Tiled property type (string, int, float, bool, color, file, object)
    and ``converted()`` applies it.
    """
    name: str
    value: str = ""
    type: str = "string"

    @classmethod
    def from_xml(cls, elem: ET.Element) -> 'Property':
        value = elem.get('value')
        if value is None:
            # Multi-line string properties store the value as element text
            value = elem.text or ''
        return cls(name=elem.get('name', ''), value=value, type=elem.get('type', 'string'))

    def converted(self) -> Any:
        """Return the value converted according to its declared type."""
        if self.type == 'int':
            return int(self.value)
        if self.type == 'float':
            return float(self.value)
        if self.type == 'bool':
            return self.value.lower() == 'true'
        return self.value


def parse_properties(elem: ET.Element) -> Tuple[Property, ...]:
    """Read the <properties> child of an element, in document order."""
    props_elem = elem.find('properties')
    if props_elem is None:
        return ()
    return tuple(Property.from_xml(p) for p in props_elem.findall('property'))


class HasProperties:
    """Lookup helper for classes with a ``properties`` tuple."""

    properties: Tuple[Property, ...]

    def get_property(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Value of the first property called ``name``."""
        for prop in self.properties:
            if prop.name == name:
                return prop.value
        return default


# =============================================================================
# TILESET
# =============================================================================

@dataclass(frozen=True)
class Tileset:
    """
    Range of GIDs starting at ``firstgid``.

    For external tilesets ``source`` is the .tsx path joined onto the map's
    directory. Embedded tilesets keep an empty source and carry their size
    attributes inline instead.
    """
    firstgid: int
    source: str = ""
    name: str = ""
    tilewidth: int = 0
    tileheight: int = 0
    tilecount: int = 0
    columns: int = 0

    @classmethod
    def from_xml(cls, elem: ET.Element) -> 'Tileset':
        firstgid = int_attr(elem, 'firstgid')
        if firstgid < 1:
            raise DocumentParseError(f"tileset firstgid must be >= 1, got {firstgid}")
        return cls(
            firstgid=firstgid,
            source=elem.get('source', ''),
            name=elem.get('name', ''),
            tilewidth=int_attr(elem, 'tilewidth', 0),
            tileheight=int_attr(elem, 'tileheight', 0),
            tilecount=int_attr(elem, 'tilecount', 0),
            columns=int_attr(elem, 'columns', 0),
        )


class TileRef(NamedTuple):
    """Result of a GID lookup: owning tileset and the tile's local id."""
    tileset: Tileset
    local_id: int


# =============================================================================
# TILE LAYER
# =============================================================================

@dataclass(frozen=True, eq=False)
class TileLayer(HasProperties):
    """
    Decoded tile layer.

    ``tiles`` is a read-only uint32 array of width * height raw GIDs in
    row-major order (index = y * width + x). Flip bits are still set; use
    TiledMap.resolve_gid() or gid.split_gid() to interpret them.
    """
    name: str
    width: int
    height: int
    tiles: np.ndarray
    id: int = 0
    offsetx: float = 0
    offsety: float = 0
    opacity: float = 1.0
    visible: bool = True
    properties: Tuple[Property, ...] = ()

    def __post_init__(self):
        self.tiles.setflags(write=False)

    def __len__(self) -> int:
        return len(self.tiles)

    @property
    def is_empty(self) -> bool:
        """True when no cell holds a tile."""
        return not np.any(self.tiles & GID_MASK)

    def get_tile_gid(self, x: int, y: int) -> int:
        """Raw GID at column x, row y; 0 when out of bounds."""
        if 0 <= x < self.width and 0 <= y < self.height:
            return int(self.tiles[y * self.width + x])
        return 0

    def as_grid(self) -> np.ndarray:
        """Read-only (height, width) view of the tiles."""
        return self.tiles.reshape(self.height, self.width)

    def tile_position(self, index: int, tiled_map: 'TiledMap') -> Tuple[float, float]:
        """
        Pixel position of the cell at ``index`` in ``tiles``.

        Uses the map's tile size and this layer's pixel offset.
        """
        x = index % self.width
        y = index // self.width
        return (self.offsetx + x * tiled_map.tilewidth,
                self.offsety + y * tiled_map.tileheight)


# =============================================================================
# OBJECTS
# =============================================================================

@dataclass(frozen=True)
class MapObject(HasProperties):
    """
    Free-form object placed in an object group.

    Rectangle objects only use x/y/width/height. Tile objects also have a
    gid. Shape objects have a polygon or polyline whose points are relative
    to x/y.
    """
    id: int = 0
    name: str = ""
    type: str = ""
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0
    rotation: float = 0
    gid: Optional[int] = None
    visible: bool = True
    polygon: Optional[Polygon] = None
    polyline: Optional[PolyLine] = None
    properties: Tuple[Property, ...] = ()

    @classmethod
    def from_xml(cls, elem: ET.Element) -> 'MapObject':
        polygon = elem.find('polygon')
        polyline = elem.find('polyline')
        return cls(
            id=int_attr(elem, 'id', 0),
            name=elem.get('name', ''),
            # Tiled 1.9 renamed "type" to "class"
            type=elem.get('type') or elem.get('class', ''),
            x=float_attr(elem, 'x'),
            y=float_attr(elem, 'y'),
            width=float_attr(elem, 'width'),
            height=float_attr(elem, 'height'),
            rotation=float_attr(elem, 'rotation'),
            gid=int_attr(elem, 'gid') if elem.get('gid') is not None else None,
            visible=flag_attr(elem, 'visible'),
            polygon=Polygon(polygon.get('points', '')) if polygon is not None else None,
            polyline=PolyLine(polyline.get('points', '')) if polyline is not None else None,
            properties=parse_properties(elem),
        )


@dataclass(frozen=True)
class ObjectGroup(HasProperties):
    """Named collection of objects, in document order."""
    name: str
    color: str = ""
    opacity: float = 1.0
    visible: bool = True
    properties: Tuple[Property, ...] = ()
    objects: Tuple[MapObject, ...] = ()

    @classmethod
    def from_xml(cls, elem: ET.Element) -> 'ObjectGroup':
        return cls(
            name=elem.get('name', ''),
            color=elem.get('color', ''),
            opacity=float_attr(elem, 'opacity', 1.0),
            visible=flag_attr(elem, 'visible'),
            properties=parse_properties(elem),
            objects=tuple(MapObject.from_xml(o) for o in elem.findall('object')),
        )

    def get_object(self, name: str) -> Optional[MapObject]:
        for obj in self.objects:
            if obj.name == name:
                return obj
        return None


# =============================================================================
# MAP
# =============================================================================

@dataclass(frozen=True, eq=False)
class TiledMap(HasProperties):
    """
    A fully decoded map. Build it with loader.load_map().

    ``class_name`` is the map's ``class`` attribute and is the key the
    registry indexes maps by. ``base_dir`` is the directory relative
    resource paths were resolved against.
    """
    source: str
    base_dir: str
    class_name: str
    orientation: str
    width: int
    height: int
    tilewidth: int
    tileheight: int
    version: str = ""
    properties: Tuple[Property, ...] = ()
    tilesets: Tuple[Tileset, ...] = ()
    layers: Tuple[TileLayer, ...] = ()
    objectgroups: Tuple[ObjectGroup, ...] = ()

    def get_layer(self, name: str) -> TileLayer:
        """
        Find a tile layer by name (first match).

        Raises:
        -------
        LayerNotFoundError : If no layer has that name
        """
        for layer in self.layers:
            if layer.name == name:
                return layer
        raise LayerNotFoundError(name)

    def get_object_group(self, name: str) -> Optional[ObjectGroup]:
        for group in self.objectgroups:
            if group.name == name:
                return group
        return None

    def resolve_gid(self, gid: int) -> Optional[TileRef]:
        """
        Find the tileset that owns a GID.

        Flip bits are ignored. Returns None for empty cells (GID 0) and for
        GIDs below every tileset's firstgid; callers treat both as "no tile".
        """
        masked = int(gid) & GID_MASK
        if masked == EMPTY_GID:
            return None
        for tileset in self.tilesets:
            if tileset.firstgid <= masked:
                return TileRef(tileset, masked - tileset.firstgid)
        return None
