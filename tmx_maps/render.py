"""
Bridge between loaded maps and a host rendering engine.

tmx_maps never touches images or a screen. A renderer implements
TileDrawer (usually by looking up a texture from the tileset source and
the local tile id) and draw_map_layer() feeds it every non-empty cell of
a layer with its pixel position and orientation.
"""

from typing import Protocol, Union

from .gid import Flip, flip_flags
from .registry import LoadedMaps, MapRegistry


class TileDrawer(Protocol):
    def draw_tile(self, tileset_source: str, local_id: int,
                  x: float, y: float, flip: Flip) -> None:
        ...


def draw_map_layer(maps: Union[LoadedMaps, MapRegistry], map_name: str,
                   layer_name: str, drawer: TileDrawer,
                   skip_hidden: bool = False) -> int:
    """
    Draw one layer of one map.

    Lookup errors (RegistryNotLoadedError, MapNotFoundError,
    LayerNotFoundError) propagate. Empty cells and GIDs no tileset owns
    are skipped. A layer with visible="0" is drawn like any other unless
    ``skip_hidden`` is set, in which case nothing is drawn for it.

    Returns:
    --------
    int : Number of tiles handed to the drawer
    """
    tiled_map = maps.get_by_name(map_name)
    layer = tiled_map.get_layer(layer_name)
    if skip_hidden and not layer.visible:
        return 0

    drawn = 0
    for index, gid in enumerate(layer.tiles):
        ref = tiled_map.resolve_gid(gid)
        if ref is None:
            continue
        x, y = layer.tile_position(index, tiled_map)
        drawer.draw_tile(ref.tileset.source, ref.local_id, x, y, flip_flags(gid))
        drawn += 1
    return drawn
