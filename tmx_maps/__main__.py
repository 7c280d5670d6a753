#!/usr/bin/env python3

"""
TMX map inspector

Usage:
    python -m tmx_maps [maps_dir] [map_name [layer_name]]

    maps_dir              List every map found (default: $TMX_MAPS_DIR or ./maps)
    maps_dir map          Show the map's tilesets, layers and object groups
    maps_dir map layer    Print the layer's tile grid (tile ids, flip bits removed)
"""

import logging
import sys

from . import config
from .errors import TmxError
from .gid import GID_MASK
from .registry import MapRegistry


def print_maps(maps):
    for name in maps.names():
        tiled_map = maps.get_by_name(name)
        print(f"{name:20} {tiled_map.width}x{tiled_map.height} "
              f"{tiled_map.orientation:12} {tiled_map.source}")


def print_map(tiled_map):
    print(f"Map: {tiled_map.class_name} ({tiled_map.source})")
    print(f"  {tiled_map.width}x{tiled_map.height} tiles of "
          f"{tiled_map.tilewidth}x{tiled_map.tileheight} px, {tiled_map.orientation}")
    for prop in tiled_map.properties:
        print(f"  property {prop.name} = {prop.value}")
    for tileset in tiled_map.tilesets:
        print(f"  tileset firstgid={tileset.firstgid} {tileset.source or tileset.name or '(embedded)'}")
    for layer in tiled_map.layers:
        state = "empty" if layer.is_empty else ("visible" if layer.visible else "hidden")
        print(f"  layer {layer.name!r} {layer.width}x{layer.height} {state}")
    for group in tiled_map.objectgroups:
        print(f"  objectgroup {group.name!r} ({len(group.objects)} objects)")


def print_layer(tiled_map, layer):
    print(f"Layer {layer.name!r} of {tiled_map.class_name}")
    for row in layer.as_grid():
        print(" ".join(f"{int(gid) & GID_MASK:4d}" for gid in row))


def main():
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)

    args = sys.argv[1:]
    if args and args[0] in ('-h', '--help'):
        print(__doc__)
        sys.exit(0)
    if len(args) > 3:
        print(__doc__)
        sys.exit(1)

    maps_dir = args[0] if args else config.DEFAULT_MAPS_DIR

    try:
        maps = MapRegistry().load(maps_dir)
        if len(args) < 2:
            print_maps(maps)
            return
        tiled_map = maps.get_by_name(args[1])
        if len(args) < 3:
            print_map(tiled_map)
            return
        print_layer(tiled_map, tiled_map.get_layer(args[2]))
    except TmxError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
