"""
Registry of every map under a directory, indexed by map class name.

=============================================================================
STATES
=============================================================================

A registry is either unloaded or holds a LoadedMaps index:

    registry = MapRegistry()
    registry.get_by_name("town")        # RegistryNotLoadedError

    maps = registry.load("assets/maps")   # LoadedMaps
    maps.get_by_name("town")            # TiledMap, or MapNotFoundError
    registry.get_by_name("town")        # same thing

Code that holds a LoadedMaps value can never see "not loaded". Reloading
builds a complete new index first and only then replaces the old one, so
readers never observe a half-built index and a failed reload keeps the
previous maps.

=============================================================================
FAILURES
=============================================================================

By default any map that fails to load aborts the whole load and the error
propagates. ``skip_invalid=True`` logs a warning and skips the file
instead.

Two files declaring the same class name: the file loaded last wins (files
are loaded in sorted path order) and a warning is logged.
``reject_duplicates=True`` raises DuplicateClassNameError instead.

=============================================================================
"""

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Union

from . import config
from .errors import (
    DuplicateClassNameError, MapNotFoundError, RegistryNotLoadedError,
    ResourceIOError, TmxError,
)
from .loader import load_map
from .model import TiledMap

logger = logging.getLogger(__name__)


def find_map_files(base_dir: Union[str, Path],
                   suffix: str = config.MAP_FILE_SUFFIX) -> List[Path]:
    """
    Recursively list map files under ``base_dir`` in sorted order.

    Raises:
    -------
    ResourceIOError : If base_dir does not exist or is not a directory
    """
    base = Path(base_dir)
    if not base.is_dir():
        raise ResourceIOError(f"map directory not found: {base}")
    try:
        return sorted(p for p in base.rglob(f"*{suffix}") if p.is_file())
    except OSError as exc:
        raise ResourceIOError(f"cannot scan map directory {base}: {exc}") from exc


class LoadedMaps:
    """Read-only index of loaded maps by class name."""

    def __init__(self, maps: Mapping[str, TiledMap]):
        self._maps = MappingProxyType(dict(maps))

    def get_by_name(self, name: str) -> TiledMap:
        """
        Raises:
        -------
        MapNotFoundError : If no map was indexed under ``name``
        """
        try:
            return self._maps[name]
        except KeyError:
            raise MapNotFoundError(name) from None

    def names(self) -> List[str]:
        return sorted(self._maps)

    def __contains__(self, name: object) -> bool:
        return name in self._maps

    def __len__(self) -> int:
        return len(self._maps)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __repr__(self) -> str:
        return f"LoadedMaps({self.names()!r})"


def load_maps(base_dir: Union[str, Path], *,
              suffix: str = config.MAP_FILE_SUFFIX,
              skip_invalid: bool = False,
              reject_duplicates: bool = False) -> LoadedMaps:
    """
    Load every map file under ``base_dir``.

    Parameters:
    -----------
    base_dir : str or Path
        Directory scanned recursively for map files
    suffix : str
        File suffix of map documents
    skip_invalid : bool
        Log and skip maps that fail to load instead of raising
    reject_duplicates : bool
        Raise DuplicateClassNameError when two maps share a class name
        instead of keeping the last one

    Returns:
    --------
    LoadedMaps : Index of the loaded maps by class name
    """
    maps: Dict[str, TiledMap] = {}
    for path in find_map_files(base_dir, suffix):
        try:
            tiled_map = load_map(path)
        except TmxError as exc:
            if not skip_invalid:
                raise
            logger.warning("Skipping map %s: %s", path, exc)
            continue

        previous = maps.get(tiled_map.class_name)
        if previous is not None:
            if reject_duplicates:
                raise DuplicateClassNameError(tiled_map.class_name, previous.source, tiled_map.source)
            logger.warning("Map class %r from %s replaces %s",
                           tiled_map.class_name, tiled_map.source, previous.source)
        maps[tiled_map.class_name] = tiled_map

    logger.info("Loaded %d maps from %s", len(maps), base_dir)
    return LoadedMaps(maps)


class MapRegistry:
    """
    Holder for the current LoadedMaps index, if any.

    Not safe for concurrent load() calls; concurrent get_by_name() calls
    while a load runs see either the old or the new index.
    """

    def __init__(self):
        self._loaded: Optional[LoadedMaps] = None

    @property
    def loaded(self) -> Optional[LoadedMaps]:
        return self._loaded

    @property
    def is_loaded(self) -> bool:
        return self._loaded is not None

    def load(self, base_dir: Union[str, Path], **options) -> LoadedMaps:
        """Load (or reload) all maps; see load_maps() for the options."""
        loaded = load_maps(base_dir, **options)
        self._loaded = loaded
        return loaded

    def get_by_name(self, name: str) -> TiledMap:
        """
        Raises:
        -------
        RegistryNotLoadedError : If load() has not completed successfully
        MapNotFoundError : If no map was indexed under ``name``
        """
        if self._loaded is None:
            raise RegistryNotLoadedError()
        return self._loaded.get_by_name(name)
