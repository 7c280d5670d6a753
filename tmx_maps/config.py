"""Default settings for tmx_maps.

Values that make sense to change per deployment are read from the
environment once, at import time:

    TMX_MAPS_DIR        directory scanned by the command line tool
    TMX_MAPS_LOG_LEVEL  logging level name used by the command line tool
"""

import os

MAP_FILE_SUFFIX = ".tmx"
"""File suffix the registry scan treats as a map document."""

DEFAULT_MAPS_DIR = os.environ.get("TMX_MAPS_DIR", "maps")
"""Base directory used by ``python -m tmx_maps`` when none is given."""

LOG_LEVEL = os.environ.get("TMX_MAPS_LOG_LEVEL", "WARNING").upper()
"""Logging level name for the command line tool."""

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
"""Format string passed to logging.basicConfig by the command line tool."""
