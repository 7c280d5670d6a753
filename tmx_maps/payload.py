"""
Tile layer payload decoding.

=============================================================================
DATA ENCODINGS
=============================================================================

A <layer> carries its tiles in a single <data> element, in one of three
encodings:

1. Inline records (no encoding attribute):
   <data>
       <tile gid="1"/><tile gid="2"/><tile/>...
   </data>
   One element per cell. A <tile/> without gid is an empty cell.

2. CSV:
   <data encoding="csv">
       1,2,3,4,
       5,6,7,8
   </data>

3. Base64, optionally compressed:
   <data encoding="base64" compression="zlib">
       eJxjZGBgYAZiViBmA2IAAEQADQ==
   </data>
   After decoding (and decompressing) the bytes are little-endian uint32
   values, one per cell.

=============================================================================
OUTPUT
=============================================================================

Every strategy returns a NEW numpy uint32 array of exactly width * height
entries in row-major order (index = y * width + x). Flip bits are left in
place; see gid.py.

=============================================================================
"""

import base64
import binascii
import gzip
import re
import zlib
from dataclasses import dataclass, field
from typing import Sequence, Tuple

import numpy as np

from .errors import (
    CompressionError, EncodingError, LengthMismatchError,
    MalformedNumberError, UnknownCompressionError, UnknownEncodingError,
)

ENCODING_INLINE = ""
ENCODING_CSV = "csv"
ENCODING_BASE64 = "base64"

COMPRESSION_NONE = ""
COMPRESSION_GZIP = "gzip"
COMPRESSION_ZLIB = "zlib"
COMPRESSIONS = (COMPRESSION_NONE, COMPRESSION_GZIP, COMPRESSION_ZLIB)

GID_DTYPE = np.uint32
_GID_MAX = 0xFFFFFFFF

# Anything that is not part of a number or a separator, e.g. the newlines
# and indentation Tiled puts around each CSV row.
_CSV_NOISE = re.compile(r"[^0-9,]")


@dataclass(frozen=True)
class LayerData:
    """
    Undecoded contents of a <data> element.

    Only lives while a layer is being loaded; decoded layers keep the tile
    array, never this object.
    """
    encoding: str = ENCODING_INLINE
    compression: str = COMPRESSION_NONE
    text: str = ""
    records: Tuple[str, ...] = field(default_factory=tuple)  # gid attributes of <tile> children


def parse_gid(token: str) -> int:
    """Parse one decimal unsigned 32-bit GID."""
    if not token.isdigit() or not token.isascii():
        raise MalformedNumberError(token)
    value = int(token)
    if value > _GID_MAX:
        raise MalformedNumberError(token)
    return value


def _check_count(actual: int, width: int, height: int):
    expected = width * height
    if actual != expected:
        raise LengthMismatchError(expected, actual)


def decode_inline(records: Sequence[str], width: int, height: int) -> np.ndarray:
    """Decode per-tile <tile gid="..."/> records (document order)."""
    _check_count(len(records), width, height)
    # A missing gid attribute reaches us as "" and means an empty cell
    gids = [parse_gid(r) if r != "" else 0 for r in records]
    return np.array(gids, dtype=GID_DTYPE)


def decode_csv(text: str, width: int, height: int) -> np.ndarray:
    """Decode comma separated GIDs."""
    tokens = _CSV_NOISE.sub("", text).split(',')
    gids = [parse_gid(token) for token in tokens]
    _check_count(len(gids), width, height)
    return np.array(gids, dtype=GID_DTYPE)


def decompress(raw: bytes, compression: str) -> bytes:
    """Undo the base64 payload compression."""
    try:
        if compression == COMPRESSION_ZLIB:
            return zlib.decompress(raw)
        if compression == COMPRESSION_GZIP:
            return gzip.decompress(raw)
    except (OSError, EOFError, zlib.error) as exc:
        raise CompressionError(f"invalid {compression} stream: {exc}") from exc
    if compression == COMPRESSION_NONE:
        return raw
    raise UnknownCompressionError(compression)


def decode_base64(text: str, compression: str, width: int, height: int) -> np.ndarray:
    """Decode base64 (optionally gzip/zlib compressed) little-endian GIDs."""
    # Validate the compression tag before doing any work on the payload
    if compression not in COMPRESSIONS:
        raise UnknownCompressionError(compression)

    cleaned = text.strip().replace('\r', '').replace('\n', '')
    try:
        raw = base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise EncodingError(f"invalid base64 data: {exc}") from exc

    raw = decompress(raw, compression)

    expected = width * height * 4
    if len(raw) != expected:
        raise LengthMismatchError(expected, len(raw), unit="bytes")

    # astype() copies, so the result owns its memory and is native-endian
    return np.frombuffer(raw, dtype='<u4').astype(GID_DTYPE)


def decode_layer_data(data: LayerData, width: int, height: int) -> np.ndarray:
    """
    Decode a layer payload into a flat row-major GID array.

    Parameters:
    -----------
    data : LayerData
        Encoding, compression and raw contents of the <data> element
    width, height : int
        Layer dimensions in tiles

    Returns:
    --------
    np.ndarray : uint32 array of exactly width * height raw GIDs

    Raises:
    -------
    UnknownEncodingError, UnknownCompressionError, EncodingError,
    CompressionError, LengthMismatchError, MalformedNumberError
    """
    if data.encoding == ENCODING_INLINE:
        return decode_inline(data.records, width, height)
    if data.encoding == ENCODING_CSV:
        return decode_csv(data.text, width, height)
    if data.encoding == ENCODING_BASE64:
        return decode_base64(data.text, data.compression, width, height)
    raise UnknownEncodingError(data.encoding)
