"""
Error types raised while loading and querying TMX maps.

Every failure is a subclass of TmxError, so callers that only care about
"the map could not be used" can catch a single type. The decode errors
share DecodeError as a common parent.

    TmxError
    ├── DocumentParseError       XML not well-formed / structurally invalid
    ├── DecodeError
    │   ├── UnknownEncodingError
    │   ├── UnknownCompressionError
    │   ├── EncodingError        malformed base64
    │   ├── CompressionError     malformed gzip/zlib stream
    │   ├── LengthMismatchError  decoded size != declared grid size
    │   ├── MalformedNumberError
    │   └── MalformedPointsError
    ├── LayerNotFoundError       (also a LookupError)
    ├── MapNotFoundError         (also a LookupError)
    ├── RegistryNotLoadedError
    ├── DuplicateClassNameError
    └── ResourceIOError          (also an OSError)
"""


class TmxError(Exception):
    """Base class for every error raised by tmx_maps."""


class DocumentParseError(TmxError):
    """The map document is not well-formed XML or misses required fields."""


class DecodeError(TmxError):
    """A layer payload or geometry string could not be decoded."""


class UnknownEncodingError(DecodeError):
    def __init__(self, encoding: str):
        super().__init__(f"invalid encoding scheme: {encoding!r}")
        self.encoding = encoding


class UnknownCompressionError(DecodeError):
    def __init__(self, compression: str):
        super().__init__(f"invalid compression method: {compression!r}")
        self.compression = compression


class EncodingError(DecodeError):
    """Base64 payload contains invalid characters or padding."""


class CompressionError(DecodeError):
    """Compressed payload has an invalid header or body."""


class LengthMismatchError(DecodeError):
    """
    Decoded data does not match the declared grid size.

    ``expected`` and ``actual`` are in the unit the check was made in
    (tiles for inline/csv data, bytes for base64 data).
    """

    def __init__(self, expected: int, actual: int, unit: str = "tiles"):
        super().__init__(
            f"invalid decoded data length: expected {expected} {unit}, got {actual}")
        self.expected = expected
        self.actual = actual
        self.unit = unit


class MalformedNumberError(DecodeError):
    def __init__(self, token: str):
        super().__init__(f"invalid tile number: {token!r}")
        self.token = token


class MalformedPointsError(DecodeError):
    def __init__(self, points: str, reason: str = ""):
        message = f"invalid points string: {points!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.points = points


class LayerNotFoundError(TmxError, LookupError):
    def __init__(self, name: str):
        super().__init__(f"layer not found: {name!r}")
        self.name = name


class MapNotFoundError(TmxError, LookupError):
    def __init__(self, name: str):
        super().__init__(f"map not found: {name!r}")
        self.name = name


class RegistryNotLoadedError(TmxError):
    def __init__(self):
        super().__init__("map registry not loaded")


class DuplicateClassNameError(TmxError):
    def __init__(self, class_name: str, first: str, second: str):
        super().__init__(
            f"map class {class_name!r} declared by both {first} and {second}")
        self.class_name = class_name
        self.first = first
        self.second = second


class ResourceIOError(TmxError, OSError):
    """A map file or directory could not be opened or read."""
