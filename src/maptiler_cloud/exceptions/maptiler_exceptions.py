from typing import Any, Optional


class MaptilerError(Exception):
    """Base exception for the MapTiler Cloud client"""
    pass


class ConfigurationError(MaptilerError):
    """Configuration related errors (API key, settings)"""
    pass


class ValidationError(MaptilerError, ValueError):
    """A request argument was rejected before any network call"""

    def _values(self) -> tuple:
        return self.args

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._values() == other._values()

    def __hash__(self) -> int:
        return hash((type(self), self._values()))


class InvalidTileSet(ValidationError):
    """The tileset is not a TileSet or CustomTileSet"""

    def __init__(self, tileset: Any, reason: str = "Unsupported tileset"):
        self.tileset = tileset
        super().__init__(f"{reason}: {tileset!r}")

    def _values(self) -> tuple:
        return (self.tileset,)


class InvalidCoordinate(ValidationError):
    """Tile coordinates outside the tile pyramid"""
    pass


class ZoomTooLarge(InvalidCoordinate):

    def __init__(self, zoom: int, tileset: Any, max_zoom: int):
        self.zoom = zoom
        self.tileset = tileset
        self.max_zoom = max_zoom
        super().__init__(
            f"Zoom level {zoom} is too large for the tileset {tileset} (max: {max_zoom})"
        )

    def _values(self) -> tuple:
        return (self.zoom, self.tileset, self.max_zoom)


class ZoomTooSmall(InvalidCoordinate):

    def __init__(self, zoom: int, tileset: Any, min_zoom: int):
        self.zoom = zoom
        self.tileset = tileset
        self.min_zoom = min_zoom
        super().__init__(
            f"Zoom level {zoom} is too small for the tileset {tileset} (min: {min_zoom})"
        )

    def _values(self) -> tuple:
        return (self.zoom, self.tileset, self.min_zoom)


class XTooLarge(InvalidCoordinate):

    def __init__(self, x: int, zoom: int, max_index: int):
        self.x = x
        self.zoom = zoom
        self.max_index = max_index
        super().__init__(
            f"X coordinate {x} is out of range for zoom level {zoom} (must be < {max_index})"
        )

    def _values(self) -> tuple:
        return (self.x, self.zoom, self.max_index)


class YTooLarge(InvalidCoordinate):

    def __init__(self, y: int, zoom: int, max_index: int):
        self.y = y
        self.zoom = zoom
        self.max_index = max_index
        super().__init__(
            f"Y coordinate {y} is out of range for zoom level {zoom} (must be < {max_index})"
        )

    def _values(self) -> tuple:
        return (self.y, self.zoom, self.max_index)


class RequestError(MaptilerError):
    """The tile request failed at the network layer"""
    pass


class TransportError(RequestError):
    """DNS, connection, TLS or timeout failure; the cause is chained"""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class HTTPStatusError(RequestError):
    """The server answered with a non-success status code"""

    def __init__(self, status_code: int, url: Optional[str] = None, reason: str = ""):
        self.status_code = status_code
        self.url = url
        self.reason = reason
        detail = f" {reason}" if reason else ""
        super().__init__(f"Server returned HTTP error code: {status_code}{detail} ({url})")
