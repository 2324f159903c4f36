from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from ..exceptions.maptiler_exceptions import (
    InvalidCoordinate,
    InvalidTileSet,
    XTooLarge,
    YTooLarge,
    ZoomTooLarge,
    ZoomTooSmall,
)
from ..utils.tile_calculator import TileCalculator
from .tile_set import AnyTileSet, CustomTileSet, TileSet


def _check_index(name: str, value: Any) -> None:
    # bool is an int subclass but never a meaningful tile index
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidCoordinate(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidCoordinate(f"{name} must be non-negative, got {value}")


@dataclass(frozen=True)
class TileRequest:
    """A validated request for one tile of a tileset.

    Build it with ``TileRequest.create``; direct construction runs the same
    checks. Valid tiles at zoom ``z`` have ``0 <= x, y < 2 ** z`` and ``z``
    inside the tileset's zoom range.
    """
    tileset: AnyTileSet
    x: int
    y: int
    zoom: int

    def __post_init__(self):
        tileset = self.tileset
        if not isinstance(tileset, (TileSet, CustomTileSet)):
            raise InvalidTileSet(tileset)

        _check_index('zoom', self.zoom)
        _check_index('x', self.x)
        _check_index('y', self.y)

        if self.zoom > tileset.max_zoom:
            raise ZoomTooLarge(self.zoom, tileset, tileset.max_zoom)
        if self.zoom < tileset.min_zoom:
            raise ZoomTooSmall(self.zoom, tileset, tileset.min_zoom)

        max_index = self.max_index_for_zoom(self.zoom)
        if self.x >= max_index:
            raise XTooLarge(self.x, self.zoom, max_index)
        if self.y >= max_index:
            raise YTooLarge(self.y, self.zoom, max_index)

    @classmethod
    def create(cls, tileset: AnyTileSet, x: int, y: int, zoom: int) -> 'TileRequest':
        """Validate the arguments and build the request"""
        return cls(tileset=tileset, x=x, y=y, zoom=zoom)

    @classmethod
    def from_lat_lon(cls, tileset: AnyTileSet, lat: float, lon: float, zoom: int) -> 'TileRequest':
        """Request for the tile containing a WGS84 point"""
        # tile (0, 0) exists at every zoom, so this only checks tileset and zoom
        cls.create(tileset, 0, 0, zoom)
        x, y = TileCalculator.deg2num(lat, lon, zoom)
        return cls.create(tileset, x, y, zoom)

    @classmethod
    def covering(cls, tileset: AnyTileSet, bbox: Sequence[float],
                 min_zoom: Optional[int] = None, max_zoom: Optional[int] = None) -> List['TileRequest']:
        """Requests for every tile touching a [min_lon, min_lat, max_lon, max_lat] box.

        The zoom range is clipped to the tileset's own range; omitted bounds
        default to it. A box with min_lon > max_lon wraps across the
        antimeridian.
        """
        TileCalculator.split_bbox(bbox)
        return [
            cls(tileset, x, y, zoom)
            for zoom in cls._zoom_levels(tileset, min_zoom, max_zoom)
            for x, y in TileCalculator.tiles_in_bbox(bbox, zoom)
        ]

    @classmethod
    def covering_polygon(cls, tileset: AnyTileSet, polygon_geojson: dict,
                         min_zoom: Optional[int] = None, max_zoom: Optional[int] = None) -> List['TileRequest']:
        """Requests for every tile intersecting a GeoJSON polygon; zooms as in covering"""
        return [
            cls(tileset, x, y, zoom)
            for zoom in cls._zoom_levels(tileset, min_zoom, max_zoom)
            for x, y in TileCalculator.tiles_in_polygon(polygon_geojson, zoom)
        ]

    @staticmethod
    def _zoom_levels(tileset: AnyTileSet, min_zoom: Optional[int], max_zoom: Optional[int]) -> range:
        if not isinstance(tileset, (TileSet, CustomTileSet)):
            raise InvalidTileSet(tileset)
        low, high = tileset.min_zoom, tileset.max_zoom
        if min_zoom is not None:
            _check_index('min_zoom', min_zoom)
            low = max(low, min_zoom)
        if max_zoom is not None:
            _check_index('max_zoom', max_zoom)
            high = min(high, max_zoom)
        return range(low, high + 1)

    @staticmethod
    def max_index_for_zoom(zoom: int) -> int:
        """Number of tiles per axis at a zoom level"""
        return 2 ** zoom

    @property
    def path(self) -> str:
        """Tileset-relative path, e.g. ``satellite/2/2/1.jpg``"""
        return (f"{self.tileset.endpoint}/{self.zoom}/{self.x}/{self.y}"
                f".{self.tileset.file_extension}")

    @property
    def media_type(self) -> str:
        return self.tileset.media_type

    def bounds(self) -> List[float]:
        """Geographic bounds [min_lon, min_lat, max_lon, max_lat] of the tile"""
        return TileCalculator.tile_bounds(self.zoom, self.x, self.y)
