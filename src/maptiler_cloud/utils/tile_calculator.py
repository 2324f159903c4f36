import math
from typing import Iterator, List, Sequence, Tuple
from shapely.geometry import box, shape
from shapely.prepared import prep

from ..exceptions.maptiler_exceptions import InvalidCoordinate

# Web-mercator latitude limit, atan(sinh(pi)) in degrees
MAX_LATITUDE = 85.0511287798066


def check_lat_lon(lat: float, lon: float) -> None:
    """Reject NaN and infinite coordinates"""
    for name, value in (('lat', lat), ('lon', lon)):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidCoordinate(f"{name} must be a number, got {value!r}")
        if not math.isfinite(value):
            raise InvalidCoordinate(f"{name} must be finite, got {value!r}")


class TileCalculator:
    """Utility class for tiled-web-map coordinate calculations"""

    @staticmethod
    def deg2num(lat_deg: float, lon_deg: float, zoom: int) -> Tuple[int, int]:
        """Convert lat/lon to tile coordinates, clamped to the zoom level's grid"""
        check_lat_lon(lat_deg, lon_deg)
        n = 2 ** zoom
        lat_deg = max(-MAX_LATITUDE, min(MAX_LATITUDE, lat_deg))
        lat_rad = math.radians(lat_deg)
        xtile = int((lon_deg + 180.0) / 360.0 * n)
        ytile = int((1.0 - math.asinh(math.tan(lat_rad)) / math.pi) / 2.0 * n)
        return min(max(xtile, 0), n - 1), min(max(ytile, 0), n - 1)

    @staticmethod
    def num2deg(zoom: int, x: int, y: int) -> Tuple[float, float]:
        """Return the lat/lon of the north-west corner of a tile"""
        n = 2 ** zoom
        lon_deg = x / n * 360.0 - 180.0
        lat_deg = math.degrees(math.atan(math.sinh(math.pi * (1 - 2 * y / n))))
        return lat_deg, lon_deg

    @staticmethod
    def tile_bounds(zoom: int, x: int, y: int) -> List[float]:
        """Return geographic bounds [minLon, minLat, maxLon, maxLat] for XYZ tile."""
        lat_max, lon_min = TileCalculator.num2deg(zoom, x, y)
        lat_min, lon_max = TileCalculator.num2deg(zoom, x + 1, y + 1)
        return [lon_min, lat_min, lon_max, lat_max]

    @staticmethod
    def split_bbox(bbox: Sequence[float]) -> List[Tuple[float, float, float, float]]:
        """Validate a [min_lon, min_lat, max_lon, max_lat] box.

        A box with min_lon > max_lon crosses the antimeridian and comes back
        as two boxes, one on each side of it.
        """
        if len(bbox) != 4:
            raise InvalidCoordinate(f"bbox needs 4 values, got {len(bbox)}")
        min_lon, min_lat, max_lon, max_lat = bbox
        check_lat_lon(min_lat, min_lon)
        check_lat_lon(max_lat, max_lon)
        if min_lat > max_lat:
            raise InvalidCoordinate(f"bbox min_lat {min_lat} is north of max_lat {max_lat}")
        if not (-180.0 <= min_lon <= 180.0 and -180.0 <= max_lon <= 180.0):
            raise InvalidCoordinate(f"bbox longitudes must lie in [-180, 180]: {list(bbox)}")

        if min_lon <= max_lon:
            return [(min_lon, min_lat, max_lon, max_lat)]
        return [(min_lon, min_lat, 180.0, max_lat), (-180.0, min_lat, max_lon, max_lat)]

    @staticmethod
    def tiles_in_bbox(bbox: Sequence[float], zoom: int) -> Iterator[Tuple[int, int]]:
        """Yield (x, y) of every tile at one zoom level touching the box"""
        seen = set()
        for west, south, east, north in TileCalculator.split_bbox(bbox):
            left, bottom = TileCalculator.deg2num(south, west, zoom)
            right, top = TileCalculator.deg2num(north, east, zoom)
            for x in range(left, right + 1):
                for y in range(top, bottom + 1):
                    if (x, y) not in seen:
                        seen.add((x, y))
                        yield x, y

    @staticmethod
    def tiles_in_polygon(polygon_geojson: dict, zoom: int) -> Iterator[Tuple[int, int]]:
        """Yield (x, y) of every tile at one zoom level intersecting a GeoJSON polygon"""
        poly = shape(polygon_geojson)
        if not poly.is_valid:
            poly = poly.buffer(0)
        prepared = prep(poly)

        for x, y in TileCalculator.tiles_in_bbox(list(poly.bounds), zoom):
            if prepared.intersects(box(*TileCalculator.tile_bounds(zoom, x, y))):
                yield x, y
