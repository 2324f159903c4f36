from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..exceptions.maptiler_exceptions import InvalidTileSet

# Deepest level of the web-mercator pyramid served by MapTiler Cloud
PYRAMID_MAX_ZOOM = 22

_MEDIA_TYPES = {
    'pbf': 'application/x-protobuf',
    'png': 'image/png',
    'jpg': 'image/jpeg',
    'webp': 'image/webp',
    'quantized-mesh-1.0': 'application/vnd.quantized-mesh',
}

_TILE_TYPES = {
    'pbf': 'vector',
    'quantized-mesh-1.0': 'terrain',
}


def media_type_for(extension: str) -> str:
    """Media type the API answers with for a given file extension"""
    return _MEDIA_TYPES.get(extension, 'application/octet-stream')


def tile_type_for(extension: str) -> str:
    """Tile type (raster/vector/terrain) for a given file extension"""
    return _TILE_TYPES.get(extension, 'raster')


class TileSet(Enum):
    """The tilesets MapTiler Cloud serves.

    Each member carries its endpoint (the URL path segment), the file
    extension of the tiles it returns, its zoom range and a display name.
    """

    CONTOURS = ('contours', 'pbf', 9, 14, 'Contours')
    COUNTRIES = ('countries', 'pbf', 0, 11, 'Countries')
    HILLSHADING = ('hillshades', 'png', 0, 12, 'Hillshades')
    LAND = ('land', 'pbf', 0, 14, 'Land')
    LANDCOVER = ('landcover', 'pbf', 0, 9, 'Landcover')
    MAPTILER_PLANET = ('v3', 'pbf', 0, 14, 'MaptilerPlanet')
    MAPTILER_PLANET_LITE = ('v3-lite', 'pbf', 0, 10, 'MaptilerPlanetLite')
    OPEN_MAP_TILES = ('v3-openmaptiles', 'pbf', 0, 14, 'OpenMapTiles')
    OPEN_MAP_TILES_WGS84 = ('v3-4326', 'pbf', 0, 13, 'OpenMapTilesWGS84')
    OUTDOOR = ('outdoor', 'pbf', 5, 14, 'Outdoor')
    SATELLITE = ('satellite', 'jpg', 0, 20, 'Satellite')
    SATELLITE_MEDIUM_RES_2016 = ('satellite-mediumres', 'jpg', 0, 13, 'SatelliteMediumRes2016')
    SATELLITE_MEDIUM_RES_2018 = ('satellite-mediumres-2018', 'jpg', 0, 13, 'SatelliteMediumRes2018')
    TERRAIN_3D = ('terrain-quantized-mesh', 'quantized-mesh-1.0', 0, 13, 'Terrain3D')
    # height = -10000 + ((R * 256 * 256 + G * 256 + B) * 0.1)
    TERRAIN_RGB = ('terrain-rgb', 'png', 0, 12, 'TerrainRGB')

    def __init__(self, endpoint: str, extension: str, min_zoom: int, max_zoom: int,
                 display_name: str):
        self.endpoint = endpoint
        self.file_extension = extension
        self.min_zoom = min_zoom
        self.max_zoom = max_zoom
        self.display_name = display_name

    @property
    def media_type(self) -> str:
        return media_type_for(self.file_extension)

    @property
    def tile_type(self) -> str:
        return tile_type_for(self.file_extension)

    @classmethod
    def from_endpoint(cls, endpoint: str) -> 'TileSet':
        """Look up a tileset by its URL endpoint"""
        for member in cls:
            if member.endpoint == endpoint:
                return member
        raise InvalidTileSet(endpoint, "Unknown tileset endpoint")

    def __str__(self) -> str:
        return self.display_name


_FORBIDDEN = ('/', '?', '#')


@dataclass(frozen=True)
class CustomTileSet:
    """A tileset not listed in TileSet, addressed by endpoint and extension.

    The zoom range defaults to 0-20; the real range of the endpoint may be
    narrower, in which case the server rejects the request.
    """
    endpoint: str
    file_extension: str
    min_zoom: int = 0
    max_zoom: int = 20
    media_type_override: Optional[str] = None

    def __post_init__(self):
        for value in (self.endpoint, self.file_extension):
            if not isinstance(value, str) or not value.strip():
                raise InvalidTileSet(self, "Custom tileset needs an endpoint and an extension")
            if any(ch in value for ch in _FORBIDDEN):
                raise InvalidTileSet(self, "Custom tileset contains a reserved URL character")
        for value in (self.min_zoom, self.max_zoom):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidTileSet(self, "Custom tileset zoom bounds must be integers")
        if not (0 <= self.min_zoom <= self.max_zoom <= PYRAMID_MAX_ZOOM):
            raise InvalidTileSet(self, "Custom tileset has an invalid zoom range")

    @property
    def media_type(self) -> str:
        return self.media_type_override or media_type_for(self.file_extension)

    @property
    def tile_type(self) -> str:
        return tile_type_for(self.file_extension)

    @property
    def display_name(self) -> str:
        return self.endpoint

    def __str__(self) -> str:
        return self.endpoint


AnyTileSet = Union[TileSet, CustomTileSet]
