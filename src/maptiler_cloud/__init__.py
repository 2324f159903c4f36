"""Python client for the MapTiler Cloud tiles API.

A ``TileRequest`` names one tile of a ``TileSet`` and is validated when it
is built; a ``Maptiler`` (async) or ``MaptilerSync`` session sends it with
the caller's API key and returns the tile bytes untouched.
"""
import logging

from .exceptions import (
    ConfigurationError,
    HTTPStatusError,
    InvalidCoordinate,
    InvalidTileSet,
    MaptilerError,
    RequestError,
    TransportError,
    ValidationError,
    XTooLarge,
    YTooLarge,
    ZoomTooLarge,
    ZoomTooSmall,
)
from .infrastructure.logging import LoggingManager
from .models.client_settings import ClientSettings
from .models.tile_request import TileRequest
from .models.tile_set import CustomTileSet, TileSet
from .services.maptiler_client import ConstructedRequest, Maptiler
from .services.sync_client import MaptilerSync
from .utils.tile_calculator import TileCalculator
from .version import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ClientSettings",
    "ConfigurationError",
    "ConstructedRequest",
    "CustomTileSet",
    "HTTPStatusError",
    "InvalidCoordinate",
    "InvalidTileSet",
    "LoggingManager",
    "Maptiler",
    "MaptilerError",
    "MaptilerSync",
    "RequestError",
    "TileCalculator",
    "TileRequest",
    "TileSet",
    "TransportError",
    "ValidationError",
    "XTooLarge",
    "YTooLarge",
    "ZoomTooLarge",
    "ZoomTooSmall",
    "__version__",
]
