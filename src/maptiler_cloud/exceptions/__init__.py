from .maptiler_exceptions import (
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

__all__ = [
    "ConfigurationError",
    "HTTPStatusError",
    "InvalidCoordinate",
    "InvalidTileSet",
    "MaptilerError",
    "RequestError",
    "TransportError",
    "ValidationError",
    "XTooLarge",
    "YTooLarge",
    "ZoomTooLarge",
    "ZoomTooSmall",
]
