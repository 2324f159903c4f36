from abc import ABC, abstractmethod

from ..models.tile_request import TileRequest


class ITileClient(ABC):
    """Interface for MapTiler Cloud tile clients (async and blocking)"""

    @abstractmethod
    def build_url(self, tile_request: TileRequest) -> str:
        """Absolute URL, including the API key, for a tile request"""
        pass

    @abstractmethod
    def redacted_url(self, tile_request: TileRequest) -> str:
        """Same URL as build_url with the API key masked, safe for logs"""
        pass

    @abstractmethod
    def request(self, tile_request: TileRequest):
        """Fetch one tile and return its body.

        Async clients implement this as a coroutine returning bytes.
        """
        pass
