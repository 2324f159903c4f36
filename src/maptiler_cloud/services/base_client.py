from typing import Optional
from urllib.parse import urlencode

from ..interfaces.tile_client import ITileClient
from ..models.client_settings import ClientSettings
from ..models.tile_request import TileRequest
from .config_service import ConfigService

REDACTED = "***"


class BaseTileClient(ITileClient):
    """Shared session state: the API key and the settings.

    Nothing here changes after construction, so one client can serve any
    number of concurrent requests.
    """

    def __init__(self, api_key: str, settings: Optional[ClientSettings] = None):
        self._api_key = ConfigService.validate_api_key(api_key)
        self._settings = ConfigService.validate_settings(settings or ClientSettings())

    def build_url(self, tile_request: TileRequest) -> str:
        # https://api.maptiler.com/tiles/satellite/{z}/{x}/{y}.jpg?key=...
        query = urlencode({'key': self._api_key})
        return f"{self._settings.base_url}/{tile_request.path}?{query}"

    def redacted_url(self, tile_request: TileRequest) -> str:
        return f"{self._settings.base_url}/{tile_request.path}?key={REDACTED}"

    def _redact(self, text: str) -> str:
        """Mask the API key wherever it appears in a message"""
        query_key = urlencode({'key': self._api_key})[len('key='):]
        for secret in {self._api_key, query_key}:
            text = text.replace(secret, REDACTED)
        return text

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self._settings.base_url!r}, api_key={REDACTED!r})"
