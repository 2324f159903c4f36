"""Asynchronous MapTiler Cloud session.

Example::

    async with Maptiler("my api key") as maptiler:
        tile = TileRequest.create(TileSet.SATELLITE, x=2, y=1, zoom=2)
        jpeg = await maptiler.request(tile)

The bytes are returned exactly as the server sent them; their format is
implied by the tileset (``tile.media_type``).
"""
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from ..exceptions.maptiler_exceptions import HTTPStatusError, TransportError
from ..models.client_settings import ClientSettings
from ..models.tile_request import TileRequest
from .base_client import BaseTileClient
from .config_service import ConfigService

logger = logging.getLogger(__name__)


class Maptiler(BaseTileClient):
    """A MapTiler Cloud session: an API key plus a shared httpx.AsyncClient.

    Each call to ``request`` makes exactly one GET. There are no retries and
    no timeout unless ``ClientSettings.timeout`` is set; wrap the call in
    ``asyncio.wait_for`` to bound it from outside.
    """

    def __init__(self, api_key: str, client: Optional[httpx.AsyncClient] = None,
                 settings: Optional[ClientSettings] = None):
        super().__init__(api_key, settings)
        self._owns_client = client is None
        self._client = self.create_client() if client is None else client

    @classmethod
    def from_env(cls, client: Optional[httpx.AsyncClient] = None) -> 'Maptiler':
        """Session configured from MAPTILER_* environment variables"""
        config = ConfigService()
        return cls(config.load_api_key(), client=client, settings=config.load_settings())

    def create_client(self) -> httpx.AsyncClient:
        """Create the pooled client owned by this session"""
        settings = self._settings
        limits = httpx.Limits(
            max_connections=settings.max_connections,
            max_keepalive_connections=settings.max_connections,
        )
        return httpx.AsyncClient(
            headers=settings.get_headers(),
            timeout=httpx.Timeout(settings.timeout),
            limits=limits,
        )

    def create_request(self, tile_request: TileRequest) -> 'ConstructedRequest':
        """Bind a tile request to this session without sending it"""
        return ConstructedRequest(session=self, tile_request=tile_request)

    async def request(self, tile_request: TileRequest) -> bytes:
        """Fetch one tile and return the response body"""
        url = self.build_url(tile_request)
        log_url = self.redacted_url(tile_request)
        logger.debug("GET %s", log_url)

        try:
            response = await self._client.get(url)
        except httpx.RequestError as e:
            raise TransportError(f"Server request failed: {self._redact(str(e))}", url=log_url) from e

        if not response.is_success:
            logger.debug("GET %s -> HTTP %d", log_url, response.status_code)
            raise HTTPStatusError(response.status_code, url=log_url, reason=response.reason_phrase)

        content = response.content
        logger.debug("GET %s -> HTTP %d, %d bytes", log_url, response.status_code, len(content))
        return content

    async def aclose(self) -> None:
        """Close the underlying client if this session created it"""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> 'Maptiler':
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


@dataclass(frozen=True)
class ConstructedRequest:
    """A tile request bound to the session that will send it"""
    session: Maptiler
    tile_request: TileRequest

    @property
    def url(self) -> str:
        return self.session.build_url(self.tile_request)

    async def execute(self) -> bytes:
        """Perform the API call"""
        return await self.session.request(self.tile_request)
