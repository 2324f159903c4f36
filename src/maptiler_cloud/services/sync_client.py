import logging
from typing import Optional

import requests
from requests.adapters import HTTPAdapter

from ..exceptions.maptiler_exceptions import HTTPStatusError, TransportError
from ..models.client_settings import ClientSettings
from ..models.tile_request import TileRequest
from .base_client import BaseTileClient
from .config_service import ConfigService

logger = logging.getLogger(__name__)


class MaptilerSync(BaseTileClient):
    """Blocking MapTiler Cloud session on top of requests.Session"""

    def __init__(self, api_key: str, session: Optional[requests.Session] = None,
                 settings: Optional[ClientSettings] = None):
        super().__init__(api_key, settings)
        self._owns_session = session is None
        self._session = self.create_session() if session is None else session

    @classmethod
    def from_env(cls, session: Optional[requests.Session] = None) -> 'MaptilerSync':
        """Session configured from MAPTILER_* environment variables"""
        config = ConfigService()
        return cls(config.load_api_key(), session=session, settings=config.load_settings())

    def create_session(self) -> requests.Session:
        """Create pooled session for tile requests"""
        session = requests.Session()

        # One attempt per request; retrying is left to the caller
        adapter = HTTPAdapter(
            max_retries=0,
            pool_connections=self._settings.max_connections,
            pool_maxsize=self._settings.max_connections,
        )

        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers.update(self._settings.get_headers())

        return session

    def request(self, tile_request: TileRequest) -> bytes:
        """Fetch one tile and return the response body"""
        url = self.build_url(tile_request)
        log_url = self.redacted_url(tile_request)
        logger.debug("GET %s", log_url)

        try:
            response = self._session.get(url, timeout=self._settings.timeout)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Server request failed: {self._redact(str(e))}", url=log_url) from e

        if not 200 <= response.status_code < 300:
            logger.debug("GET %s -> HTTP %d", log_url, response.status_code)
            raise HTTPStatusError(response.status_code, url=log_url, reason=response.reason or "")

        content = response.content
        logger.debug("GET %s -> HTTP %d, %d bytes", log_url, response.status_code, len(content))
        return content

    def close(self) -> None:
        """Close the underlying session if this client created it"""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> 'MaptilerSync':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
