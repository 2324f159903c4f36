from dataclasses import dataclass
from typing import Optional

from ..version import __version__

DEFAULT_BASE_URL = "https://api.maptiler.com/tiles"
DEFAULT_USER_AGENT = f"maptiler-cloud-python/{__version__}"


@dataclass(frozen=True)
class ClientSettings:
    """Data model for client configuration"""
    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = None  # None: no internal timeout
    user_agent: str = DEFAULT_USER_AGENT
    max_connections: int = 20

    def get_headers(self) -> dict:
        """Get request headers"""
        return {"User-Agent": self.user_agent}
