import math
import os
from typing import Mapping, Optional
from urllib.parse import urlparse

from ..exceptions.maptiler_exceptions import ConfigurationError
from ..models.client_settings import DEFAULT_BASE_URL, DEFAULT_USER_AGENT, ClientSettings

API_KEY_ENV = "MAPTILER_KEY"
BASE_URL_ENV = "MAPTILER_BASE_URL"
TIMEOUT_ENV = "MAPTILER_TIMEOUT"
USER_AGENT_ENV = "MAPTILER_USER_AGENT"


class ConfigService:
    """Service for loading and validating client configuration"""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self.environ = os.environ if environ is None else environ

    def load_api_key(self) -> str:
        """Read the API key from the environment"""
        api_key = self.environ.get(API_KEY_ENV)
        if api_key is None:
            raise ConfigurationError(f"Environment variable {API_KEY_ENV} not set")
        return self.validate_api_key(api_key)

    def load_settings(self) -> ClientSettings:
        """Build ClientSettings from the environment, defaults for anything unset"""
        base_url = self.environ.get(BASE_URL_ENV) or DEFAULT_BASE_URL
        user_agent = self.environ.get(USER_AGENT_ENV) or DEFAULT_USER_AGENT

        timeout = None
        raw_timeout = self.environ.get(TIMEOUT_ENV)
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ConfigurationError(f"Invalid {TIMEOUT_ENV} value {raw_timeout!r}: {e}") from e

        return self.validate_settings(ClientSettings(
            base_url=base_url,
            timeout=timeout,
            user_agent=user_agent,
        ))

    @staticmethod
    def validate_api_key(api_key: str) -> str:
        """Validate an API key; returns it stripped"""
        if not isinstance(api_key, str):
            raise ConfigurationError("API key must be a string")
        api_key = api_key.strip()
        if not api_key:
            raise ConfigurationError("API key must not be empty")
        return api_key

    @staticmethod
    def validate_settings(settings: ClientSettings) -> ClientSettings:
        """Validate settings; returns them with the base URL normalized"""
        parsed = urlparse(settings.base_url)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise ConfigurationError(f"Invalid base URL: {settings.base_url!r}")
        if parsed.query or parsed.fragment:
            raise ConfigurationError(f"Base URL must not carry a query or fragment: {settings.base_url!r}")

        timeout = settings.timeout
        if timeout is not None and not (math.isfinite(timeout) and timeout > 0):
            raise ConfigurationError(f"Timeout must be a positive finite number, got {timeout}")

        if settings.max_connections < 1:
            raise ConfigurationError(f"max_connections must be at least 1, got {settings.max_connections}")

        base_url = settings.base_url.rstrip('/')
        if base_url == settings.base_url:
            return settings
        return ClientSettings(
            base_url=base_url,
            timeout=settings.timeout,
            user_agent=settings.user_agent,
            max_connections=settings.max_connections,
        )
