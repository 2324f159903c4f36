"""Logging configuration"""
import logging
import sys
from typing import Any, Dict, Optional

from ..exceptions.maptiler_exceptions import ConfigurationError

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# HTTP stacks whose INFO/DEBUG output would repeat the full tile URL
_NOISY_LOGGERS = ('httpx', 'httpcore', 'urllib3', 'requests')


class LoggingManager:
    """Manages application logging configuration"""

    @staticmethod
    def setup_logging(config: Optional[Dict[str, Any]] = None) -> None:
        """Setup logging based on configuration"""
        logging_config = (config or {}).get('logging', {})

        level_name = str(logging_config.get('level', 'INFO')).upper()
        level = getattr(logging, level_name, None)
        if not isinstance(level, int):
            raise ConfigurationError(f"Unknown logging level: {level_name}")
        format_str = logging_config.get('format', DEFAULT_FORMAT)

        logging.basicConfig(
            level=level,
            format=format_str,
            stream=sys.stdout
        )

        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
