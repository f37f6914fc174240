"""
Configuration management for the flight tracker backend.

OpenSky credentials and endpoints, cache lifetimes, the HTTP server
and the optional AviationStack key are read from the process environment
(and a local .env file) once at import. DEPLOYMENT_MODE decides
whether missing credentials stop startup (standalone) or only downgrade
to anonymous OpenSky requests (serverless).
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_URL = (
    'https://auth.opensky-network.org/auth/realms/opensky-network'
    '/protocol/openid-connect/token'
)
DEFAULT_API_URL = 'https://opensky-network.org/api/states/all'

STANDALONE = 'standalone'
SERVERLESS = 'serverless'


class ConfigurationError(Exception):
    """Raised when the process cannot start with the given settings."""


def _positive_int(value: Optional[str], default: int) -> int:
    """Parse a positive integer, or fall back to the default."""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


@dataclass(frozen=True)
class OpenSkyConfig:
    """OpenSky API configuration."""
    token_url: str = DEFAULT_TOKEN_URL
    api_url: str = DEFAULT_API_URL
    client_id: Optional[str] = None
    client_secret: Optional[str] = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)


@dataclass(frozen=True)
class CacheConfig:
    """In-memory cache settings."""
    token_buffer_minutes: int = 5
    flights_cache_minutes: int = 5

    @property
    def token_buffer_ms(self) -> int:
        return self.token_buffer_minutes * 60 * 1000

    @property
    def flights_ttl_ms(self) -> int:
        return self.flights_cache_minutes * 60 * 1000


@dataclass(frozen=True)
class ServerConfig:
    """HTTP server settings."""
    port: int = 3000
    cors_origin: str = '*'
    deployment_mode: str = STANDALONE
    debug_endpoints: bool = False
    debug: bool = False

    @property
    def environment(self) -> str:
        return 'Serverless' if self.deployment_mode == SERVERLESS else 'Standalone'


@dataclass(frozen=True)
class AviationStackConfig:
    """AviationStack API configuration for flight route data."""
    api_key: Optional[str] = None
    base_url: str = 'http://api.aviationstack.com/v1'

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    opensky: OpenSkyConfig
    cache: CacheConfig
    server: ServerConfig
    aviationstack: AviationStackConfig

    def validate(self) -> None:
        """
        Check that the process can serve requests.

        Standalone servers refuse to start without OpenSky credentials.
        Serverless deployments degrade to unauthenticated requests.
        """
        if self.opensky.has_credentials:
            return

        if self.server.deployment_mode == SERVERLESS:
            logger.warning('OpenSky credentials missing; running unauthenticated only')
            return

        raise ConfigurationError(
            'OPENSKY_CLIENT_ID and OPENSKY_CLIENT_SECRET must be set'
        )

    def log_summary(self) -> None:
        """Log the effective configuration (never the client secret)."""
        logger.info('Configuration loaded:')
        logger.info(f'   Port: {self.server.port}')
        logger.info(f'   CORS Origin: {self.server.cors_origin}')
        logger.info(f'   Deployment: {self.server.deployment_mode}')
        logger.info(f'   Client ID: {self.opensky.client_id or "<unset>"}')
        logger.info(f'   Token Cache Buffer: {self.cache.token_buffer_minutes} minutes')
        logger.info(f'   Flights Cache: {self.cache.flights_cache_minutes} minutes')


def load_config() -> AppConfig:
    """Load all configuration from the environment."""
    mode = os.getenv('DEPLOYMENT_MODE', STANDALONE).strip().lower()
    if mode not in (STANDALONE, SERVERLESS):
        logger.warning(f'Unknown DEPLOYMENT_MODE {mode!r}, using {STANDALONE}')
        mode = STANDALONE

    return AppConfig(
        opensky=OpenSkyConfig(
            token_url=os.getenv('OPENSKY_TOKEN_URL') or DEFAULT_TOKEN_URL,
            api_url=os.getenv('OPENSKY_API_URL') or DEFAULT_API_URL,
            client_id=os.getenv('OPENSKY_CLIENT_ID') or None,
            client_secret=os.getenv('OPENSKY_CLIENT_SECRET') or None,
        ),
        cache=CacheConfig(
            token_buffer_minutes=_positive_int(os.getenv('TOKEN_CACHE_BUFFER_MINUTES'), 5),
            flights_cache_minutes=_positive_int(os.getenv('FLIGHTS_CACHE_MINUTES'), 5),
        ),
        server=ServerConfig(
            port=_positive_int(os.getenv('PORT'), 3000),
            cors_origin=os.getenv('CORS_ORIGIN') or '*',
            deployment_mode=mode,
            debug_endpoints=os.getenv('ENABLE_DEBUG_ENDPOINTS', '0') == '1',
            debug=os.getenv('FLASK_DEBUG', '0') == '1',
        ),
        aviationstack=AviationStackConfig(
            api_key=os.getenv('AVIATIONSTACK_API_KEY') or None,
        ),
    )


# Singleton instance
config = load_config()
