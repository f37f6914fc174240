"""
OAuth2 access token acquisition for the OpenSky API.

OpenSky authenticates API clients with the client-credentials grant:
POST grant_type/client_id/client_secret (form-encoded) to the token
endpoint and receive {access_token, expires_in}.

The token is cached until expires_in minus a buffer, so it is always
refreshed before OpenSky would reject it.

Known limitation: there is no in-flight guard. Overlapping requests that
miss the cache each request their own token; the last one stored wins.
"""

import logging
from typing import Optional

import requests

from flight_tracker.cache import ExpiringCache, TOKEN_KEY
from flight_tracker.config import CacheConfig, OpenSkyConfig
from flight_tracker.ingestion.exceptions import TokenRequestError
from flight_tracker.retry import RetryExhaustedError, RetryPolicy, TOKEN_RETRY_POLICY

logger = logging.getLogger(__name__)


class TokenProvider:
    """Fetches and caches the OpenSky bearer token."""

    def __init__(
        self,
        opensky: OpenSkyConfig,
        cache_config: CacheConfig,
        cache: ExpiringCache,
        session: Optional[requests.Session] = None,
        retry_policy: RetryPolicy = TOKEN_RETRY_POLICY,
    ):
        self.opensky = opensky
        self.buffer_ms = cache_config.token_buffer_ms
        self.cache = cache
        self.session = session or requests.Session()
        self.retry_policy = retry_policy

    @property
    def is_cached(self) -> bool:
        return self.cache.has(TOKEN_KEY)

    def get_access_token(self) -> str:
        """
        Return a valid bearer token, requesting a new one on cache miss.

        Raises:
            TokenRequestError when every attempt fails.
        """
        token = self.cache.get(TOKEN_KEY)
        if token:
            logger.debug('Using cached token')
            return token

        logger.info('Requesting new access token...')

        try:
            data = self.retry_policy.call(
                self.request_token,
                description='Token request',
                retry_on=(requests.RequestException, ValueError),
            )
        except RetryExhaustedError as e:
            logger.error(str(e))
            raise TokenRequestError(str(e), attempts=e.attempts, last_error=e.last_error) from e

        token = data['access_token']
        expires_at = self.cache.now() + data['expires_in'] * 1000 - self.buffer_ms
        self.cache.set_until(TOKEN_KEY, token, expires_at)

        logger.info('Token received and cached')
        return token

    def request_token(self, timeout: float) -> dict:
        """
        Perform a single client-credentials grant.

        Raises:
            requests.RequestException on network errors or non-2xx status
            ValueError when the body lacks a usable access_token/expires_in
        """
        response = self.session.post(
            self.opensky.token_url,
            data={
                'grant_type': 'client_credentials',
                'client_id': self.opensky.client_id,
                'client_secret': self.opensky.client_secret,
            },
            headers={'Content-Type': 'application/x-www-form-urlencoded'},
            timeout=timeout,
        )

        if not response.ok:
            raise requests.HTTPError(
                f'Token request failed: {response.status_code} {response.reason}',
                response=response,
            )

        data = response.json()
        if not isinstance(data, dict) or not data.get('access_token'):
            raise ValueError(f'Token response missing access_token: {data!r}')

        try:
            data['expires_in'] = int(data['expires_in'])
        except (KeyError, TypeError, ValueError):
            raise ValueError(f'Token response has no valid expires_in: {data!r}')

        return data
