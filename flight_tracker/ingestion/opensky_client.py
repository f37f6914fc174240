"""
OpenSky Network API client.

Handles communication with the OpenSky REST API, including:
- Bearer-token authentication with unauthenticated fallback
- Mapping state vectors into Flight records
- Short-lived caching of the transformed flight list
- Connectivity checks for the diagnostic endpoint

The /states/all response is {"time": int, "states": [[...18 fields...], ...]};
see flight_tracker.models.flight for the field layout.
"""

import logging
import time
from typing import List, Optional

import requests

from flight_tracker.cache import ExpiringCache, FLIGHTS_KEY
from flight_tracker.config import AppConfig
from flight_tracker.ingestion.exceptions import (
    AuthenticationError,
    FlightsRequestError,
    TokenRequestError,
)
from flight_tracker.ingestion.token_provider import TokenProvider
from flight_tracker.models import Flight
from flight_tracker.retry import FLIGHTS_RETRY_POLICY, RetryExhaustedError, RetryPolicy

logger = logging.getLogger(__name__)

AUTH_FAILURE_STATUSES = (401, 403)
CHECK_TIMEOUT_SECONDS = 5


class OpenSkyClient:
    """
    Client for the OpenSky /states/all endpoint.

    Handles:
    - Authenticated GET with a cached bearer token
    - Fallback to anonymous access when authentication fails
    - Flight-list caching (flights_cache_minutes)
    """

    def __init__(
        self,
        app_config: AppConfig,
        cache: Optional[ExpiringCache] = None,
        session: Optional[requests.Session] = None,
        token_provider: Optional[TokenProvider] = None,
        retry_policy: RetryPolicy = FLIGHTS_RETRY_POLICY,
    ):
        self.config = app_config
        self.api_url = app_config.opensky.api_url
        self.cache = cache or ExpiringCache()
        self.session = session or requests.Session()
        self.retry_policy = retry_policy

        self.token_provider = token_provider
        if self.token_provider is None and app_config.opensky.has_credentials:
            self.token_provider = TokenProvider(
                app_config.opensky,
                app_config.cache,
                self.cache,
                session=self.session,
            )

        if self.token_provider:
            logger.info('OpenSky client initialized with client credentials')
        else:
            logger.warning('OpenSky client running without authentication (lower rate limits)')

    @property
    def token_cached(self) -> bool:
        return bool(self.token_provider and self.token_provider.is_cached)

    @property
    def flights_cached(self) -> bool:
        return self.cache.has(FLIGHTS_KEY)

    def get_flights_data(self) -> List[Flight]:
        """
        Return the full transformed flight list, from cache when fresh.

        Raises:
            FlightsRequestError on non-2xx responses or network failures
        """
        flights = self.cache.get(FLIGHTS_KEY)
        if flights is not None:
            logger.debug('Using cached flights data')
            return flights

        logger.info('Fetching fresh flights data...')

        try:
            data = self._fetch_states()
        except FlightsRequestError as e:
            logger.error(f'Flights request failed: {e}')
            raise

        flights = [Flight.from_state_vector(row) for row in data.get('states') or []]
        self.cache.set(FLIGHTS_KEY, flights, self.config.cache.flights_ttl_ms)

        logger.info(f'Fetched and cached {len(flights)} flights')
        return flights

    def find_flight(self, flight_id: str) -> Optional[Flight]:
        """Exact-match lookup by ICAO24 id."""
        for flight in self.get_flights_data():
            if flight.id == flight_id:
                return flight
        return None

    def _fetch_states(self) -> dict:
        """Authenticated fetch, falling back to anonymous on auth failure."""
        if self.token_provider:
            try:
                token = self.token_provider.get_access_token()
                return self._request_states(token)
            except (TokenRequestError, AuthenticationError) as e:
                logger.warning(f'Authenticated request failed ({e}); retrying without authentication')

        return self._request_states(None)

    def _request_states(self, token: Optional[str]) -> dict:
        headers = {'Authorization': f'Bearer {token}'} if token else {}

        def attempt(timeout: float) -> requests.Response:
            return self.session.get(self.api_url, headers=headers, timeout=timeout)

        try:
            response = self.retry_policy.call(
                attempt,
                description='Flights request',
                retry_on=(requests.RequestException,),
            )
        except RetryExhaustedError as e:
            raise FlightsRequestError(f'Flights request failed: {e.last_error}') from e

        logger.debug(
            f'OpenSky rate limit remaining: {response.headers.get("X-Rate-Limit-Remaining")}'
        )

        if token and response.status_code in AUTH_FAILURE_STATUSES:
            raise AuthenticationError(response.status_code)

        if not response.ok:
            raise FlightsRequestError(
                f'Flights request failed: {response.status_code} {response.reason}',
                status=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise FlightsRequestError(f'Flights request returned invalid JSON: {e}') from e

    # -------------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------------

    def check_connectivity(self) -> List[dict]:
        """
        Check connectivity to each upstream URL with a single attempt.

        Never raises; failures are reported in the result.
        """
        results = [self._check_states()]
        if self.token_provider:
            results.insert(0, self._check_token())
        return results

    def _check_token(self) -> dict:
        return self._check(
            'token',
            self.config.opensky.token_url,
            lambda: self.session.post(
                self.config.opensky.token_url,
                data={
                    'grant_type': 'client_credentials',
                    'client_id': self.config.opensky.client_id,
                    'client_secret': self.config.opensky.client_secret,
                },
                timeout=CHECK_TIMEOUT_SECONDS,
            ),
        )

    def _check_states(self) -> dict:
        return self._check(
            'states_unauthenticated',
            self.api_url,
            lambda: self.session.get(self.api_url, timeout=CHECK_TIMEOUT_SECONDS),
        )

    def _check(self, name: str, url: str, send) -> dict:
        start_time = time.perf_counter()
        result = {'name': name, 'url': url, 'ok': False, 'status': None, 'error': None}

        try:
            response = send()
            result['ok'] = response.ok
            result['status'] = response.status_code
            result['rate_limit_remaining'] = response.headers.get('X-Rate-Limit-Remaining')
        except requests.RequestException as e:
            logger.warning(f'Check {name} failed: {e}')
            result['error'] = str(e)

        result['elapsed_ms'] = round((time.perf_counter() - start_time) * 1000, 2)
        return result
