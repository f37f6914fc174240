"""
Flight route service - enriches flights with origin/destination airports.

OpenSky reports where an aircraft is, not where it is going. AviationStack
fills the gap by flight number:
- Origin/destination airports
- Airline and flight status

Uses caching to minimize API calls (the free tier allows 100 requests a
month). Lookups never fail the caller: errors are logged and yield None.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Optional

import requests

from flight_tracker.cache import ExpiringCache
from flight_tracker.config import AviationStackConfig

logger = logging.getLogger(__name__)

ROUTE_CACHE_TTL_MS = 60 * 60 * 1000  # 1 hour
_MISS = object()

# Common ICAO to IATA airline prefixes
ICAO_TO_IATA = {
    'AAL': 'AA',  # American Airlines
    'DAL': 'DL',  # Delta
    'UAL': 'UA',  # United
    'SWA': 'WN',  # Southwest
    'JBU': 'B6',  # JetBlue
    'ASA': 'AS',  # Alaska
    'ACA': 'AC',  # Air Canada
    'BAW': 'BA',  # British Airways
    'DLH': 'LH',  # Lufthansa
    'AFR': 'AF',  # Air France
    'KLM': 'KL',  # KLM
    'UAE': 'EK',  # Emirates
    'QTR': 'QR',  # Qatar Airways
    'ETD': 'EY',  # Etihad
    'SVA': 'SV',  # Saudia
    'FAD': 'F3',  # flyadeal
    'KNE': 'XY',  # flynas
    'THY': 'TK',  # Turkish Airlines
    'QFA': 'QF',  # Qantas
    'SIA': 'SQ',  # Singapore
    'CPA': 'CX',  # Cathay Pacific
    'ANA': 'NH',  # All Nippon
    'JAL': 'JL',  # Japan Airlines
    'RYR': 'FR',  # Ryanair
    'EZY': 'U2',  # easyJet
}


@dataclass
class RouteInfo:
    """Route information for a flight."""
    flight_number: str
    airline_name: Optional[str] = None
    origin_iata: Optional[str] = None
    origin_name: Optional[str] = None
    destination_iata: Optional[str] = None
    destination_name: Optional[str] = None
    status: Optional[str] = None  # scheduled, active, landed, etc.

    @property
    def origin(self) -> Optional[str]:
        return self.origin_name or self.origin_iata

    @property
    def destination(self) -> Optional[str]:
        return self.destination_name or self.destination_iata

    def to_dict(self) -> dict:
        return asdict(self)


def _section(payload: dict, name: str) -> dict:
    """Nested object from an AviationStack record, or {} when absent or malformed."""
    value = payload.get(name)
    return value if isinstance(value, dict) else {}


def callsign_to_flight_number(callsign: str) -> str:
    """
    Convert ICAO callsign to IATA flight number.

    Examples:
    - AAL839 -> AA839
    - SVA1020 -> SV1020
    """
    prefix = callsign[:3]
    if len(callsign) > 3 and prefix in ICAO_TO_IATA:
        return ICAO_TO_IATA[prefix] + callsign[3:]
    return callsign


class RouteLookupService:
    """
    Looks up flight routes on AviationStack.

    Disabled when no API key is configured.
    """

    def __init__(
        self,
        aviationstack: AviationStackConfig,
        cache: Optional[ExpiringCache] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = aviationstack.api_key
        self.base_url = aviationstack.base_url
        self.cache = cache or ExpiringCache()
        self.session = session or requests.Session()

        if not self.api_key:
            logger.warning('AviationStack API key not configured - route lookups disabled')

    @property
    def is_enabled(self) -> bool:
        return bool(self.api_key)

    def get_route_info(self, callsign: Optional[str]) -> Optional[RouteInfo]:
        """
        Get route information for a flight by callsign.

        Returns cached data if available, otherwise fetches from the API.
        Misses are cached too, to avoid repeated failed lookups.
        """
        if not self.api_key or not callsign or callsign == 'N/A':
            return None

        callsign = callsign.strip().upper()
        key = f'route:{callsign}'

        cached = self.cache.get(key)
        if cached is not None:
            return None if cached is _MISS else cached

        logger.info(f'Fetching route info from AviationStack for {callsign}')
        route_info = self._fetch_from_api(callsign)
        self.cache.set(key, route_info or _MISS, ROUTE_CACHE_TTL_MS)
        return route_info

    def _fetch_from_api(self, callsign: str) -> Optional[RouteInfo]:
        flight_iata = callsign_to_flight_number(callsign)

        try:
            response = self.session.get(
                f'{self.base_url}/flights',
                params={'access_key': self.api_key, 'flight_iata': flight_iata},
                timeout=10,
            )
        except requests.RequestException as e:
            logger.error(f'Failed to fetch flight info: {e}')
            return None

        if response.status_code != 200:
            logger.warning(f'AviationStack API error: {response.status_code}')
            return None

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f'Error parsing flight info: {e}')
            return None

        if not isinstance(data, dict):
            logger.warning(f'Unexpected AviationStack payload: {type(data).__name__}')
            return None

        if 'error' in data:
            logger.warning(f'AviationStack API error: {data["error"]}')
            return None

        flights = data.get('data') or []
        if not isinstance(flights, list) or not flights or not isinstance(flights[0], dict):
            logger.debug(f'No route data found for {callsign}')
            return None

        # Use first matching flight
        flight = flights[0]
        departure = _section(flight, 'departure')
        arrival = _section(flight, 'arrival')

        return RouteInfo(
            flight_number=flight_iata,
            airline_name=_section(flight, 'airline').get('name'),
            origin_iata=departure.get('iata'),
            origin_name=departure.get('airport'),
            destination_iata=arrival.get('iata'),
            destination_name=arrival.get('airport'),
            status=flight.get('flight_status'),
        )
