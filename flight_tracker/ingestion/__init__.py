"""
Upstream data acquisition for the flight tracker.

Handles OAuth2 token acquisition and fetching/mapping OpenSky state
vectors into cached Flight records.
"""

from flight_tracker.ingestion.exceptions import (
    AuthenticationError,
    FlightsRequestError,
    OpenSkyError,
    TokenRequestError,
)
from flight_tracker.ingestion.opensky_client import OpenSkyClient
from flight_tracker.ingestion.token_provider import TokenProvider

__all__ = [
    'AuthenticationError',
    'FlightsRequestError',
    'OpenSkyClient',
    'OpenSkyError',
    'TokenProvider',
    'TokenRequestError',
]
