"""Shared fixtures for the flight tracker tests."""

from typing import Any, List, Optional
from unittest.mock import Mock

import pytest

from flight_tracker.cache import ExpiringCache
from flight_tracker.config import (
    AppConfig,
    AviationStackConfig,
    CacheConfig,
    OpenSkyConfig,
    ServerConfig,
)
from flight_tracker.models import Flight

TOKEN_URL = 'https://auth.example.test/token'
API_URL = 'https://opensky.example.test/api/states/all'


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


def make_state_vector(
    icao24: str = 'abc123',
    callsign: Optional[str] = 'SVA123  ',
    latitude: Optional[float] = 24.5,
    longitude: Optional[float] = 46.7,
    on_ground: bool = False,
    velocity: Optional[float] = 220.0,
    true_track: Optional[float] = 90.0,
    altitude: Optional[float] = 11000.0,
    category: Optional[int] = 3,
) -> List[Any]:
    return [
        icao24, callsign, 'Saudi Arabia', 1700000000, 1700000001,
        longitude, latitude, altitude, on_ground, velocity, true_track,
        0.0, None, altitude, '1234', False, 0, category,
    ]


def make_flight(**kwargs) -> Flight:
    return Flight.from_state_vector(make_state_vector(**kwargs))


def make_response(status: int = 200, json_data: Any = None, reason: str = 'OK', headers=None) -> Mock:
    response = Mock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.reason = reason
    response.headers = headers or {}
    response.json.return_value = json_data
    return response


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return ExpiringCache(clock=clock)


@pytest.fixture
def app_config():
    return AppConfig(
        opensky=OpenSkyConfig(
            token_url=TOKEN_URL,
            api_url=API_URL,
            client_id='client-id',
            client_secret='client-secret',
        ),
        cache=CacheConfig(token_buffer_minutes=5, flights_cache_minutes=5),
        server=ServerConfig(port=3000, cors_origin='http://localhost:4200'),
        aviationstack=AviationStackConfig(),
    )


@pytest.fixture
def no_sleep():
    return Mock()
