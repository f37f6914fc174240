"""Tests for AviationStack route lookups."""

from unittest.mock import Mock

import pytest
import requests

from flight_tracker.config import AviationStackConfig
from flight_tracker.services import RouteLookupService
from flight_tracker.services.flight_info import callsign_to_flight_number

from conftest import make_response

ROUTE_PAYLOAD = {
    'data': [{
        'flight_status': 'active',
        'airline': {'name': 'Saudia'},
        'departure': {'iata': 'RUH', 'airport': 'King Khalid International'},
        'arrival': {'iata': 'JED', 'airport': 'King Abdulaziz International'},
    }],
}


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def service(cache, session):
    return RouteLookupService(AviationStackConfig(api_key='key'), cache=cache, session=session)


def test_callsign_to_flight_number():
    assert callsign_to_flight_number('SVA1020') == 'SV1020'
    assert callsign_to_flight_number('AAL839') == 'AA839'
    assert callsign_to_flight_number('N123AB') == 'N123AB'


class TestRouteLookupService:

    def test_disabled_without_key(self, cache, session):
        service = RouteLookupService(AviationStackConfig(), cache=cache, session=session)

        assert not service.is_enabled
        assert service.get_route_info('SVA1020') is None
        session.get.assert_not_called()

    def test_fetches_and_maps_route(self, service, session):
        session.get.return_value = make_response(json_data=ROUTE_PAYLOAD)

        route = service.get_route_info('sva1020')

        assert route.flight_number == 'SV1020'
        assert route.origin == 'King Khalid International'
        assert route.destination_iata == 'JED'
        assert route.status == 'active'
        assert session.get.call_args.kwargs['params'] == {'access_key': 'key', 'flight_iata': 'SV1020'}

    def test_results_are_cached(self, service, session):
        session.get.return_value = make_response(json_data=ROUTE_PAYLOAD)

        service.get_route_info('SVA1020')
        service.get_route_info('SVA1020')

        assert session.get.call_count == 1

    def test_misses_are_cached(self, service, session):
        session.get.return_value = make_response(json_data={'data': []})

        assert service.get_route_info('XYZ1') is None
        assert service.get_route_info('XYZ1') is None
        assert session.get.call_count == 1

    def test_upstream_errors_yield_none(self, service, session):
        session.get.side_effect = requests.ConnectionError('refused')
        assert service.get_route_info('SVA1020') is None

    def test_api_error_payload_yields_none(self, service, session):
        session.get.return_value = make_response(json_data={'error': {'code': 'usage_limit_reached'}})
        assert service.get_route_info('SVA1020') is None

    def test_placeholder_callsign_is_skipped(self, service, session):
        assert service.get_route_info('N/A') is None
        session.get.assert_not_called()

    @pytest.mark.parametrize('payload', [
        ['not', 'an', 'object'],
        {'data': 'unexpected'},
        {'data': ['not-a-record']},
    ])
    def test_unexpected_payload_shapes_yield_none(self, service, session, payload):
        session.get.return_value = make_response(json_data=payload)
        assert service.get_route_info('SVA1020') is None

    def test_malformed_nested_sections_are_ignored(self, service, session):
        session.get.return_value = make_response(json_data={
            'data': [{'departure': 'RUH', 'arrival': None, 'airline': [], 'flight_status': 'active'}],
        })

        route = service.get_route_info('SVA1020')

        assert route.origin is None
        assert route.destination is None
        assert route.status == 'active'
