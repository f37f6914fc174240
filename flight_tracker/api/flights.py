"""
Flight data API endpoints.

Provides endpoints for:
- GET /api/flights - Paginated flight list, optionally filtered by region
- GET /api/flights/<id> - Single flight by ICAO24 id
"""

import logging

from flask import Blueprint, request

from flight_tracker.analytics import filter_flights
from flight_tracker.api.responses import (
    error_response,
    int_arg,
    opensky_client,
    route_service,
    success_response,
)
from flight_tracker.models import paginate

logger = logging.getLogger(__name__)

flights_bp = Blueprint('flights', __name__, url_prefix='/api/flights')

DEFAULT_REGION = 'all'
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 50


@flights_bp.route('', methods=['GET'])
def list_flights():
    """
    List flights in a region, one page at a time.

    Query parameters:
    - region: region name, case-insensitive (default all)
    - page: 1-based page number (default 1)
    - limit: flights per page (default 50)

    Unknown regions yield an empty list.
    """
    region = request.args.get('region') or DEFAULT_REGION
    page = int_arg('page', DEFAULT_PAGE)
    limit = int_arg('limit', DEFAULT_LIMIT)

    logger.info(f'API request: region={region}, page={page}, limit={limit}')

    try:
        flights = opensky_client().get_flights_data()

        filtered = filter_flights(flights, region)
        if len(filtered) != len(flights):
            logger.debug(f'Filtered to {len(filtered)} of {len(flights)} flights in {region}')

        page_flights, pagination = paginate(filtered, page, limit)
        logger.debug(
            f'Pagination: {len(page_flights)} flights (page {page}/{pagination.total_pages})'
        )
        data = [f.to_dict() for f in page_flights]
    except Exception as e:
        logger.error(f'API error: {e}')
        return error_response(str(e))

    return success_response(
        data,
        pagination=pagination.to_dict(),
        filters={'region': region},
    )


@flights_bp.route('/<flight_id>', methods=['GET'])
def get_flight(flight_id: str):
    """
    Get a single flight by exact ICAO24 id.

    Includes origin/destination airports when route lookups are enabled
    and AviationStack knows the callsign.
    """
    try:
        flight = opensky_client().find_flight(flight_id)
        if flight is None:
            return error_response('Flight not found', 404)

        result = flight.to_dict()

        service = route_service()
        if service is not None and service.is_enabled:
            route_info = service.get_route_info(flight.callsign)
            if route_info:
                result['origin'] = route_info.origin or result['origin']
                result['destination'] = route_info.destination or result['destination']
                result['route'] = route_info.to_dict()
    except Exception as e:
        logger.error(f'API error: {e}')
        return error_response(str(e))

    return success_response(result)
