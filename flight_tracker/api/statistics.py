"""
Statistics and region API endpoints.

Provides endpoints for:
- GET /api/statistics - Aggregate statistics for a region
- GET /api/regions - Region names accepted by the filters
"""

import logging

from flask import Blueprint, request

from flight_tracker.analytics import REGION_NAMES, calculate_flight_statistics, filter_flights
from flight_tracker.api.responses import error_response, opensky_client, success_response

logger = logging.getLogger(__name__)

statistics_bp = Blueprint('statistics', __name__, url_prefix='/api')


@statistics_bp.route('/statistics', methods=['GET'])
def get_statistics():
    """
    Get aggregate statistics over every flight in a region.

    Query parameters:
    - region: region name, case-insensitive (default all)

    Unlike /api/flights this is not paginated.
    """
    region = request.args.get('region') or 'all'

    try:
        flights = opensky_client().get_flights_data()
        stats = calculate_flight_statistics(filter_flights(flights, region), region)
    except Exception as e:
        logger.error(f'Statistics API error: {e}')
        return error_response(str(e))

    logger.info(f'Statistics calculated for {stats["totalFlights"]} flights in {region}')

    return success_response(stats, region=region)


@statistics_bp.route('/regions', methods=['GET'])
def list_regions():
    """Region names for the frontend's region selector."""
    return success_response(REGION_NAMES)
