"""
Diagnostic endpoints, registered only when ENABLE_DEBUG_ENDPOINTS=1.

- GET /api/debug/opensky - Connectivity checks against upstream URLs
"""

import logging

from flask import Blueprint

from flight_tracker.api.responses import opensky_client, success_response

logger = logging.getLogger(__name__)

debug_bp = Blueprint('debug', __name__, url_prefix='/api/debug')


@debug_bp.route('/opensky', methods=['GET'])
def check_opensky():
    """Hit each OpenSky URL once, without retries or caching."""
    results = opensky_client().check_connectivity()
    for result in results:
        logger.info(f'Check {result["name"]}: ok={result["ok"]} status={result["status"]}')
    return success_response(results)
