"""
Flight tracker Flask application.

Main entry point for the web application. Initializes:
- Configuration validation
- Shared cache and OpenSky client
- Optional AviationStack route lookups
- API routes

Usage:
    python -m flight_tracker.app

Or with gunicorn:
    gunicorn 'flight_tracker.app:create_app()'
"""

import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS

from flight_tracker.api import debug_bp, flights_bp, statistics_bp
from flight_tracker.api.responses import error_response, utc_timestamp
from flight_tracker.cache import ExpiringCache
from flight_tracker.config import AppConfig, config
from flight_tracker.ingestion import OpenSkyClient
from flight_tracker.services import RouteLookupService

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.server.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger(__name__)


def create_app(
    app_config: Optional[AppConfig] = None,
    opensky_client: Optional[OpenSkyClient] = None,
    route_service: Optional[RouteLookupService] = None,
) -> Flask:
    """
    Application factory for Flask.

    Args:
        app_config: Settings to use instead of the environment.
        opensky_client: Pre-built upstream client (tests inject fakes).
        route_service: Pre-built route lookup service.

    Returns:
        Configured Flask application instance.

    Raises:
        ConfigurationError if a standalone deployment has no credentials.
    """
    app_config = app_config or config
    app_config.validate()
    app_config.log_summary()

    app = Flask(__name__)
    app.config['APP_CONFIG'] = app_config

    CORS(
        app,
        resources={r'/api/*': {'origins': app_config.server.cors_origin},
                   r'/health': {'origins': app_config.server.cors_origin}},
        supports_credentials=True,
    )

    # One cache per process, shared by token and flights cells
    if opensky_client is None:
        opensky_client = OpenSkyClient(app_config, cache=ExpiringCache())
    if route_service is None:
        route_service = RouteLookupService(app_config.aviationstack)

    app.config['OPENSKY_CLIENT'] = opensky_client
    app.config['ROUTE_SERVICE'] = route_service

    # Register API blueprints
    app.register_blueprint(flights_bp)
    app.register_blueprint(statistics_bp)
    if app_config.server.debug_endpoints:
        app.register_blueprint(debug_bp)
        logger.info('Debug endpoints enabled at /api/debug')

    @app.route('/health')
    def health():
        """Liveness plus cache population and effective config."""
        return {
            'success': True,
            'status': 'OK',
            'timestamp': utc_timestamp(),
            'tokenCached': opensky_client.token_cached,
            'flightsCached': opensky_client.flights_cached,
            'environment': app_config.server.environment,
            'config': {
                'port': app_config.server.port,
                'corsOrigin': app_config.server.cors_origin,
                'tokenCacheBuffer': app_config.cache.token_buffer_minutes,
                'flightsCache': app_config.cache.flights_cache_minutes,
            },
        }

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    @app.errorhandler(404)
    def not_found(e):
        return error_response('Not found', 404)

    @app.errorhandler(500)
    def server_error(e):
        logger.error(f'Server error: {e}')
        return error_response('Internal server error', 500)

    return app


def run_development_server():
    """Run the development server."""
    app = create_app()
    port = config.server.port

    logger.info(f'Flight Tracker backend running on http://localhost:{port}')
    logger.info('API endpoints:')
    logger.info('   GET /api/flights - Paginated flights')
    logger.info('   GET /api/flights/<id> - Single flight')
    logger.info('   GET /api/regions - Region names')
    logger.info('   GET /api/statistics - Region statistics')
    logger.info('   GET /health - Health check')

    app.run(
        host='0.0.0.0',
        port=port,
        debug=config.server.debug,
        use_reloader=False,
    )


if __name__ == '__main__':
    run_development_server()
