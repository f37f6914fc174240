"""JSON envelope shared by every endpoint: {success, ..., timestamp}."""

from datetime import datetime, timezone

from flask import current_app, jsonify, request


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def success_response(data=None, status: int = 200, **metadata):
    body = {'success': True}
    if data is not None:
        body['data'] = data
    body.update(metadata)
    body['timestamp'] = utc_timestamp()
    return jsonify(body), status


def error_response(message: str, status: int = 500):
    return jsonify({
        'success': False,
        'error': message,
        'timestamp': utc_timestamp(),
    }), status


def int_arg(name: str, default: int) -> int:
    """Positive integer query parameter; anything else takes the default."""
    try:
        value = int(request.args.get(name, default))
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def opensky_client():
    return current_app.config['OPENSKY_CLIENT']


def route_service():
    return current_app.config.get('ROUTE_SERVICE')
