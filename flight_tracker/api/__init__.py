"""
API module for the flight tracker.

Provides REST endpoints for:
- Flight data (paginated lists, individual flights)
- Regions and aggregate statistics
- Upstream diagnostics (optional)
"""

from flight_tracker.api.debug import debug_bp
from flight_tracker.api.flights import flights_bp
from flight_tracker.api.statistics import statistics_bp

__all__ = ['debug_bp', 'flights_bp', 'statistics_bp']
