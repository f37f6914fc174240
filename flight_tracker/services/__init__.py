"""
External integration services.

Handles third-party API calls with caching and graceful degradation
when services are unavailable.
"""

from flight_tracker.services.flight_info import RouteInfo, RouteLookupService

__all__ = ['RouteInfo', 'RouteLookupService']
