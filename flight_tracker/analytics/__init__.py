"""
Analytics module for the flight tracker.

Region filtering by bounding box and NumPy-based aggregate statistics
over the current flight list.
"""

from flight_tracker.analytics.regions import (
    REGION_NAMES,
    REGIONS,
    BoundingBox,
    filter_flights,
    is_flight_in_region,
    is_known_region,
)
from flight_tracker.analytics.statistics import (
    calculate_flight_statistics,
    is_in_direction,
)

__all__ = [
    'REGION_NAMES',
    'REGIONS',
    'BoundingBox',
    'calculate_flight_statistics',
    'filter_flights',
    'is_flight_in_region',
    'is_in_direction',
    'is_known_region',
]
