"""
Data models for the flight tracker.

Flights are plain in-memory records rebuilt from OpenSky state vectors;
nothing is persisted.
"""

from flight_tracker.models.flight import Flight, NOT_AVAILABLE, STATE_VECTOR_LENGTH
from flight_tracker.models.pagination import Pagination, paginate

__all__ = [
    'Flight',
    'NOT_AVAILABLE',
    'STATE_VECTOR_LENGTH',
    'Pagination',
    'paginate',
]
