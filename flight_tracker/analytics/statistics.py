"""
Aggregate statistics over a set of flights using NumPy.

Produces the snapshot served by /api/statistics:
- Counts of valid, flying and grounded flights
- Average and peak altitude/speed
- Bucketed histograms for altitude, speed, category and direction

Units follow OpenSky: altitudes in meters, speeds in m/s, tracks in
degrees clockwise from north. Missing altitudes and speeds count as 0;
a missing track is its own Unknown bucket (0 is a valid heading).
"""

import logging
from typing import Optional, Sequence

import numpy as np

from flight_tracker.models import Flight

logger = logging.getLogger(__name__)

# (label, start, end); North wraps through 0
DIRECTIONS = [
    ('North (315-45°)', 315, 45),
    ('East (45-135°)', 45, 135),
    ('South (135-225°)', 135, 225),
    ('West (225-315°)', 225, 315),
]

CATEGORY_LABELS = {
    1: 'Light',
    2: 'Small',
    3: 'Large',
    4: 'Heavy',
    5: 'Military',
}


def is_in_direction(track: Optional[float], start: float, end: float) -> bool:
    """Wrap-aware inclusive range test on a compass track."""
    if track is None:
        return False
    if start > end:
        return track >= start or track <= end
    return start <= track <= end


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives, matching display rounding."""
    return int(np.floor(value + 0.5))


def _values(flights: Sequence[Flight], attr: str) -> np.ndarray:
    """Numeric array of an attribute with missing values as 0."""
    return np.array([getattr(f, attr) or 0 for f in flights], dtype=float)


def _mean(values: np.ndarray) -> float:
    return float(values.mean()) if values.size else 0.0


def _max(values: np.ndarray) -> float:
    return float(values.max()) if values.size else 0


def _as_number(value: float):
    """Keep integral maxima as ints in the JSON output."""
    return int(value) if float(value).is_integer() else value


def empty_statistics(region: str) -> dict:
    return {
        'totalFlights': 0,
        'flyingFlights': 0,
        'groundedFlights': 0,
        'averageAltitude': 0,
        'averageSpeed': 0,
        'highestAltitude': 0,
        'fastestSpeed': 0,
        'altitudeRanges': {},
        'speedRanges': {},
        'aircraftCategories': {},
        'flightDirections': {},
        'region': region,
    }


def calculate_flight_statistics(flights: Sequence[Flight], region: str) -> dict:
    """
    Compute the statistics snapshot for a set of flights.

    Only flights with a position are counted. Average altitude is taken
    over airborne flights only; every other figure covers all valid flights.
    """
    if not flights:
        return empty_statistics(region)

    valid = [f for f in flights if f.has_position()]
    flying = [f for f in valid if not f.on_ground]
    grounded = [f for f in valid if f.on_ground]

    flying_altitudes = _values(flying, 'altitude')
    altitudes = _values(valid, 'altitude')
    speeds = _values(valid, 'velocity')

    altitude_ranges = {
        'Ground (0m)': len(grounded),
        'Low (1-3000m)': int(np.count_nonzero((flying_altitudes > 0) & (flying_altitudes <= 3000))),
        'Medium (3000-10000m)': int(np.count_nonzero((flying_altitudes > 3000) & (flying_altitudes <= 10000))),
        'High (10000m+)': int(np.count_nonzero(flying_altitudes > 10000)),
    }

    speed_ranges = {
        'Stationary (0 m/s)': int(np.count_nonzero(speeds == 0)),
        'Slow (1-50 m/s)': int(np.count_nonzero((speeds > 0) & (speeds <= 50))),
        'Medium (50-150 m/s)': int(np.count_nonzero((speeds > 50) & (speeds <= 150))),
        'Fast (150+ m/s)': int(np.count_nonzero(speeds > 150)),
    }

    categories = _values(valid, 'category')
    aircraft_categories = {'Unknown': int(np.count_nonzero(categories == 0))}
    for code, label in CATEGORY_LABELS.items():
        aircraft_categories[label] = int(np.count_nonzero(categories == code))
    aircraft_categories['Other'] = int(np.count_nonzero(categories > 5))

    flight_directions = {
        label: sum(1 for f in valid if is_in_direction(f.true_track, start, end))
        for label, start, end in DIRECTIONS
    }
    flight_directions['Unknown'] = sum(1 for f in valid if f.true_track is None)

    logger.debug(f'Statistics computed over {len(valid)} of {len(flights)} flights in {region}')

    return {
        'totalFlights': len(valid),
        'flyingFlights': len(flying),
        'groundedFlights': len(grounded),
        'averageAltitude': round_half_up(_mean(flying_altitudes)),
        'averageSpeed': round_half_up(_mean(speeds)),
        'highestAltitude': _as_number(_max(altitudes)),
        'fastestSpeed': _as_number(_max(speeds)),
        'altitudeRanges': altitude_ranges,
        'speedRanges': speed_ranges,
        'aircraftCategories': aircraft_categories,
        'flightDirections': flight_directions,
        'region': region,
    }
