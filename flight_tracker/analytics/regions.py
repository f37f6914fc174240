"""
Geographic regions used to filter flights.

Regions are axis-aligned latitude/longitude boxes. Most are open
intervals; Saudi Arabia is the one closed box. New regions only need a
new entry in REGIONS.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from flight_tracker.models import Flight

ALL_REGIONS = 'all'


@dataclass(frozen=True)
class BoundingBox:
    """Named lat/lon box, inclusive or exclusive on all four edges."""
    name: str
    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float
    inclusive: bool = False

    def contains(self, latitude: float, longitude: float) -> bool:
        if self.inclusive:
            return (self.lat_min <= latitude <= self.lat_max
                    and self.lon_min <= longitude <= self.lon_max)
        return (self.lat_min < latitude < self.lat_max
                and self.lon_min < longitude < self.lon_max)

    @property
    def center(self) -> tuple:
        return ((self.lat_min + self.lat_max) / 2, (self.lon_min + self.lon_max) / 2)


REGIONS: List[BoundingBox] = [
    BoundingBox('Saudi Arabia', 16, 32, 34, 56, inclusive=True),
    BoundingBox('Europe', 35, 70, -25, 40),
    BoundingBox('North America', 15, 70, -170, -50),
    BoundingBox('South America', -60, 15, -90, -30),
    BoundingBox('Asia', 0, 70, 60, 180),
    BoundingBox('Africa', -40, 35, -20, 50),
    BoundingBox('Oceania', -50, 0, 110, 180),
]

_REGIONS_BY_KEY: Dict[str, BoundingBox] = {box.name.lower(): box for box in REGIONS}

# Served by /api/regions
REGION_NAMES: List[str] = ['All'] + [box.name for box in REGIONS]


def get_region(name: str) -> Optional[BoundingBox]:
    """Look up a region box by case-insensitive name."""
    return _REGIONS_BY_KEY.get(name.strip().lower())


def is_known_region(name: str) -> bool:
    return name.strip().lower() == ALL_REGIONS or get_region(name) is not None


def is_flight_in_region(flight: Flight, region: str) -> bool:
    """
    Check whether a flight's position lies in the named region.

    Flights without a position are never in a region, not even 'all'.
    Unknown region names return False.
    """
    if not flight.has_position():
        return False

    if region.strip().lower() == ALL_REGIONS:
        return True

    box = get_region(region)
    if box is None:
        return False
    return box.contains(flight.latitude, flight.longitude)


def filter_flights(flights: Sequence[Flight], region: str) -> List[Flight]:
    """Flights in the region; 'all' returns every flight unfiltered."""
    if region.strip().lower() == ALL_REGIONS:
        return list(flights)
    return [f for f in flights if is_flight_in_region(f, region)]
