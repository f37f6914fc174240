"""
Flight record - one aircraft from an OpenSky state vector.

OpenSky state vector format (array indices):
0: icao24          - ICAO24 hex address
1: callsign        - Callsign (8 chars max)
2: origin_country  - Country of registration
3: time_position   - Unix timestamp of last position update
4: last_contact    - Unix timestamp of last message
5: longitude       - WGS84 longitude
6: latitude        - WGS84 latitude
7: baro_altitude   - Barometric altitude (meters)
8: on_ground       - Boolean
9: velocity        - Ground speed (m/s)
10: true_track     - Track angle (degrees, 0=north)
11: vertical_rate  - Vertical rate (m/s)
12: sensors        - Sensor IDs (array)
13: geo_altitude   - Geometric altitude (meters)
14: squawk         - Transponder code
15: spi            - Special position indicator
16: position_source - 0=ADS-B, 1=ASTERIX, 2=MLAT, 3=FLARM
17: category       - Aircraft category (0=no info, 1=light, ...)

Records are rebuilt wholesale on every upstream fetch and never mutated.
"""

from dataclasses import asdict, dataclass
from typing import Any, List, Optional, Sequence

NOT_AVAILABLE = 'N/A'
STATE_VECTOR_LENGTH = 18


def _normalize(row: Sequence[Any]) -> List[Any]:
    """Pad or truncate a state vector to exactly STATE_VECTOR_LENGTH fields."""
    row = list(row[:STATE_VECTOR_LENGTH])
    return row + [None] * (STATE_VECTOR_LENGTH - len(row))


@dataclass(frozen=True)
class Flight:
    """
    Flight record served by the API.

    Field names are the JSON keys of the REST contract. Origin comes from
    the country of registration; destination is never reported by OpenSky.
    """
    id: Optional[str]
    callsign: str
    origin: str
    destination: str
    time_position: Optional[int]
    last_contact: Optional[int]
    longitude: Optional[float]
    latitude: Optional[float]
    baro_altitude: Optional[float]
    on_ground: bool
    velocity: Optional[float]
    true_track: Optional[float]
    vertical_rate: Optional[float]
    sensors: Optional[List[int]]
    altitude: Optional[float]
    squawk: Optional[str]
    spi: bool
    position_source: Optional[int]
    category: Optional[int]

    @classmethod
    def from_state_vector(cls, row: Sequence[Any]) -> 'Flight':
        """
        Map a state vector onto a Flight.

        Short rows are padded with None; fields past STATE_VECTOR_LENGTH are
        ignored.
        """
        row = _normalize(row)
        callsign = row[1]
        if isinstance(callsign, str):
            callsign = callsign.strip()

        return cls(
            id=row[0],
            callsign=callsign or NOT_AVAILABLE,
            origin=row[2] or NOT_AVAILABLE,
            destination=NOT_AVAILABLE,
            time_position=row[3],
            last_contact=row[4],
            longitude=row[5],
            latitude=row[6],
            baro_altitude=row[7],
            on_ground=bool(row[8]),
            velocity=row[9],
            true_track=row[10],
            vertical_rate=row[11],
            sensors=row[12],
            altitude=row[13],
            squawk=row[14],
            spi=bool(row[15]),
            position_source=row[16],
            category=row[17],
        )

    def has_position(self) -> bool:
        """Check if this flight has position data (0 is a valid coordinate)."""
        return self.latitude is not None and self.longitude is not None

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        return asdict(self)
