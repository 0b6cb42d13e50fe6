"""
Named locations usable as ?location=<key> instead of browser coordinates (kiosk deployments).
Keys are matched case-insensitively.
"""
from typing import TypedDict


class Coordinates(TypedDict):
    latitude: float
    longitude: float


PREDEFINED_LOCATIONS: dict[str, Coordinates] = {
    "nyc": {"latitude": 40.7128, "longitude": -74.0060},
    "sf": {"latitude": 37.7749, "longitude": -122.4194},
    "baltimore": {"latitude": 39.2904, "longitude": -76.6122},
}


def get_coordinates(key: str | None) -> Coordinates | None:
    """Resolve a location key (case-insensitive). None if missing or unknown."""
    if not key:
        return None
    coords = PREDEFINED_LOCATIONS.get(key.strip().lower())
    return dict(coords) if coords else None
