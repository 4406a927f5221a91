"""Great-circle distance and drive-time estimates."""

from __future__ import annotations

import math

from rapidaid.contracts.common import Coordinate

EARTH_RADIUS_KM = 6371.0

# Assumed average road speed of an ambulance. Not measured.
AVERAGE_SPEED_KMH = 40.0


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in kilometers between two points given in degrees.

    Uses the atan2 form, which stays exact for coincident points. Inputs are
    not validated: NaN in, NaN out.
    """
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(dlon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_between(a: Coordinate, b: Coordinate) -> float:
    return distance_km(a.latitude, a.longitude, b.latitude, b.longitude)


def estimate_eta_minutes(
    distance: float, average_speed_kmh: float = AVERAGE_SPEED_KMH
) -> int:
    """Whole minutes to cover *distance* km at *average_speed_kmh*, rounded half up."""
    return math.floor(distance / average_speed_kmh * 60 + 0.5)
