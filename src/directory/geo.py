"""
Great-circle distance helpers.
Distances are reported in statute miles because every radius in the directory is expressed in miles.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final

EARTH_RADIUS_MILES: Final[float] = 3959.0


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


def haversine_miles(a: GeoPoint, b: GeoPoint) -> float:
    """Return the haversine distance in miles between two points.

    Inputs are not range-checked. Non-finite coordinates propagate to a NaN result,
    which never compares `<=` to a radius and is therefore dropped by radius filters.
    """

    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = math.radians(b.latitude - a.latitude)
    dlon = math.radians(b.longitude - a.longitude)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # Rounding can push h a hair above 1.0 for antipodal points.
    if h > 1.0:
        h = 1.0
    return 2 * EARTH_RADIUS_MILES * math.asin(math.sqrt(h))
