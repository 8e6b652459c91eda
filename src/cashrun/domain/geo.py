"""Great-circle distance on a spherical Earth."""

from __future__ import annotations

import math

EARTH_RADIUS_M = 6_371_000.0


def haversine_distance(
    lat1: float,
    lng1: float,
    lat2: float,
    lng2: float,
    *,
    radius: float = EARTH_RADIUS_M,
) -> float:
    """Distance in meters between two latitude/longitude points (degrees).

    Inputs are assumed in range; out-of-range coordinates are a caller bug
    and are not checked here.
    """
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    a = min(a, 1.0)  # float drift near antipodes
    return radius * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
