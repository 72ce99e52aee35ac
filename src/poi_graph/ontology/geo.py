from __future__ import annotations

import math

EARTH_RADIUS_M = 6_371_000.0


def haversine_m(
    lat1: float, lon1: float, lat2: float, lon2: float, *, radius_m: float = EARTH_RADIUS_M
) -> float:
    """Great-circle distance in meters on a sphere (ellipsoid ignored)."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    # rounding can push `a` just outside [0, 1] for near-antipodal points
    a = min(1.0, max(0.0, a))
    return radius_m * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
