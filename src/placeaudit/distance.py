"""Great-circle distance between two WGS84 coordinates."""

from math import atan2, cos, pi, sin, sqrt

EARTH_RADIUS_KM = 6371.0


def _radians(degrees: float) -> float:
    return degrees * pi / 180


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Haversine distance in kilometres between (*lat1*, *lon1*) and
    (*lat2*, *lon2*), all given in degrees.

    Ranges are not validated: out-of-range inputs still produce a number,
    it just doesn't mean much.
    """
    lat1_rad = _radians(lat1)
    lat2_rad = _radians(lat2)
    delta_lat = lat2_rad - lat1_rad
    delta_lon = _radians(lon2) - _radians(lon1)

    a = (
        sin(delta_lat / 2) ** 2
        + cos(lat1_rad) * cos(lat2_rad) * sin(delta_lon / 2) ** 2
    )
    # a is in [0, 1] mathematically; rounding can step just outside
    a = min(max(a, 0.0), 1.0)
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def format_km(km: float) -> str:
    """Format a distance with exactly three decimals, e.g. 0.14 -> '0.140'."""
    return f"{km:.3f}"
