"""
Great-circle distance helpers for radius searches.
"""

import math

EARTH_RADIUS_METERS = 6_371_008.8
METERS_PER_DEGREE_LAT = 111_320.0


def haversine_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance between two points in meters."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    return 2 * EARTH_RADIUS_METERS * math.asin(min(1.0, math.sqrt(a)))


def bounding_box(lat: float, lon: float, radius_meters: float) -> tuple[float, float, float, float]:
    """
    Return (min_lat, max_lat, min_lon, max_lon) enclosing the circle.

    The box is only a prefilter; callers still check the exact distance.
    Near the poles the longitude span covers the whole globe.
    """
    d_lat = radius_meters / METERS_PER_DEGREE_LAT
    cos_lat = math.cos(math.radians(lat))
    if cos_lat < 1e-6:
        d_lon = 180.0
    else:
        d_lon = min(180.0, radius_meters / (METERS_PER_DEGREE_LAT * cos_lat))
    return lat - d_lat, lat + d_lat, lon - d_lon, lon + d_lon
