"""
Geographic utility functions
"""
from math import radians, sin, cos, asin, sqrt
from typing import Tuple

EARTH_RADIUS_M = 6371000.0

# Meters per degree of latitude (and of longitude at the equator)
METERS_PER_DEGREE = 111320.0


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate distance between two lat/lng points in meters using Haversine formula.

    Args:
        lat1, lon1: First point coordinates
        lat2, lon2: Second point coordinates

    Returns:
        Distance in meters
    """
    dlat = radians(lat2 - lat1)
    dlon = radians(lon2 - lon1)

    a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlon / 2) ** 2
    c = 2 * asin(min(1.0, sqrt(a)))

    return EARTH_RADIUS_M * c


def bounding_box(lat: float, lng: float, radius_m: float) -> Tuple[float, float, float, float]:
    """
    Degree box that contains every point within radius_m of (lat, lng).

    Returns (min_lat, max_lat, min_lng, max_lng). The box is padded slightly
    and widens to the full longitude range near the poles or when it would
    cross the antimeridian, so it never excludes a true match.
    """
    radius_m = max(radius_m, 0.0) * 1.01 + 1.0
    dlat = radius_m / METERS_PER_DEGREE
    min_lat = max(-90.0, lat - dlat)
    max_lat = min(90.0, lat + dlat)

    cos_lat = cos(radians(min(abs(lat) + dlat, 90.0)))
    if cos_lat < 1e-6:
        return min_lat, max_lat, -180.0, 180.0

    dlng = radius_m / (METERS_PER_DEGREE * cos_lat)
    min_lng = lng - dlng
    max_lng = lng + dlng
    if min_lng < -180.0 or max_lng > 180.0:
        return min_lat, max_lat, -180.0, 180.0
    return min_lat, max_lat, min_lng, max_lng


def is_valid_coordinate(lat: float, lng: float) -> bool:
    return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0
