"""
Distance Module
===============

Great-circle and ellipsoidal distances between geocoordinates, in meters.

Calculators:
- GEODESIC (default): WGS84 ellipsoid via pyproj.Geod (inverse geodesic problem)
- HAVERSINE: spherical formula on the mapping library's earth radius
"""

import math
from enum import Enum

from pyproj import Geod

from geoloop_draw.geometry.coords import GeoPoint

# Earth radius used by the map widget's haversine calculator.
EARTH_RADIUS_M = 6356752.314245

_geod = Geod(ellps="WGS84")


class DistanceCalculator(str, Enum):
    """Distance algorithm selection."""
    HAVERSINE = "haversine"
    GEODESIC = "geodesic"


def haversine_distance(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in meters on a sphere of EARTH_RADIUS_M."""
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    sin_dlat = math.sin((lat2 - lat1) / 2)
    sin_dlon = math.sin(math.radians(b.lon - a.lon) / 2)

    h = sin_dlat ** 2 + sin_dlon ** 2 * math.cos(lat1) * math.cos(lat2)
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_M * c


def geodesic_distance(a: GeoPoint, b: GeoPoint) -> float:
    """Ellipsoidal (WGS84) distance in meters."""
    # pyproj expects (lon, lat) order
    _, _, meters = _geod.inv(a.lon, a.lat, b.lon, b.lat)
    return float(meters)


def distance(
    a: GeoPoint,
    b: GeoPoint,
    calculator: DistanceCalculator = DistanceCalculator.GEODESIC,
) -> float:
    """
    Distance between two geocoordinates in meters.

    Args:
        a: First point
        b: Second point
        calculator: Algorithm (default: GEODESIC)

    Returns:
        Distance in meters (0.0 for identical points)
    """
    if a == b:
        return 0.0
    if DistanceCalculator(calculator) is DistanceCalculator.GEODESIC:
        return geodesic_distance(a, b)
    return haversine_distance(a, b)
