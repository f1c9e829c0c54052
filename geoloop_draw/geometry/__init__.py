"""
Geometry Layer
==============

Bounded Context: Geocoordinates, map transforms and spatial queries.

Responsibilities:
- Point value objects (GeoPoint, ScreenPoint)
- Screen <-> geocoordinate conversion
- Distance between geocoordinates
- Point-in-polygon tests
- NO state, NO drawing lifecycle, NO rendering
"""

from geoloop_draw.geometry.coords import GeoPoint, ScreenPoint
from geoloop_draw.geometry.distance import (
    DistanceCalculator,
    distance,
    geodesic_distance,
    haversine_distance,
)
from geoloop_draw.geometry.polygon import point_in_polygon, points_in_polygon
from geoloop_draw.geometry.transform import MapTransform, WebMercatorCamera
from geoloop_draw.geometry.utils import GeometryUtils

__all__ = [
    "GeoPoint",
    "ScreenPoint",
    "DistanceCalculator",
    "distance",
    "geodesic_distance",
    "haversine_distance",
    "point_in_polygon",
    "points_in_polygon",
    "MapTransform",
    "WebMercatorCamera",
    "GeometryUtils",
]
