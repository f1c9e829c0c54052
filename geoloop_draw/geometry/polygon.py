"""
Polygon Containment Module
==========================

Ray casting (even-odd rule) over latitude/longitude vertices.

A horizontal ray is cast eastward from the query point; each polygon edge
whose endpoints straddle the point's latitude and whose interpolated
longitude lies east of the point counts as one crossing. Odd crossings
mean inside.

Points lying exactly on an edge or vertex have no defined answer.
"""

from typing import Sequence

import numpy as np

from geoloop_draw.geometry.coords import GeoPoint


def _ray_intersects_segment(point: GeoPoint, seg_start: GeoPoint, seg_end: GeoPoint) -> bool:
    if (seg_start.lat > point.lat) == (seg_end.lat > point.lat):
        return False

    intersection_lon = (
        (seg_end.lon - seg_start.lon)
        * (point.lat - seg_start.lat)
        / (seg_end.lat - seg_start.lat)
        + seg_start.lon
    )
    return point.lon < intersection_lon


def point_in_polygon(point: GeoPoint, polygon: Sequence[GeoPoint]) -> bool:
    """
    Check whether a point lies inside a polygon.

    Args:
        point: Query geocoordinate
        polygon: Ordered vertices (implicitly closed)

    Returns:
        True if inside, False if outside or if the polygon has fewer
        than 3 vertices
    """
    n = len(polygon)
    if n < 3:
        return False

    intersections = 0
    for i in range(n):
        j = (i + 1) % n
        if _ray_intersects_segment(point, polygon[i], polygon[j]):
            intersections += 1

    return intersections % 2 == 1


def points_in_polygon(points: Sequence[GeoPoint], polygon: Sequence[GeoPoint]) -> np.ndarray:
    """
    Vectorized containment test for many points.

    Same even-odd rule as point_in_polygon(), evaluated for all
    (point, edge) pairs at once.

    Returns:
        Boolean mask of shape (N,) where True = inside
    """
    if len(points) == 0:
        return np.array([], dtype=bool)
    if len(polygon) < 3:
        return np.zeros(len(points), dtype=bool)

    lat = np.array([p.lat for p in points], dtype=float)[:, None]
    lon = np.array([p.lon for p in points], dtype=float)[:, None]

    start_lat = np.array([v.lat for v in polygon], dtype=float)
    start_lon = np.array([v.lon for v in polygon], dtype=float)
    end_lat = np.roll(start_lat, -1)
    end_lon = np.roll(start_lon, -1)

    straddles = (start_lat[None, :] > lat) != (end_lat[None, :] > lat)

    # Horizontal edges never straddle; keep the division finite for them
    dlat = end_lat - start_lat
    safe_dlat = np.where(dlat == 0, 1.0, dlat)
    intercept = (end_lon - start_lon)[None, :] * (lat - start_lat[None, :]) / safe_dlat[None, :] + start_lon[None, :]

    crossings = straddles & (lon < intercept)
    return crossings.sum(axis=1) % 2 == 1
