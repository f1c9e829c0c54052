"""
Geometry Utilities
==================

Stateless facade over the geometry layer, used by the drawing session
(distance filtering) and by the gesture controller (screen conversion).

Design:
- All methods are static (no instance state)
- Conversion failures become None, never exceptions
"""

from typing import Iterable, List, Optional, Sequence

import numpy as np

from geoloop_logging import LogEvent, create_logger
from geoloop_draw.geometry.coords import GeoPoint, ScreenPoint
from geoloop_draw.geometry.distance import DistanceCalculator, distance
from geoloop_draw.geometry.polygon import point_in_polygon, points_in_polygon
from geoloop_draw.geometry.transform import MapTransform

logger = create_logger("geometry")


class GeometryUtils:
    """
    Geometric calculations and coordinate transformations for map drawing.

    Usage:
        geo = GeometryUtils.screen_to_geo(ScreenPoint(120, 80), camera)
        meters = GeometryUtils.distance(a, b)
        inside = GeometryUtils.point_in_polygon(point, loop)
    """

    @staticmethod
    def screen_to_geo(
        screen_point: ScreenPoint,
        transform: Optional[MapTransform],
    ) -> Optional[GeoPoint]:
        """
        Convert a screen offset to a geocoordinate via the host transform.

        Args:
            screen_point: Offset inside the map viewport
            transform: Host coordinate transform (None if unavailable)

        Returns:
            The geocoordinate, or None if the transform is missing or fails
        """
        if transform is None:
            return None

        try:
            return transform.screen_to_geo(screen_point)
        except Exception as e:
            logger.debug(
                event=LogEvent.GEOMETRY_CONVERSION_FAILED,
                message="Screen point conversion failed",
                metadata={'x': screen_point.x, 'y': screen_point.y, 'error': str(e)}
            )
            return None

    @staticmethod
    def batch_screen_to_geo(
        screen_points: Iterable[ScreenPoint],
        transform: Optional[MapTransform],
    ) -> List[GeoPoint]:
        """
        Convert many screen offsets, preserving order and dropping failures.

        The result may be shorter than the input.
        """
        converted = (GeometryUtils.screen_to_geo(p, transform) for p in screen_points)
        return [geo for geo in converted if geo is not None]

    @staticmethod
    def distance(
        a: GeoPoint,
        b: GeoPoint,
        calculator: DistanceCalculator = DistanceCalculator.GEODESIC,
    ) -> float:
        """Distance between two geocoordinates in meters."""
        return distance(a, b, calculator)

    @staticmethod
    def point_in_polygon(point: GeoPoint, polygon: Sequence[GeoPoint]) -> bool:
        """Ray-casting containment test (False for fewer than 3 vertices)."""
        return point_in_polygon(point, polygon)

    @staticmethod
    def points_in_polygon(points: Sequence[GeoPoint], polygon: Sequence[GeoPoint]) -> np.ndarray:
        """Vectorized containment test returning a boolean mask."""
        return points_in_polygon(points, polygon)
