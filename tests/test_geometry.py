import math

import numpy as np
import pytest

from geoloop_draw.geometry import (
    DistanceCalculator,
    GeoPoint,
    GeometryUtils,
    ScreenPoint,
    distance,
    geodesic_distance,
    haversine_distance,
    point_in_polygon,
    points_in_polygon,
)
from geoloop_draw.geometry.distance import EARTH_RADIUS_M


# ===== GeoPoint =====

def test_geopoint_rejects_out_of_range():
    with pytest.raises(ValueError):
        GeoPoint(lat=91, lon=0)
    with pytest.raises(ValueError):
        GeoPoint(lat=0, lon=-180.5)


def test_geopoint_from_dict_variants():
    assert GeoPoint.from_dict({'lat': 1, 'lon': 2}) == GeoPoint(1, 2)
    assert GeoPoint.from_dict({'lat': 1, 'lng': 2}) == GeoPoint(1, 2)
    assert GeoPoint.from_dict({'latitude': 1, 'longitude': 2}) == GeoPoint(1, 2)
    assert GeoPoint.from_dict([1, 2]) == GeoPoint(1, 2)


def test_geopoint_from_dict_missing_field():
    with pytest.raises(ValueError, match="Missing"):
        GeoPoint.from_dict({'lat': 1})


# ===== Distance =====

def test_distance_same_point_is_zero():
    p = GeoPoint(0, 0)
    assert distance(p, p) == 0
    assert distance(p, p, DistanceCalculator.GEODESIC) == 0


def test_haversine_one_degree_latitude():
    meters = haversine_distance(GeoPoint(0, 0), GeoPoint(1, 0))
    assert meters == pytest.approx(EARTH_RADIUS_M * math.pi / 180, rel=1e-9)


def test_haversine_is_symmetric():
    a = GeoPoint(51.5, -0.1)
    b = GeoPoint(48.85, 2.35)
    assert haversine_distance(a, b) == pytest.approx(haversine_distance(b, a))


def test_geodesic_one_degree_latitude_at_equator():
    # WGS84 meridian arc for the first degree of latitude
    assert geodesic_distance(GeoPoint(0, 0), GeoPoint(1, 0)) == pytest.approx(110574.4, abs=1.0)


def test_distance_accepts_calculator_name():
    a = GeoPoint(51.5, -0.1)
    b = GeoPoint(51.6, -0.2)
    assert distance(a, b, "geodesic") == pytest.approx(geodesic_distance(a, b))


def test_default_calculator_is_ellipsoidal():
    a = GeoPoint(0, 0)
    b = GeoPoint(0.00902, 0)
    assert distance(a, b) == pytest.approx(geodesic_distance(a, b))
    assert GeometryUtils.distance(a, b) == pytest.approx(geodesic_distance(a, b))
    # sphere on the polar radius overshoots the ellipsoid near the equator
    assert distance(a, b) < 1000 < haversine_distance(a, b)


def test_london_paris_calculators_agree_roughly():
    london = GeoPoint(51.5074, -0.1278)
    paris = GeoPoint(48.8566, 2.3522)
    h = distance(london, paris, DistanceCalculator.HAVERSINE)
    g = distance(london, paris)
    assert 330_000 < h < 350_000
    assert abs(h - g) / g < 0.01


# ===== Point in polygon =====

def test_square_contains_center(square):
    assert point_in_polygon(GeoPoint(1, 1), square) is True


def test_square_excludes_outside_point(square):
    assert point_in_polygon(GeoPoint(3, 3), square) is False


@pytest.mark.parametrize("polygon", [
    [],
    [GeoPoint(0, 0)],
    [GeoPoint(0, 0), GeoPoint(1, 1)],
])
def test_degenerate_polygon_is_never_inside(polygon):
    for point in (GeoPoint(0, 0), GeoPoint(0.5, 0.5), GeoPoint(10, 10)):
        assert point_in_polygon(point, polygon) is False


def test_concave_polygon_notch():
    # U shape opening north: notch between lon 1 and 2 above lat 1
    u_shape = [
        GeoPoint(0, 0), GeoPoint(3, 0), GeoPoint(3, 1), GeoPoint(1, 1),
        GeoPoint(1, 2), GeoPoint(3, 2), GeoPoint(3, 3), GeoPoint(0, 3),
    ]
    assert point_in_polygon(GeoPoint(0.5, 1.5), u_shape) is True
    assert point_in_polygon(GeoPoint(2, 1.5), u_shape) is False
    assert point_in_polygon(GeoPoint(2, 0.5), u_shape) is True


def test_vectorized_matches_scalar(square):
    points = [GeoPoint(1, 1), GeoPoint(3, 3), GeoPoint(0.5, 1.9), GeoPoint(-1, 1), GeoPoint(1.5, 2.5)]
    mask = points_in_polygon(points, square)
    assert mask.dtype == bool
    assert list(mask) == [point_in_polygon(p, square) for p in points]


def test_vectorized_edge_cases(square):
    assert points_in_polygon([], square).shape == (0,)
    mask = points_in_polygon([GeoPoint(1, 1)], square[:2])
    assert not mask.any()


# ===== GeometryUtils =====

class FailingTransform:
    def screen_to_geo(self, screen_point):
        raise RuntimeError("map not initialized")


class ShiftTransform:
    """Maps screen (x, y) to (lat=y, lon=x); negative x fails."""

    def screen_to_geo(self, screen_point):
        if screen_point.x < 0:
            raise ValueError("off map")
        return GeoPoint(lat=screen_point.y, lon=screen_point.x)


def test_screen_to_geo_without_transform_is_none():
    assert GeometryUtils.screen_to_geo(ScreenPoint(1, 1), None) is None


def test_screen_to_geo_swallows_transform_errors():
    assert GeometryUtils.screen_to_geo(ScreenPoint(1, 1), FailingTransform()) is None


def test_screen_to_geo_delegates():
    assert GeometryUtils.screen_to_geo(ScreenPoint(2, 1), ShiftTransform()) == GeoPoint(1, 2)


def test_batch_screen_to_geo_drops_failures_in_order():
    points = [ScreenPoint(1, 1), ScreenPoint(-1, 5), ScreenPoint(3, 2)]
    result = GeometryUtils.batch_screen_to_geo(points, ShiftTransform())
    assert result == [GeoPoint(1, 1), GeoPoint(2, 3)]


def test_utils_points_in_polygon_returns_mask(square):
    mask = GeometryUtils.points_in_polygon([GeoPoint(1, 1)], square)
    assert isinstance(mask, np.ndarray)
    assert mask.tolist() == [True]
