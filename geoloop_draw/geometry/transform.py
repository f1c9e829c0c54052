"""
Map Transform Module
====================

Screen <-> geocoordinate conversion.

Design:
- MapTransform: Protocol the host map component satisfies
- WebMercatorCamera: self-contained EPSG:3857 camera (center + zoom +
  viewport) for hosts without a map widget (CLI replay, OpenCV demo)
"""

import math
from dataclasses import dataclass
from typing import Protocol, Tuple

from geoloop_draw.geometry.coords import GeoPoint, ScreenPoint

# Web Mercator is undefined at the poles; latitudes are clamped here.
MAX_MERCATOR_LAT = 85.05112878


class MapTransform(Protocol):
    """Protocol for host map components (coordinate transform capability)."""

    def screen_to_geo(self, screen_point: ScreenPoint) -> GeoPoint:
        """
        Convert a viewport offset to a geocoordinate.

        May raise if the map is not initialized or the point is off-map.
        """
        ...


@dataclass(frozen=True)
class WebMercatorCamera:
    """
    Immutable Web Mercator camera.

    The camera center is projected to the middle of the viewport; screen
    offsets are measured from the viewport's top-left corner.

    Attributes:
        center: Geocoordinate at the viewport center
        zoom: Zoom level (fractional allowed)
        viewport_wh: (width, height) in pixels
        tile_size: Tile edge in pixels (256 for OSM tiles)
    """

    center: GeoPoint
    zoom: float
    viewport_wh: Tuple[int, int] = (800, 600)
    tile_size: int = 256

    def __post_init__(self):
        if not 0.0 <= self.zoom <= 22.0:
            raise ValueError(f"zoom must be in [0, 22], got {self.zoom}")
        width, height = self.viewport_wh
        if width <= 0 or height <= 0:
            raise ValueError(f"viewport_wh must be positive, got {self.viewport_wh}")
        if self.tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {self.tile_size}")

    @property
    def world_size(self) -> float:
        """Width (== height) of the projected world in pixels at this zoom."""
        return self.tile_size * (2.0 ** self.zoom)

    def project(self, point: GeoPoint) -> Tuple[float, float]:
        """Geocoordinate -> absolute world pixel (x, y)."""
        lat = max(-MAX_MERCATOR_LAT, min(MAX_MERCATOR_LAT, point.lat))
        siny = math.sin(math.radians(lat))
        x = (point.lon + 180.0) / 360.0 * self.world_size
        y = (0.5 - math.log((1 + siny) / (1 - siny)) / (4 * math.pi)) * self.world_size
        return x, y

    def unproject(self, x: float, y: float) -> GeoPoint:
        """
        Absolute world pixel -> geocoordinate.

        Raises:
            ValueError: If the pixel lies outside the projected world
        """
        size = self.world_size
        if not (0.0 <= x <= size and 0.0 <= y <= size):
            raise ValueError(f"Pixel ({x:.1f}, {y:.1f}) outside projected world (size={size:.1f})")

        lon = x / size * 360.0 - 180.0
        n = math.pi - 2.0 * math.pi * y / size
        lat = math.degrees(math.atan(math.sinh(n)))
        return GeoPoint(lat=lat, lon=lon)

    def screen_to_geo(self, screen_point: ScreenPoint) -> GeoPoint:
        """Viewport offset -> geocoordinate (raises ValueError off-map)."""
        cx, cy = self.project(self.center)
        width, height = self.viewport_wh
        return self.unproject(
            cx + screen_point.x - width / 2.0,
            cy + screen_point.y - height / 2.0,
        )

    def geo_to_screen(self, point: GeoPoint) -> ScreenPoint:
        """Geocoordinate -> viewport offset (may fall outside the viewport)."""
        cx, cy = self.project(self.center)
        px, py = self.project(point)
        width, height = self.viewport_wh
        return ScreenPoint(x=px - cx + width / 2.0, y=py - cy + height / 2.0)
