"""
Configuration schema for geoloop.

Defines the drawing thresholds, the initial map view and the overlay
style. Every section is a frozen dataclass validated at construction and
can be loaded from YAML.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import supervision as sv
import yaml

from geoloop_draw.geometry.coords import GeoPoint
from geoloop_draw.geometry.distance import DistanceCalculator


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    # "drawing:" with no body parses to None
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Config section '{name}' must be a mapping, got {type(section).__name__}")
    return dict(section)


@dataclass(frozen=True)
class DrawingConfig:
    """
    Drawing session thresholds.

    Attributes:
        min_point_separation_m: Points closer than this to the previous
            point are dropped while drawing (meters)
        connectivity_timeout_s: Seconds to wait for the map-ready signal
            before falling back to offline mode
        distance_calculator: "geodesic" (default) or "haversine"
    """

    min_point_separation_m: float = 1000.0
    connectivity_timeout_s: float = 10.0
    distance_calculator: DistanceCalculator = DistanceCalculator.GEODESIC

    def __post_init__(self):
        if self.min_point_separation_m < 0:
            raise ValueError(
                f"min_point_separation_m must be >= 0, got {self.min_point_separation_m}"
            )
        if self.connectivity_timeout_s <= 0:
            raise ValueError(
                f"connectivity_timeout_s must be > 0, got {self.connectivity_timeout_s}"
            )
        try:
            calculator = DistanceCalculator(self.distance_calculator)
        except ValueError:
            raise ValueError(
                f"Invalid distance_calculator: {self.distance_calculator}. "
                f"Must be one of {[c.value for c in DistanceCalculator]}"
            )
        object.__setattr__(self, 'distance_calculator', calculator)


@dataclass(frozen=True)
class MapViewConfig:
    """
    Initial map camera.

    Attributes:
        center: (lat, lon) at the viewport center
        zoom: Initial zoom level
        viewport_wh: (width, height) in pixels
        tile_size: Tile edge in pixels
    """

    center: Tuple[float, float] = (51.509364, -0.128928)
    zoom: float = 9.2
    viewport_wh: Tuple[int, int] = (800, 600)
    tile_size: int = 256

    def __post_init__(self):
        GeoPoint(lat=self.center[0], lon=self.center[1])

        if not 0.0 <= self.zoom <= 22.0:
            raise ValueError(f"zoom must be in [0, 22], got {self.zoom}")

        width, height = self.viewport_wh
        if width <= 0 or height <= 0:
            raise ValueError(f"viewport_wh must have positive dimensions, got {self.viewport_wh}")
        if width > 4096 or height > 4096:
            raise ValueError(
                f"viewport_wh dimensions too large (max 4096x4096), got {self.viewport_wh}"
            )

    @property
    def center_point(self) -> GeoPoint:
        return GeoPoint(lat=self.center[0], lon=self.center[1])


@dataclass(frozen=True)
class RenderConfig:
    """
    Overlay style.

    Attributes:
        path_color: Hex RGB color of the drawn loop (e.g. "#2196F3")
        thickness: Polyline thickness in pixels
        banner_text: Message shown while offline
    """

    path_color: str = "#2196F3"
    thickness: int = 4
    banner_text: str = "Map is offline. Check your internet connection."

    def __post_init__(self):
        try:
            sv.Color.from_hex(self.path_color)
        except ValueError as e:
            raise ValueError(f"Invalid path_color: {self.path_color} ({e})")
        if self.thickness <= 0:
            raise ValueError(f"thickness must be > 0, got {self.thickness}")

    @property
    def color(self) -> sv.Color:
        return sv.Color.from_hex(self.path_color)


@dataclass(frozen=True)
class GeoloopConfig:
    """Top-level configuration (drawing + map view + rendering)."""

    drawing: DrawingConfig = field(default_factory=DrawingConfig)
    map_view: MapViewConfig = field(default_factory=MapViewConfig)
    render: RenderConfig = field(default_factory=RenderConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeoloopConfig":
        """
        Build from a parsed mapping; missing or empty sections use defaults.

        Raises:
            ValueError: If a section is not a mapping, has unknown keys or
                fails validation
        """
        data = data or {}

        drawing_data = _section(data, "drawing")
        render_data = _section(data, "render")
        map_view_data = _section(data, "map_view")

        try:
            if "center" in map_view_data:
                map_view_data["center"] = tuple(map_view_data["center"])
            if "viewport_wh" in map_view_data:
                map_view_data["viewport_wh"] = tuple(map_view_data["viewport_wh"])

            return cls(
                drawing=DrawingConfig(**drawing_data),
                map_view=MapViewConfig(**map_view_data),
                render=RenderConfig(**render_data),
            )
        except TypeError as e:
            raise ValueError(f"Invalid config: {e}")

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "GeoloopConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            drawing:
              min_point_separation_m: 1000
              connectivity_timeout_s: 10
              distance_calculator: "geodesic"

            map_view:
              center: [51.509364, -0.128928]
              zoom: 9.2
              viewport_wh: [800, 600]

            render:
              path_color: "#2196F3"
              thickness: 4

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the YAML is invalid or a value fails validation
        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {yaml_path}: {e}")

        if data is not None and not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

        return cls.from_dict(data or {})
