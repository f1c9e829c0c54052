"""
Coordinate Value Objects
========================

Immutable point types shared by every layer.

Design:
- Frozen dataclasses (value objects, hashable)
- Fail-fast validation in __post_init__
- to_dict()/from_dict() for YAML/JSON I/O
"""

from dataclasses import dataclass
from typing import Any, Dict, Sequence, Union


@dataclass(frozen=True)
class GeoPoint:
    """
    Immutable latitude/longitude pair in decimal degrees.

    Attributes:
        lat: Latitude in [-90, 90]
        lon: Longitude in [-180, 180]

    Example:
        >>> p = GeoPoint(lat=51.5, lon=-0.1)
        >>> p.to_dict()
        {'lat': 51.5, 'lon': -0.1}
    """

    lat: float
    lon: float

    def __post_init__(self):
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"lat must be in [-90, 90], got {self.lat}")
        if not -180.0 <= self.lon <= 180.0:
            raise ValueError(f"lon must be in [-180, 180], got {self.lon}")

    def to_dict(self) -> Dict[str, float]:
        return {'lat': self.lat, 'lon': self.lon}

    @classmethod
    def from_dict(cls, data: Union[Dict[str, Any], Sequence[float]]) -> 'GeoPoint':
        """
        Build from ``{lat, lon}`` (``lng``/``latitude``/``longitude`` also
        accepted) or a ``[lat, lon]`` pair.

        Raises:
            ValueError: If keys are missing or values are invalid
        """
        if isinstance(data, dict):
            key_lat = 'lat' if 'lat' in data else 'latitude'
            if 'lon' in data:
                key_lon = 'lon'
            elif 'lng' in data:
                key_lon = 'lng'
            else:
                key_lon = 'longitude'
            try:
                return cls(lat=float(data[key_lat]), lon=float(data[key_lon]))
            except KeyError as e:
                raise ValueError(f"Missing required GeoPoint field: {e}")
            except TypeError as e:
                raise ValueError(f"Invalid GeoPoint data: {e}")

        if len(data) != 2:
            raise ValueError(f"GeoPoint pair must have 2 values, got {len(data)}")
        return cls(lat=float(data[0]), lon=float(data[1]))


@dataclass(frozen=True)
class ScreenPoint:
    """
    Pixel offset from the top-left corner of the map viewport.

    Attributes:
        x: Horizontal offset (pixels, grows right)
        y: Vertical offset (pixels, grows down)
    """

    x: float
    y: float

    def as_tuple(self) -> tuple:
        return (self.x, self.y)
