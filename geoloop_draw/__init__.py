"""
geoloop Draw
============

Bounded Context: Drawing closed loops on a map with a pointer gesture.

Design Philosophy:
- Separation of Concerns: Geometry, Session, Rendering separated
- Immutable state snapshots, replaced on every transition
- Out-of-order gesture events are no-ops, never errors

Architecture:

    geoloop_draw/
    ├── geometry/          # Pure geometry (immutable, stateless)
    │   ├── coords.py      # GeoPoint, ScreenPoint
    │   ├── distance.py    # Haversine / geodesic distance
    │   ├── polygon.py     # Ray-casting containment
    │   ├── transform.py   # MapTransform, WebMercatorCamera
    │   └── utils.py       # GeometryUtils facade
    │
    ├── session/           # Drawing lifecycle (stateful)
    │   ├── state.py       # DrawingStatus, DrawingState
    │   ├── session.py     # DrawingSession
    │   ├── connectivity.py# ConnectivityMonitor (ready / offline)
    │   └── listeners.py   # ListenerRegistry
    │
    ├── rendering/         # Visualization (stateless drawing)
    │   └── visualizer.py  # LoopVisualizer
    │
    ├── controller.py      # Pan gestures -> session (host glue)
    └── config.py          # YAML-backed configuration

Usage:

    from geoloop_draw import GeoPoint, ScreenPoint, WebMercatorCamera
    from geoloop_draw import GestureDrawingController

    camera = WebMercatorCamera(center=GeoPoint(51.509364, -0.128928), zoom=9.2)
    controller = GestureDrawingController(transform=camera)
    controller.session.set_map_ready()

    controller.on_pan_start(ScreenPoint(200, 200))
    controller.on_pan_update(ScreenPoint(400, 220))
    controller.on_pan_update(ScreenPoint(380, 420))
    controller.on_pan_end()

    loop = controller.session.polygon
    controller.contains(GeoPoint(51.45, -0.05))

    controller.dispose()
"""

from geoloop_draw.geometry import (
    GeoPoint,
    ScreenPoint,
    DistanceCalculator,
    GeometryUtils,
    MapTransform,
    WebMercatorCamera,
)
from geoloop_draw.session import (
    DrawingState,
    DrawingStatus,
    DrawingSession,
)
from geoloop_draw.controller import GestureDrawingController
from geoloop_draw.rendering import LoopVisualizer
from geoloop_draw.config import (
    DrawingConfig,
    MapViewConfig,
    RenderConfig,
    GeoloopConfig,
)

__all__ = [
    # Geometry
    "GeoPoint",
    "ScreenPoint",
    "DistanceCalculator",
    "GeometryUtils",
    "MapTransform",
    "WebMercatorCamera",
    # Session
    "DrawingState",
    "DrawingStatus",
    "DrawingSession",
    # Host glue
    "GestureDrawingController",
    # Rendering
    "LoopVisualizer",
    # Config
    "DrawingConfig",
    "MapViewConfig",
    "RenderConfig",
    "GeoloopConfig",
]

__version__ = "1.0.0"
