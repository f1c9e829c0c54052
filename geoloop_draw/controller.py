"""
Gesture Drawing Controller
==========================

Bounded Context: Host UI glue between pointer events and a DrawingSession.

Design:
- Orchestrator only: conversion goes to GeometryUtils, lifecycle to the
  session
- Pan events are dropped while the map is offline (drawing disabled)
- Tracks offline-banner visibility (shown on offline, dismiss, retry)
"""

import threading
from typing import Optional

from geoloop_draw.config import DrawingConfig
from geoloop_draw.geometry.coords import GeoPoint, ScreenPoint
from geoloop_draw.geometry.transform import MapTransform
from geoloop_draw.geometry.utils import GeometryUtils
from geoloop_draw.session.connectivity import TimerFactory
from geoloop_draw.session.session import DrawingSession


class GestureDrawingController:
    """
    Forwards pan gestures to a DrawingSession in map coordinates.

    Usage:
        camera = WebMercatorCamera(center=GeoPoint(51.5, -0.12), zoom=9.2)
        controller = GestureDrawingController(transform=camera)
        controller.session.set_map_ready()

        controller.on_pan_start(ScreenPoint(100, 100))
        controller.on_pan_update(ScreenPoint(300, 120))
        controller.on_pan_end()

        loop = controller.session.polygon
    """

    def __init__(
        self,
        transform: Optional[MapTransform],
        session: Optional[DrawingSession] = None,
        config: Optional[DrawingConfig] = None,
        timer_factory: TimerFactory = threading.Timer,
    ):
        """
        Args:
            transform: Host map transform (None until the map exists)
            session: Existing session (default: a new DrawingSession)
            config: Drawing config for a new session
            timer_factory: Timer constructor for a new session
        """
        self.transform = transform
        self.session = session or DrawingSession(config=config, timer_factory=timer_factory)
        self._show_offline_banner = False
        self._was_offline = self.session.is_offline
        self.session.add_listener(self._on_session_changed)

    @property
    def show_offline_banner(self) -> bool:
        return self._show_offline_banner

    @property
    def drawing_enabled(self) -> bool:
        return not self.session.is_offline

    @property
    def show_loading(self) -> bool:
        """Connection attempt in progress (neither ready nor offline)."""
        return not self.session.is_map_ready and not self.session.is_offline

    # ===== Pan gestures =====

    def on_pan_start(self, screen_point: ScreenPoint) -> None:
        if not self.drawing_enabled:
            return
        geo = GeometryUtils.screen_to_geo(screen_point, self.transform)
        if geo is None:
            return
        self.session.start(geo)

    def on_pan_update(self, screen_point: ScreenPoint) -> None:
        if not self.drawing_enabled or not self.session.state.is_drawing:
            return
        geo = GeometryUtils.screen_to_geo(screen_point, self.transform)
        if geo is None:
            return
        self.session.add_point(geo)

    def on_pan_end(self) -> None:
        if not self.drawing_enabled or not self.session.state.is_drawing:
            return
        self.session.complete()

    # ===== Actions =====

    def clear(self) -> None:
        self.session.clear_loop()

    def contains(self, point: GeoPoint) -> bool:
        """Whether ``point`` lies inside the completed loop."""
        return GeometryUtils.point_in_polygon(point, self.session.polygon)

    def dismiss_banner(self) -> None:
        self._show_offline_banner = False

    def retry(self) -> None:
        """Hide the banner and re-arm the connectivity timeout."""
        self._show_offline_banner = False
        self.session.retry_connection()

    def dispose(self) -> None:
        self.session.remove_listener(self._on_session_changed)
        self.session.dispose()

    def _on_session_changed(self) -> None:
        offline = self.session.is_offline
        if offline and not self._was_offline:
            self._show_offline_banner = True
        elif not offline:
            self._show_offline_banner = False
        self._was_offline = offline
