"""
Loop Visualizer Module
======================

Pure visualization layer for drawn loops and connectivity chrome.

Design:
- Stateless rendering (pure functions over frames)
- No drawing-lifecycle logic
- Configurable styles
- Uses supervision drawing utilities

Dependencies:
- supervision (draw utilities, Color, Point, Rect)
- numpy (frames)
"""

import numpy as np
import supervision as sv

from geoloop_draw.config import RenderConfig
from geoloop_draw.controller import GestureDrawingController
from geoloop_draw.geometry.transform import WebMercatorCamera
from geoloop_draw.session.state import DrawingState


class LoopVisualizer:
    """
    Stateless visualizer for the drawing overlay.

    Usage:
        visualizer = LoopVisualizer(path_color=sv.Color.from_hex("#2196F3"))

        frame = visualizer.draw_path(frame, session.state, camera)
        frame = visualizer.draw_offline_banner(frame)

        # Or everything at once from a controller
        frame = visualizer.draw_session(frame, controller, camera)
    """

    def __init__(
        self,
        path_color: sv.Color = sv.Color(r=33, g=150, b=243),
        text_color: sv.Color = sv.Color(r=255, g=255, b=255),
        banner_color: sv.Color = sv.Color(r=33, g=150, b=243),
        thickness: int = 4,
        text_scale: float = 0.6,
        text_thickness: int = 2,
        text_padding: int = 10,
        opacity: float = 0.3,
        banner_text: str = "Map is offline. Check your internet connection.",
    ):
        """
        Args:
            path_color: Color of the loop polyline
            text_color: Color for banner / overlay text
            banner_color: Fill color of the offline banner and loading overlay
            thickness: Polyline thickness
            text_scale: Scale factor for text
            text_thickness: Thickness for text
            text_padding: Padding for text background
            opacity: Opacity of banner and loading fills (0-1)
            banner_text: Offline banner message
        """
        self.path_color = path_color
        self.text_color = text_color
        self.banner_color = banner_color
        self.thickness = thickness
        self.text_scale = text_scale
        self.text_thickness = text_thickness
        self.text_padding = text_padding
        self.opacity = opacity
        self.banner_text = banner_text

    @classmethod
    def from_config(cls, config: RenderConfig) -> 'LoopVisualizer':
        return cls(
            path_color=config.color,
            thickness=config.thickness,
            banner_text=config.banner_text,
        )

    def draw_path(
        self,
        frame: np.ndarray,
        state: DrawingState,
        camera: WebMercatorCamera,
    ) -> np.ndarray:
        """
        Draw the display path as a polyline.

        A closed loop includes its closing segment back to the first point.

        Args:
            frame: Frame to draw on (viewport-sized)
            state: Drawing state to render
            camera: Camera used to project geocoordinates to pixels

        Returns:
            Frame with the path drawn
        """
        if not state.has_points:
            return frame

        points = [camera.geo_to_screen(p) for p in state.display_path()]
        anchors = [sv.Point(x=int(round(p.x)), y=int(round(p.y))) for p in points]

        for start, end in zip(anchors, anchors[1:]):
            frame = sv.draw_line(
                scene=frame,
                start=start,
                end=end,
                color=self.path_color,
                thickness=self.thickness,
            )

        # Start marker so single-point paths stay visible
        half = self.thickness
        marker = sv.Rect(
            x=anchors[0].x - half,
            y=anchors[0].y - half,
            width=2 * half,
            height=2 * half,
        )
        frame = sv.draw_filled_rectangle(scene=frame, rect=marker, color=self.path_color)

        return frame

    def draw_offline_banner(self, frame: np.ndarray) -> np.ndarray:
        """Draw the offline banner across the top of the frame."""
        height, width = frame.shape[:2]
        banner_height = min(56, height)

        frame = sv.draw_filled_rectangle(
            scene=frame,
            rect=sv.Rect(x=0, y=0, width=width, height=banner_height),
            color=self.banner_color,
            opacity=self.opacity,
        )
        frame = sv.draw_text(
            scene=frame,
            text=self.banner_text,
            text_anchor=sv.Point(x=width // 2, y=banner_height // 2),
            text_color=self.text_color,
            text_scale=self.text_scale,
            text_thickness=self.text_thickness,
            text_padding=self.text_padding,
        )
        return frame

    def draw_loading_overlay(self, frame: np.ndarray) -> np.ndarray:
        """Tint the whole frame while the connection attempt is running."""
        height, width = frame.shape[:2]

        frame = sv.draw_filled_rectangle(
            scene=frame,
            rect=sv.Rect(x=0, y=0, width=width, height=height),
            color=self.banner_color,
            opacity=self.opacity,
        )
        frame = sv.draw_text(
            scene=frame,
            text="Connecting...",
            text_anchor=sv.Point(x=width // 2, y=height // 2),
            text_color=self.text_color,
            text_scale=self.text_scale,
            text_thickness=self.text_thickness,
            text_padding=self.text_padding,
        )
        return frame

    def draw_session(
        self,
        frame: np.ndarray,
        controller: GestureDrawingController,
        camera: WebMercatorCamera,
    ) -> np.ndarray:
        """
        Compose the overlay for the controller's current mode.

        - Online: path
        - Connection attempt: path + loading overlay
        - Offline: path + banner (unless dismissed)
        """
        frame = self.draw_path(frame, controller.session.state, camera)

        if controller.show_loading:
            frame = self.draw_loading_overlay(frame)
        if controller.show_offline_banner:
            frame = self.draw_offline_banner(frame)

        return frame
