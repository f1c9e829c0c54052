"""
Rendering Layer
===============

Bounded Context: Drawing overlays onto frames.

Responsibilities:
- Loop polyline (open while drawing, closed when completed)
- Offline banner and connection-attempt overlay
- NO lifecycle logic, NO coordinate math beyond camera projection
"""

from geoloop_draw.rendering.visualizer import LoopVisualizer

__all__ = [
    "LoopVisualizer",
]
