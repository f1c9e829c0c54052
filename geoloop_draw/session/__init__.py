"""
Session Layer
=============

Bounded Context: Drawing lifecycle (stateful).

Responsibilities:
- DrawingStatus / DrawingState value types
- DrawingSession state machine (start, add_point, complete, reset)
- Connectivity watchdog (ready / offline / retry)
- Change listeners
"""

from geoloop_draw.session.state import DrawingState, DrawingStatus
from geoloop_draw.session.listeners import ListenerRegistry
from geoloop_draw.session.connectivity import ConnectivityMonitor
from geoloop_draw.session.session import DrawingSession

__all__ = [
    "DrawingState",
    "DrawingStatus",
    "ListenerRegistry",
    "ConnectivityMonitor",
    "DrawingSession",
]
