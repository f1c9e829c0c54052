"""
Drawing State Module
====================

Immutable snapshot of a drawing session.

Design:
- Frozen dataclass, replaced wholesale on every transition
- copy_with() for partial updates (returns a new instance)
- Display path (closing segment) computed, never stored
"""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from geoloop_draw.geometry.coords import GeoPoint


class DrawingStatus(str, Enum):
    """
    Lifecycle of a drawing:

    * IDLE - no drawing, ready to start
    * DRAWING - capturing pointer input
    * COMPLETED - drawing finished, loop closed
    """
    IDLE = "idle"
    DRAWING = "drawing"
    COMPLETED = "completed"


@dataclass(frozen=True)
class DrawingState:
    """
    Immutable state of the current drawing.

    Attributes:
        status: Current lifecycle status
        path: Ordered geocoordinates of the drawn path
        start_time: When drawing began, None if not started
        is_loop_closed: Whether the last point connects back to the first

    Example:
        >>> state = DrawingState.idle()
        >>> state = state.copy_with(
        ...     status=DrawingStatus.DRAWING,
        ...     path=(GeoPoint(51.5, -0.1),),
        ... )
    """

    status: DrawingStatus
    path: Tuple[GeoPoint, ...] = ()
    start_time: Optional[datetime] = None
    is_loop_closed: bool = False

    def __post_init__(self):
        # Accept any sequence, store a tuple so the path cannot be mutated
        object.__setattr__(self, 'path', tuple(self.path))

    @classmethod
    def idle(cls) -> 'DrawingState':
        return cls(status=DrawingStatus.IDLE)

    @property
    def is_idle(self) -> bool:
        return self.status == DrawingStatus.IDLE

    @property
    def is_drawing(self) -> bool:
        return self.status == DrawingStatus.DRAWING

    @property
    def is_completed(self) -> bool:
        return self.status == DrawingStatus.COMPLETED

    @property
    def has_points(self) -> bool:
        return len(self.path) > 0

    def copy_with(self, **changes: Any) -> 'DrawingState':
        """New state with the given fields replaced; others unchanged."""
        return replace(self, **changes)

    def display_path(self) -> Tuple[GeoPoint, ...]:
        """
        Path as it should be drawn.

        When the loop is closed the first point is repeated at the end so
        the overlay renders the closing segment.
        """
        if self.is_loop_closed and self.path:
            return self.path + (self.path[0],)
        return self.path

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'status': self.status.value,
            'path': [p.to_dict() for p in self.path],
            'start_time': self.start_time.isoformat() if self.start_time else None,
            'is_loop_closed': self.is_loop_closed,
        }
