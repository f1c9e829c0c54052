"""
Drawing Session Module
======================

Stateful controller for one drawing loop on a map.

Design:
- State machine over DrawingStatus: idle -> drawing -> completed,
  plus reset back to idle from any state
- Out-of-state calls are silent no-ops (host gesture events may race)
- Immutable DrawingState replaced wholesale on each transition
- Drag flag kept as auxiliary session memory, not as a status
- Connectivity watchdog owned by the session, disposed with it
- One RLock per session: the timer thread and the caller never
  interleave state replacement and notification
"""

import threading
from datetime import datetime, timezone
from typing import Callable, Optional, Tuple

from geoloop_logging import LogEvent, StructuredLogger, create_logger
from geoloop_draw.config import DrawingConfig
from geoloop_draw.geometry.coords import GeoPoint
from geoloop_draw.geometry.utils import GeometryUtils
from geoloop_draw.session.connectivity import ConnectivityMonitor, TimerFactory
from geoloop_draw.session.listeners import Listener, ListenerRegistry
from geoloop_draw.session.state import DrawingState, DrawingStatus


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DrawingSession:
    """
    Manages the state and lifecycle of a drawn loop.

    Usage:
        session = DrawingSession()
        session.add_listener(lambda: print(session.state.status))

        session.start(GeoPoint(51.5, -0.1))
        session.add_point(GeoPoint(51.6, -0.2))
        session.complete()

        polygon = session.polygon

        session.dispose()
    """

    def __init__(
        self,
        config: Optional[DrawingConfig] = None,
        timer_factory: TimerFactory = threading.Timer,
        logger: Optional[StructuredLogger] = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """
        Initialize an idle session and arm the connectivity timeout.

        Args:
            config: Drawing thresholds (default: DrawingConfig())
            timer_factory: One-shot timer constructor (threading.Timer signature)
            logger: Structured logger (default: component "session")
            clock: Source of start timestamps
        """
        self.config = config or DrawingConfig()
        self._logger = logger or create_logger("session")
        self._clock = clock

        self._lock = threading.RLock()
        self._state = DrawingState.idle()
        self._was_dragged = False
        self._disposed = False

        self._listeners = ListenerRegistry(self._logger)
        self._connectivity = ConnectivityMonitor(
            timeout_s=self.config.connectivity_timeout_s,
            on_change=self._listeners.notify,
            logger=self._logger,
            timer_factory=timer_factory,
            lock=self._lock,
        )
        self._connectivity.arm()

    # ===== Read-only state =====

    @property
    def state(self) -> DrawingState:
        return self._state

    @property
    def was_dragged(self) -> bool:
        """True once a point beyond the start point was appended."""
        return self._was_dragged

    @property
    def is_map_ready(self) -> bool:
        return self._connectivity.is_ready

    @property
    def is_offline(self) -> bool:
        return self._connectivity.is_offline

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def polygon(self) -> Tuple[GeoPoint, ...]:
        """Vertices of the completed loop (empty unless completed)."""
        state = self._state
        return state.path if state.is_completed else ()

    # ===== Listeners =====

    def add_listener(self, listener: Listener) -> None:
        self._listeners.add(listener)

    def remove_listener(self, listener: Listener) -> bool:
        return self._listeners.remove(listener)

    # ===== Drawing lifecycle =====

    def start(self, point: GeoPoint) -> None:
        """
        Begin a new drawing at ``point`` (legal from any state).

        Resets the drag flag so a tap can be told apart from a drag.
        """
        with self._lock:
            if self._disposed:
                return
            self._was_dragged = False
            self._commit(DrawingState(
                status=DrawingStatus.DRAWING,
                path=(point,),
                start_time=self._clock(),
            ))
            self._logger.info(
                event=LogEvent.SESSION_STARTED,
                message="Drawing started",
                metadata=point.to_dict(),
            )
            self._listeners.notify()

    def add_point(self, point: GeoPoint) -> None:
        """
        Append ``point`` while drawing.

        Points closer than ``min_point_separation_m`` to the last point
        are dropped without notification.
        """
        with self._lock:
            state = self._state
            if self._disposed or not state.is_drawing:
                return

            if state.path:
                meters = GeometryUtils.distance(
                    state.path[-1], point, self.config.distance_calculator
                )
                if meters < self.config.min_point_separation_m:
                    self._logger.debug(
                        event=LogEvent.SESSION_POINT_SKIPPED,
                        message="Point too close to previous point",
                        metadata={'distance_m': round(meters, 1)},
                    )
                    return

            self._was_dragged = True
            self._commit(state.copy_with(path=state.path + (point,)))
            self._logger.debug(
                event=LogEvent.SESSION_POINT_ADDED,
                message="Point added",
                metadata={'path_length': len(self._state.path)},
            )
            self._listeners.notify()

    def complete(self) -> None:
        """
        Finish the drawing and close the loop.

        - Tap (no point appended since start): closes the single-point path,
          or resets when the path is empty
        - Drag: always closes the loop
        """
        with self._lock:
            state = self._state
            if self._disposed or not state.is_drawing:
                return

            if not self._was_dragged and not state.has_points:
                # Unreachable after start(), which always seeds the path
                self.reset()
                return

            self._commit(state.copy_with(
                status=DrawingStatus.COMPLETED,
                is_loop_closed=True,
            ))
            self._logger.info(
                event=LogEvent.SESSION_COMPLETED,
                message="Loop closed",
                metadata={
                    'path_length': len(state.path),
                    'gesture': 'drag' if self._was_dragged else 'tap',
                },
            )
            self._listeners.notify()

    def reset(self) -> None:
        """Discard the drawing and return to idle (legal from any state)."""
        with self._lock:
            if self._disposed:
                return
            self._was_dragged = False
            self._commit(DrawingState.idle())
            self._logger.info(
                event=LogEvent.SESSION_RESET,
                message="Drawing reset",
            )
            self._listeners.notify()

    def clear_loop(self) -> None:
        """Host "clear" action; same as reset()."""
        self.reset()

    # ===== Connectivity =====

    def set_map_ready(self) -> None:
        """Host signal: the map surface finished initializing."""
        self._connectivity.mark_ready()

    def retry_connection(self) -> None:
        """Clear offline mode and re-arm the connectivity timeout."""
        self._connectivity.retry()

    # ===== Teardown =====

    def dispose(self) -> None:
        """Cancel the pending timer and drop all listeners."""
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            self._connectivity.dispose()
            self._listeners.clear()
            self._logger.info(
                event=LogEvent.SESSION_DISPOSED,
                message="Session disposed",
            )

    close = dispose

    def __enter__(self) -> 'DrawingSession':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()

    def _commit(self, new_state: DrawingState) -> None:
        self._state = new_state

    def __repr__(self) -> str:
        return (
            f"DrawingSession(status={self._state.status.value}, "
            f"points={len(self._state.path)}, ready={self.is_map_ready}, "
            f"offline={self.is_offline})"
        )
