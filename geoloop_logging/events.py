"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for the drawing session, the connectivity watchdog,
the geometry layer and the command line.

Event Naming Convention:
    <component>.<action>

    component: session, connectivity, geometry, listener, cli
    action: started, point_added, offline, conversion_failed, ...

Example Log Query (Loki):
    {app="geoloop"} | json | event = "session.completed"
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - session.*: Drawing lifecycle transitions
    - connectivity.*: Map readiness / offline fallback
    - geometry.*: Coordinate conversion
    - listener.*: Observer notification
    - cli.*: Command line
    """

    # ========== Session Events ==========
    SESSION_STARTED = "session.started"
    """Drawing started at a first point."""

    SESSION_POINT_ADDED = "session.point_added"
    """Point appended to the current path."""

    SESSION_POINT_SKIPPED = "session.point_skipped"
    """Point dropped (closer than the minimum separation)."""

    SESSION_COMPLETED = "session.completed"
    """Loop closed and drawing completed."""

    SESSION_RESET = "session.reset"
    """Session returned to idle."""

    SESSION_DISPOSED = "session.disposed"
    """Session released; timers cancelled."""

    # ========== Connectivity Events ==========
    CONNECTIVITY_ARMED = "connectivity.armed"
    """Connectivity timeout armed."""

    CONNECTIVITY_READY = "connectivity.ready"
    """Map surface reported ready."""

    CONNECTIVITY_OFFLINE = "connectivity.offline"
    """Timeout expired before the map was ready."""

    CONNECTIVITY_RETRY = "connectivity.retry"
    """Caller re-armed the connectivity timeout."""

    # ========== Geometry Events ==========
    GEOMETRY_CONVERSION_FAILED = "geometry.conversion_failed"
    """Screen point could not be converted to a geocoordinate."""

    # ========== Listener Events ==========
    LISTENER_ERROR = "listener.error"
    """A registered listener raised during notification."""

    LISTENER_DUPLICATE = "listener.duplicate"
    """Listener registered twice; the second registration was ignored."""

    # ========== CLI Events ==========
    CLI_REPLAY_FINISHED = "cli.replay_finished"
    """Gesture replay finished."""
