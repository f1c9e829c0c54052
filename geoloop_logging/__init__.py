"""
Structured Logging for geoloop
==============================

Bounded Context: Observability

JSON-structured logging with typed events, shared by the drawing session,
the connectivity watchdog and the geometry layer.

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function

Example:
    >>> from geoloop_logging import create_logger, LogEvent
    >>> logger = create_logger("session")
    >>> logger.info(
    ...     event=LogEvent.SESSION_STARTED,
    ...     message="Drawing started",
    ...     metadata={'lat': 51.5, 'lon': -0.1}
    ... )

Output:
    {
        "timestamp": "2025-10-24T15:30:45.123456+00:00",
        "level": "INFO",
        "component": "session",
        "event": "session.started",
        "message": "Drawing started",
        "metadata": {"lat": 51.5, "lon": -0.1}
    }
"""

from .events import LogEvent
from .structured import StructuredLogger, create_logger

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'create_logger',
]
