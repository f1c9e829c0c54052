"""
ConnectivityMonitor - map readiness watchdog

Bounded Context: Online / offline detection
Responsibilities:
  - Arm a one-shot timeout when the session is created
  - Switch to ready when the host reports the map surface is up
  - Switch to offline when the timeout expires first
  - Re-arm on explicit retry (no automatic retry)

States:
  - Connection attempt: ready=False, offline=False (timer armed)
  - Online:             ready=True,  offline=False
  - Offline:            ready=False, offline=True

Threading:
  - Timer callback runs in the timer thread
  - All transitions happen under the lock shared with the owning session
  - Stale callbacks (cancelled, re-armed or disposed) are ignored via a
    generation counter
"""

import threading
from typing import Callable, Optional, Protocol

from geoloop_logging import LogEvent, StructuredLogger


class TimerLike(Protocol):
    """Subset of threading.Timer used by the monitor."""

    daemon: bool

    def start(self) -> None:
        ...

    def cancel(self) -> None:
        ...


TimerFactory = Callable[[float, Callable[[], None]], TimerLike]


class ConnectivityMonitor:
    """
    One-shot readiness timeout with a caller-driven retry.

    Example:
        monitor = ConnectivityMonitor(timeout_s=10.0, on_change=session_changed, logger=logger)
        monitor.arm()

        # Later, from the map widget
        monitor.mark_ready()

        # On teardown
        monitor.dispose()
    """

    def __init__(
        self,
        timeout_s: float,
        on_change: Callable[[], None],
        logger: StructuredLogger,
        timer_factory: TimerFactory = threading.Timer,
        lock: Optional[threading.RLock] = None,
    ):
        """
        Args:
            timeout_s: Seconds to wait for mark_ready() before going offline
            on_change: Called after every committed transition
            logger: Structured logger
            timer_factory: Builds the one-shot timer (threading.Timer signature)
            lock: Lock shared with the owning session
        """
        self.timeout_s = timeout_s
        self._on_change = on_change
        self._logger = logger
        self._timer_factory = timer_factory
        self._lock = lock or threading.RLock()

        self._ready = False
        self._offline = False
        self._disposed = False
        self._timer: Optional[TimerLike] = None
        self._generation = 0

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def is_offline(self) -> bool:
        return self._offline

    @property
    def is_armed(self) -> bool:
        return self._timer is not None

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def arm(self) -> None:
        """Start (or restart) the one-shot timeout."""
        with self._lock:
            if self._disposed:
                return
            self._cancel_timer()
            self._generation += 1
            generation = self._generation

            timer = self._timer_factory(self.timeout_s, lambda: self._on_timeout(generation))
            timer.daemon = True
            self._timer = timer
            timer.start()

            self._logger.debug(
                event=LogEvent.CONNECTIVITY_ARMED,
                message="Connectivity timeout armed",
                metadata={'timeout_s': self.timeout_s, 'generation': generation}
            )

    def mark_ready(self) -> None:
        """Host signal: the map surface is initialized."""
        with self._lock:
            if self._disposed or self._ready:
                return
            self._ready = True
            self._offline = False
            self._cancel_timer()

            self._logger.info(
                event=LogEvent.CONNECTIVITY_READY,
                message="Map ready, online mode",
            )
            self._on_change()

    def retry(self) -> None:
        """Clear the offline flag and re-arm the timeout."""
        with self._lock:
            if self._disposed or self._ready:
                return
            self._offline = False

            self._logger.info(
                event=LogEvent.CONNECTIVITY_RETRY,
                message="Retrying map connection",
                metadata={'timeout_s': self.timeout_s}
            )
            self.arm()
            self._on_change()

    def dispose(self) -> None:
        """Cancel any pending timer; later callbacks become no-ops."""
        with self._lock:
            self._disposed = True
            self._cancel_timer()

    def _on_timeout(self, generation: int) -> None:
        """Timer callback (runs in the timer thread)."""
        with self._lock:
            if self._disposed or generation != self._generation:
                return
            self._timer = None
            if self._ready:
                return
            self._offline = True

            self._logger.warning(
                event=LogEvent.CONNECTIVITY_OFFLINE,
                message="Map not ready before timeout, offline mode",
                metadata={'timeout_s': self.timeout_s}
            )
            self._on_change()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
