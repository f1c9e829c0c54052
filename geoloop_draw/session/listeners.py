"""
ListenerRegistry - explicit change-listener registration

Bounded Context: Observer notification
Responsibilities:
  - Register / unregister zero-argument change callbacks
  - Notify every listener synchronously, in registration order
  - Isolate listener failures (logged, never propagated)

Threading: Thread-safe (lock guards the listener list)
"""

import threading
from typing import Callable, List

from geoloop_logging import LogEvent, StructuredLogger

Listener = Callable[[], None]


class ListenerRegistry:
    """
    Registry of "state changed" callbacks.

    Listeners receive no payload; they re-read the state they care about.

    Example:
        registry = ListenerRegistry(logger)
        registry.add(on_change)
        registry.notify()
        registry.remove(on_change)
    """

    def __init__(self, logger: StructuredLogger):
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()
        self._logger = logger

    def add(self, listener: Listener) -> None:
        """
        Register a listener.

        Registering the same listener twice is a no-op; it is still
        notified once per change.
        """
        with self._lock:
            if listener in self._listeners:
                self._logger.debug(
                    event=LogEvent.LISTENER_DUPLICATE,
                    message="Listener already registered, ignored",
                    metadata={'listener': repr(listener)},
                )
                return
            self._listeners.append(listener)

    def remove(self, listener: Listener) -> bool:
        """
        Unregister a listener.

        Returns:
            True if it was registered, False otherwise
        """
        with self._lock:
            if listener not in self._listeners:
                return False
            self._listeners.remove(listener)
            return True

    def clear(self) -> None:
        with self._lock:
            self._listeners.clear()

    def notify(self) -> None:
        """Invoke every listener; a failing listener does not stop the rest."""
        with self._lock:
            snapshot = list(self._listeners)

        for listener in snapshot:
            try:
                listener()
            except Exception as e:
                self._logger.error(
                    event=LogEvent.LISTENER_ERROR,
                    message="Listener raised during notification",
                    metadata={'listener': repr(listener)},
                    exc_info=e,
                )

    def __len__(self) -> int:
        return len(self._listeners)
