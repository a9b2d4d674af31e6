"""Observable connectivity flag for the machine connection."""

import logging
from typing import Callable, List

logger = logging.getLogger("ShotHistory.Connectivity")

ConnectivityListener = Callable[[bool], None]


class ConnectivitySignal:
    """Boolean value with change notification.

    Subscribers are called with the new value only when it actually changes.
    """

    def __init__(self, connected: bool = False):
        self._value = connected
        self._listeners: List[ConnectivityListener] = []

    @property
    def value(self) -> bool:
        return self._value

    def set(self, connected: bool) -> None:
        connected = bool(connected)
        if connected == self._value:
            return
        self._value = connected
        logger.info("Machine connected" if connected else "Machine disconnected")
        for listener in list(self._listeners):
            try:
                listener(connected)
            except Exception as e:
                logger.error(f"Connectivity listener failed: {e}")

    def subscribe(self, listener: ConnectivityListener) -> Callable[[], None]:
        """Register a listener.

        Returns:
            Callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
