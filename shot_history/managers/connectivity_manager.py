"""Reloads the shot list each time the machine connection comes up."""

import asyncio
import logging
from typing import Callable, Optional, Set

from shot_history.managers.history_loader_manager import HistoryLoaderManager
from shot_history.services.connectivity import ConnectivitySignal

logger = logging.getLogger("ShotHistory.ConnectivityManager")


class ConnectivityManager:
    """Triggers one reset sync per disconnected -> connected transition.

    Going offline cancels nothing: a fetch already in flight still applies
    its result.
    """

    def __init__(self, signal: ConnectivitySignal, loader: HistoryLoaderManager):
        self.signal = signal
        self.loader = loader
        self._connected = False
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._tasks: Set[asyncio.Task] = set()

    @property
    def is_running(self) -> bool:
        return self._unsubscribe is not None

    def start(self) -> None:
        """Subscribe to the signal. Must be called from the running event loop."""
        if self._unsubscribe is not None:
            return
        self._connected = False
        self._unsubscribe = self.signal.subscribe(self._on_connectivity_changed)
        # An already-open connection counts as a fresh transition.
        self._on_connectivity_changed(self.signal.value)

    def stop(self) -> None:
        """Unsubscribe and cancel reloads that have not finished yet."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._connected = False
        for task in list(self._tasks):
            if not task.done():
                task.cancel()

    def _on_connectivity_changed(self, connected: bool) -> None:
        was_connected = self._connected
        self._connected = connected
        if connected and not was_connected:
            logger.info("Connection established, reloading history")
            task = asyncio.get_running_loop().create_task(
                self.loader.load_history(reset=True)
            )
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    async def wait_idle(self) -> None:
        """Wait for every reload this manager has scheduled."""
        while True:
            pending = [t for t in self._tasks if not t.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)
