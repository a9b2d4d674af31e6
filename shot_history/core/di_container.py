"""Dependency injection container."""

from dataclasses import dataclass, field
from typing import Optional

from shot_history.config import AppSettings
from shot_history.managers import (
    ConnectivityManager,
    HistoryLoaderManager,
    PaginationManager,
)
from shot_history.services import (
    ConnectivitySignal,
    HistoryApiService,
    WebSocketClient,
)


@dataclass
class AppContainer:
    settings: AppSettings

    _connectivity: Optional[ConnectivitySignal] = field(
        default=None, init=False, repr=False
    )
    _client: Optional[WebSocketClient] = field(default=None, init=False, repr=False)
    _history_loader: Optional[HistoryLoaderManager] = field(
        default=None, init=False, repr=False
    )
    _connectivity_manager: Optional[ConnectivityManager] = field(
        default=None, init=False, repr=False
    )

    @property
    def connectivity(self) -> ConnectivitySignal:
        if self._connectivity is None:
            self._connectivity = ConnectivitySignal()
        return self._connectivity

    @property
    def client(self) -> WebSocketClient:
        if self._client is None:
            conn = self.settings.connection
            self._client = WebSocketClient(
                conn.uri,
                self.connectivity,
                max_size=conn.max_size,
                open_timeout=conn.open_timeout,
                request_timeout=conn.request_timeout,
                max_reconnect_attempts=conn.max_reconnect_attempts,
            )
        return self._client

    @property
    def history_loader(self) -> HistoryLoaderManager:
        if self._history_loader is None:
            self._history_loader = HistoryLoaderManager(
                HistoryApiService(self.client),
                PaginationManager(self.settings.history.page_size),
            )
        return self._history_loader

    @property
    def connectivity_manager(self) -> ConnectivityManager:
        if self._connectivity_manager is None:
            self._connectivity_manager = ConnectivityManager(
                self.connectivity, self.history_loader
            )
        return self._connectivity_manager

    @classmethod
    def create(cls, settings: Optional[AppSettings] = None) -> "AppContainer":
        return cls(settings=settings or AppSettings.load())
