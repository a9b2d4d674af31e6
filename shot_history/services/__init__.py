"""Machine communication services."""

from .connectivity import ConnectivitySignal
from .history_api import HistoryApiService
from .websocket_client import WebSocketClient

__all__ = ["ConnectivitySignal", "HistoryApiService", "WebSocketClient"]
