"""Manager classes for application state."""

from .connectivity_manager import ConnectivityManager
from .history_loader_manager import HistoryLoaderManager, map_records
from .pagination_manager import HistoryView, PageState, PaginationManager, Phase

__all__ = [
    "ConnectivityManager",
    "HistoryLoaderManager",
    "HistoryView",
    "PageState",
    "PaginationManager",
    "Phase",
    "map_records",
]
