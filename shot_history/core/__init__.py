"""Core types, interfaces and exceptions.

The container lives in ``shot_history.core.di_container`` and is imported
from there directly, since it depends on the managers and services.
"""

from .exceptions import (
    ConnectionClosedError,
    NotConnectedError,
    RecordNotFoundError,
    RequestError,
    RequestTimeoutError,
    ShotHistoryError,
)
from .models import LIMIT, HistoryItem, RawPage, ShotSample
from .protocols import ErrorSink, HistoryApiPort, RecordParser, RequestChannel

__all__ = [
    "LIMIT",
    "HistoryItem",
    "RawPage",
    "ShotSample",
    "ErrorSink",
    "HistoryApiPort",
    "RecordParser",
    "RequestChannel",
    "ShotHistoryError",
    "RequestError",
    "RecordNotFoundError",
    "NotConnectedError",
    "RequestTimeoutError",
    "ConnectionClosedError",
]
