"""Configuration management."""

from .settings import AppSettings, ConnectionSettings, HistorySettings

__all__ = ["AppSettings", "ConnectionSettings", "HistorySettings"]
