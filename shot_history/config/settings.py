"""Application settings configuration."""

from dataclasses import dataclass
from typing import Optional

import yaml

from shot_history.core.models import LIMIT


@dataclass(frozen=True)
class ConnectionSettings:
    uri: str = "ws://gaggimate.local/ws"
    max_size: int = 2 ** 20
    open_timeout: float = 5
    request_timeout: float = 10
    max_reconnect_attempts: int = 5


@dataclass(frozen=True)
class HistorySettings:
    page_size: int = LIMIT


@dataclass(frozen=True)
class AppSettings:
    connection: ConnectionSettings
    history: HistorySettings

    @classmethod
    def default(cls) -> "AppSettings":
        return cls(connection=ConnectionSettings(), history=HistorySettings())

    @classmethod
    def load(cls, path: Optional[str] = None) -> "AppSettings":
        if path is None:
            path = "settings.yml"

        config = cls._load_yaml(path)
        connection = config.get("connection") or {}
        history = config.get("history") or {}
        if not isinstance(connection, dict):
            connection = {}
        if not isinstance(history, dict):
            history = {}

        page_size = history.get("page_size", LIMIT)
        if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
            page_size = LIMIT

        return cls(
            connection=ConnectionSettings(
                uri=connection.get("uri", ConnectionSettings.uri),
                max_size=connection.get("max_size", ConnectionSettings.max_size),
                open_timeout=connection.get("open_timeout", ConnectionSettings.open_timeout),
                request_timeout=connection.get(
                    "request_timeout", ConnectionSettings.request_timeout
                ),
                max_reconnect_attempts=connection.get(
                    "max_reconnect_attempts", ConnectionSettings.max_reconnect_attempts
                ),
            ),
            history=HistorySettings(page_size=page_size),
        )

    @staticmethod
    def _load_yaml(path: str) -> dict:
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            return {}
        except yaml.YAMLError:
            return {}
        return data if isinstance(data, dict) else {}
