"""Protocol definitions for dependency injection."""

from typing import Any, Callable, Optional, Protocol

from shot_history.core.models import HistoryItem, RawPage


class RequestChannel(Protocol):
    async def request(self, payload: dict) -> dict: ...


class HistoryApiPort(Protocol):
    async def list_page(self, offset: int, limit: int) -> RawPage: ...

    async def delete_record(self, item_id: str) -> None: ...

    async def get_record(self, item_id: str) -> dict: ...


RecordParser = Callable[[Any], Optional[HistoryItem]]

ErrorSink = Callable[[str, Exception], None]
