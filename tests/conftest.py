"""Pytest configuration and shared fixtures."""

import asyncio
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest


def make_record(index: int, profile: Optional[str] = None) -> Dict[str, Any]:
    """Raw record in the format the machine stores shots in."""
    profile = profile or f"Profile {index}"
    lines = [
        f"1,{profile},{1700000000 + index}",
        "0,93.0,91.5,9.0,0.5,1.2,0.0,0.0,0.0,0.0,0.0",
        "12000,93.0,92.8,9.0,8.9,2.0,0.0,1.8,1.5,18.2,17.9",
        "28500,93.0,93.1,6.0,6.1,1.7,0.0,1.6,1.4,36.4,35.8",
    ]
    return {"id": f"{index:06d}", "history": "\n".join(lines)}


class FakeHistoryChannel:
    """In-memory stand-in for the machine's request/response channel.

    Serves ``req:history:*`` requests from a list of raw records. Responses can
    be held back with ``hold()`` so tests can interleave operations.
    """

    def __init__(self, records: Optional[List[dict]] = None):
        self.records: List[dict] = list(records or [])
        self.requests: List[dict] = []
        self.list_overrides: List[Any] = []
        self.fail_list = False
        self.fail_delete = False
        self._gate: Optional[asyncio.Event] = None

    def hold(self) -> None:
        self._gate = asyncio.Event()

    def release(self) -> None:
        if self._gate is not None:
            self._gate.set()
            self._gate = None

    @property
    def list_requests(self) -> List[dict]:
        return [r for r in self.requests if r["tp"] == "req:history:list"]

    @property
    def delete_requests(self) -> List[dict]:
        return [r for r in self.requests if r["tp"] == "req:history:delete"]

    async def request(self, payload: dict) -> Any:
        self.requests.append(dict(payload))
        gate = self._gate
        if gate is not None:
            await gate.wait()
        else:
            await asyncio.sleep(0)

        tp = payload["tp"]
        if tp == "req:history:list":
            if self.fail_list:
                raise ConnectionError("socket closed")
            if self.list_overrides:
                return self.list_overrides.pop(0)
            offset, limit = payload["offset"], payload["limit"]
            page = self.records[offset:offset + limit]
            return {
                "tp": "res:history:list",
                "history": page,
                "total": len(self.records),
                "hasMore": offset + limit < len(self.records),
            }
        if tp == "req:history:delete":
            if self.fail_delete:
                raise ConnectionError("delete rejected")
            self.records = [r for r in self.records if r["id"] != payload["id"]]
            return {"tp": "res:history:delete", "msg": "Ok"}
        if tp == "req:history:get":
            for record in self.records:
                if record["id"] == payload["id"]:
                    return {"tp": "res:history:get", "history": record["history"]}
            return {"tp": "res:history:get", "error": "not found"}
        return {"tp": "res:unknown", "error": f"unknown request {tp}"}


@pytest.fixture
def records() -> List[dict]:
    return [make_record(i) for i in range(13)]


@pytest.fixture
def channel(records) -> FakeHistoryChannel:
    return FakeHistoryChannel(records)


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def loader_factory(channel):
    """Build a HistoryLoaderManager wired to the fake channel."""

    def build(page_size: int = 5, **kwargs):
        from shot_history.managers import HistoryLoaderManager, PaginationManager
        from shot_history.services import HistoryApiService

        return HistoryLoaderManager(
            HistoryApiService(channel), PaginationManager(page_size), **kwargs
        )

    return build


@pytest.fixture
def temp_config_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.yml"
