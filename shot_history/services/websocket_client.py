"""WebSocket request/response channel to the machine."""

import asyncio
import json
import logging
import uuid
from typing import Dict, Optional

import websockets

from shot_history.core.exceptions import (
    ConnectionClosedError,
    NotConnectedError,
    RequestTimeoutError,
)
from shot_history.services.connectivity import ConnectivitySignal

logger = logging.getLogger("ShotHistory.WebSocketClient")


class WebSocketClient:
    """Sends JSON requests tagged with a ``rid`` and resolves them from the listener.

    The machine also pushes unsolicited events on the same socket; anything
    without a known ``rid`` is ignored here.
    """

    def __init__(
        self,
        uri: str,
        connectivity: ConnectivitySignal,
        max_size: int = 2 ** 20,
        open_timeout: float = 5,
        request_timeout: float = 10,
        max_reconnect_attempts: int = 5,
    ):
        self.uri = uri
        self.connectivity = connectivity
        self.max_size = max_size
        self.open_timeout = open_timeout
        self.request_timeout = request_timeout
        self.max_reconnect_attempts = max_reconnect_attempts
        self._websocket = None
        self._listener_task: Optional[asyncio.Task] = None
        self._pending: Dict[str, asyncio.Future] = {}
        self._reconnect_attempt = 0

    @property
    def is_connected(self) -> bool:
        return self._websocket is not None and self.connectivity.value

    async def connect(self) -> bool:
        """Open the socket, retrying with exponential backoff.

        Returns:
            True once connected, False after the last failed attempt
        """
        self._reconnect_attempt = 0
        while self._reconnect_attempt < self.max_reconnect_attempts:
            try:
                logger.info(
                    f"Connecting to {self.uri} (attempt {self._reconnect_attempt + 1})..."
                )
                self._websocket = await websockets.connect(
                    self.uri, max_size=self.max_size, open_timeout=self.open_timeout
                )
            except (OSError, asyncio.TimeoutError, websockets.exceptions.WebSocketException) as e:
                self._reconnect_attempt += 1
                if self._reconnect_attempt >= self.max_reconnect_attempts:
                    break
                delay = 2 ** self._reconnect_attempt
                logger.warning(f"Connection failed: {e}. Retrying in {delay} seconds...")
                await asyncio.sleep(delay)
                continue

            logger.info("Connected to machine")
            self._listener_task = asyncio.create_task(self._listen_for_messages())
            self.connectivity.set(True)
            return True

        logger.error("Failed to connect to machine after multiple attempts.")
        return False

    async def _listen_for_messages(self):
        websocket = self._websocket
        try:
            async for message in websocket:
                self._dispatch(message)
        except websockets.exceptions.ConnectionClosedError as e:
            logger.warning(f"Connection lost: {e}")
        except websockets.exceptions.ConnectionClosedOK:
            logger.info("Connection closed")
        finally:
            if self._websocket is websocket:
                self._websocket = None
            self._fail_pending(ConnectionClosedError("Connection closed"))
            self.connectivity.set(False)

    def _dispatch(self, message) -> None:
        try:
            data = json.loads(message)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring non-JSON message: {message!r:.80}")
            return
        if not isinstance(data, dict):
            return

        rid = data.get("rid")
        future = self._pending.get(rid) if rid is not None else None
        if future is None:
            logger.debug(f"Ignoring message {data.get('tp')} (rid={rid})")
            return
        if not future.done():
            future.set_result(data)

    def _fail_pending(self, error: Exception) -> None:
        for future in self._pending.values():
            if not future.done():
                future.set_exception(error)
        self._pending.clear()

    async def request(self, payload: dict) -> dict:
        """Send one request and wait for the response with the same ``rid``."""
        if not self.is_connected:
            raise NotConnectedError(f"Not connected to {self.uri}")

        rid = uuid.uuid4().hex[:12]
        future = asyncio.get_running_loop().create_future()
        self._pending[rid] = future
        try:
            await self._websocket.send(json.dumps({**payload, "rid": rid}))
            return await asyncio.wait_for(future, timeout=self.request_timeout)
        except asyncio.TimeoutError:
            raise RequestTimeoutError(
                f"No response to {payload.get('tp')} within {self.request_timeout}s"
            )
        except websockets.exceptions.ConnectionClosed as e:
            raise ConnectionClosedError(f"Connection closed during send: {e}")
        finally:
            self._pending.pop(rid, None)

    async def close(self) -> None:
        websocket = self._websocket
        self._websocket = None
        if websocket is not None:
            await websocket.close()
        if self._listener_task is not None:
            await asyncio.gather(self._listener_task, return_exceptions=True)
            self._listener_task = None
        self.connectivity.set(False)
