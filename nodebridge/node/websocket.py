"""WebSocket event stream to one audio node.

WHY: The node pushes player updates, stats and lifecycle ops over a
persistent socket. The owning node object needs those as an ordered stream
of lifecycle events, without this layer interpreting payloads or deciding
when to reconnect.

HOW: NodeWebSocket owns exactly one websockets client connection and one
background reader task. The task turns socket activity into typed events
(SocketOpen, SocketMessage, SocketError, SocketClose) and hands each one to
a single subscriber callback, in occurrence order.

RULES:
- Exactly one socket and one subscriber per NodeWebSocket
- Inbound frames are parsed as JSON; a bad frame is an error event, the
  socket stays open
- SocketClose is delivered once, last; the subscriber is detached right after
- Never retries or reconnects; the orchestrator calls connect() again
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from websockets.asyncio.client import connect as ws_connect
from websockets.exceptions import ConnectionClosedError

from nodebridge.config import WS_CLOSE_CODE, WS_CLOSE_REASON

logger = logging.getLogger(__name__)

ABNORMAL_CLOSURE = 1006


@dataclass(frozen=True)
class SocketOpen:
    pass


@dataclass(frozen=True)
class SocketMessage:
    data: Any


@dataclass(frozen=True)
class SocketError:
    error: BaseException


@dataclass(frozen=True)
class SocketClose:
    code: int
    reason: str


SocketEvent = Union[SocketOpen, SocketMessage, SocketError, SocketClose]
Subscriber = Callable[[SocketEvent], None]
Connector = Callable[..., Awaitable[Any]]


class NodeWebSocket:
    """Single-socket event producer.

    Use as:
        ws = NodeWebSocket(url, headers, subscriber)
        ws.start()          # needs a running event loop
        ...
        await ws.close()

    Args:
        url: ws:// or wss:// URL of the node's event endpoint.
        headers: Handshake headers. A "User-Agent" entry is sent through the
            library's user_agent_header so it is not duplicated.
        subscriber: Callback receiving every SocketEvent.
        connector: Replacement for websockets' connect(), for tests.
    """

    def __init__(
        self,
        url: str,
        headers: Dict[str, str],
        subscriber: Subscriber,
        connector: Optional[Connector] = None,
    ) -> None:
        self.url = url
        self.headers = dict(headers)
        self._subscriber: Optional[Subscriber] = subscriber
        self._connector = connector or ws_connect
        self._socket: Any = None
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def is_open(self) -> bool:
        return self._socket is not None and self._subscriber is not None

    @property
    def is_detached(self) -> bool:
        return self._subscriber is None

    def detach(self) -> None:
        """Stop delivering events; the socket itself is left as it is."""
        self._subscriber = None

    def start(self) -> None:
        """Schedule the connect-and-read task on the running loop."""
        if self._task is not None:
            raise RuntimeError("NodeWebSocket already started")
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def close(self, code: int = WS_CLOSE_CODE, reason: str = WS_CLOSE_REASON) -> None:
        """Close the socket and wait until the close event has been delivered.

        If the handshake has not finished yet, the reader task is cancelled
        instead and a SocketClose with the given code is delivered.
        """
        if self._task is None:
            return
        if self._socket is None:
            self._task.cancel()
        else:
            await self._socket.close(code, reason)
        await self.wait_closed(code, reason)

    async def wait_closed(
        self,
        code: int = ABNORMAL_CLOSURE,
        reason: str = "",
    ) -> None:
        if self._task is None or self._task is asyncio.current_task():
            return
        try:
            await self._task
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise
            self._finish(code, reason)

    # ------------------------------------------------------------------
    # Reader task
    # ------------------------------------------------------------------

    async def _run(self) -> None:
        headers = dict(self.headers)
        user_agent = headers.pop("User-Agent", None)
        try:
            self._socket = await self._connector(
                self.url,
                additional_headers=headers,
                user_agent_header=user_agent,
            )
        except Exception as exc:
            logger.debug("Connection to %s failed: %s", self.url, exc)
            self._emit(SocketError(exc))
            self._finish(ABNORMAL_CLOSURE, "")
            return

        self._emit(SocketOpen())
        try:
            async for raw in self._socket:
                try:
                    data = json.loads(raw)
                except (json.JSONDecodeError, TypeError) as exc:
                    self._emit(SocketError(exc))
                    continue
                self._emit(SocketMessage(data))
        except ConnectionClosedError as exc:
            self._emit(SocketError(exc))

        code = self._socket.close_code
        self._finish(ABNORMAL_CLOSURE if code is None else code, self._socket.close_reason or "")

    def _finish(self, code: int, reason: str) -> None:
        if self._subscriber is None:
            return
        self._emit(SocketClose(code, reason))
        self._subscriber = None

    def _emit(self, event: SocketEvent) -> None:
        subscriber = self._subscriber
        if subscriber is None:
            return
        try:
            subscriber(event)
        except Exception:
            logger.exception("Socket subscriber failed on %s", type(event).__name__)
