"""Test doubles and sample payloads shared across the nodebridge tests.

WHY: Driver, REST and socket tests all need the same sample tracks, a node
object that records what it receives, a fake HTTP transport and a fake
socket. Keeping them in a plain module lets test files import them
directly, while conftest.py stays limited to fixtures.

HOW: HTTP goes through httpx.MockTransport with a per-test handler that
also records the requests it saw. Sockets go through FakeConnector, which
stands in for websockets' connect() and returns a scripted FakeSocket.

RULES:
- No test opens a real network connection
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx

# ---------------------------------------------------------------------------
# Sample payloads (v4 wire format)
# ---------------------------------------------------------------------------

SAMPLE_TRACK: Dict[str, Any] = {
    "encoded": "QAAAjQIAJVJpY2sgQXN0bGV5IC0gTmV2ZXIgR29ubmEgR2l2ZSBZb3UgVXA=",
    "info": {
        "identifier": "dQw4w9WgXcQ",
        "isSeekable": True,
        "author": "RickAstleyVEVO",
        "length": 212000,
        "isStream": False,
        "position": 0,
        "title": "Rick Astley - Never Gonna Give You Up",
        "uri": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "artworkUrl": "https://i.ytimg.com/vi/dQw4w9WgXcQ/maxresdefault.jpg",
        "isrc": None,
        "sourceName": "youtube",
    },
    "pluginInfo": {},
}

SAMPLE_PLAYLIST: Dict[str, Any] = {
    "info": {"name": "Greatest Hits", "selectedTrack": -1},
    "pluginInfo": {"type": "album"},
    "tracks": [SAMPLE_TRACK, SAMPLE_TRACK],
}


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------


class RecordingNode:
    """NodeHandler that records every lifecycle call in order."""

    def __init__(self) -> None:
        self.events: List[Tuple[Any, ...]] = []

    def ws_open_event(self) -> None:
        self.events.append(("open",))

    def ws_message_event(self, data: Any) -> None:
        self.events.append(("message", data))

    def ws_error_event(self, error: BaseException) -> None:
        self.events.append(("error", error))

    def ws_close_event(self, code: int, reason: str) -> None:
        self.events.append(("close", code, reason))

    @property
    def kinds(self) -> List[str]:
        return [e[0] for e in self.events]


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


def json_response(status: int, body: Any = None) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    return handler


# ---------------------------------------------------------------------------
# WebSocket
# ---------------------------------------------------------------------------


class FakeSocket:
    """Scripted stand-in for a websockets ClientConnection.

    Yields ``frames`` in order. Then either raises ``error``, or (with
    hold_open) waits until close() is called, or ends as a normal close
    with ``final_code`` / ``final_reason``.
    """

    def __init__(
        self,
        frames: Optional[List[Any]] = None,
        final_code: int = 1000,
        final_reason: str = "",
        error: Optional[BaseException] = None,
        hold_open: bool = False,
    ) -> None:
        self.frames = list(frames or [])
        self.final_code = final_code
        self.final_reason = final_reason
        self.error = error
        self.hold_open = hold_open
        self.close_code: Optional[int] = None
        self.close_reason: Optional[str] = None
        self.close_calls: List[Tuple[int, str]] = []
        self._closed: Optional[asyncio.Event] = None

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        self._closed = asyncio.Event()
        for frame in self.frames:
            yield frame
        if self.error is not None:
            self.close_code = self.final_code
            self.close_reason = self.final_reason
            raise self.error
        if self.hold_open:
            await self._closed.wait()
            return
        self.close_code = self.final_code
        self.close_reason = self.final_reason

    async def close(self, code: int = 1000, reason: str = "") -> None:
        self.close_calls.append((code, reason))
        self.close_code = code
        self.close_reason = reason
        if self._closed is not None:
            self._closed.set()


class FakeConnector:
    """Async callable replacing websockets' connect()."""

    def __init__(self, socket: Optional[FakeSocket] = None, error: Optional[BaseException] = None) -> None:
        self.socket = socket or FakeSocket()
        self.error = error
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    async def __call__(self, url: str, **kwargs: Any) -> FakeSocket:
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.socket


async def wait_for_events(node: RecordingNode, count: int, rounds: int = 100) -> None:
    """Yield to the loop until the node has seen ``count`` events."""
    for _ in range(rounds):
        if len(node.events) >= count:
            return
        await asyncio.sleep(0)
    raise AssertionError(f"expected {count} events, got {node.events}")
