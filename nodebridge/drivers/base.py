"""Abstract driver contract shared by every server dialect.

WHY: The orchestrator configures, connects and queries every node the same
way regardless of the protocol it speaks. Dialects differ in REST path
segment, load-type vocabulary and resume support; everything else (header
handling, HTTP outcome classification, socket lifecycle wiring) is common
and lives here.

HOW: AbstractDriver holds an immutable DriverConfig (set by initial()), a
SessionState, the latest NodeWebSocket handle and a capability registry.
Subclasses set ``id`` and ``api_version``, implement update_session(), and
may override convert_load_result() and register extra functions.

RULES:
- Every public operation except initial() fails with ConfigurationError
  while the driver is not registered
- Authorization on REST calls always comes from the node options; caller
  headers can override User-Agent but never Authorization
- 204 and non-200 responses return None; a malformed 200 body raises ParseError
- The Session-Id handshake header is "" unless a resumable token exists and
  the client enabled resume
"""

from __future__ import annotations

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import (
    Any,
    Awaitable,
    Callable,
    ClassVar,
    Dict,
    Optional,
    Protocol,
    Set,
)

import httpx

from nodebridge.api.models import RawTrack, RequesterOptions
from nodebridge.config import (
    CLIENT_SIGNATURE,
    DEFAULT_REQUEST_TIMEOUT,
    WS_CLOSE_CODE,
    WS_CLOSE_REASON,
    ManagerInfo,
    NodeOptions,
)
from nodebridge.core.session import SessionState
from nodebridge.errors import ConfigurationError, ParseError, SessionError
from nodebridge.node.websocket import (
    Connector,
    NodeWebSocket,
    SocketClose,
    SocketError,
    SocketEvent,
    SocketMessage,
    SocketOpen,
)

logger = logging.getLogger(__name__)

REDACTED = "<redacted>"


class NodeHandler(Protocol):
    """The node object that owns a driver and consumes its socket events."""

    def ws_open_event(self) -> None: ...

    def ws_message_event(self, data: Any) -> None: ...

    def ws_error_event(self, error: BaseException) -> None: ...

    def ws_close_event(self, code: int, reason: str) -> None: ...


class PlayerLike(Protocol):
    """What driver capability functions need from a player."""

    guild_id: str

    @property
    def current_track(self) -> Optional[RawTrack]: ...


DriverFunction = Callable[..., Awaitable[Any]]
"""Capability handler: called as handler(player, *args)."""


@dataclass(frozen=True)
class DriverConfig:
    """Everything initial() received, plus the URLs derived from it."""

    manager: ManagerInfo
    options: NodeOptions
    node: NodeHandler
    ws_url: str
    http_url: str

    @property
    def is_complete(self) -> bool:
        return bool(
            self.manager is not None
            and self.options is not None
            and self.node is not None
            and self.ws_url
            and self.http_url
        )


class AbstractDriver(ABC):
    """Base class of the closed set of dialect drivers.

    Args:
        transport: httpx transport used for REST calls (tests inject
            httpx.MockTransport). None means the default network transport.
        connector: Replacement for websockets' connect() (tests).
    """

    id: ClassVar[str]
    api_version: ClassVar[str]

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        connector: Optional[Connector] = None,
    ) -> None:
        self.session = SessionState()
        self.functions: Dict[str, DriverFunction] = {}
        self._config: Optional[DriverConfig] = None
        self._ws: Optional[NodeWebSocket] = None
        self._retiring: Set[asyncio.Task[None]] = set()
        self._transport = transport
        self._connector = connector

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    @property
    def is_registered(self) -> bool:
        return self._config is not None and self._config.is_complete

    @property
    def config(self) -> DriverConfig:
        return self._require_registered()

    def _require_registered(self) -> DriverConfig:
        if self._config is None or not self._config.is_complete:
            raise ConfigurationError(f"Driver {self.id} not registered by using initial()")
        return self._config

    @property
    def ws_url(self) -> str:
        return self._config.ws_url if self._config else ""

    @property
    def http_url(self) -> str:
        return self._config.http_url if self._config else ""

    @property
    def session_id(self) -> Optional[str]:
        return self.session.session_id

    def initial(self, manager: ManagerInfo, options: NodeOptions, node: NodeHandler) -> None:
        """Store references and derive the socket and REST URLs.

        No network I/O. Calling it again replaces the configuration and
        drops any session token.
        """
        ws_scheme = "wss" if options.secure else "ws"
        http_scheme = "https" if options.secure else "http"
        base = f"{options.host}:{options.port}/{self.api_version}"
        self._config = DriverConfig(
            manager=manager,
            options=options,
            node=node,
            ws_url=f"{ws_scheme}://{base}/websocket",
            http_url=f"{http_scheme}://{base}",
        )
        self.session.reset()

    # ------------------------------------------------------------------
    # Event stream
    # ------------------------------------------------------------------

    def build_ws_headers(self) -> Dict[str, str]:
        config = self.config
        return {
            "Authorization": config.options.auth,
            "User-Id": config.manager.id,
            "Client-Name": CLIENT_SIGNATURE,
            "Session-Id": self.session.header_value(config.manager.resume),
            "User-Agent": config.manager.user_agent,
        }

    def connect(self) -> NodeWebSocket:
        """Open the event stream and return its handle.

        Must be called from inside a running event loop; the handshake and
        the reader run as a background task. A handle from an earlier
        connect() that is still live is detached (its close never reaches
        the node) and closed with the self-close code in the background.
        """
        config = self.config
        node = config.node
        self._retire_previous()

        def subscriber(event: SocketEvent) -> None:
            _dispatch(node, event)

        ws = NodeWebSocket(
            config.ws_url,
            self.build_ws_headers(),
            subscriber,
            connector=self._connector,
        )
        ws.start()
        self._ws = ws
        logger.debug("[%s] Connecting to %s", self.id, config.ws_url)
        return ws

    def _retire_previous(self) -> None:
        previous, self._ws = self._ws, None
        if previous is None or previous.is_detached:
            return
        previous.detach()
        logger.debug("[%s] Replacing previous connection to %s", self.id, previous.url)
        task = asyncio.get_running_loop().create_task(previous.close(WS_CLOSE_CODE, WS_CLOSE_REASON))
        self._retiring.add(task)
        task.add_done_callback(self._retiring.discard)

    async def ws_close(self) -> None:
        self._require_registered()
        if self._ws is None:
            return
        ws, self._ws = self._ws, None
        await ws.close(WS_CLOSE_CODE, WS_CLOSE_REASON)

    # ------------------------------------------------------------------
    # REST
    # ------------------------------------------------------------------

    async def requester(self, options: RequesterOptions) -> Optional[Any]:
        """Issue one REST call against the node and classify the outcome.

        Returns:
            The decoded JSON body (load results translated to the canonical
            taxonomy), or None for 204 and for any non-200 status.

        Raises:
            ConfigurationError: driver not registered.
            SessionError: options.use_session_id without a session token.
            ParseError: 200 response whose body is not valid JSON.
            httpx.HTTPError: network failure or timeout.
        """
        config = self.config
        if options.use_session_id and not self.session.has_session:
            raise SessionError("sessionId not initialized! Please wait for the node to get connected!")

        url = f"{config.http_url}{options.path}"
        headers = self._merge_headers(config, options.headers)
        content = None
        if options.data is not None:
            content = json.dumps(options.data)
            if "content-type" not in headers:
                headers["Content-Type"] = "application/json"

        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=httpx.Timeout(DEFAULT_REQUEST_TIMEOUT),
        ) as client:
            resp = await client.request(
                options.method,
                url,
                params=options.params,
                content=content,
                headers=headers,
            )

        if resp.status_code == 204:
            logger.debug("[%s] %s %s returned no content", self.id, options.method, resp.url)
            return None
        if resp.status_code != 200:
            logger.warning(
                "[%s] Something went wrong with the node. Status code: %s Headers: %s",
                self.id,
                resp.status_code,
                _redact(headers),
            )
            return None

        try:
            payload = resp.json()
        except ValueError as exc:
            raise ParseError(resp.status_code, f"{options.method} {options.path}: {exc}") from exc

        if isinstance(payload, dict) and "loadType" in payload:
            payload = self.convert_load_result(payload)

        logger.debug("[%s] %s %s", self.id, options.method, resp.url)
        return payload

    def convert_load_result(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Normalize a response carrying a loadType. Identity by default."""
        return payload

    # ------------------------------------------------------------------
    # Session & capabilities
    # ------------------------------------------------------------------

    @abstractmethod
    async def update_session(self, session_id: str, mode: bool, timeout: int) -> None:
        """Record the session token and set whether it is resumable."""

    async def call_function(self, name: str, player: PlayerLike, *args: Any) -> Optional[Any]:
        """Invoke a dialect-specific capability by name.

        Unsupported names log a warning and return None.
        """
        self._require_registered()
        handler = self.functions.get(name)
        if handler is None:
            logger.warning("[%s] Function %r is not supported by this driver", self.id, name)
            return None
        return await handler(player, *args)

    @staticmethod
    def _merge_headers(config: DriverConfig, extra: Optional[Dict[str, str]]) -> httpx.Headers:
        headers = httpx.Headers({"User-Agent": config.manager.user_agent})
        for key, value in (extra or {}).items():
            if key.lower() == "authorization":
                continue
            headers[key] = value
        headers["Authorization"] = config.options.auth
        return headers


def _dispatch(node: NodeHandler, event: SocketEvent) -> None:
    if isinstance(event, SocketOpen):
        node.ws_open_event()
    elif isinstance(event, SocketMessage):
        node.ws_message_event(event.data)
    elif isinstance(event, SocketError):
        node.ws_error_event(event.error)
    elif isinstance(event, SocketClose):
        node.ws_close_event(event.code, event.reason)


def _redact(headers: httpx.Headers) -> Dict[str, str]:
    return {
        key: REDACTED if key.lower() == "authorization" else value
        for key, value in headers.items()
    }
