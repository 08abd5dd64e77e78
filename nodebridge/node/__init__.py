"""Event-stream connection to a node."""

from nodebridge.node.websocket import (
    NodeWebSocket,
    SocketClose,
    SocketError,
    SocketEvent,
    SocketMessage,
    SocketOpen,
)

__all__ = [
    "NodeWebSocket",
    "SocketClose",
    "SocketError",
    "SocketEvent",
    "SocketMessage",
    "SocketOpen",
]
