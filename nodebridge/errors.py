"""Exception types raised by drivers.

WHY: Callers must be able to tell usage errors (fix the code) apart from
protocol violations (the server sent garbage) and from plain network
failures raised by httpx. Soft HTTP failures are not exceptions at all:
the requester returns None for them.

RULES:
- ConfigurationError and SessionError are raised before any I/O
- ParseError is raised only for a 200 response that cannot be understood
- Never retry on any of these; they do not describe transient conditions
"""

from __future__ import annotations


class NodeBridgeError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(NodeBridgeError):
    """Raised when a driver is used before initial() registered it.

    Also raised for an unknown dialect name.
    """


class SessionError(NodeBridgeError):
    """Raised when a session-scoped request is made with no session token.

    The caller must wait for the socket to deliver a session id (and pass
    it to update_session) or avoid the operation.
    """


class ParseError(NodeBridgeError, ValueError):
    """Raised when a successful response body is not the expected JSON.

    HOW: Wraps the HTTP status code (200 for bodies, 0 for payloads parsed
    outside a request) and a short description.

    RULES:
    - Always chained from the underlying decoding error when there is one
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"Malformed node response (status {status_code}): {message}")
