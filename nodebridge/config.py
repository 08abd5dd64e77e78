"""Configuration defaults and .env loading.

WHY: Driver defaults (user agent, resume policy, timeouts) and the
connection details of a node must be easy to find and override without
touching code. The CLI and tests read the same values.

HOW: python-dotenv loads the .env file on import. Defaults are module-level
constants read from the environment. NodeOptions and ManagerInfo are frozen
dataclasses so a driver's configuration cannot change after initial().

RULES:
- Every default can be overridden via an environment variable
- The node password is never hardcoded; load_node_options() raises if missing
- Boolean variables accept "true"/"false" (case-insensitive)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from nodebridge import CLIENT_NAME, PROJECT_URL, __version__

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == "true"


# ---------------------------------------------------------------------------
# Client defaults
# ---------------------------------------------------------------------------

CLIENT_SIGNATURE = f"{CLIENT_NAME}/{__version__} ({PROJECT_URL})"
"""Value of the Client-Name header sent when opening a socket."""

DEFAULT_USER_AGENT = os.getenv("NODEBRIDGE_USER_AGENT", CLIENT_SIGNATURE)
DEFAULT_RESUME = _env_bool("NODEBRIDGE_RESUME", "false")
DEFAULT_RESUME_TIMEOUT = int(os.getenv("NODEBRIDGE_RESUME_TIMEOUT", "60"))
DEFAULT_REQUEST_TIMEOUT = float(os.getenv("NODEBRIDGE_REQUEST_TIMEOUT", "10"))
DEFAULT_DRIVER = os.getenv("NODE_DRIVER", "lavalink4")

WS_CLOSE_CODE = 1000
WS_CLOSE_REASON = "Self closed"


@dataclass(frozen=True)
class NodeOptions:
    """Connection details for one audio node server.

    Attributes:
        name: Human-readable node name (used in logs only).
        host: Hostname or IP address of the server.
        port: TCP port of the server.
        auth: Password sent as the Authorization header.
        secure: Use wss/https instead of ws/http.
        driver: Dialect name, a key of nodebridge.drivers.DRIVERS.
    """

    name: str
    host: str
    port: int
    auth: str
    secure: bool = False
    driver: str = DEFAULT_DRIVER


@dataclass(frozen=True)
class ManagerInfo:
    """What a driver needs to know about the orchestrator that owns it.

    Attributes:
        id: Client (bot) user id, sent as the User-Id header.
        resume: Whether resuming is enabled for this client.
        resume_timeout: Seconds the server keeps a detached session alive.
        user_agent: User-Agent for both REST and WebSocket traffic.
    """

    id: str
    resume: bool = DEFAULT_RESUME
    resume_timeout: int = DEFAULT_RESUME_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT


def load_node_options() -> NodeOptions:
    """Build NodeOptions from the environment.

    WHY: The CLI needs a node to talk to; keeping the password in .env keeps
    it out of shell history and source code.

    HOW: Reads NODE_NAME, NODE_HOST, NODE_PORT, NODE_SECURE, NODE_AUTH and
    NODE_DRIVER from os.environ (populated by python-dotenv).

    RULES:
    - Raises ValueError if NODE_AUTH is missing or empty
    - Host defaults to localhost, port to 2333
    """
    auth = os.getenv("NODE_AUTH", "").strip()
    if not auth:
        raise ValueError(
            "Node password not configured. "
            "Add NODE_AUTH to the .env file or pass --auth."
        )
    return NodeOptions(
        name=os.getenv("NODE_NAME", "default"),
        host=os.getenv("NODE_HOST", "localhost"),
        port=int(os.getenv("NODE_PORT", "2333")),
        auth=auth,
        secure=_env_bool("NODE_SECURE", "false"),
        driver=DEFAULT_DRIVER,
    )
