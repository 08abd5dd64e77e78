"""Command-line interface for poking at an audio node.

WHY: When wiring up a new node it helps to check, from the terminal, that
the password works, that searches resolve and what the event stream
actually sends, using the same drivers the orchestrator uses.

HOW: argparse subcommands build NodeOptions from flags (defaults from the
environment via config), create the driver, register it with a printing
node, and run the async operation via asyncio.run(). Results go to stdout
as JSON; status messages go to stderr.

RULES:
- Commands: load <identifier>, decode <encoded>, info, listen [--seconds N]
- --auth falls back to NODE_AUTH; missing password is a usage error
- listen prints one JSON line per socket event and exits on close or timeout
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Any, List, Optional

from nodebridge import __version__
from nodebridge.api.rest import NodeRest
from nodebridge.config import DEFAULT_DRIVER, ManagerInfo, NodeOptions, load_node_options
from nodebridge.drivers import DRIVERS, AbstractDriver, create_driver


def _status(msg: str) -> None:
    print(msg, file=sys.stderr, flush=True)


def _emit(obj: Any) -> None:
    print(json.dumps(obj, default=_to_jsonable, ensure_ascii=False), flush=True)


def _to_jsonable(obj: Any) -> Any:
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if hasattr(obj, "__dataclass_fields__"):
        return {name: getattr(obj, name) for name in obj.__dataclass_fields__}
    return str(obj)


class PrintingNode:
    """Minimal node that prints socket events as JSON lines."""

    def __init__(self) -> None:
        self.closed = asyncio.Event()

    def ws_open_event(self) -> None:
        _emit({"event": "open"})

    def ws_message_event(self, data: Any) -> None:
        _emit({"event": "message", "data": data})

    def ws_error_event(self, error: BaseException) -> None:
        _emit({"event": "error", "error": repr(error)})

    def ws_close_event(self, code: int, reason: str) -> None:
        _emit({"event": "close", "code": code, "reason": reason})
        self.closed.set()


def _build_driver(args: argparse.Namespace, node: PrintingNode) -> AbstractDriver:
    auth = args.auth
    if not auth:
        try:
            auth = load_node_options().auth
        except ValueError as exc:
            raise SystemExit(f"error: {exc}") from None
    options = NodeOptions(
        name="cli",
        host=args.host,
        port=args.port,
        auth=auth,
        secure=args.secure,
        driver=args.driver,
    )
    driver = create_driver(options.driver)
    driver.initial(ManagerInfo(id=args.user_id), options, node)
    return driver


async def _run(args: argparse.Namespace) -> None:
    node = PrintingNode()
    driver = _build_driver(args, node)
    rest = NodeRest(driver)
    _status(f"Using {driver.id} at {driver.http_url}")

    if args.command == "load":
        result = await rest.load_tracks(args.identifier)
        if result is None:
            _status("No result (see warnings above).")
            return
        _status(f"loadType: {result.load_type.value}, {len(result.tracks)} track(s)")
        _emit({"loadType": result.load_type.value, "data": result.data})
    elif args.command == "decode":
        _emit(await rest.decode_track(args.encoded))
    elif args.command == "info":
        _emit(await rest.get_info())
    elif args.command == "listen":
        driver.connect()
        try:
            await asyncio.wait_for(node.closed.wait(), timeout=args.seconds)
        except asyncio.TimeoutError:
            _status(f"No close after {args.seconds}s; closing.")
            await driver.ws_close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nodebridge",
        description="Talk to an audio node server through a nodebridge driver.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--driver",
        default=DEFAULT_DRIVER,
        choices=sorted(DRIVERS),
        help="Server dialect (default: %(default)s).",
    )
    parser.add_argument("--host", default=os.getenv("NODE_HOST", "localhost"))
    parser.add_argument("--port", type=int, default=int(os.getenv("NODE_PORT", "2333")))
    parser.add_argument(
        "--secure",
        action=argparse.BooleanOptionalAction,
        default=os.getenv("NODE_SECURE", "false").lower() == "true",
        help="Use wss/https (default: %(default)s).",
    )
    parser.add_argument("--auth", default=None, help="Node password (default: $NODE_AUTH).")
    parser.add_argument("--user-id", default="0", help="Value of the User-Id header.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")

    sub = parser.add_subparsers(dest="command", required=True)
    load = sub.add_parser("load", help="Resolve a URL or search query.")
    load.add_argument("identifier")
    decode = sub.add_parser("decode", help="Decode an encoded track.")
    decode.add_argument("encoded")
    sub.add_parser("info", help="Print the node's /info document.")
    listen = sub.add_parser("listen", help="Print socket events as JSON lines.")
    listen.add_argument("--seconds", type=float, default=30.0)
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    asyncio.run(_run(args))


if __name__ == "__main__":
    main()
