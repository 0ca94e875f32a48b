"""The application: every route wired onto one server, and its command."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from .advanced import (
    help_handler,
    load_test_handler,
    random_handler,
    simulate_handler,
    sleep_handler,
    status_handler,
    timestamp_handler,
)
from .fibonacci import fibonacci_handler
from .files import create_file_handler, delete_file_handler
from .server import HttpServer
from .text_handlers import hash_handler, reverse_handler, root_handler, to_upper_handler

log = logging.getLogger(__name__)

DEFAULT_PORT = 8080
DEFAULT_ADDRESS = f"localhost:{DEFAULT_PORT}"


def build_server() -> HttpServer:
    """Return a server with every application route registered."""
    server = HttpServer()

    server.get("/fibonacci", fibonacci_handler)

    server.post("/createfile", create_file_handler)
    # Also reachable by GET, for manual tries without a body.
    server.get("/createfile", create_file_handler)

    server.delete("/deletefile", delete_file_handler)
    server.get("/deletefile", delete_file_handler)

    server.get("/reverse", reverse_handler)
    server.get("/toupper", to_upper_handler)
    server.get("/hash", hash_handler)
    server.get("/", root_handler)

    server.get("/random", random_handler)
    server.get("/timestamp", timestamp_handler)
    server.get("/simulate", simulate_handler)
    server.get("/sleep", sleep_handler)
    server.get("/loadtest", load_test_handler)
    server.get("/status", status_handler)
    server.get("/help", help_handler)

    return server


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="minihttpd", description="Run the HTTP server.")
    parser.add_argument("--host", default="", help="address to listen on (default: all)")
    parser.add_argument(
        "--port", type=int, default=DEFAULT_PORT, help=f"port to listen on (default: {DEFAULT_PORT})"
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Start the server and serve until interrupted; return an exit status."""
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    server = build_server()
    try:
        server.start(args.port, args.host)
    except OSError as exc:
        log.error("Error starting or running server error=%s", exc)
        return 1
    return 0