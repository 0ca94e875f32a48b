"""A small threaded HTTP/1.0 server with method and path dispatch."""

from __future__ import annotations

import contextlib
import logging
import signal
import socket
import threading
from dataclasses import dataclass
from typing import Any, Callable

from .request import HttpRequest, RequestError, read_request
from .response import HttpResponse, bad_request, not_found

log = logging.getLogger(__name__)

Handle = Callable[[HttpRequest], HttpResponse]

_ACCEPT_POLL_SECONDS = 0.2


@dataclass
class Handler:
    """A handle function bound to an HTTP method and a path."""

    method: str
    path: str
    handle: Handle


def match_path(request_path: str, handler_path: str) -> bool:
    """Match exactly, or as a prefix followed by a '/'."""
    if request_path == handler_path:
        return True
    return request_path.startswith(handler_path + "/")


class HttpServer:
    """Accepts TCP connections and dispatches each request to a handler."""

    def __init__(self) -> None:
        self.handlers: list[Handler] = []
        self.address: Any = None
        self.ready = threading.Event()
        self._listener: socket.socket | None = None
        self._stopping = threading.Event()

    def add_handler(self, method: str, path: str, handle: Handle) -> None:
        """Register ``handle`` for ``method`` requests on ``path``."""
        self.handlers.append(Handler(method, path, handle))

    def get(self, path: str, handle: Handle) -> None:
        """Register a GET handler."""
        self.add_handler("GET", path, handle)

    def post(self, path: str, handle: Handle) -> None:
        """Register a POST handler."""
        self.add_handler("POST", path, handle)

    def delete(self, path: str, handle: Handle) -> None:
        """Register a DELETE handler."""
        self.add_handler("DELETE", path, handle)

    def sort_handlers(self) -> None:
        """Order handlers by path depth, then path length, most specific first."""
        self.handlers.sort(key=lambda h: (h.path.count("/"), len(h.path)), reverse=True)

    def start(self, port: int, host: str = "") -> None:
        """Listen on ``host:port`` and serve until :meth:`stop` is called."""
        self.sort_handlers()
        listener = socket.create_server((host, port))
        listener.settimeout(_ACCEPT_POLL_SECONDS)
        self._stopping.clear()
        self._listener = listener
        self.address = listener.getsockname()
        previous = self._install_signal_handlers()
        log.info("Server started address=%s", self.address)
        self.ready.set()
        try:
            while True:
                try:
                    conn, _ = listener.accept()
                except socket.timeout:
                    if self._stopping.is_set():
                        break
                    continue
                except OSError:
                    if self._stopping.is_set():
                        break
                    raise
                conn.settimeout(None)
                threading.Thread(target=self.handle_with_error, args=(conn,), daemon=True).start()
        finally:
            self._restore_signal_handlers(previous)
            listener.close()
            self.ready.clear()
        log.info("Server stopped")

    def stop(self) -> None:
        """Close the listener so that :meth:`start` returns."""
        self._stopping.set()
        if self._listener is not None:
            self._listener.close()

    def handle_with_error(self, conn: socket.socket) -> None:
        """Handle one connection, logging anything that goes wrong."""
        try:
            self.handle(conn)
        except Exception:
            log.exception("Error")

    def handle(self, conn: socket.socket) -> None:
        """Read one request from ``conn``, answer it and close the connection."""
        with conn, conn.makefile("rb") as stream:
            try:
                request = read_request(stream)
            except (RequestError, OSError) as exc:
                _send(bad_request().text(str(exc)), conn)
                return

            log.info(
                "Request address=%s method=%s path=%s",
                _peer(conn),
                request.method,
                request.target.path,
            )

            path_matched = False
            for handler in self.handlers:
                if not match_path(request.target.path, handler.path):
                    continue
                path_matched = True
                if request.method != handler.method:
                    continue
                try:
                    response = handler.handle(request)
                except Exception:
                    log.exception("Handler failed")
                    response = HttpResponse(
                        500, "Internal Server Error", {}, "500 Internal Server Error"
                    )
                _send(response, conn)
                return

            if path_matched:
                _send(bad_request().text("Bad method"), conn)
            else:
                _send(not_found().text("404 Not Found"), conn)

    def _install_signal_handlers(self) -> dict[int, Any]:
        if threading.current_thread() is not threading.main_thread():
            return {}

        def on_signal(signum: int, frame: Any) -> None:
            print()
            self.stop()

        previous = {}
        for signum in (signal.SIGINT, signal.SIGTERM):
            previous[signum] = signal.signal(signum, on_signal)
        return previous

    @staticmethod
    def _restore_signal_handlers(previous: dict[int, Any]) -> None:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


def _peer(conn: socket.socket) -> Any:
    try:
        return conn.getpeername()
    except OSError:
        return "unknown"


def _send(response: HttpResponse, conn: socket.socket) -> None:
    with contextlib.suppress(OSError):
        response.write_to(conn)