"""HTTP responses and their HTTP/1.0 wire form."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from json import dumps as _dumps
from typing import Any

log = logging.getLogger(__name__)

_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _encode_json(value: Any) -> str:
    text = _dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    for char, escaped in _JSON_ESCAPES.items():
        text = text.replace(char, escaped)
    return text


@dataclass
class HttpResponse:
    """An HTTP response; the setters return the response for chaining."""

    status_code: int
    status_text: str
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""

    def header(self, key: str, value: str) -> HttpResponse:
        """Set one header."""
        self.headers[key] = value
        return self

    def content_type(self, content_type: str) -> HttpResponse:
        """Set the Content-Type header."""
        return self.header("Content-Type", content_type)

    def text(self, text: str) -> HttpResponse:
        """Use ``text`` as a plain-text body."""
        self.content_type("text/plain")
        self.body = text
        return self

    def json(self, data: str) -> HttpResponse:
        """Use an already encoded JSON string as the body."""
        self.content_type("application/json")
        self.body = data
        return self

    def json_obj(self, value: Any) -> HttpResponse:
        """Encode ``value`` as JSON; on failure return a new 500 response."""
        try:
            encoded = _encode_json(value)
        except (TypeError, ValueError):
            return HttpResponse(500, "Internal Server Error", body="json marshal error").content_type(
                "text/plain"
            )
        return self.json(encoded)

    def render(self) -> str:
        """Return the HTTP/1.0 message, setting Content-Length first."""
        self.header("Content-Length", str(len(self.body.encode("utf-8", "surrogateescape"))))
        header_lines = "".join(f"{key}: {self.headers[key]}\r\n" for key in sorted(self.headers))
        return f"HTTP/1.0 {self.status_code} {self.status_text}\r\n{header_lines}\r\n{self.body}"

    def __str__(self) -> str:
        return self.render()

    def write_to(self, conn: Any) -> None:
        """Send the rendered response over a connected socket."""
        try:
            address = conn.getpeername()
        except (OSError, AttributeError):
            address = "unknown"
        log.info(
            "Response address=%s status_code=%d status_text=%s",
            address,
            self.status_code,
            self.status_text,
        )
        conn.sendall(self.render().encode("utf-8", "surrogateescape"))


def ok() -> HttpResponse:
    """A 200 OK response with an empty body."""
    return HttpResponse(200, "OK")


def not_found() -> HttpResponse:
    """A 404 Not Found response with an empty body."""
    return HttpResponse(404, "Not Found")


def bad_request() -> HttpResponse:
    """A 400 Bad Request response with an empty body."""
    return HttpResponse(400, "Bad Request")