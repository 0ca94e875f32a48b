"""Reading and parsing HTTP/1.x requests."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import BinaryIO
from urllib.parse import SplitResult, parse_qs, unquote, urlsplit

HTTP_METHODS = frozenset(
    {"GET", "HEAD", "POST", "PUT", "DELETE", "CONNECT", "OPTIONS", "TRACE", "PATCH"}
)
HTTP_VERSIONS = frozenset({"HTTP/1.0", "HTTP/1.1"})

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"
_CONTROL_CHAR = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class RequestError(ValueError):
    """Raised when a request cannot be read or parsed."""


def parse_target(target: str) -> SplitResult:
    """Parse a request target into URL parts, with the path percent-decoded."""
    if _CONTROL_CHAR.search(target):
        raise RequestError(f"invalid control character in URL: {target!r}")
    if target.startswith(":"):
        raise RequestError(f"missing protocol scheme: {target!r}")
    parts = urlsplit(target)
    for piece in (parts.path, parts.fragment):
        if _BAD_ESCAPE.search(piece):
            raise RequestError(f"invalid URL escape in {target!r}")
    return parts._replace(path=unquote(parts.path, _ENCODING, _ERRORS))


@dataclass
class HttpRequest:
    """A received HTTP request."""

    method: str
    target: SplitResult
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.target, str):
            self.target = parse_target(self.target)

    def param(self, name: str) -> str:
        """Return the first query value for ``name``, or an empty string."""
        values = parse_qs(self.target.query, keep_blank_values=True)
        return values.get(name, [""])[0]


def parse_request(headers_part: str) -> HttpRequest:
    """Parse the request line and headers; the body is left empty."""
    end = headers_part.find("\r\n\r\n")
    if end == -1:
        raise RequestError("no header end")

    start_line, *header_lines = headers_part[:end].split("\r\n")

    start = start_line.split(" ", 2)
    if len(start) < 2:
        raise RequestError("no method or target")

    method, target_text = start[0], start[1]
    if method not in HTTP_METHODS:
        raise RequestError(f"bad method: {method}")

    try:
        target = parse_target(target_text)
    except RequestError as exc:
        raise RequestError(f"bad target format: {exc}") from exc

    version = start[2] if len(start) > 2 else ""
    if version not in HTTP_VERSIONS:
        raise RequestError(f"bad version: {version}")

    headers: dict[str, str] = {}
    for line in header_lines:
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip()
        if not key:
            continue
        headers[key] = value.strip()

    return HttpRequest(method, target, headers, "")


def parse_body(request: HttpRequest, reader: BinaryIO) -> None:
    """Read the body announced by Content-Length into ``request.body``."""
    length_text = request.headers.get("Content-Length")
    if length_text is None:
        return

    found = _LEADING_INT.match(length_text)
    if found is None:
        raise RequestError(f"bad content length format: {length_text!r}")
    length = int(found.group(1))
    if length <= 0:
        return

    chunks: list[bytes] = []
    remaining = length
    while remaining > 0:
        chunk = reader.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)

    if remaining > 0:
        reason = "EOF" if remaining == length else "unexpected EOF"
        raise RequestError(f"can't read body: {reason}")

    request.body = b"".join(chunks).decode(_ENCODING, _ERRORS)


def read_request(stream: BinaryIO) -> HttpRequest:
    """Read a whole request (headers and body) from a binary stream."""
    lines: list[str] = []
    while True:
        raw = stream.readline()
        if not raw.endswith(b"\n"):
            break
        line = raw.decode(_ENCODING, _ERRORS)
        line = line.removesuffix("\r\n").removesuffix("\n")
        if not line:
            break
        lines.append(line)

    if not lines:
        raise RequestError("empty request")

    try:
        request = parse_request("\r\n".join(lines) + "\r\n\r\n")
    except RequestError as exc:
        raise RequestError(f"can't parse request: {exc}") from exc

    if request.method == "POST" and "Content-Length" not in request.headers:
        raise RequestError("post request without content length")

    parse_body(request, stream)
    return request