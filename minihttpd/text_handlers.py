"""Handlers that transform a ``text`` query parameter."""

from __future__ import annotations

import hashlib

from .request import HttpRequest
from .response import HttpResponse, bad_request, ok

ROOT_TEXT = """Servidor HTTP activo. Rutas disponibles:
GET  /reverse?text=...
GET  /toupper?text=...
GET  /hash?text=...
GET  /timestamp
GET  /random?count=n&min=a&max=b
GET  /simulate?seconds=s&task=name
GET  /sleep?seconds=s
GET  /loadtest?tasks=n&sleep=s
GET  /status
GET  /help"""


def _missing(key: str) -> HttpResponse:
    return bad_request().text(f"{key} is required")


def _upper_char(char: str) -> str:
    upper = char.upper()
    return upper if len(upper) == 1 else char


def reverse_handler(request: HttpRequest) -> HttpResponse:
    """Answer with the characters of ``text`` in reverse order."""
    text = request.param("text")
    if not text:
        return _missing("text")
    return ok().text(text[::-1])


def to_upper_handler(request: HttpRequest) -> HttpResponse:
    """Answer with ``text`` in upper case, one character at a time."""
    text = request.param("text")
    if not text:
        return _missing("text")
    return ok().text("".join(_upper_char(char) for char in text))


def hash_handler(request: HttpRequest) -> HttpResponse:
    """Answer with the hex SHA-256 digest of ``text``."""
    text = request.param("text")
    if not text:
        return _missing("text")
    digest = hashlib.sha256(text.encode("utf-8", "surrogateescape")).hexdigest()
    return ok().text(digest)


def root_handler(request: HttpRequest) -> HttpResponse:
    """Answer with the list of available routes."""
    return ok().text(ROOT_TEXT)