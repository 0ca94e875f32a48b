"""Fibonacci numbers and the handler that serves them."""

from __future__ import annotations

import re

from .request import HttpRequest
from .response import HttpResponse, bad_request, ok

MAX_NUM = 92

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _atoi(text: str) -> int:
    """Parse a signed decimal 64-bit integer with no surrounding spaces."""
    if not _INT_PATTERN.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def fibonacci(num: int) -> int:
    """Return the ``num``-th Fibonacci number; zero for ``num <= 0``."""
    if num <= 0:
        return 0
    a, b = 0, 1
    for _ in range(num - 1):
        a, b = b, a + b
    return b


def fibonacci_handler(request: HttpRequest) -> HttpResponse:
    """Answer with the Fibonacci number for the ``num`` query parameter."""
    num_text = request.param("num")
    if not num_text:
        return bad_request().text("num is required")
    try:
        num = _atoi(num_text)
    except ValueError:
        return bad_request().text("num must be a number")
    if num < 0 or num > MAX_NUM:
        return bad_request().text(f"num must be between 0 and {MAX_NUM}")
    return ok().text(str(fibonacci(num)))