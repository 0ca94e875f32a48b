"""Handlers for timing, load simulation, random numbers and server status."""

from __future__ import annotations

import os
import random
import re
import threading
import time
from datetime import datetime, timezone

from .request import HttpRequest
from .response import HttpResponse, bad_request, ok

_START_TIME = time.monotonic()
_conn_lock = threading.Lock()
_total_conns = 0

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

COMMANDS = [
    "GET  /fibonacci?num=",
    "POST /createfile?name=&content=&repeat=",
    "DELETE /deletefile?name=",
    "GET  /reverse?text=",
    "GET  /toupper?text=",
    "GET  /hash?text=",
    "GET  /random?count=&min=&max=",
    "GET  /timestamp",
    "GET  /simulate?seconds=&task=",
    "GET  /sleep?seconds=",
    "GET  /loadtest?tasks=&sleep=",
    "GET  /status",
    "GET  /help",
]


def _atoi(text: str) -> int:
    """Parse a signed decimal 64-bit integer with no surrounding spaces."""
    if not _INT_PATTERN.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


class _BadParam(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.response = bad_request().text(message)


def _required_int(request: HttpRequest, name: str, minimum: int) -> int:
    text = request.param(name)
    if not text:
        raise _BadParam(f"{name} is required")
    try:
        value = _atoi(text)
    except ValueError:
        raise _BadParam(f"{name} must be a number") from None
    if value < minimum:
        raise _BadParam(f"{name} must be >= {minimum}")
    return value


def count_conn() -> None:
    """Count one more connection for the status report."""
    global _total_conns
    with _conn_lock:
        _total_conns += 1


def simulate_handler(request: HttpRequest) -> HttpResponse:
    """Pretend to run ``task`` for ``seconds`` seconds."""
    try:
        seconds = _required_int(request, "seconds", 0)
    except _BadParam as exc:
        return exc.response
    task = request.param("task")
    if not task:
        return bad_request().text("task is required")

    time.sleep(seconds)
    return ok().json_obj({"task": task, "done": True})


def sleep_handler(request: HttpRequest) -> HttpResponse:
    """Sleep for ``seconds`` seconds."""
    try:
        seconds = _required_int(request, "seconds", 0)
    except _BadParam as exc:
        return exc.response

    time.sleep(seconds)
    return ok().text(f"slept {seconds} seconds")


def load_test_handler(request: HttpRequest) -> HttpResponse:
    """Run ``tasks`` threads that each sleep ``sleep`` seconds, and time them."""
    try:
        tasks = _required_int(request, "tasks", 1)
        pause = _required_int(request, "sleep", 0)
    except _BadParam as exc:
        return exc.response

    workers = [threading.Thread(target=time.sleep, args=(pause,)) for _ in range(tasks)]
    started = time.monotonic()
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    duration_ms = int((time.monotonic() - started) * 1000)

    return ok().json_obj({"tasks": tasks, "sleep": pause, "duration_ms": duration_ms})


def status_handler(request: HttpRequest) -> HttpResponse:
    """Report uptime, connection count, process id and live threads."""
    with _conn_lock:
        total = _total_conns
    return ok().json_obj(
        {
            "uptime_s": time.monotonic() - _START_TIME,
            "total_connections": total,
            "pid": os.getpid(),
            "goroutines": threading.active_count(),
        }
    )


def help_handler(request: HttpRequest) -> HttpResponse:
    """List the available commands."""
    return ok().json_obj({"commands": list(COMMANDS)})


def random_handler(request: HttpRequest) -> HttpResponse:
    """Answer with ``count`` random integers between ``min`` and ``max``."""
    try:
        count = _atoi(request.param("count"))
    except ValueError:
        count = 0
    if count < 1:
        return bad_request().text("count must be a positive integer")

    try:
        low = _atoi(request.param("min"))
    except ValueError:
        return bad_request().text("min must be a number")
    try:
        high = _atoi(request.param("max"))
    except ValueError:
        return bad_request().text("max must be a number")
    if high < low:
        return bad_request().text("max must be >= min")

    numbers = [random.randint(low, high) for _ in range(count)]
    return ok().json_obj({"numbers": numbers})


def timestamp_handler(request: HttpRequest) -> HttpResponse:
    """Answer with the current UTC time in RFC 3339 form."""
    now = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    return ok().json_obj({"timestamp": now})