"""Creating and deleting files below the working directory."""

from __future__ import annotations

import logging
import os
import re

from .request import HttpRequest
from .response import HttpResponse, bad_request, ok

log = logging.getLogger(__name__)

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class FileServiceError(Exception):
    """Raised when a file cannot be created or deleted."""


def _atoi(text: str) -> int:
    """Parse a signed decimal 64-bit integer with no surrounding spaces."""
    if not _INT_PATTERN.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def _resolve(filename: str) -> str:
    """Join ``filename`` onto the working directory and check it stays inside."""
    wd = os.getcwd()
    path = os.path.normpath(wd + os.sep + filename) if filename else wd
    if not os.path.isabs(path) or not path.startswith(wd):
        raise FileServiceError(f"path is not absolute: {path}")
    return path


def create_file(filename: str, content: str, repeat: int) -> None:
    """Create ``filename`` holding ``content`` repeated ``repeat`` times.

    Missing parent directories are created; an existing file is an error.
    """
    if repeat < 1:
        raise FileServiceError("repeat must be greater than 0")

    path = _resolve(filename)
    if os.path.exists(path):
        raise FileServiceError(f"file already exists: {path}")

    data = content.encode("utf-8", "surrogateescape")
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as file:
            for _ in range(repeat):
                file.write(data)
    except OSError as exc:
        raise FileServiceError(str(exc)) from exc


def delete_file(filename: str) -> None:
    """Delete ``filename``; a directory is removed only when empty."""
    path = _resolve(filename)
    if not os.path.exists(path):
        raise FileServiceError(f"file does not exist: {path}")

    try:
        if os.path.isdir(path) and not os.path.islink(path):
            os.rmdir(path)
        else:
            os.remove(path)
    except OSError as exc:
        raise FileServiceError(str(exc)) from exc


def create_file_handler(request: HttpRequest) -> HttpResponse:
    """Create a file from the ``name``, ``content`` and ``repeat`` parameters."""
    name = request.param("name")
    if not name:
        return bad_request().text("name is required")

    content = request.param("content")
    if not content:
        return bad_request().text("content is required")

    repeat_text = request.param("repeat")
    if not repeat_text:
        return bad_request().text("repeat is required")

    try:
        repeat = _atoi(repeat_text)
    except ValueError:
        return bad_request().text("repeat must be a number")

    if repeat < 1:
        return bad_request().text("repeat must be greater than 0")

    try:
        create_file(name, content, repeat)
    except FileServiceError as exc:
        log.error("Error creating file error=%s", exc)
        return HttpResponse(500, "Internal Server Error", body="Error creating file")

    return ok().text("File created successfully")


def delete_file_handler(request: HttpRequest) -> HttpResponse:
    """Delete the file named by the ``name`` parameter."""
    name = request.param("name")
    if not name:
        return bad_request().text("name is required")

    try:
        delete_file(name)
    except FileServiceError as exc:
        log.error("Error deleting file error=%s", exc)
        return HttpResponse(500, "Internal Server Error", body="Error deleting file")

    return ok().text("File deleted successfully")