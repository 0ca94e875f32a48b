"""A standalone request router."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .request import HttpRequest
from .response import HttpResponse, not_found

Handle = Callable[[HttpRequest], HttpResponse]


@dataclass
class Route:
    """A method, a path and the function that serves them."""

    method: str
    path: str
    handle: Handle


def match(request_path: str, route_path: str) -> bool:
    """Match exactly, or as a prefix ending in '/'."""
    if request_path == route_path:
        return True
    if not route_path.endswith("/"):
        route_path += "/"
    return request_path.startswith(route_path)


class Router:
    """Keeps routes in order and dispatches requests to the first match."""

    def __init__(self) -> None:
        self.routes: list[Route] = []

    def get(self, path: str, handle: Handle) -> None:
        """Register a GET route."""
        self.routes.append(Route("GET", path, handle))

    def post(self, path: str, handle: Handle) -> None:
        """Register a POST route."""
        self.routes.append(Route("POST", path, handle))

    def delete(self, path: str, handle: Handle) -> None:
        """Register a DELETE route."""
        self.routes.append(Route("DELETE", path, handle))

    def handle(self, request: HttpRequest) -> HttpResponse:
        """Run the first matching route, or answer 404."""
        for route in self.routes:
            if request.method == route.method and match(request.target.path, route.path):
                return route.handle(request)
        return not_found().text("no route")

    def sort_handlers(self) -> None:
        """Order routes by path depth, then path length, most specific first."""
        self.routes.sort(key=lambda r: (r.path.count("/"), len(r.path)), reverse=True)