from urllib.parse import parse_qsl

import httpx
import pytest

from .config import Settings
from .lib.wordpress import WordPressClient

WP_BASE = "http://wp.test"


class FakeWordPress:
    """Answers WordPress API requests from a ``path -> JSON`` mapping.

    Keys are paths below ``/wp-json/wp/v2/`` or ``(method, path)`` pairs.
    A value may be JSON data, a ready ``httpx.Response``, an exception to
    raise as a transport error, or a callable taking the request.  Unknown
    paths get a 404 WordPress error body.
    """

    def __init__(self, routes: dict | None = None):
        self.routes: dict = routes or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/wp-json/wp/v2/")
        route = self.routes.get((request.method, path), self.routes.get(path))
        if isinstance(route, Exception):
            raise route
        if callable(route):
            route = route(request)
        if route is None:
            return httpx.Response(404, json={"code": "rest_no_route", "message": "No route"})
        if isinstance(route, httpx.Response):
            return route
        return httpx.Response(200, json=route)

    def paths(self) -> list[str]:
        return [r.url.path.removeprefix("/wp-json/wp/v2/") for r in self.requests]

    def query(self, index: int = -1) -> dict[str, str]:
        return dict(parse_qsl(self.requests[index].url.query.decode()))

    def client(self, **settings) -> WordPressClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(self))
        return WordPressClient(Settings(wp_api_base=WP_BASE, **settings), http=http)


@pytest.fixture
def wordpress():
    return FakeWordPress()


@pytest.fixture
def wp(wordpress):
    """``WordPressClient`` wired to ``wordpress`` through a mock transport."""
    return wordpress.client()
