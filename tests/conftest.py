"""
Pytest configuration and fixtures
"""
import json
import sys
from pathlib import Path

import httpx
import pytest

# Make the project root importable without installing
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from upcraft.api_client import ApiClient


class FakeBackend:
    """
    Route table for httpx.MockTransport.

    Routes map ``"METHOD /path"`` to a JSON body, a ``(status, body)`` tuple,
    or a callable taking the request. Every request is recorded.
    """

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method: str, path: str, response):
        self.routes[f"{method.upper()} {path}"] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(f"{request.method} {request.url.path}")
        if route is None:
            return httpx.Response(404, json={"message": f"No route for {request.url.path}"})
        if callable(route):
            route = route(request)
            if isinstance(route, httpx.Response):
                return route
        status, body = route if isinstance(route, tuple) else (200, route)
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def bodies(self, method: str, path: str):
        return [
            json.loads(r.content) for r in self.requests
            if r.method == method and r.url.path == path and r.content
        ]


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def api(backend) -> ApiClient:
    client = ApiClient(
        base_url="http://upcraft.test",
        timeout=5,
        ai_timeout=10,
        transport=httpx.MockTransport(backend.handler),
    )
    yield client
    client.close()
