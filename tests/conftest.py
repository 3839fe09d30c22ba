"""Shared fixtures: an in-process fake HAL API served through httpx.MockTransport."""
from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from hal_walk.client.http import HalClient

BASE_URL = "https://api.test"

ROOT_DOCUMENT: dict[str, Any] = {
    "_links": {
        "self": {"href": "/"},
        "curies": [{"name": "ex", "href": "https://api.test/rels/{rel}", "templated": True}],
        "next": {"href": "/b", "title": "Next page"},
        "ex:search": {"href": "/search{?q,limit}", "templated": True},
        "ex:create": {"href": "/items"},
        "legacy": {"href": "/old", "deprecated": True, "deprecation": "https://api.test/deprecations/old"},
        "ex:items": [{"href": "/items/1"}, {"href": "/items/2"}],
    },
    "title": "Root",
}


class FakeApi:
    """Canned responses keyed by ``(method, path)``; records every request."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, Any, str]] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        body: Any,
        *,
        status: int = 200,
        content_type: str = "application/hal+json",
    ) -> None:
        self.routes[(method.upper(), path)] = (status, body, content_type)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.raw_path.decode())
        if key not in self.routes:
            key = (request.method, request.url.path)
        status, body, content_type = self.routes.get(
            key, (404, {"message": "not found"}, "application/json")
        )
        content = json.dumps(body) if "json" in content_type else str(body)
        return httpx.Response(status, content=content, headers={"content-type": content_type})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture()
def api() -> FakeApi:
    fake = FakeApi()
    fake.add("GET", "/", ROOT_DOCUMENT)
    fake.add("GET", "/b", {"_links": {"self": {"href": "/b"}, "up": {"href": "/"}}, "page": "b"})
    return fake


@pytest.fixture()
def client(api: FakeApi) -> HalClient:
    return HalClient(transport=api.transport)
