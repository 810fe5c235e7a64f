"""Shared fixtures: settings and a canned IEX Cloud API served via httpx.MockTransport."""

import asyncio
import json
import os
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
import pytest
from loguru import logger

from quotedesk.client.http import ApiRequester, build_http_client
from quotedesk.core.config import Settings

API_BASE = "https://api.test/stable"
LOGO_BASE = "https://logos.test/logos"


@dataclass
class Route:
    status: int = 200
    content: bytes = b""
    delay: float = 0.0
    error: bool = False


class MockApi:
    """Serves canned responses by URL path and records every request."""

    def __init__(self) -> None:
        self.routes: dict[str, Route] = {}
        self.requests: list[httpx.Request] = []

    def respond(
        self,
        path: str,
        status: int = 200,
        json_body: object = None,
        content: bytes | None = None,
        delay: float = 0.0,
    ) -> None:
        if content is None:
            content = b"" if json_body is None else json.dumps(json_body).encode()
        self.routes[path] = Route(status=status, content=content, delay=delay)

    def fail(self, path: str) -> None:
        self.routes[path] = Route(error=True)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, content=b"not found")
        if route.error:
            raise httpx.ConnectError("connection refused", request=request)
        if route.delay:
            await asyncio.sleep(route.delay)
        return httpx.Response(route.status, content=route.content)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Keep a developer's .env, config/ and QUOTEDESK_* variables out of the tests."""
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.upper().startswith("QUOTEDESK_"):
            monkeypatch.delenv(key)


@pytest.fixture
def log_messages():
    """Collect loguru output for the duration of a test."""
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{message}")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_token="test-token",
        api_base_url=API_BASE,
        logo_base_url=LOGO_BASE,
        request_timeout=0.2,
    )


@pytest.fixture
def mock_api() -> MockApi:
    return MockApi()


@pytest.fixture
def open_requester(settings, mock_api):
    """Factory for an `ApiRequester` bound to the mock API."""

    @asynccontextmanager
    async def _open():
        async with build_http_client(settings, transport=mock_api.transport()) as client:
            yield ApiRequester(client, timeout=settings.request_timeout)

    return _open
