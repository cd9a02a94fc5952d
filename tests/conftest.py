"""Pytest bootstrap configuration.

Pin the gateway settings before application modules are imported, and
provide an in-process fake gateway built on ``httpx.MockTransport``.
"""
import os

os.environ.setdefault("FILES_API__BASE_URL", "http://files.test")
os.environ.setdefault("FILES_API__PATH_PREFIX", "")

import json
from typing import Any, Optional

import httpx
import pytest

from infrastructure.external.api_clients import build_client, set_default_client


class FakeGateway:
    """Records requests and replays queued responses (200 ``{}`` when empty)."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[Any] = []

    def respond(
        self,
        status_code: int = 200,
        json_body: Any = None,
        *,
        content: Optional[bytes] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        if content is not None:
            response = httpx.Response(status_code, content=content, headers=headers)
        else:
            response = httpx.Response(
                status_code, json={} if json_body is None else json_body, headers=headers
            )
        self._responses.append(response)

    def fail(self, exc: Exception) -> None:
        self._responses.append(exc)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            return httpx.Response(200, json={})
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content) if request.content else None


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
async def client(gateway: FakeGateway):
    """Default client wired to the fake gateway with fast retries."""
    c = build_client(
        transport=httpx.MockTransport(gateway.handler),
        max_retries=2,
        retry_delay=0.01,
    )
    set_default_client(c)
    try:
        yield c
    finally:
        set_default_client(None)
        await c.close()
