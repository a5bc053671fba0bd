"""Shared fixtures: fake backends built on ``httpx.MockTransport``."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingBackend:
    """Serve canned responses and remember every request it saw."""

    def __init__(self, handler: Handler) -> None:
        self._handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def backend() -> Callable[[Handler], RecordingBackend]:
    """Return a factory for recording mock backends."""
    return RecordingBackend


def json_response(
    data: Any,
    status_code: int = 200,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    return httpx.Response(status_code=status_code, json=data, headers=headers)


@pytest.fixture
def respond() -> Callable[..., httpx.Response]:
    """Build a JSON ``httpx.Response``."""
    return json_response
