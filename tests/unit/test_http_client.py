"""Tests for the shared HTTP client helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from email.utils import format_datetime
from typing import Any

import httpx
import pytest

from scm_driver.domain.exceptions import TransportError
from scm_driver.infrastructure.http_client import (
    HttpClient,
    body_excerpt,
    parse_retry_after,
    raise_for_status,
)


def _response(status: int = 200, **kwargs: Any) -> httpx.Response:
    return httpx.Response(status, request=httpx.Request("GET", "https://scm.example.com"), **kwargs)


class TestParseRetryAfter:
    def test_delta_seconds(self) -> None:
        assert parse_retry_after(_response(429, headers={"Retry-After": "30"})) == 30

    def test_http_date(self) -> None:
        when = datetime.now(timezone.utc) + timedelta(seconds=120)
        seconds = parse_retry_after(_response(429, headers={"Retry-After": format_datetime(when, usegmt=True)}))
        assert seconds is not None
        assert 100 <= seconds <= 121

    def test_past_date_is_zero(self) -> None:
        header = "Wed, 21 Oct 2015 07:28:00 GMT"
        assert parse_retry_after(_response(429, headers={"Retry-After": header})) == 0

    @pytest.mark.parametrize("headers", [{}, {"Retry-After": "soon"}])
    def test_absent_or_garbage(self, headers: dict[str, str]) -> None:
        assert parse_retry_after(_response(429, headers=headers)) is None


class TestRaiseForStatus:
    def test_success_passes(self) -> None:
        raise_for_status(_response(204), operation="op", repo="a/b")

    def test_unexpected_status_carries_excerpt(self) -> None:
        with pytest.raises(TransportError) as info:
            raise_for_status(_response(503, text="maintenance"), operation="list_tags", repo="a/b")
        assert info.value.status_code == 503
        assert info.value.body_excerpt == "maintenance"
        assert "list_tags on a/b" in str(info.value)

    def test_excerpt_is_capped(self) -> None:
        excerpt = body_excerpt(_response(500, text="y" * 5000))
        assert excerpt.startswith("y" * 200)
        assert len(excerpt) == 203


class TestHttpClient:
    async def test_joins_base_url_and_path(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200)

        client = HttpClient(httpx.AsyncClient(transport=httpx.MockTransport(handler)), "https://scm.example.com/")
        await client.get("/api/v1/version", params={"a": "1"})

        assert str(seen[0].url) == "https://scm.example.com/api/v1/version?a=1"
        assert seen[0].headers["User-Agent"].startswith("scm-driver/")

    async def test_timeout_is_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = HttpClient(httpx.AsyncClient(transport=httpx.MockTransport(handler)), "https://scm.example.com")
        with pytest.raises(TransportError, match="Timed out"):
            await client.get("/x")
