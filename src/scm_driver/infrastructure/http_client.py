"""Thin HTTP client bound to one backend, plus the shared status policy.

The underlying ``httpx.AsyncClient`` is owned by the caller and shared
between adapters; its connection pool and timeout are the only limits
applied to outbound requests.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from enum import Enum
from functools import lru_cache
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from scm_driver.domain.exceptions import (
    AuthError,
    DecodeError,
    RateLimitedError,
    TransportError,
)

logger = logging.getLogger(__name__)

_USER_AGENT = "scm-driver/1.0"
_EXCERPT_LIMIT = 200

T = TypeVar("T")


class AuthScheme(str, Enum):
    """Prefix used in the ``Authorization`` header for token credentials."""

    BEARER = "Bearer"
    TOKEN = "token"


class HttpClient:
    """Perform GET requests against a single backend base URL."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        token: str | None = None,
        *,
        scheme: AuthScheme = AuthScheme.BEARER,
        username: str | None = None,
        accept: str = "application/json",
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._headers: dict[str, str] = {
            "Accept": accept,
            "User-Agent": _USER_AGENT,
        }
        self._auth: httpx.Auth | None = None
        if token:
            if username:
                self._auth = httpx.BasicAuth(username, token)
            else:
                self._headers["Authorization"] = f"{scheme.value} {token}"

    @property
    def base_url(self) -> str:
        return self._base_url

    async def get(
        self,
        path: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """GET ``base_url + path``; network failures become TransportError."""
        url = f"{self._base_url}{path}"
        kwargs: dict[str, Any] = {"headers": self._headers, "params": params}
        if self._auth is not None:
            kwargs["auth"] = self._auth

        logger.debug("GET %s params=%s", url, params)
        try:
            resp = await self._client.get(url, **kwargs)
        except httpx.TimeoutException as exc:
            raise TransportError(f"Timed out fetching {url}: {exc}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"Network error fetching {url}: {exc}") from exc

        logger.debug("GET %s -> %d", url, resp.status_code)
        return resp


def parse_retry_after(resp: httpx.Response) -> int | None:
    """Return the Retry-After hint in whole seconds, or None if absent/unparseable.

    Accepts both forms allowed by RFC 9110: delta-seconds and HTTP-date.
    """
    raw = resp.headers.get("retry-after")
    if raw is None:
        return None
    raw = raw.strip()
    if raw.isdigit():
        return int(raw)
    try:
        when = parsedate_to_datetime(raw)
    except (TypeError, ValueError):
        logger.debug("Could not parse Retry-After header %r", raw)
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    delta = (when - datetime.now(timezone.utc)).total_seconds()
    return max(0, math.ceil(delta))


def body_excerpt(resp: httpx.Response) -> str:
    text = resp.text
    if len(text) <= _EXCERPT_LIMIT:
        return text
    return text[:_EXCERPT_LIMIT] + "..."


def raise_for_status(resp: httpx.Response, *, operation: str, repo: str) -> None:
    """Apply the status policy shared by every adapter.

    2xx passes through.  Callers handle "missing" statuses (404 and any
    backend-specific equivalents) before calling this.
    """
    status = resp.status_code
    if resp.is_success:
        return

    where = f"{operation} on {repo}"

    if status in (401, 403):
        raise AuthError(
            f"Backend rejected credentials ({status}) during {where}",
            status_code=status,
        )

    if status == 429:
        retry_after = parse_retry_after(resp)
        raise RateLimitedError(
            f"Rate limited (429) during {where}",
            retry_after=retry_after,
        )

    raise TransportError(
        f"Backend returned HTTP {status} during {where}",
        status_code=status,
        body_excerpt=body_excerpt(resp),
    )


@lru_cache(maxsize=None)
def _type_adapter(wire_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(wire_type)


def decode(resp: httpx.Response, wire_type: type[T] | Any, *, operation: str, repo: str) -> T:
    """Validate a JSON body against a wire model; raise DecodeError otherwise."""
    try:
        return _type_adapter(wire_type).validate_json(resp.content)  # type: ignore[no-any-return]
    except ValidationError as exc:
        first = exc.errors()[0]
        loc = ".".join(str(p) for p in first.get("loc", ())) or "<body>"
        raise DecodeError(
            f"Malformed {operation} response for {repo}: {loc}: {first.get('msg')}",
            operation=operation,
            repo=repo,
        ) from exc
