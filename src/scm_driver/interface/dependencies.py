"""FastAPI dependency injection wiring."""

from __future__ import annotations

import logging

import httpx

from scm_driver.domain.ports.git_service import GitService
from scm_driver.infrastructure.config import get_settings
from scm_driver.infrastructure.driver_factory import DriverKind, new_git_service, parse_kind

logger = logging.getLogger(__name__)

_http_client: httpx.AsyncClient | None = None
_git_service: GitService | None = None
_driver_kind: DriverKind | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _git_service, _driver_kind  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout),
        limits=httpx.Limits(max_connections=settings.max_connections),
    )
    token = settings.scm_token.get_secret_value() if settings.scm_token else None
    try:
        _git_service = new_git_service(
            settings.scm_driver,
            _http_client,
            url=settings.scm_url,
            token=token,
            username=settings.scm_username,
        )
        _driver_kind = parse_kind(settings.scm_driver)
    except Exception:
        await _http_client.aclose()
        _http_client = None
        raise


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _git_service, _driver_kind  # noqa: PLW0603

    _git_service = None
    _driver_kind = None
    if _http_client:
        await _http_client.aclose()
        _http_client = None


def get_git_service() -> GitService:
    """Return the GitService built at startup."""
    assert _git_service is not None, "startup() was not called"
    return _git_service


def get_driver_kind() -> DriverKind | None:
    """Return the backend kind selected at startup, or None before startup."""
    return _driver_kind
